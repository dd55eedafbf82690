"""Shared fixtures for the PC Build Validator tests."""

from datetime import datetime, timezone

import pytest

from pc_build_validator.analysis import BuildCompatibilityAnalyzer
from pc_build_validator.config import Config
from pc_build_validator.knowledge_base import get_default_knowledge_base
from pc_build_validator.models import Build, Component

FIXED_TIME = datetime(2024, 5, 1, 12, 30, 0, tzinfo=timezone.utc)


def _make(category: str, name: str = "Test", specs: dict = None, **kw) -> Component:
    """Quick Component factory."""
    return Component(
        name=name,
        brand=kw.get("brand", "Generic"),
        category=category,
        price=kw.get("price", 100.0),
        specifications=specs if specs is not None else {},
        model=kw.get("model"),
        original_price=kw.get("original_price"),
    )


@pytest.fixture
def make_component():
    return _make


@pytest.fixture
def make_build():
    def factory(*components, name="Test build"):
        build = Build(name=name)
        for component in components:
            build.attach(component)
        return build
    return factory


@pytest.fixture
def knowledge_base():
    return get_default_knowledge_base()


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_TIME


@pytest.fixture
def analyzer(knowledge_base, fixed_clock):
    return BuildCompatibilityAnalyzer(knowledge_base=knowledge_base, config=Config(), clock=fixed_clock)


@pytest.fixture
def high_end_parts(make_component):
    """CPU/GPU/RAM/storage drawing ~479W under the default tables."""
    return [
        make_component("cpu", "Intel Core i9-13900K", {"socket": "LGA1700", "tdp": "125W"}, brand="Intel"),
        make_component("gpu", "NVIDIA GeForce RTX 4080", {}, brand="NVIDIA"),
        make_component("ram", "Vengeance 8GB", {"capacity": "8GB", "speed": "3200MHz", "memoryType": "DDR5"}),
        make_component("storage", "990 Pro 1TB", {"interface": "PCIe 4.0 NVMe"}),
    ]
