"""Tests for the core data models."""

from datetime import datetime, timedelta, timezone

import pytest

from pc_build_validator.models import (
    Build,
    CompatibilityReport,
    ComponentCategory,
    Finding,
    PowerEstimate,
    Severity,
)


class TestComponentCategory:
    @pytest.mark.parametrize("name, expected", [
        ("CPU", ComponentCategory.CPU),
        ("processor", ComponentCategory.CPU),
        ("video_card", ComponentCategory.GPU),
        ("Memory", ComponentCategory.RAM),
        ("mobo", ComponentCategory.MOTHERBOARD),
        ("ssd", ComponentCategory.STORAGE),
        ("power-supply", ComponentCategory.PSU),
        (" chassis ", ComponentCategory.CASE),
        ("cpu_cooler", ComponentCategory.COOLING),
        (ComponentCategory.PSU, ComponentCategory.PSU),
    ])
    def test_from_name(self, name, expected):
        assert ComponentCategory.from_name(name) is expected

    @pytest.mark.parametrize("name", ["monitor", "", None])
    def test_unknown_name(self, name):
        with pytest.raises(ValueError, match="Unknown component category"):
            ComponentCategory.from_name(name)


class TestComponent:
    def test_category_normalized(self, make_component):
        assert make_component("memory").category is ComponentCategory.RAM

    def test_spec_skips_blank_values(self, make_component):
        cooler = make_component("cooling", specs={"tdpRating": "  ", "maxTdp": "250W"})
        assert cooler.spec("tdpRating", "maxTdp") == "250W"
        assert cooler.spec("socket") is None

    def test_display_name_prefers_model(self, make_component):
        assert make_component("cpu", "Intel Core i5", model="i5-13600K").display_name == "i5-13600K"
        assert make_component("cpu", "Intel Core i5").display_name == "Intel Core i5"


class TestBuild:
    def test_attach_replaces_slot(self, make_build, make_component):
        build = make_build(make_component("cpu", "First"))
        build.attach(make_component("cpu", "Second"))

        assert build.component_count == 1
        assert build.get(ComponentCategory.CPU).name == "Second"

    def test_detach(self, make_build, make_component):
        build = make_build(make_component("gpu", "Card"))
        assert build.detach("gpu").name == "Card"
        assert build.detach(ComponentCategory.GPU) is None

    def test_from_components_skips_empty_slots(self, make_component):
        build = Build.from_components({"cpu": make_component("cpu"), "gpu": None}, name="Mine")
        assert build.name == "Mine"
        assert build.filled_slots == [ComponentCategory.CPU]

    def test_from_components_rejects_wrong_slot(self, make_component):
        with pytest.raises(ValueError):
            Build.from_components({"ram": make_component("storage")})

    def test_filled_slots_in_canonical_order(self, make_build, make_component):
        build = make_build(make_component("cooling"), make_component("cpu"), make_component("case"))
        assert build.filled_slots == [ComponentCategory.CPU, ComponentCategory.CASE, ComponentCategory.COOLING]

    def test_prices(self, make_build, make_component):
        build = make_build(
            make_component("cpu", price=299.99, original_price=349.99),
            make_component("gpu", price=500.0),
        )
        assert build.total_price == 799.99
        assert build.original_total_price == 849.99
        assert build.total_savings == 50.0
        assert build.total_discount_percent == 6

    def test_empty_build_summary(self):
        build = Build()
        assert build.total_price == 0
        assert build.total_discount_percent == 0
        assert build.completion_percentage == 0
        assert not build.required_components_complete

    @pytest.mark.parametrize("count, expected", [(1, 13), (3, 38), (4, 50), (8, 100)])
    def test_completion_percentage(self, make_build, make_component, count, expected):
        categories = list(ComponentCategory)[:count]
        build = make_build(*[make_component(c.value) for c in categories])
        assert build.completion_percentage == expected

    def test_required_components(self, make_build, make_component):
        build = make_build(*[make_component(c) for c in ("cpu", "motherboard", "ram", "storage")])
        assert build.required_components_complete


class TestCompatibilityReport:
    def _report(self, *findings, when=None):
        when = when or datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)
        return CompatibilityReport(findings=tuple(findings), estimated_wattage=350, last_checked=when)

    def test_severity_split(self):
        report = self._report(
            Finding.warning("cooling", "hot"),
            Finding.issue("ram_capacity", "too much"),
        )
        assert report.issues == ["too much"]
        assert report.warnings == ["hot"]
        assert not report.is_compatible
        assert report.findings[1].severity is Severity.ISSUE

    def test_to_dict(self):
        report = self._report(Finding.warning("cooling", "hot"))
        assert report.to_dict() == {
            "isCompatible": True,
            "warnings": ["hot"],
            "issues": [],
            "estimatedWattage": 350,
            "lastChecked": "2024-05-01T12:30:00.000Z",
        }

    def test_last_checked_converted_to_utc(self):
        offset = timezone(timedelta(hours=2))
        report = self._report(when=datetime(2024, 5, 1, 14, 30, 0, 250000, tzinfo=offset))
        assert report.to_dict()["lastChecked"] == "2024-05-01T12:30:00.250Z"

    def test_equality_ignores_timestamp(self):
        earlier = self._report(when=datetime(2024, 1, 1, tzinfo=timezone.utc))
        later = self._report(when=datetime(2024, 6, 1, tzinfo=timezone.utc))
        assert earlier == later


def test_power_estimate_lookup():
    estimate = PowerEstimate(total_watts=200, base_watts=50, breakdown=((ComponentCategory.CPU, 150),))
    assert estimate.watts_for(ComponentCategory.CPU) == 150
    assert estimate.watts_for(ComponentCategory.GPU) is None
