"""Tests for the build file parsers."""

import json
import logging

import pytest

from pc_build_validator.exceptions import BuildFileParseError
from pc_build_validator.models import ComponentCategory
from pc_build_validator.parsers import BuildParserFactory, JSONBuildParser, YAMLBuildParser

BUILD_DOCUMENT = {
    "name": "Streaming rig",
    "components": {
        "cpu": {
            "id": 17,
            "name": "AMD Ryzen 7 7700X",
            "brand": "AMD",
            "price": "$299.99",
            "originalPrice": 349.99,
            "specifications": {"socket": "AM5", "tdp": "105W"},
        },
        "mobo": {
            "name": "MSI B650 Tomahawk",
            "brand": "MSI",
            "price": 219,
            "specifications": {"socket": "AM5", "memoryType": "DDR5", "formFactor": "ATX"},
        },
        "gpu": None,
    },
}


def _write(tmp_path, name, content):
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return str(path)


class TestJSONBuildParser:
    def test_parse_mapping_form(self, tmp_path):
        path = _write(tmp_path, "build.json", json.dumps(BUILD_DOCUMENT))
        build = JSONBuildParser().parse(path)

        assert build.name == "Streaming rig"
        assert build.filled_slots == [ComponentCategory.CPU, ComponentCategory.MOTHERBOARD]

        cpu = build.get(ComponentCategory.CPU)
        assert cpu.price == 299.99
        assert cpu.original_price == 349.99
        assert cpu.component_id == "17"
        assert cpu.spec("socket") == "AM5"

    def test_invalid_json(self, tmp_path):
        path = _write(tmp_path, "broken.json", "{\"name\": ")
        with pytest.raises(BuildFileParseError, match="invalid JSON") as exc_info:
            JSONBuildParser().parse(path)
        assert exc_info.value.file_path == path

    def test_missing_file(self, tmp_path):
        with pytest.raises(BuildFileParseError, match="file not found"):
            JSONBuildParser().parse(str(tmp_path / "nope.json"))


class TestYAMLBuildParser:
    def test_parse_list_form(self, tmp_path):
        path = _write(tmp_path, "budget.yml", """
components:
  - category: processor
    name: Intel Core i3-12100F
    price: 89.99
    specifications:
      socket: LGA1700
  - category: memory
    name: Corsair Vengeance 16GB
    specifications:
      capacity: 16GB
      memoryType: DDR4
""")
        build = YAMLBuildParser().parse(path)

        # Falls back to the file name
        assert build.name == "budget"
        assert build.get(ComponentCategory.RAM).spec("capacity") == "16GB"
        assert build.get(ComponentCategory.RAM).price == 0.0
        assert build.get(ComponentCategory.CPU).price == 89.99

    def test_invalid_yaml(self, tmp_path):
        path = _write(tmp_path, "broken.yaml", "components: [unclosed")
        with pytest.raises(BuildFileParseError, match="invalid YAML"):
            YAMLBuildParser().parse(path)


class TestParseData:
    @pytest.fixture
    def parser(self):
        return JSONBuildParser()

    def test_empty_document(self, parser):
        build = parser.parse_data({})
        assert build.name == "Untitled build"
        assert build.component_count == 0

    def test_duplicate_slot_keeps_last(self, parser, caplog):
        caplog.set_level(logging.WARNING, logger="pc_build_validator")
        build = parser.parse_data({"components": [
            {"category": "ssd", "name": "First"},
            {"category": "hdd", "name": "Second"},
        ]})

        assert build.get(ComponentCategory.STORAGE).name == "Second"
        assert "Duplicate Storage" in caplog.text

    @pytest.mark.parametrize("data, message", [
        ([], "must be a mapping"),
        ({"components": "cpu"}, "must be a mapping or a list"),
        ({"components": [{"name": "Orphan"}]}, "component 0 needs a 'category'"),
        ({"components": {"monitor": {"name": "Screen"}}}, "Unknown component category"),
        ({"components": {"cpu": "Ryzen"}}, "CPU entry must be a mapping"),
        ({"components": {"cpu": {"brand": "AMD"}}}, "CPU entry needs a 'name'"),
        ({"components": {"cpu": {"name": "X", "category": "gpu"}}}, "declares category 'gpu'"),
        ({"components": {"cpu": {"name": "X", "specifications": ["socket"]}}}, "'specifications' must be a mapping"),
        ({"components": {"cpu": {"name": "X", "price": "cheap"}}}, "is not a number"),
        ({"components": {"cpu": {"name": "X", "price": -5}}}, "must not be negative"),
        ({"components": {"cpu": {"name": "X", "price": True}}}, "price must be a number"),
        ({"components": {"cpu": {"name": "X", "price": float("inf")}}}, "not a finite number"),
        ({"components": {"cpu": {"name": "X", "originalPrice": "nan"}}}, "not a finite number"),
    ])
    def test_invalid_documents(self, parser, data, message):
        with pytest.raises(BuildFileParseError, match=message):
            parser.parse_data(data, "build.json")


class TestBuildParserFactory:
    def test_selects_parser_by_extension(self):
        factory = BuildParserFactory()
        assert isinstance(factory.get_parser("build.JSON"), JSONBuildParser)
        assert isinstance(factory.get_parser("build.yml"), YAMLBuildParser)

    def test_supported_extensions(self):
        assert BuildParserFactory().get_supported_extensions() == [".json", ".yaml", ".yml"]

    def test_unsupported_extension(self):
        with pytest.raises(BuildFileParseError, match="unsupported file extension .txt"):
            BuildParserFactory().get_parser("build.txt")

    def test_parse_file(self, tmp_path):
        path = _write(tmp_path, "build.yaml", "name: Tiny\ncomponents:\n  case:\n    name: NR200\n")
        build = BuildParserFactory().parse_file(path)
        assert build.name == "Tiny"
        assert build.get(ComponentCategory.CASE).name == "NR200"
