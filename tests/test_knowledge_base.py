"""Tests for the hardware lookup tables and their loader."""

import json
import logging

import pytest

from pc_build_validator.exceptions import KnowledgeBaseError
from pc_build_validator.knowledge_base import (
    DEFAULT_TABLES_FILE,
    HardwareKnowledgeBase,
    KnowledgeBaseLoader,
    get_default_knowledge_base,
)


def _write(tmp_path, data, name="tables.json"):
    path = tmp_path / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


class TestBundledTables:
    def test_bundled_file_is_loaded(self, knowledge_base):
        assert str(DEFAULT_TABLES_FILE) in knowledge_base.loaded_files
        stats = knowledge_base.get_statistics()
        assert stats["cpu_power_tiers"] == 8
        assert stats["sockets"] == 2

    def test_default_is_cached(self):
        assert get_default_knowledge_base() is get_default_knowledge_base()

    def test_first_match_wins(self, knowledge_base):
        # "RTX 4080" is listed before any shorter fragment it contains
        assert knowledge_base.gpu_power("RTX 4080") == 280
        assert knowledge_base.gpu_power("GTX 1080") is None

    def test_chipsets_for_normalizes_socket(self, knowledge_base):
        assert "Z790" in knowledge_base.chipsets_for("LGA1700", "13")
        assert knowledge_base.chipsets_for("lga 1700", "13") == knowledge_base.chipsets_for("LGA1700", "13")
        assert "Z790" not in knowledge_base.chipsets_for("LGA1700", "12")

    def test_chipsets_for_unknown_entry(self, knowledge_base):
        assert knowledge_base.chipsets_for("AM4", "5") is None
        assert knowledge_base.chipsets_for("AM5", "9") is None
        assert knowledge_base.chipsets_for("AM5", None) is None

    def test_chipset_fragments(self, knowledge_base):
        assert knowledge_base.is_budget_chipset("Intel H610")
        assert knowledge_base.is_budget_chipset("b660m")
        assert not knowledge_base.is_budget_chipset("Z790")
        assert knowledge_base.is_legacy_nvme_chipset("older Intel chipset")
        assert not knowledge_base.is_legacy_nvme_chipset(None)


class TestLoading:
    def test_extra_file_replaces_table(self, tmp_path):
        path = _write(tmp_path, {
            "metadata": {"schema_version": "1.2"},
            "cpu_power_tiers": [{"match": "Xeon", "value": 150}],
        })
        kb = KnowledgeBaseLoader().load_single(path)

        assert kb.cpu_power("Intel Xeon W-2400") == 150
        # Replaced wholesale, not merged
        assert kb.cpu_power("Core i9-13900K") is None
        # Untouched tables keep the bundled rows
        assert kb.gpu_power("RTX 4090") == 320

    def test_without_defaults(self, tmp_path):
        path = _write(tmp_path, {"gpu_lengths": [{"match": "Arc", "value": 300}]})
        kb = KnowledgeBaseLoader(include_defaults=False).load_multiple([path])

        assert kb.gpu_length("Intel Arc A770") == 300
        assert kb.gpu_power("RTX 4090") is None
        assert kb.loaded_files == [path]

    def test_missing_file(self, tmp_path):
        kb = HardwareKnowledgeBase()
        with pytest.raises(KnowledgeBaseError, match="file not found"):
            kb.load_from_files([str(tmp_path / "missing.json")])

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(KnowledgeBaseError, match="invalid JSON"):
            HardwareKnowledgeBase().load_from_files([str(path)])

    def test_unsupported_schema_major(self, tmp_path):
        path = _write(tmp_path, {"metadata": {"schema_version": "2.0"}})
        with pytest.raises(KnowledgeBaseError, match="unsupported schema_version"):
            HardwareKnowledgeBase().load_from_files([path])

    def test_invalid_schema_version(self):
        with pytest.raises(KnowledgeBaseError, match="invalid schema_version"):
            HardwareKnowledgeBase().load_from_dict({"metadata": {"schema_version": "latest"}})

    @pytest.mark.parametrize("data", [
        [],
        {"cpu_power_tiers": {"i9": 125}},
        {"cpu_power_tiers": [{"match": "i9"}]},
        {"gpu_power_tiers": [{"match": "RTX", "value": 0}]},
        {"budget_chipsets": "H610"},
        {"socket_chipsets": {"AM5": ["B650"]}},
        {"socket_chipsets": {"AM5": {"7": "B650"}}},
    ])
    def test_malformed_tables(self, data):
        with pytest.raises(KnowledgeBaseError):
            HardwareKnowledgeBase().load_from_dict(data)

    def test_unknown_tables_are_ignored(self, caplog):
        caplog.set_level(logging.WARNING, logger="pc_build_validator")
        kb = HardwareKnowledgeBase()
        kb.load_from_dict({"ram_tiers": [], "budget_chipsets": ["A520"]}, "extra")

        assert kb.is_budget_chipset("A520M")
        assert "ram_tiers" in caplog.text
