"""Tests for the build compatibility analyzer and its end-to-end scenarios."""

import json
import logging

import pytest

from pc_build_validator.analysis import (
    BuildCompatibilityAnalyzer,
    BuildCompletenessRule,
    CompatibilityRule,
    create_analyzer,
)
from pc_build_validator.config import Config
from pc_build_validator.models import Build, BuildAnalysis, ComponentCategory, Severity


class ExplodingRule(CompatibilityRule):
    name = "exploding"

    def check(self, build, context):
        raise RuntimeError("boom")


class TestScenarios:
    def test_socket_mismatch(self, analyzer, make_component):
        report = analyzer.check_components({
            "cpu": make_component("cpu", "AMD Ryzen 5 7600X", {"socket": "AM5"}),
            "motherboard": make_component("motherboard", "MSI PRO B760", {"socket": "LGA1700"}),
        })

        assert not report.is_compatible
        assert "CPU socket AM5 is not compatible with motherboard socket LGA1700" in report.issues

    def test_ram_capacity_overflow(self, analyzer, make_component):
        report = analyzer.check_components({
            "ram": make_component("ram", "Kit", {"capacity": "64GB"}),
            "motherboard": make_component("motherboard", "Board", {"maxRam": "32GB"}),
        })

        assert not report.is_compatible
        assert any("exceeds motherboard limit" in issue for issue in report.issues)

    def test_psu_undersized(self, analyzer, make_build, make_component, high_end_parts):
        build = make_build(*high_end_parts, make_component("psu", "PSU", {"wattage": "400W"}))
        report = analyzer.check_compatibility(build)

        assert report.estimated_wattage == 479
        assert not report.is_compatible
        assert any("insufficient" in issue for issue in report.issues)

    def test_psu_within_margin_warns(self, analyzer, make_build, make_component, high_end_parts):
        build = make_build(*high_end_parts, make_component("psu", "PSU", {"wattage": "500W"}))
        report = analyzer.check_compatibility(build)

        assert report.is_compatible
        power_findings = [f for f in report.findings if f.rule == "power_budget"]
        assert [f.severity for f in power_findings] == [Severity.WARNING]
        assert "Recommend 575W" in power_findings[0].message

    def test_psu_with_headroom(self, analyzer, make_build, make_component, high_end_parts):
        build = make_build(*high_end_parts, make_component("psu", "PSU", {"wattage": "650W"}))
        report = analyzer.check_compatibility(build)

        assert report.is_compatible
        assert not [f for f in report.findings if f.rule == "power_budget"]

    def test_empty_build(self, analyzer):
        report = analyzer.check_components({})

        assert report.is_compatible
        assert report.issues == []
        assert report.warnings == [
            "Build is incomplete. Essential components: CPU, Motherboard, RAM, Storage"
        ]
        assert report.estimated_wattage == 50

    def test_gpu_tight_fit(self, analyzer, make_component):
        # RTX 4080 is estimated at 310mm from the lookup tables
        report = analyzer.check_components({
            "gpu": make_component("gpu", "NVIDIA GeForce RTX 4080"),
            "case": make_component("case", "Mid Tower", {"maxGpuLength": "330mm"}),
        })

        assert report.is_compatible
        assert "GPU will be a tight fit in case (310mm vs 330mm max)" in report.warnings


class TestProperties:
    def test_repeat_evaluation_is_identical(self, analyzer, make_build, make_component, high_end_parts):
        build = make_build(*high_end_parts, make_component("psu", "PSU", {"wattage": "500W"}))

        first = analyzer.check_compatibility(build)
        second = analyzer.check_compatibility(build)

        assert first == second
        assert json.dumps(first.to_dict()) == json.dumps(second.to_dict())

    def test_compatible_iff_no_issues(self, analyzer, make_build, make_component, high_end_parts):
        builds = [
            Build(),
            make_build(*high_end_parts),
            make_build(*high_end_parts, make_component("psu", "PSU", {"wattage": "300W"})),
            make_build(
                make_component("cpu", "CPU", {"socket": "AM5"}),
                make_component("motherboard", "Board", {"socket": "AM4"}),
            ),
        ]
        for build in builds:
            report = analyzer.check_compatibility(build)
            assert report.is_compatible == (len(report.issues) == 0)
            assert report.to_dict()["isCompatible"] == (report.to_dict()["issues"] == [])

    def test_new_issue_keeps_unrelated_issues(self, analyzer, make_build, make_component):
        build = make_build(
            make_component("ram", "Kit", {"capacity": "64GB"}),
            make_component("motherboard", "Board", {"maxRam": "32GB", "socket": "LGA1700"}),
        )
        before = analyzer.check_compatibility(build).issues

        build.attach(make_component("cpu", "AMD Ryzen 5 7600X", {"socket": "AM5"}))
        after = analyzer.check_compatibility(build).issues

        assert set(before) <= set(after)
        assert len(after) == len(before) + 1

    def test_empty_specifications_never_fire_spuriously(self, analyzer, make_build, make_component):
        build = make_build(*[make_component(category.value, category.label) for category in ComponentCategory])
        report = analyzer.check_compatibility(build)

        assert report.is_compatible
        assert [(f.rule, f.message) for f in report.findings] == [
            ("gpu_case_clearance", "Please verify GPU will fit in selected case"),
        ]

    def test_findings_follow_rule_order(self, analyzer, make_build, make_component, high_end_parts):
        build = make_build(
            *high_end_parts,
            make_component("motherboard", "Board", {"socket": "AM5", "memoryType": "DDR4"}),
        )
        rules = [f.rule for f in analyzer.check_compatibility(build).findings]

        assert rules == ["cpu_motherboard_socket", "ram_motherboard_type", "power_budget", "cooling"]


class TestAnalyzer:
    def test_last_checked_from_clock(self, analyzer):
        report = analyzer.check_compatibility(Build())
        assert report.to_dict()["lastChecked"] == "2024-05-01T12:30:00.000Z"

    def test_report_reflects_current_components(self, analyzer, make_build, make_component):
        build = make_build(
            make_component("cpu", "CPU", {"socket": "AM5"}),
            make_component("motherboard", "Board", {"socket": "LGA1700"}),
        )
        assert not analyzer.check_compatibility(build).is_compatible

        build.detach("motherboard")
        assert analyzer.check_compatibility(build).is_compatible

    def test_analyze_collects_power_and_timing(self, analyzer, make_build, high_end_parts, caplog):
        caplog.set_level(logging.INFO, logger="pc_build_validator")
        analysis = analyzer.analyze(make_build(*high_end_parts, name="Gaming rig"))

        assert isinstance(analysis, BuildAnalysis)
        assert analysis.power.total_watts == analysis.report.estimated_wattage == 479
        assert analysis.processing_time >= 0
        assert analysis.source_file is None
        assert "Checking build 'Gaming rig'" in caplog.text
        assert "~479W estimated" in caplog.text

    def test_check_components_accepts_aliases_and_empty_slots(self, analyzer, make_component):
        report = analyzer.check_components({
            "processor": make_component("cpu", "CPU", {"socket": "AM5"}),
            "mobo": make_component("motherboard", "Board", {"socket": "AM4"}),
            "gpu": None,
        })
        assert not report.is_compatible

    def test_check_components_rejects_misfiled_component(self, analyzer, make_component):
        with pytest.raises(ValueError, match="is a GPU, not a CPU"):
            analyzer.check_components({"cpu": make_component("gpu", "RTX 4090")})

    def test_overlong_values_read_as_unknown(self, analyzer, make_build, make_component):
        garbled = make_build(
            make_component("ram", "Kit", {"capacity": "1" * 400 + "GB", "speed": float("inf")}),
            make_component("psu", "Supply", {"wattage": "9" * 400 + "W"}),
        )
        blank = make_build(make_component("ram", "Kit"), make_component("psu", "Supply"))

        analysis = analyzer.analyze(garbled)
        expected = analyzer.analyze(blank)

        assert analysis.report.findings == expected.report.findings
        assert analysis.power.total_watts == expected.power.total_watts

    def test_check_components_with_overlong_capacity(self, analyzer, make_component):
        report = analyzer.check_components({"ram": make_component("ram", "Kit", {"capacity": "1" * 400 + "GB"})})
        assert report.estimated_wattage > 0

    def test_failing_rule_is_logged_and_skipped(self, knowledge_base, fixed_clock, caplog):
        analyzer = BuildCompatibilityAnalyzer(
            knowledge_base=knowledge_base,
            rules=[ExplodingRule(), BuildCompletenessRule()],
            clock=fixed_clock,
        )
        report = analyzer.check_compatibility(Build(name="Fragile"))

        assert len(report.warnings) == 1
        assert "Rule 'exploding' failed on build 'Fragile': boom" in caplog.text
        assert any(record.levelno == logging.ERROR for record in caplog.records)

    def test_custom_rule_thresholds(self, knowledge_base, make_build, make_component):
        config = Config()
        config.rules.min_filled_slots = 0
        analyzer = BuildCompatibilityAnalyzer(knowledge_base=knowledge_base, config=config)

        assert analyzer.check_compatibility(Build()).findings == ()


class TestCreateAnalyzer:
    def test_defaults(self, knowledge_base):
        analyzer = create_analyzer()
        assert analyzer.knowledge_base is knowledge_base
        assert len(analyzer.rules) == 11

    def test_extra_tables_from_config(self, tmp_path, make_component):
        tables = tmp_path / "lengths.json"
        tables.write_text(json.dumps({"gpu_lengths": [{"match": "RTX 4080", "value": 350}]}), encoding="utf-8")
        config = Config()
        config.knowledge_base.files = [str(tables)]

        report = create_analyzer(config).check_components({
            "gpu": make_component("gpu", "RTX 4080"),
            "case": make_component("case", "Case", {"maxGpuLength": "330mm"}),
        })

        assert report.issues == ["GPU length (~350mm) exceeds case clearance (330mm)"]

    def test_explicit_knowledge_base_wins(self, knowledge_base):
        config = Config()
        config.knowledge_base.include_defaults = False
        assert create_analyzer(config, knowledge_base=knowledge_base).knowledge_base is knowledge_base
