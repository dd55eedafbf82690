"""
JSON report generator for build compatibility results.
"""

import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..models import Build, BuildAnalysis, ComponentCategory, Finding, PowerEstimate
from ..version import get_version
from .base import ReportGenerator


class JSONReporter(ReportGenerator):
    """
    JSON report generator that serves as the foundation for all other report formats.
    Generates structured JSON output with the compatibility report, build
    summary and power breakdown.
    """

    def __init__(self, include_metadata: bool = True, pretty_print: bool = True):
        """
        Initialize JSON reporter.

        Args:
            include_metadata: Whether to include metadata like timestamps
            pretty_print: Whether to format JSON with indentation
        """
        self.include_metadata = include_metadata
        self.pretty_print = pretty_print

    def generate_report(self, analysis: BuildAnalysis, output_path: Optional[str] = None) -> str:
        """
        Generate JSON report from a build analysis.

        Args:
            analysis: BuildAnalysis to generate report from
            output_path: Optional path to write report to file

        Returns:
            JSON report content as string
        """
        report_data = self._build_report_structure(analysis)

        if self.pretty_print:
            json_content = json.dumps(report_data, indent=2, ensure_ascii=False, default=str)
        else:
            json_content = json.dumps(report_data, ensure_ascii=False, default=str)

        if output_path:
            self._write_text(json_content, output_path)

        return json_content

    def get_format_name(self) -> str:
        """Get the name of the report format."""
        return "json"

    def _build_report_structure(self, analysis: BuildAnalysis) -> Dict[str, Any]:
        """
        Build the complete report data structure.

        Args:
            analysis: Analysis results to structure

        Returns:
            Dictionary containing structured report data
        """
        report = {
            "compatibility": analysis.report.to_dict(),
            "summary": self._build_summary(analysis),
            "build": self._build_build_section(analysis.build),
            "components": self._build_components_list(analysis.build),
            "findings": self._build_findings_list(analysis.report.findings),
            "power": self._build_power_section(analysis.power),
        }

        if self.include_metadata:
            report["metadata"] = self._build_metadata(analysis)

        return report

    def _build_summary(self, analysis: BuildAnalysis) -> Dict[str, Any]:
        report = analysis.report
        return {
            "build_name": analysis.build.name,
            "is_compatible": report.is_compatible,
            "issue_count": len(report.issues),
            "warning_count": len(report.warnings),
            "estimated_wattage": report.estimated_wattage,
            "processing_time_seconds": round(analysis.processing_time, 3),
        }

    def _build_build_section(self, build: Build) -> Dict[str, Any]:
        """Build summary figures derived from the component set."""
        return {
            "name": build.name,
            "component_count": build.component_count,
            "completion_percentage": build.completion_percentage,
            "required_components_complete": build.required_components_complete,
            "missing_slots": [c.value for c in ComponentCategory if c not in build.components],
            "total_price": build.total_price,
            "original_total_price": build.original_total_price,
            "total_savings": build.total_savings,
            "total_discount_percent": build.total_discount_percent,
        }

    def _build_components_list(self, build: Build) -> List[Dict[str, Any]]:
        components_data = []
        for category in build.filled_slots:
            component = build.components[category]
            components_data.append({
                "category": category.value,
                "label": category.label,
                "name": component.name,
                "brand": component.brand,
                "model": component.model,
                "price": component.price,
                "specifications": component.specifications,
            })
        return components_data

    def _build_findings_list(self, findings) -> List[Dict[str, Any]]:
        return [self._finding_to_dict(finding) for finding in findings]

    @staticmethod
    def _finding_to_dict(finding: Finding) -> Dict[str, Any]:
        return {
            "severity": finding.severity.value,
            "rule": finding.rule,
            "message": finding.message,
        }

    def _build_power_section(self, power: PowerEstimate) -> Dict[str, Any]:
        return {
            "total_watts": power.total_watts,
            "base_watts": power.base_watts,
            "breakdown": [
                {"category": category.value, "label": category.label, "watts": watts}
                for category, watts in power.breakdown
            ],
        }

    def _build_metadata(self, analysis: BuildAnalysis) -> Dict[str, Any]:
        """Build metadata section of the report."""
        metadata = {
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "generator": "PC Build Validator",
            "version": get_version(),
            "report_format": self.get_format_name()
        }

        if analysis.source_file:
            metadata["build_file"] = analysis.source_file

        return metadata

    def get_structured_data(self, analysis: BuildAnalysis) -> Dict[str, Any]:
        """
        Get structured data without converting to JSON string.
        Used by other reporters that need the data structure.

        Args:
            analysis: Analysis results to structure

        Returns:
            Dictionary containing structured report data
        """
        return self._build_report_structure(analysis)
