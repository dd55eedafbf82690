"""
Markdown report generator for build compatibility results.
"""

from typing import Any, Dict, List, Optional

from ..models import BuildAnalysis
from .base import ReportGenerator
from .json_reporter import JSONReporter


class MarkdownReporter(ReportGenerator):
    """
    Markdown report generator that creates human-readable reports.
    Uses JSONReporter internally for data structuring.
    """

    def __init__(self, include_metadata: bool = True, include_power: bool = True):
        """
        Initialize Markdown reporter.

        Args:
            include_metadata: Whether to include metadata section
            include_power: Whether to include the power breakdown table
        """
        self.include_metadata = include_metadata
        self.include_power = include_power
        self.json_reporter = JSONReporter(include_metadata=include_metadata)

    def generate_report(self, analysis: BuildAnalysis, output_path: Optional[str] = None) -> str:
        """
        Generate Markdown report from a build analysis.

        Args:
            analysis: BuildAnalysis to generate report from
            output_path: Optional path to write report to file

        Returns:
            Markdown report content as string
        """
        data = self.json_reporter.get_structured_data(analysis)
        markdown_content = self._build_markdown_report(data)

        if output_path:
            self._write_text(markdown_content, output_path)

        return markdown_content

    def get_format_name(self) -> str:
        """Get the name of the report format."""
        return "markdown"

    def _build_markdown_report(self, data: Dict[str, Any]) -> str:
        sections = [self._build_title_section(data)]

        if self.include_metadata and "metadata" in data:
            sections.append(self._build_metadata_section(data["metadata"]))

        sections.append(self._build_summary_section(data))
        sections.append(self._build_findings_section(data["findings"]))
        sections.append(self._build_components_section(data["components"]))

        if self.include_power:
            sections.append(self._build_power_section(data["power"]))

        return "\n\n".join(sections) + "\n"

    def _build_title_section(self, data: Dict[str, Any]) -> str:
        summary = data["summary"]
        status_emoji = "✅" if summary["is_compatible"] else "❌"
        verdict = "compatible" if summary["is_compatible"] else "not compatible"

        return (
            f"# {status_emoji} PC Build Compatibility Report: {self._escape(summary['build_name'])}\n\n"
            f"**The build is {verdict}, with {summary['issue_count']} issues and "
            f"{summary['warning_count']} warnings. Estimated draw is ~{summary['estimated_wattage']}W.**"
        )

    def _build_metadata_section(self, metadata: Dict[str, Any]) -> str:
        lines = [
            "## Report Information",
            "",
            f"- **Generated:** {metadata['generated_at']}",
            f"- **Generator:** {metadata['generator']} v{metadata['version']}",
        ]
        if metadata.get("build_file"):
            lines.append(f"- **Build file:** `{metadata['build_file']}`")
        return "\n".join(lines)

    def _build_summary_section(self, data: Dict[str, Any]) -> str:
        build = data["build"]
        summary = data["summary"]

        lines = [
            "## Summary",
            "",
            "| Metric | Value |",
            "|--------|-------|",
            f"| Components | {build['component_count']}/8 ({build['completion_percentage']}%) |",
            f"| Essentials present | {'Yes' if build['required_components_complete'] else 'No'} |",
            f"| Issues | {summary['issue_count']} |",
            f"| Warnings | {summary['warning_count']} |",
            f"| Estimated wattage | ~{summary['estimated_wattage']}W |",
            f"| Total price | ${build['total_price']:.2f} |",
        ]
        if build["total_savings"] > 0:
            lines.append(f"| Savings | ${build['total_savings']:.2f} ({build['total_discount_percent']}%) |")
        if build["missing_slots"]:
            lines.extend(["", f"Empty slots: {', '.join(build['missing_slots'])}"])
        return "\n".join(lines)

    def _build_findings_section(self, findings: List[Dict[str, Any]]) -> str:
        lines = ["## Findings", ""]

        issues = [f for f in findings if f["severity"] == "issue"]
        warnings = [f for f in findings if f["severity"] == "warning"]

        if not findings:
            lines.append("No compatibility problems found.")
            return "\n".join(lines)

        if issues:
            lines.extend(["### ❌ Issues", ""])
            lines.extend(f"- {self._escape(f['message'])} (`{f['rule']}`)" for f in issues)
            lines.append("")

        if warnings:
            lines.extend(["### ⚠️ Warnings", ""])
            lines.extend(f"- {self._escape(f['message'])} (`{f['rule']}`)" for f in warnings)

        return "\n".join(lines).rstrip()

    def _build_components_section(self, components: List[Dict[str, Any]]) -> str:
        lines = ["## Components", ""]

        if not components:
            lines.append("No components selected.")
            return "\n".join(lines)

        lines.extend([
            "| Slot | Component | Brand | Price |",
            "|------|-----------|-------|-------|",
        ])
        for component in components:
            name = self._escape(component["model"] or component["name"])
            brand = self._escape(component["brand"] or "")
            lines.append(f"| {component['label']} | {name} | {brand} | ${component['price']:.2f} |")
        return "\n".join(lines)

    def _build_power_section(self, power: Dict[str, Any]) -> str:
        lines = [
            "## Power Breakdown",
            "",
            "| Source | Watts |",
            "|--------|-------|",
            f"| Base (board, fans) | {power['base_watts']} |",
        ]
        for entry in power["breakdown"]:
            lines.append(f"| {entry['label']} | {entry['watts']:g} |")
        lines.append(f"| **Total** | **{power['total_watts']}** |")
        return "\n".join(lines)

    @staticmethod
    def _escape(text: str) -> str:
        return str(text).replace("|", "\\|")
