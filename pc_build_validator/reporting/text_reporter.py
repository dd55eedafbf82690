"""
Human-readable text report generator for build compatibility results.
"""

import os
import re
import sys
from typing import Any, Dict, List, Optional

from ..models import BuildAnalysis
from .base import ReportGenerator
from .json_reporter import JSONReporter


class HumanReadableReporter(ReportGenerator):
    """
    Human-readable text report generator for console output.
    Uses JSONReporter internally for data structuring and includes color coding.
    """

    # ANSI color codes
    COLORS = {
        'RED': '\033[91m',
        'GREEN': '\033[92m',
        'YELLOW': '\033[93m',
        'BLUE': '\033[94m',
        'CYAN': '\033[96m',
        'BOLD': '\033[1m',
        'RESET': '\033[0m'
    }

    SEVERITY_CONFIG = {
        'issue': {'symbol': '❌', 'color': 'RED'},
        'warning': {'symbol': '⚠️ ', 'color': 'YELLOW'},
    }

    _ANSI_ESCAPE = re.compile(r'\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])')

    def __init__(self, use_colors: bool = None, width: int = 80, detailed: bool = False):
        """
        Initialize human-readable text reporter.

        Args:
            use_colors: Whether to use ANSI color codes. Auto-detects if None.
            width: Console width for formatting (default: 80)
            detailed: Whether to include component specifications and power breakdown
        """
        if use_colors is None:
            self.use_colors = self._supports_color()
        else:
            self.use_colors = use_colors

        self.width = width
        self.detailed = detailed
        self.json_reporter = JSONReporter(include_metadata=True)

    def generate_report(self, analysis: BuildAnalysis, output_path: Optional[str] = None) -> str:
        """
        Generate human-readable text report from a build analysis.

        Args:
            analysis: BuildAnalysis to generate report from
            output_path: Optional path to write report to file

        Returns:
            Text report content as string
        """
        data = self.json_reporter.get_structured_data(analysis)
        text_content = self._build_text_report(data)

        # Files never get color codes
        if output_path:
            self._write_text(self._strip_colors(text_content), output_path)

        return text_content

    def get_format_name(self) -> str:
        """Get the name of the report format."""
        return "text"

    def _supports_color(self) -> bool:
        """
        Auto-detect if the terminal supports color output.

        Returns:
            True if colors are supported, False otherwise
        """
        if os.environ.get('NO_COLOR'):
            return False

        if not hasattr(sys.stdout, 'isatty') or not sys.stdout.isatty():
            return False

        term = os.environ.get('TERM', '').lower()
        return 'color' in term or term in ['xterm', 'xterm-256color', 'screen']

    def _colorize(self, text: str, color: str) -> str:
        if not self.use_colors or color not in self.COLORS:
            return text
        return f"{self.COLORS[color]}{text}{self.COLORS['RESET']}"

    def _strip_colors(self, text: str) -> str:
        return self._ANSI_ESCAPE.sub('', text)

    def _build_text_report(self, data: Dict[str, Any]) -> str:
        """
        Build complete text report from structured data.

        Args:
            data: Structured report data from JSON reporter

        Returns:
            Complete text report as string
        """
        sections = [
            self._build_header(data),
            self._build_summary_section(data),
            self._build_components_section(data["components"]),
            self._build_findings_section(data["findings"]),
        ]

        if self.detailed:
            sections.append(self._build_power_section(data["power"]))
            sections.append(self._build_specifications_section(data["components"]))

        if "metadata" in data:
            sections.append(self._build_footer(data["metadata"]))

        return "\n\n".join(section for section in sections if section)

    def _build_header(self, data: Dict[str, Any]) -> str:
        summary = data["summary"]

        if not summary["is_compatible"]:
            status_text = self._colorize("ISSUES FOUND", "RED")
            status_symbol = "❌"
        elif summary["warning_count"]:
            status_text = self._colorize("COMPATIBLE WITH WARNINGS", "YELLOW")
            status_symbol = "⚠️"
        else:
            status_text = self._colorize("COMPATIBLE", "GREEN")
            status_symbol = "✅"

        title = f"{status_symbol} PC BUILD COMPATIBILITY REPORT - {status_text}"
        separator = "=" * min(len(self._strip_colors(title)), self.width)

        return "\n".join([
            self._colorize(separator, 'BOLD'),
            self._colorize(title, 'BOLD'),
            self._colorize(separator, 'BOLD'),
            "",
            f"Build: {self._colorize(summary['build_name'], 'CYAN')}",
        ])

    def _build_summary_section(self, data: Dict[str, Any]) -> str:
        summary = data["summary"]
        build = data["build"]

        lines = [
            f"📊 {self._colorize('SUMMARY', 'BOLD')}",
            "",
            f"   Components:          {build['component_count']}/8 ({build['completion_percentage']}% complete)",
            f"   Essentials present:  {'Yes' if build['required_components_complete'] else 'No'}",
            f"   Issues:              {self._colorize(str(summary['issue_count']), 'RED' if summary['issue_count'] else 'GREEN')}",
            f"   Warnings:            {self._colorize(str(summary['warning_count']), 'YELLOW' if summary['warning_count'] else 'GREEN')}",
            f"   Estimated wattage:   ~{summary['estimated_wattage']}W",
            f"   Total price:         ${build['total_price']:.2f}",
        ]

        if build["total_savings"] > 0:
            lines.append(
                f"   Savings:             ${build['total_savings']:.2f} ({build['total_discount_percent']}% off)"
            )

        return "\n".join(lines)

    def _build_components_section(self, components: List[Dict[str, Any]]) -> str:
        lines = [f"🧩 {self._colorize('COMPONENTS', 'BOLD')}", ""]

        if not components:
            lines.append("   (no components selected)")
            return "\n".join(lines)

        for component in components:
            name = component["model"] or component["name"]
            brand = f"{component['brand']} " if component["brand"] else ""
            lines.append(f"   {component['label']:<12} {brand}{name}  ${component['price']:.2f}")

        return "\n".join(lines)

    def _build_findings_section(self, findings: List[Dict[str, Any]]) -> str:
        lines = [f"🔍 {self._colorize('FINDINGS', 'BOLD')}", ""]

        if not findings:
            lines.append(self._colorize("   ✅ No compatibility problems found.", "GREEN"))
            return "\n".join(lines)

        # Blocking issues first, then advisories, each in rule order
        for severity in ('issue', 'warning'):
            config = self.SEVERITY_CONFIG[severity]
            for finding in findings:
                if finding["severity"] != severity:
                    continue
                message = self._colorize(finding["message"], config["color"])
                lines.append(f"   {config['symbol']} {message}")

        return "\n".join(lines)

    def _build_power_section(self, power: Dict[str, Any]) -> str:
        lines = [
            f"⚡ {self._colorize('POWER BREAKDOWN', 'BOLD')}",
            "",
            f"   {'Base (board, fans)':<20} {power['base_watts']:>6}W",
        ]
        for entry in power["breakdown"]:
            lines.append(f"   {entry['label']:<20} {entry['watts']:>6g}W")
        lines.append(f"   {'Total':<20} {power['total_watts']:>6}W")
        return "\n".join(lines)

    def _build_specifications_section(self, components: List[Dict[str, Any]]) -> str:
        if not components:
            return ""

        lines = [f"📋 {self._colorize('SPECIFICATIONS', 'BOLD')}"]
        for component in components:
            lines.append("")
            lines.append(f"   {self._colorize(component['label'], 'BLUE')}: {component['name']}")
            specifications = component["specifications"] or {}
            if not specifications:
                lines.append("      (none declared)")
            for key, value in specifications.items():
                if isinstance(value, (list, tuple)):
                    value = ", ".join(str(v) for v in value)
                lines.append(f"      {key}: {value}")
        return "\n".join(lines)

    def _build_footer(self, metadata: Dict[str, Any]) -> str:
        lines = ["-" * self.width, f"Generated by {metadata['generator']} v{metadata['version']}"]
        if metadata.get("build_file"):
            lines.append(f"Build file: {metadata['build_file']}")
        lines.append("Results are advisory; verify critical fit and power figures with the manufacturer.")
        return "\n".join(lines)
