"""
Excel report generator for build compatibility results.
"""

import io
from typing import Any, Dict, Optional

from openpyxl import Workbook
from openpyxl.chart import BarChart, Reference
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from ..exceptions import ReportGenerationError
from ..models import BuildAnalysis
from .base import ReportGenerator
from .json_reporter import JSONReporter


class ExcelReporter(ReportGenerator):
    """
    Excel report generator that creates a workbook with Summary, Findings,
    Components and Power sheets.
    Uses JSONReporter internally for data structuring.
    """

    def __init__(self, include_charts: bool = True):
        """
        Initialize Excel reporter.

        Args:
            include_charts: Whether to add a power breakdown chart
        """
        self.include_charts = include_charts
        self.json_reporter = JSONReporter(include_metadata=True)

        # Define styles
        self.header_font = Font(bold=True, color="FFFFFF")
        self.header_fill = PatternFill(start_color="366092", end_color="366092", fill_type="solid")
        self.compatible_fill = PatternFill(start_color="C6EFCE", end_color="C6EFCE", fill_type="solid")
        self.issue_fill = PatternFill(start_color="FFC7CE", end_color="FFC7CE", fill_type="solid")
        self.warning_fill = PatternFill(start_color="FFEB9C", end_color="FFEB9C", fill_type="solid")
        self.center_alignment = Alignment(horizontal="center", vertical="center")
        self.border = Border(
            left=Side(style="thin"),
            right=Side(style="thin"),
            top=Side(style="thin"),
            bottom=Side(style="thin")
        )

    def generate_report(self, analysis: BuildAnalysis, output_path: Optional[str] = None) -> str:
        """
        Generate Excel report from a build analysis.

        Args:
            analysis: BuildAnalysis to generate report from
            output_path: Optional path to write the workbook to

        Returns:
            Short description of where the workbook went
        """
        data = self.json_reporter.get_structured_data(analysis)
        workbook = self.create_workbook(data)

        if output_path:
            try:
                workbook.save(output_path)
            except OSError as e:
                raise ReportGenerationError(str(e), self.get_format_name(), output_path)
            return f"Excel report saved to {output_path}"

        buffer = io.BytesIO()
        workbook.save(buffer)
        return f"Excel workbook generated ({len(buffer.getvalue())} bytes)"

    def get_format_name(self) -> str:
        """Get the name of the report format."""
        return "excel"

    def create_workbook(self, data: Dict[str, Any]) -> Workbook:
        """
        Create complete Excel workbook from structured data.

        Args:
            data: Structured report data from JSON reporter

        Returns:
            Configured Excel workbook
        """
        wb = Workbook()
        wb.remove(wb.active)

        self._create_summary_sheet(wb, data)
        self._create_findings_sheet(wb, data)
        self._create_components_sheet(wb, data)
        self._create_power_sheet(wb, data)

        wb.active = wb["Summary"]
        return wb

    def _write_header_row(self, ws, row: int, headers) -> None:
        for col, header in enumerate(headers, 1):
            cell = ws.cell(row=row, column=col, value=header)
            cell.font = self.header_font
            cell.fill = self.header_fill
            cell.alignment = self.center_alignment
            cell.border = self.border

    def _create_summary_sheet(self, workbook: Workbook, data: Dict[str, Any]):
        ws = workbook.create_sheet("Summary")
        summary = data["summary"]
        build = data["build"]

        ws["A1"] = "PC Build Compatibility Summary"
        ws["A1"].font = Font(size=16, bold=True)
        ws.merge_cells("A1:D1")

        current_row = 3
        if "metadata" in data:
            metadata = data["metadata"]
            ws[f"A{current_row}"] = "Report Information"
            ws[f"A{current_row}"].font = Font(bold=True)
            current_row += 1

            info = [
                ("Generated:", metadata["generated_at"]),
                ("Generator:", f"{metadata['generator']} v{metadata['version']}"),
            ]
            if metadata.get("build_file"):
                info.append(("Build File:", metadata["build_file"]))
            for label, value in info:
                ws[f"A{current_row}"] = label
                ws[f"B{current_row}"] = value
                current_row += 1
            current_row += 1

        ws[f"A{current_row}"] = "Build Summary"
        ws[f"A{current_row}"].font = Font(bold=True)
        current_row += 1

        self._write_header_row(ws, current_row, ["Metric", "Value"])
        current_row += 1

        rows = [
            ("Build", summary["build_name"]),
            ("Compatible", "Yes" if summary["is_compatible"] else "No"),
            ("Issues", summary["issue_count"]),
            ("Warnings", summary["warning_count"]),
            ("Estimated Wattage (W)", summary["estimated_wattage"]),
            ("Components", build["component_count"]),
            ("Completion (%)", build["completion_percentage"]),
            ("Essentials Present", "Yes" if build["required_components_complete"] else "No"),
            ("Total Price", build["total_price"]),
            ("Total Savings", build["total_savings"]),
        ]
        for metric, value in rows:
            ws.cell(row=current_row, column=1, value=metric).border = self.border
            value_cell = ws.cell(row=current_row, column=2, value=value)
            value_cell.border = self.border
            if metric == "Compatible":
                value_cell.fill = self.compatible_fill if summary["is_compatible"] else self.issue_fill
            elif metric in ("Total Price", "Total Savings"):
                value_cell.number_format = '"$"#,##0.00'
            current_row += 1

        self._auto_fit_columns(ws, 2)

    def _create_findings_sheet(self, workbook: Workbook, data: Dict[str, Any]):
        ws = workbook.create_sheet("Findings")
        self._write_header_row(ws, 1, ["Severity", "Rule", "Message"])

        findings = data["findings"]
        if not findings:
            ws.cell(row=2, column=1, value="none")
            ws.cell(row=2, column=3, value="No compatibility problems found.")

        for i, finding in enumerate(findings, 2):
            fill = self.issue_fill if finding["severity"] == "issue" else self.warning_fill
            values = [finding["severity"].upper(), finding["rule"], finding["message"]]
            for col, value in enumerate(values, 1):
                cell = ws.cell(row=i, column=col, value=value)
                cell.border = self.border
                cell.fill = fill

        ws.freeze_panes = "A2"
        self._auto_fit_columns(ws, 3)

    def _create_components_sheet(self, workbook: Workbook, data: Dict[str, Any]):
        ws = workbook.create_sheet("Components")
        self._write_header_row(ws, 1, ["Slot", "Name", "Brand", "Model", "Price", "Specifications"])

        for i, component in enumerate(data["components"], 2):
            specifications = "; ".join(
                f"{key}: {', '.join(map(str, value)) if isinstance(value, (list, tuple)) else value}"
                for key, value in (component["specifications"] or {}).items()
            )
            values = [
                component["label"],
                component["name"],
                component["brand"],
                component["model"],
                component["price"],
                specifications,
            ]
            for col, value in enumerate(values, 1):
                cell = ws.cell(row=i, column=col, value=value)
                cell.border = self.border
            ws.cell(row=i, column=5).number_format = '"$"#,##0.00'

        ws.freeze_panes = "A2"
        self._auto_fit_columns(ws, 6)

    def _create_power_sheet(self, workbook: Workbook, data: Dict[str, Any]):
        ws = workbook.create_sheet("Power")
        power = data["power"]
        self._write_header_row(ws, 1, ["Source", "Watts"])

        rows = [("Base (board, fans)", power["base_watts"])]
        rows.extend((entry["label"], entry["watts"]) for entry in power["breakdown"])
        for i, (source, watts) in enumerate(rows, 2):
            ws.cell(row=i, column=1, value=source).border = self.border
            ws.cell(row=i, column=2, value=watts).border = self.border

        total_row = len(rows) + 2
        ws.cell(row=total_row, column=1, value="Total").font = Font(bold=True)
        ws.cell(row=total_row, column=2, value=power["total_watts"]).font = Font(bold=True)

        if self.include_charts and rows:
            chart = BarChart()
            chart.title = "Estimated Power Draw"
            chart.y_axis.title = "Watts"
            chart.add_data(Reference(ws, min_col=2, min_row=1, max_row=len(rows) + 1), titles_from_data=True)
            chart.set_categories(Reference(ws, min_col=1, min_row=2, max_row=len(rows) + 1))
            ws.add_chart(chart, "D2")

        self._auto_fit_columns(ws, 2)

    @staticmethod
    def _auto_fit_columns(ws, column_count: int) -> None:
        for col_num in range(1, column_count + 1):
            column_letter = get_column_letter(col_num)
            max_length = 0
            for row in ws.iter_rows(min_col=col_num, max_col=col_num):
                for cell in row:
                    if cell.value is not None:
                        max_length = max(max_length, len(str(cell.value)))
            ws.column_dimensions[column_letter].width = min(max(max_length + 2, 12), 80)
