"""
Reporting Module

Contains report generators for different output formats (JSON, Markdown, Excel, text).
"""

from typing import Optional

from .base import ReportGenerator
from .excel_reporter import ExcelReporter
from .json_reporter import JSONReporter
from .markdown_reporter import MarkdownReporter
from .text_reporter import HumanReadableReporter


def get_reporter(format_name: str, use_colors: Optional[bool] = None, detailed: bool = False) -> ReportGenerator:
    """
    Get the report generator for an output format.

    Args:
        format_name: One of "text", "json", "markdown", "excel"
        use_colors: Color setting for text output (auto-detect when None)
        detailed: Include specifications and power breakdown in text output

    Returns:
        ReportGenerator instance

    Raises:
        ValueError: If the format is unknown
    """
    if format_name == 'text':
        return HumanReadableReporter(use_colors=use_colors, detailed=detailed)
    if format_name == 'json':
        return JSONReporter()
    if format_name == 'markdown':
        return MarkdownReporter()
    if format_name == 'excel':
        return ExcelReporter()
    raise ValueError(f"Unknown output format: {format_name}")


__all__ = [
    'ReportGenerator',
    'JSONReporter',
    'HumanReadableReporter',
    'MarkdownReporter',
    'ExcelReporter',
    'get_reporter',
]
