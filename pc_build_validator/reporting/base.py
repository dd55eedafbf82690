"""
Abstract base classes for report generation.
"""

from abc import ABC, abstractmethod
from typing import Optional

from ..exceptions import ReportGenerationError
from ..models import BuildAnalysis


class ReportGenerator(ABC):
    """Abstract base class for report generators."""

    @abstractmethod
    def generate_report(self, analysis: BuildAnalysis, output_path: Optional[str] = None) -> str:
        """
        Generate a report from a build analysis.

        Args:
            analysis: BuildAnalysis to generate report from
            output_path: Optional path to write report to file

        Returns:
            Report content as string
        """
        pass

    @abstractmethod
    def get_format_name(self) -> str:
        """
        Get the name of the report format.

        Returns:
            String identifier for the report format (e.g., "json", "markdown")
        """
        pass

    def _write_text(self, content: str, output_path: str) -> None:
        """Write report text to a file, wrapping I/O failures."""
        try:
            with open(output_path, 'w', encoding='utf-8') as f:
                f.write(content)
        except OSError as e:
            raise ReportGenerationError(str(e), self.get_format_name(), output_path)
