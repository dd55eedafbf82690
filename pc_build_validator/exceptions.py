"""
Custom exceptions for the PC Build Validator.

The compatibility engine itself never raises on messy specification text;
these exceptions cover the surfaces around it (build files, lookup tables,
configuration and report output).
"""


class PCBuildValidatorError(Exception):
    """Base exception class for all PC Build Validator errors."""
    pass


class BuildFileParseError(PCBuildValidatorError):
    """Raised when a build file cannot be parsed."""

    def __init__(self, message: str, file_path: str = None):
        self.file_path = file_path

        if file_path:
            message = f"Error parsing build file '{file_path}': {message}"

        super().__init__(message)


class KnowledgeBaseError(PCBuildValidatorError):
    """Raised when hardware lookup tables cannot be loaded."""

    def __init__(self, message: str, file_path: str = None):
        self.file_path = file_path

        if file_path:
            message = f"Knowledge base error in '{file_path}': {message}"

        super().__init__(message)


class ConfigurationError(PCBuildValidatorError):
    """Raised when configuration is invalid."""
    pass


class ReportGenerationError(PCBuildValidatorError):
    """Raised when report generation fails."""

    def __init__(self, message: str, format_name: str = None, output_path: str = None):
        self.format_name = format_name
        self.output_path = output_path

        if format_name:
            message = f"Report generation error for format '{format_name}': {message}"
            if output_path:
                message += f" (output: {output_path})"

        super().__init__(message)
