"""
Build File Parser Factory

Picks the parser for a build file from its extension.
"""

import os
from typing import List

from ..exceptions import BuildFileParseError
from ..models import Build
from .base import BuildFileParser
from .json_parser import JSONBuildParser
from .yaml_parser import YAMLBuildParser


class BuildParserFactory:
    """Factory class for creating appropriate build file parsers."""

    def __init__(self):
        """Initialize the factory with available parsers."""
        self.parsers = [
            JSONBuildParser(),
            YAMLBuildParser(),
        ]

    def get_parser(self, file_path: str) -> BuildFileParser:
        """
        Get the appropriate parser for a build file.

        Args:
            file_path: Path to the build file

        Returns:
            BuildFileParser instance for the file's extension

        Raises:
            BuildFileParseError: If no parser handles the extension
        """
        for parser in self.parsers:
            if parser.can_parse(file_path):
                return parser

        extension = os.path.splitext(file_path)[1] or "(none)"
        raise BuildFileParseError(
            f"unsupported file extension {extension}; "
            f"supported: {', '.join(self.get_supported_extensions())}",
            file_path
        )

    def parse_file(self, file_path: str) -> Build:
        """
        Parse a build file using the appropriate parser.

        Args:
            file_path: Path to the build file

        Returns:
            Parsed Build
        """
        return self.get_parser(file_path).parse(file_path)

    def get_supported_extensions(self) -> List[str]:
        extensions = []
        for parser in self.parsers:
            extensions.extend(parser.supported_extensions)
        return extensions
