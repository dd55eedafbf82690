"""
Build File Parsers Module

Contains parsers for build files (JSON, YAML) and the factory that selects
between them.
"""

from .base import BuildFileParser
from .factory import BuildParserFactory
from .json_parser import JSONBuildParser
from .yaml_parser import YAMLBuildParser

__all__ = [
    "BuildFileParser",
    "JSONBuildParser",
    "YAMLBuildParser",
    "BuildParserFactory"
]
