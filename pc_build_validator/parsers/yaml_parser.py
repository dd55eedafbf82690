"""
YAML build file parser.
"""

from typing import Any, List

import yaml

from ..exceptions import BuildFileParseError
from .base import BuildFileParser


class YAMLBuildParser(BuildFileParser):
    """Parser for builds stored as YAML documents."""

    def _get_supported_extensions(self) -> List[str]:
        return [".yaml", ".yml"]

    def _load(self, stream) -> Any:
        try:
            return yaml.safe_load(stream)
        except yaml.YAMLError as e:
            raise BuildFileParseError(f"invalid YAML: {e}")
