"""
JSON build file parser.
"""

import json
from typing import Any, List

from ..exceptions import BuildFileParseError
from .base import BuildFileParser


class JSONBuildParser(BuildFileParser):
    """Parser for builds stored as JSON documents."""

    def _get_supported_extensions(self) -> List[str]:
        return [".json"]

    def _load(self, stream) -> Any:
        try:
            return json.load(stream)
        except json.JSONDecodeError as e:
            raise BuildFileParseError(f"invalid JSON: {e}")
