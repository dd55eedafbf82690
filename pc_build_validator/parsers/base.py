"""
Abstract base classes for build file parsers.
"""

import math
import os
from abc import ABC, abstractmethod
from typing import Any, List, Optional

from ..exceptions import BuildFileParseError
from ..logging_config import get_logger
from ..models import Build, Component, ComponentCategory

logger = get_logger('parsers')


class BuildFileParser(ABC):
    """
    Abstract base class for build file parsers.

    A build document is a mapping with an optional "name" and a "components"
    section. Components may be given as a mapping of category to component,
    or as a list of components that each carry their own "category".
    """

    def __init__(self):
        """Initialize the parser."""
        self.supported_extensions = self._get_supported_extensions()

    @abstractmethod
    def _get_supported_extensions(self) -> List[str]:
        """
        Get list of file extensions handled by this parser.

        Returns:
            List of lowercase extensions including the dot (e.g. [".json"])
        """
        pass

    @abstractmethod
    def _load(self, stream) -> Any:
        """
        Deserialize an open build file.

        Args:
            stream: Text stream positioned at the start of the file

        Returns:
            Parsed document

        Raises:
            BuildFileParseError: If the content is not valid for this format
        """
        pass

    def can_parse(self, file_path: str) -> bool:
        return os.path.splitext(file_path)[1].lower() in self.supported_extensions

    def parse(self, file_path: str) -> Build:
        """
        Parse a build file.

        Args:
            file_path: Path to the build file

        Returns:
            Build with every listed component attached

        Raises:
            BuildFileParseError: If the file is missing, unreadable or invalid
        """
        if not os.path.exists(file_path):
            raise BuildFileParseError("file not found", file_path)

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = self._load(f)
        except BuildFileParseError as e:
            raise BuildFileParseError(str(e), file_path)
        except (OSError, UnicodeDecodeError) as e:
            raise BuildFileParseError(f"could not read file: {e}", file_path)

        build = self.parse_data(data, file_path)
        logger.info(f"Parsed build '{build.name}' with {build.component_count} components from {file_path}")
        return build

    def parse_data(self, data: Any, source_file: Optional[str] = None) -> Build:
        """
        Build a Build from an already-deserialized document.

        Args:
            data: Parsed build document
            source_file: Used in error messages and as the fallback build name

        Returns:
            Build instance

        Raises:
            BuildFileParseError: If the document structure is invalid
        """
        if not isinstance(data, dict):
            raise BuildFileParseError("build document must be a mapping", source_file)

        default_name = os.path.splitext(os.path.basename(source_file))[0] if source_file else "Untitled build"
        build = Build(name=str(data.get("name") or default_name))

        components = data.get("components") or {}
        if isinstance(components, dict):
            entries = [(key, value) for key, value in components.items()]
        elif isinstance(components, list):
            entries = []
            for i, value in enumerate(components):
                if not isinstance(value, dict) or not value.get("category"):
                    raise BuildFileParseError(f"component {i} needs a 'category'", source_file)
                entries.append((value["category"], value))
        else:
            raise BuildFileParseError("'components' must be a mapping or a list", source_file)

        for key, value in entries:
            if value is None:
                continue
            component = self._component_from_dict(key, value, source_file)
            if component.category in build.components:
                logger.warning(
                    f"Duplicate {component.category.label} in {source_file or 'build'}; "
                    f"keeping '{component.name}'"
                )
            build.attach(component)

        return build

    def _component_from_dict(self, key: Any, data: Any, source_file: Optional[str]) -> Component:
        """
        Convert one component entry.

        Args:
            key: Category name or alias the entry was listed under
            data: Component mapping
            source_file: Used in error messages

        Returns:
            Component instance
        """
        try:
            category = ComponentCategory.from_name(key)
        except ValueError as e:
            raise BuildFileParseError(str(e), source_file)

        if not isinstance(data, dict):
            raise BuildFileParseError(f"{category.label} entry must be a mapping", source_file)

        declared = data.get("category")
        if declared is not None:
            try:
                declared_category = ComponentCategory.from_name(declared)
            except ValueError as e:
                raise BuildFileParseError(str(e), source_file)
            if declared_category != category:
                raise BuildFileParseError(
                    f"component listed as {category.label} declares category '{declared}'", source_file
                )

        name = data.get("name")
        if not name:
            raise BuildFileParseError(f"{category.label} entry needs a 'name'", source_file)

        specifications = data.get("specifications") or {}
        if not isinstance(specifications, dict):
            raise BuildFileParseError(f"{category.label} 'specifications' must be a mapping", source_file)

        return Component(
            name=str(name),
            brand=data.get("brand"),
            category=category,
            price=self._parse_price(data.get("price"), category, source_file) or 0.0,
            specifications=dict(specifications),
            model=data.get("model"),
            component_id=self._optional_str(data.get("id", data.get("component_id"))),
            original_price=self._parse_price(
                data.get("originalPrice", data.get("original_price")), category, source_file
            ),
        )

    @staticmethod
    def _parse_price(value: Any, category: ComponentCategory, source_file: Optional[str]) -> Optional[float]:
        if value is None or value == "":
            return None
        if isinstance(value, bool):
            raise BuildFileParseError(f"{category.label} price must be a number", source_file)
        try:
            price = float(str(value).strip().lstrip("$"))
        except ValueError:
            raise BuildFileParseError(f"{category.label} price '{value}' is not a number", source_file)
        if not math.isfinite(price):
            raise BuildFileParseError(f"{category.label} price '{value}' is not a finite number", source_file)
        if price < 0:
            raise BuildFileParseError(f"{category.label} price must not be negative", source_file)
        return price

    @staticmethod
    def _optional_str(value: Any) -> Optional[str]:
        return None if value is None else str(value)

