"""
Concrete implementations of hardware knowledge base data structures.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from packaging.version import InvalidVersion, Version

from ..exceptions import KnowledgeBaseError
from .base import KnowledgeBase

logger = logging.getLogger(__name__)

SUPPORTED_SCHEMA_VERSION = Version("1.0")

LOOKUP_TABLES = ("cpu_power_tiers", "gpu_power_tiers", "gpu_lengths")
FRAGMENT_TABLES = ("budget_chipsets", "legacy_nvme_chipsets")
KNOWN_TABLES = LOOKUP_TABLES + FRAGMENT_TABLES + ("socket_chipsets",)


def _socket_key(socket: str) -> str:
    return re.sub(r'[\s\-_]+', '', str(socket)).upper()


@dataclass(frozen=True)
class LookupEntry:
    """One row of an ordered substring lookup table."""
    match: str
    value: int

    def matches(self, text: str) -> bool:
        return self.match.lower() in text.lower()


class HardwareKnowledgeBase(KnowledgeBase):
    """JSON-based hardware lookup tables."""

    def __init__(self):
        self.cpu_power_tiers: Tuple[LookupEntry, ...] = ()
        self.gpu_power_tiers: Tuple[LookupEntry, ...] = ()
        self.gpu_lengths: Tuple[LookupEntry, ...] = ()
        self.socket_chipsets: Dict[str, Dict[str, Tuple[str, ...]]] = {}
        self.budget_chipsets: Tuple[str, ...] = ()
        self.legacy_nvme_chipsets: Tuple[str, ...] = ()
        self._loaded_files: List[str] = []

    @property
    def loaded_files(self) -> List[str]:
        return list(self._loaded_files)

    def load_from_files(self, file_paths: List[str]) -> None:
        """
        Load lookup tables from JSON files.

        Files are applied in order; a table present in a later file replaces
        the same table from earlier files.

        Args:
            file_paths: List of paths to table JSON files

        Raises:
            KnowledgeBaseError: If any file is missing or malformed
        """
        for file_path in file_paths:
            try:
                with open(file_path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
            except FileNotFoundError:
                logger.error(f"Knowledge base file not found: {file_path}")
                raise KnowledgeBaseError("file not found", file_path)
            except json.JSONDecodeError as e:
                logger.error(f"Invalid JSON in knowledge base file {file_path}: {e}")
                raise KnowledgeBaseError(f"invalid JSON: {e}", file_path)

            self.load_from_dict(data, file_path)

    def load_from_dict(self, data: Dict[str, Any], source: str = "<dict>") -> None:
        """
        Load lookup tables from already-parsed data.

        Args:
            data: Parsed table document
            source: Name used in log and error messages
        """
        self._validate_knowledge_base_format(data, source)

        for table in LOOKUP_TABLES:
            if table in data:
                setattr(self, table, tuple(
                    LookupEntry(match=str(row["match"]), value=int(row["value"]))
                    for row in data[table]
                ))

        for table in FRAGMENT_TABLES:
            if table in data:
                setattr(self, table, tuple(str(fragment) for fragment in data[table]))

        if "socket_chipsets" in data:
            self.socket_chipsets = {
                _socket_key(socket): {
                    str(generation): tuple(str(c) for c in chipsets)
                    for generation, chipsets in generations.items()
                }
                for socket, generations in data["socket_chipsets"].items()
            }

        self._loaded_files.append(source)
        logger.info(f"Successfully loaded hardware tables from {source}")

    def _validate_knowledge_base_format(self, data: Any, source: str) -> None:
        """Validate the structure of a table document."""
        if not isinstance(data, dict):
            raise KnowledgeBaseError("knowledge base must be a JSON object", source)

        metadata = data.get("metadata") or {}
        if not isinstance(metadata, dict):
            raise KnowledgeBaseError("'metadata' must be an object", source)
        schema_version = metadata.get("schema_version", str(SUPPORTED_SCHEMA_VERSION))
        try:
            version = Version(str(schema_version))
        except InvalidVersion:
            raise KnowledgeBaseError(f"invalid schema_version '{schema_version}'", source)
        if version.major != SUPPORTED_SCHEMA_VERSION.major:
            raise KnowledgeBaseError(
                f"unsupported schema_version {version} (expected {SUPPORTED_SCHEMA_VERSION.major}.x)",
                source
            )

        unknown = [key for key in data if key not in KNOWN_TABLES and key != "metadata"]
        if unknown:
            logger.warning(f"Ignoring unknown tables in {source}: {', '.join(sorted(unknown))}")

        for table in LOOKUP_TABLES:
            if table not in data:
                continue
            rows = data[table]
            if not isinstance(rows, list):
                raise KnowledgeBaseError(f"'{table}' must be a list", source)
            for i, row in enumerate(rows):
                if not isinstance(row, dict) or "match" not in row or "value" not in row:
                    raise KnowledgeBaseError(f"entry {i} of '{table}' needs 'match' and 'value'", source)
                if not isinstance(row["value"], (int, float)) or row["value"] <= 0:
                    raise KnowledgeBaseError(f"entry {i} of '{table}' has a non-positive value", source)

        for table in FRAGMENT_TABLES:
            if table in data and not isinstance(data[table], list):
                raise KnowledgeBaseError(f"'{table}' must be a list", source)

        if "socket_chipsets" in data:
            sockets = data["socket_chipsets"]
            if not isinstance(sockets, dict):
                raise KnowledgeBaseError("'socket_chipsets' must be an object", source)
            for socket, generations in sockets.items():
                if not isinstance(generations, dict):
                    raise KnowledgeBaseError(f"socket '{socket}' must map generations to chipsets", source)
                for generation, chipsets in generations.items():
                    if not isinstance(chipsets, list):
                        raise KnowledgeBaseError(
                            f"chipsets for {socket} generation {generation} must be a list", source
                        )

    @staticmethod
    def _first_match(table: Tuple[LookupEntry, ...], name: Optional[str]) -> Optional[int]:
        if not name:
            return None
        for entry in table:
            if entry.matches(name):
                return entry.value
        return None

    def cpu_power(self, name: str) -> Optional[int]:
        return self._first_match(self.cpu_power_tiers, name)

    def gpu_power(self, name: str) -> Optional[int]:
        return self._first_match(self.gpu_power_tiers, name)

    def gpu_length(self, name: str) -> Optional[int]:
        return self._first_match(self.gpu_lengths, name)

    def chipsets_for(self, socket: str, generation: str) -> Optional[List[str]]:
        if not socket or not generation:
            return None
        generations = self.socket_chipsets.get(_socket_key(socket))
        if not generations or generation not in generations:
            return None
        return list(generations[generation])

    @staticmethod
    def _contains_fragment(fragments: Tuple[str, ...], chipset: Optional[str]) -> bool:
        if not chipset:
            return False
        chipset = chipset.lower()
        return any(fragment.lower() in chipset for fragment in fragments)

    def is_budget_chipset(self, chipset: str) -> bool:
        return self._contains_fragment(self.budget_chipsets, chipset)

    def is_legacy_nvme_chipset(self, chipset: str) -> bool:
        return self._contains_fragment(self.legacy_nvme_chipsets, chipset)

    def get_statistics(self) -> Dict[str, int]:
        """Get row counts per table."""
        return {
            "cpu_power_tiers": len(self.cpu_power_tiers),
            "gpu_power_tiers": len(self.gpu_power_tiers),
            "gpu_lengths": len(self.gpu_lengths),
            "sockets": len(self.socket_chipsets),
            "budget_chipsets": len(self.budget_chipsets),
            "legacy_nvme_chipsets": len(self.legacy_nvme_chipsets),
        }
