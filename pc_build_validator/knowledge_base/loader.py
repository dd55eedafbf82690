"""
Knowledge Base Loader

Provides a simple interface for loading the hardware lookup tables.
"""

from pathlib import Path
from typing import List, Optional

from .data_structures import HardwareKnowledgeBase

DEFAULT_TABLES_FILE = Path(__file__).parent / "hardware_tables.json"

_default_knowledge_base: Optional[HardwareKnowledgeBase] = None


class KnowledgeBaseLoader:
    """Simple loader for hardware table files."""

    def __init__(self, include_defaults: bool = True):
        """
        Initialize the loader.

        Args:
            include_defaults: Whether to load the bundled tables before any extra files
        """
        self.include_defaults = include_defaults
        self.knowledge_base = None

    def load_multiple(self, file_paths: List[str]) -> HardwareKnowledgeBase:
        """
        Load multiple table files on top of the bundled defaults.

        Args:
            file_paths: List of paths to table files

        Returns:
            HardwareKnowledgeBase instance with loaded data
        """
        paths = [str(DEFAULT_TABLES_FILE)] if self.include_defaults else []
        paths.extend(str(p) for p in file_paths)

        self.knowledge_base = HardwareKnowledgeBase()
        self.knowledge_base.load_from_files(paths)
        return self.knowledge_base

    def load_single(self, file_path: str) -> HardwareKnowledgeBase:
        """
        Load a single table file on top of the bundled defaults.

        Args:
            file_path: Path to table file

        Returns:
            HardwareKnowledgeBase instance with loaded data
        """
        return self.load_multiple([file_path])


def get_default_knowledge_base() -> HardwareKnowledgeBase:
    """Get the bundled tables, loaded once per process."""
    global _default_knowledge_base
    if _default_knowledge_base is None:
        _default_knowledge_base = KnowledgeBaseLoader().load_multiple([])
    return _default_knowledge_base
