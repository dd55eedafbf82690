"""
Abstract base classes for hardware knowledge base functionality.
"""

from abc import ABC, abstractmethod
from typing import List, Optional


class KnowledgeBase(ABC):
    """Abstract base class for hardware lookup table implementations."""

    @abstractmethod
    def load_from_files(self, file_paths: List[str]) -> None:
        """
        Load lookup tables from files.

        Args:
            file_paths: List of paths to table files

        Raises:
            KnowledgeBaseError: If a file is missing or malformed
        """
        pass

    @abstractmethod
    def cpu_power(self, name: str) -> Optional[int]:
        """
        Look up the estimated CPU wattage for a model name.

        Args:
            name: CPU model name

        Returns:
            Wattage of the first matching tier, or None
        """
        pass

    @abstractmethod
    def gpu_power(self, name: str) -> Optional[int]:
        """
        Look up the estimated GPU wattage for a model name.

        Args:
            name: GPU model name

        Returns:
            Wattage of the first matching entry, or None
        """
        pass

    @abstractmethod
    def gpu_length(self, name: str) -> Optional[int]:
        """
        Look up the typical card length in millimetres for a model name.

        Args:
            name: GPU model name

        Returns:
            Length of the first matching entry, or None
        """
        pass

    @abstractmethod
    def chipsets_for(self, socket: str, generation: str) -> Optional[List[str]]:
        """
        Get chipset name fragments that support a CPU generation on a socket.

        Args:
            socket: Socket name, e.g. "AM5"
            generation: Generation token, e.g. "13"

        Returns:
            List of chipset fragments, or None when the table has no entry
        """
        pass

    @abstractmethod
    def is_budget_chipset(self, chipset: str) -> bool:
        """Check whether a chipset may not run high-speed RAM at rated speed."""
        pass

    @abstractmethod
    def is_legacy_nvme_chipset(self, chipset: str) -> bool:
        """Check whether a chipset may limit NVMe throughput."""
        pass
