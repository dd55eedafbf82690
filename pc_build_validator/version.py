"""
Version management for PC Build Validator.

This module provides centralized version information to avoid hardcoding
version numbers throughout the codebase.
"""

from . import __version__


def get_version() -> str:
    """
    Get the current version of the PC Build Validator.

    Returns:
        Version string (e.g., "0.1.0")
    """
    return __version__


def get_full_name_with_version() -> str:
    """
    Get the full tool name with version.

    Returns:
        Full name string (e.g., "PC Build Validator v0.1.0")
    """
    return f"PC Build Validator v{__version__}"
