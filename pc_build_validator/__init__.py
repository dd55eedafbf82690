"""
PC Build Validator

A Python tool for checking whether a set of PC components is electrically and
physically compatible, with an estimated system power draw.
"""

import logging

__version__ = "0.1.0"
__author__ = "PC Build Validator Team"

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Make version easily importable
def get_version():
    """Get the current version of the PC Build Validator."""
    return __version__


from .models import (  # noqa: E402
    Build,
    BuildAnalysis,
    CompatibilityReport,
    Component,
    ComponentCategory,
    Finding,
    PowerEstimate,
    Severity,
)
from .analysis import BuildCompatibilityAnalyzer, create_analyzer, estimate_build_wattage  # noqa: E402

__all__ = [
    'get_version',
    'Build',
    'BuildAnalysis',
    'CompatibilityReport',
    'Component',
    'ComponentCategory',
    'Finding',
    'PowerEstimate',
    'Severity',
    'BuildCompatibilityAnalyzer',
    'create_analyzer',
    'estimate_build_wattage',
]
