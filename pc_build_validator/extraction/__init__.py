"""
Specification Extraction Module

Turns free-text vendor specification fields into typed values, with
lookup-table estimation fallbacks.
"""

from .estimators import (
    DEFAULT_CPU_POWER_W,
    DEFAULT_GPU_LENGTH_MM,
    DEFAULT_GPU_POWER_W,
    estimate_cpu_power_w,
    estimate_gpu_power_w,
    extract_gpu_length_estimate,
)
from .specifications import (
    extract_cpu_generation,
    mentions,
    normalize_token,
    parse_capacity_gb,
    parse_dimensions_mm,
    parse_length_mm,
    parse_speed_mhz,
    parse_wattage,
    split_list,
)

__all__ = [
    'parse_capacity_gb',
    'parse_speed_mhz',
    'parse_wattage',
    'parse_length_mm',
    'parse_dimensions_mm',
    'extract_cpu_generation',
    'normalize_token',
    'split_list',
    'mentions',
    'estimate_cpu_power_w',
    'estimate_gpu_power_w',
    'extract_gpu_length_estimate',
    'DEFAULT_CPU_POWER_W',
    'DEFAULT_GPU_POWER_W',
    'DEFAULT_GPU_LENGTH_MM',
]
