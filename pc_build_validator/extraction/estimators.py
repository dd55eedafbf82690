"""
Estimation fallbacks backed by the hardware lookup tables.

Used when a component does not declare the value a rule or the power
estimator needs. Each estimator always produces an answer.
"""

from typing import Any, Optional

from ..knowledge_base import KnowledgeBase, get_default_knowledge_base
from ..logging_config import get_logger
from .specifications import parse_dimensions_mm, parse_length_mm

logger = get_logger('extraction.estimators')

DEFAULT_CPU_POWER_W = 65
DEFAULT_GPU_POWER_W = 180
DEFAULT_GPU_LENGTH_MM = 270


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def estimate_cpu_power_w(name: Any, knowledge_base: Optional[KnowledgeBase] = None) -> int:
    """
    Estimate CPU power draw from its vendor tier ("i9", "Ryzen 9", ...).

    Args:
        name: CPU model name
        knowledge_base: Lookup tables; the bundled tables when omitted

    Returns:
        Estimated watts, 65 when no tier matches
    """
    kb = knowledge_base or get_default_knowledge_base()
    watts = kb.cpu_power(_text(name))
    if watts is None:
        logger.debug(f"No CPU power tier for '{name}', using {DEFAULT_CPU_POWER_W}W")
        return DEFAULT_CPU_POWER_W
    return watts


def estimate_gpu_power_w(name: Any, knowledge_base: Optional[KnowledgeBase] = None) -> int:
    """
    Estimate GPU power draw from its model name.

    Args:
        name: GPU model name
        knowledge_base: Lookup tables; the bundled tables when omitted

    Returns:
        Estimated watts, 180 when no model matches
    """
    kb = knowledge_base or get_default_knowledge_base()
    watts = kb.gpu_power(_text(name))
    if watts is None:
        logger.debug(f"No GPU power entry for '{name}', using {DEFAULT_GPU_POWER_W}W")
        return DEFAULT_GPU_POWER_W
    return watts


def extract_gpu_length_estimate(model_name_or_dims: Any, knowledge_base: Optional[KnowledgeBase] = None) -> Optional[int]:
    """
    Get a GPU card length from declared dimensions or the model name.

    Args:
        model_name_or_dims: Dimensions text ("304mm", "304 x 137 x 61 mm") or a model name ("RTX 4080")
        knowledge_base: Lookup tables; the bundled tables when omitted

    Returns:
        Length in mm (270 for unrecognised models), or None for empty input
    """
    for parse in (parse_dimensions_mm, parse_length_mm):
        length = parse(model_name_or_dims)
        if length is not None:
            return length

    text = _text(model_name_or_dims)
    if not text.strip():
        return None

    kb = knowledge_base or get_default_knowledge_base()
    length = kb.gpu_length(text)
    if length is None:
        logger.debug(f"No GPU length entry for '{text}', assuming {DEFAULT_GPU_LENGTH_MM}mm")
        return DEFAULT_GPU_LENGTH_MM
    return length
