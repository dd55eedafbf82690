"""
Free-text specification parsing.

Every function here is total: vendor text that does not match yields None
(unknown) instead of raising. Numbers that are already numeric are accepted
as-is so structured catalogs and free-text catalogs go through the same path.
"""

import math
import re
from typing import Any, List, Optional

_CAPACITY_GB = re.compile(r'(\d+)\s*GB', re.IGNORECASE)
_WATTAGE = re.compile(r'(\d+)\s*W', re.IGNORECASE)
_LENGTH_MM = re.compile(r'(\d+(?:\.\d+)?)\s*mm', re.IGNORECASE)
_DIMENSIONS_MM = re.compile(
    r'(\d+(?:\.\d+)?)\s*(?:mm)?\s*[x\u00d7]\s*(\d+(?:\.\d+)?)\s*(?:mm)?(?:\s*[x\u00d7]\s*(\d+(?:\.\d+)?))?\s*mm',
    re.IGNORECASE
)
_SPEED_WITH_UNIT = re.compile(r'(\d+)\s*(?:MHz|MT/?s)', re.IGNORECASE)
_SPEED_AFTER_DDR = re.compile(r'DDR\d\w*\s*[-\s]\s*(\d{3,5})', re.IGNORECASE)
_LEADING_INTEGER = re.compile(r'(\d+)')

_INTEL_GEN_ORDINAL = re.compile(r'(\d{1,2})(?:st|nd|rd|th)\s*Gen', re.IGNORECASE)
_INTEL_MODEL_NUMBER = re.compile(r'\bi[3-9][-\s]?(\d{4,5})', re.IGNORECASE)
_AMD_MODEL_NUMBER = re.compile(r'Ryzen\s+(?:Threadripper\s+)?\d+\s+(?:PRO\s+)?(\d)\d{3}', re.IGNORECASE)

_LIST_SEPARATORS = re.compile(r'[/,;|]')

# Values with more digits than this are unknown
_MAX_DIGITS = 9


def _positive_int(number: Any) -> Optional[int]:
    if number is None:
        return None
    if isinstance(number, float):
        if not math.isfinite(number):
            return None
        number = int(number)
    return number if 0 < number < 10 ** _MAX_DIGITS else None


def _digits_to_int(text: str) -> Optional[int]:
    whole = text.split('.', 1)[0].lstrip('0') or '0'
    if len(whole) > _MAX_DIGITS:
        return None
    return int(whole)


def _as_number(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return _positive_int(value)
    return None


def _first_int(pattern: re.Pattern, value: Any) -> Optional[int]:
    if not isinstance(value, str):
        return None
    match = pattern.search(value)
    if not match:
        return None
    return _positive_int(_digits_to_int(match.group(1)))


def parse_capacity_gb(text: Any) -> Optional[int]:
    """
    Extract a memory capacity in GB.

    Args:
        text: Free text such as "32GB", "16 GB DDR5-6000" or a number

    Returns:
        Capacity in GB, or None when no "GB" value is present
    """
    number = _as_number(text)
    if number is not None:
        return number
    return _first_int(_CAPACITY_GB, text)


def parse_speed_mhz(text: Any) -> Optional[int]:
    """
    Extract a memory frequency in MHz.

    Prefers a number with an MHz or MT/s unit, then the number after a
    DDR generation prefix ("DDR5-6000"), then the leading integer.

    Args:
        text: Free text such as "3200MHz", "DDR4-3600" or "6000"

    Returns:
        Frequency in MHz, or None when no number is present
    """
    number = _as_number(text)
    if number is not None:
        return number
    for pattern in (_SPEED_WITH_UNIT, _SPEED_AFTER_DDR, _LEADING_INTEGER):
        speed = _first_int(pattern, text)
        if speed is not None:
            return speed
    return None


def parse_wattage(text: Any) -> Optional[int]:
    """
    Extract a wattage.

    Args:
        text: Free text such as "750W", "850W 80+ Gold" or "125 W"

    Returns:
        Watts, or None when no "W" value is present
    """
    number = _as_number(text)
    if number is not None:
        return number
    return _first_int(_WATTAGE, text)


def parse_length_mm(text: Any) -> Optional[int]:
    """
    Extract a length in millimetres (decimals truncated).

    Args:
        text: Free text such as "360mm" or "304 x 137 x 61 mm"

    Returns:
        Length in mm, or None when no "mm" value is present
    """
    number = _as_number(text)
    if number is not None:
        return number
    return _first_int(_LENGTH_MM, text)


def parse_dimensions_mm(text: Any) -> Optional[int]:
    """
    Extract the longest edge from a dimensions string ("304 x 137 x 61 mm").

    Args:
        text: Free text with two or three "x"-separated measurements in mm

    Returns:
        Longest measurement in mm (decimals truncated), or None
    """
    if not isinstance(text, str):
        return None
    match = _DIMENSIONS_MM.search(text)
    if not match:
        return None
    edges = [_digits_to_int(group) for group in match.groups() if group]
    if None in edges:
        return None
    return _positive_int(max(edges))


def extract_cpu_generation(name: Any, brand: Any = None) -> Optional[str]:
    """
    Pull a generation marker out of a CPU model name.

    Intel names yield the generation from "13th Gen" or from the model
    number ("i5-12400" -> "12", "i7-9700K" -> "9"). AMD Ryzen names yield
    the leading digit of the model number ("Ryzen 5 7600X" -> "7").

    Args:
        name: CPU model name
        brand: Optional brand, used when the name omits the vendor

    Returns:
        Generation token, or None when the naming convention is not recognised
    """
    if not isinstance(name, str) or not name.strip():
        return None

    vendor_text = f"{brand or ''} {name}".lower()

    if "amd" in vendor_text or "ryzen" in vendor_text:
        model = _AMD_MODEL_NUMBER.search(name)
        return model.group(1) if model else None

    if "intel" in vendor_text or "core" in vendor_text or _INTEL_MODEL_NUMBER.search(name):
        ordinal = _INTEL_GEN_ORDINAL.search(name)
        if ordinal:
            return str(int(ordinal.group(1)))
        model = _INTEL_MODEL_NUMBER.search(name)
        if model:
            return str(int(model.group(1)[:-3]))
        return None

    return None


def normalize_token(value: Any) -> str:
    """Normalize a categorical value for comparison ("Micro-ATX" -> "MICROATX")."""
    if value is None:
        return ""
    return re.sub(r'[\s\-_]+', '', str(value)).upper()


def split_list(value: Any) -> List[str]:
    """
    Split a delimited specification value into its items.

    Args:
        value: A list, or text such as "DDR4/DDR5" or "ATX, Micro-ATX"

    Returns:
        List of stripped, non-empty items
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        items = [str(item) for item in value if item is not None]
    else:
        items = _LIST_SEPARATORS.split(str(value))
    return [item.strip() for item in items if item.strip()]


def mentions(value: Any, keyword: str) -> bool:
    """Case-insensitive check whether a specification value mentions a keyword."""
    if value is None:
        return False
    return keyword.lower() in str(value).lower()
