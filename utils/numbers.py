"""
Lenient number parsing for sheet cells.

Sheet values arrive as strings ("120", "12.5 kg", "", "N/A"). These helpers
read the leading number the way a spreadsheet user expects and return None
when there is nothing numeric to read.
"""

import math
import re
from typing import Any, Optional

_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")


def parse_number(value: Any) -> Optional[float]:
    """
    Read a float from a cell value.

    - 120 → 120.0
    - "12.5 kg" → 12.5
    - "", None, "N/A", NaN → None

    Args:
        value: Raw cell value

    Returns:
        Parsed float, or None if the value has no leading number
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        number = float(value)
        return None if math.isnan(number) else number

    match = _FLOAT_PREFIX.match(str(value))
    if not match:
        return None
    return float(match.group(1))


def parse_int(value: Any) -> Optional[int]:
    """
    Read an integer from a cell value, truncating any fraction.

    - "12.7" → 12
    - 12.7 → 12
    - "abc" → None
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        if isinstance(value, float) and (math.isnan(value) or math.isinf(value)):
            return None
        return int(value)

    match = _INT_PREFIX.match(str(value))
    if not match:
        return None
    return int(match.group(1))


def number_or(value: Any, default: float) -> float:
    """Parsed number, or default when missing or zero."""
    number = parse_number(value)
    return number if number else default
