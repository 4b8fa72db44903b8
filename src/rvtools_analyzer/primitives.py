"""Total (non-raising) coercion helpers for spreadsheet cell values."""

import math
from typing import Any


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return False


def parse_number(value: Any) -> float | None:
    # bool is an int subclass; a True/False cell is not a quantity.
    if isinstance(value, bool) or is_blank(value):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    else:
        text = str(value).strip().replace(",", "").replace("_", "")
        try:
            number = float(text)
        except (TypeError, ValueError):
            return None
    if not math.isfinite(number) or number < 0:
        return None
    return number


def to_float(value: Any, default: float = 0.0) -> float:
    number = parse_number(value)
    if number is None:
        return float(default)
    return number


def to_int(value: Any, default: int = 0) -> int:
    """Parse *value* as a count, truncating fractions ("4.7" -> 4)."""
    number = parse_number(value)
    if number is None:
        return int(default)
    return int(number)


def to_str(value: Any, default: str | None = "Unknown") -> str | None:
    if is_blank(value):
        return default
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()
