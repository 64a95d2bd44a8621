from functools import reduce
from typing import Any


def divide_by_next(items: Any, precision: int = 4) -> float:
    """
    Reduces a sequence by dividing each item by the next one, left to right.

    EXIF rationals arrive as ``[numerator, denominator, ...]``. Malformed input
    (not a sequence, empty, non-numeric or a zero divisor) yields 0 instead of
    raising, so a broken tag degrades to a present-but-zero value.
    """
    if not isinstance(items, (list, tuple)) or not items:
        return 0
    try:
        result = reduce(lambda acc, item: acc / item, items)
        return round(float(result), precision)
    except (TypeError, ValueError, ZeroDivisionError):
        return 0


def format_number(value: Any) -> str:
    """Stringifies numbers without a trailing ``.0`` for whole floats."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
