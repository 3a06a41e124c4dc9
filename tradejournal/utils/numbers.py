"""Lenient numeric coercion for optional trade fields."""

import math
from typing import Any


def is_number(value: Any) -> bool:
    """True for finite ints and floats. Booleans and None are not numbers."""
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def as_number(value: Any) -> float:
    """Numeric value of a possibly-missing field; anything non-numeric is 0."""
    return float(value) if is_number(value) else 0.0
