"""Number utilities for loosely typed input."""

import math
import typing as t


def to_finite_number(value: t.Any) -> float | None:
    """Interpret a value as a finite number.

    Numbers and numeric strings are accepted. Booleans, blanks, NaN and
    infinities are not.

    Args:
        value (t.Any): The value to interpret.

    Returns:
        float | None: The number, or None if the value is not numeric.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
    elif not isinstance(value, (int, float)):
        return None
    try:
        number: float = float(value)
    except (ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None
