"""
Score Coercion

Raider.IO reports Mythic+ scores as floats ("673.312" or 673.312), the
characters table stores an integer.
"""

import math
from typing import Any


def coerce_score(value: Any) -> int:
    """
    Round a Mythic+ score to a non-negative integer.

    Halves round up (672.5 → 673). Strings are parsed as numbers; None,
    booleans, NaN, infinities, negatives and anything unparsable become 0.

    Args:
        value: Score as received from the API or an admin form

    Returns:
        Non-negative integer score

    Example:
        >>> coerce_score(673.312)
        673
        >>> coerce_score("673.312")
        673
        >>> coerce_score("n/a")
        0
    """
    if value is None or isinstance(value, bool):
        return 0
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(number) or number <= 0:
        return 0
    return int(math.floor(number + 0.5))
