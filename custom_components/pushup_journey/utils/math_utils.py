# File: utils/math_utils.py
"""Math and calculation utilities for Push-up Journey.

Pure Python math functions with ZERO Home Assistant dependencies.

Functions:
    - clamp: Bound a value to a range
    - floor_percentage: Whole-number progress percentage
"""

from __future__ import annotations

import math


def clamp(value: int, min_val: int, max_val: int) -> int:
    """Clamp a value between minimum and maximum bounds.

    Examples:
        clamp(150, 0, 100) → 100
        clamp(-5, 0, 100) → 0
        clamp(50, 0, 100) → 50
    """
    return max(min_val, min(max_val, value))


def floor_percentage(current: int, total: int) -> int:
    """Calculate a floored, clamped percentage of current over total.

    Args:
        current: Progress made within the window
        total: Size of the window

    Returns:
        Integer percentage in [0, 100]. A window of size 0 or less counts as
        complete (100).

    Examples:
        floor_percentage(1, 10) → 10
        floor_percentage(2, 3) → 66
        floor_percentage(12, 10) → 100
        floor_percentage(0, 0) → 100
    """
    if total <= 0:
        return 100
    return clamp(math.floor(100 * current / total), 0, 100)
