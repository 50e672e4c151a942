# app/core/angles.py
"""
Circular angle helpers (degrees).
All angle comparisons in the calculators go through norm360 / is_between.
"""
import math


def norm360(x: float) -> float:
    x = float(x) % 360.0
    # float modulo can land exactly on 360.0 for tiny negatives (e.g. -1e-17)
    if x >= 360.0:
        x = 0.0
    return x


def is_between(target: float, start: float, end: float) -> bool:
    """
    True if target lies on the clockwise arc start -> end (inclusive).
    When start > end the arc wraps through 0°.
    """
    target = norm360(target)
    start = norm360(start)
    end = norm360(end)

    if start <= end:
        return start <= target <= end
    return target >= start or target <= end


def angle_index(angle: float, span: float, count: int) -> int:
    return int(math.floor(norm360(angle) / span)) % count


def forward_distance(current: float, target: float) -> float:
    """Degrees still to travel from current to target, moving forward."""
    return norm360(target - current)
