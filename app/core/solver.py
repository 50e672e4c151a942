# app/core/solver.py
"""
Angle-crossing search.

find_crossing   -> bisection between two bracketing samples (Nakshatram / Thithi / Karanam)
estimate_crossing -> linear-rate fallback used by callers when find_crossing gives up

Yogam does NOT use this module; it scans in fixed steps (see yogam.py).
"""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable, Optional

from app.core.angles import forward_distance, is_between, norm360
from app.core.errors import EventNotFound
from app.core.jd import hours_between

AngleFn = Callable[[datetime], float]

PRECISION = timedelta(minutes=1)

# Mean Moon / Moon-Sun elongation motion, used when the sampled rate is unusable
NOMINAL_RATE_DEG_PER_HOUR = 0.5

_RATE_HALF_STEP = timedelta(minutes=30)


def find_crossing(fn: AngleFn, target: float, start: datetime, max_hours: float) -> datetime:
    """
    Instant within [start, start + max_hours] where fn reaches target, to 1 minute.

    Precondition: fn crosses target at most once inside the horizon. With 24-48h
    horizons this holds for the Moon and for the Moon-Sun elongation.

    Returns the left edge of the final bracket (never later than the true crossing).
    Raises EventNotFound if the endpoints do not bracket target.
    """
    target = norm360(target)
    left = start
    right = start + timedelta(hours=max_hours)

    f_left = fn(left)
    f_right = fn(right)

    if not is_between(target, f_left, f_right):
        raise EventNotFound(
            f"target {target:.4f}° not bracketed by [{f_left:.4f}°, {f_right:.4f}°] within {max_hours}h of {start.isoformat()}"
        )

    while (right - left) > PRECISION:
        mid = left + (right - left) / 2
        f_mid = fn(mid)
        if is_between(target, f_left, f_mid):
            right = mid
        else:
            left = mid
            f_left = f_mid

    return left


def angular_rate(fn: AngleFn, t: datetime) -> float:
    """Central finite difference, deg/hour (wrap-safe)."""
    a = fn(t - _RATE_HALF_STEP)
    b = fn(t + _RATE_HALF_STEP)
    d = b - a
    if d > 180:
        d -= 360
    if d < -180:
        d += 360
    return d / hours_between(t - _RATE_HALF_STEP, t + _RATE_HALF_STEP)


def estimate_crossing(fn: AngleFn, target: float, start: datetime, cap_degrees: Optional[float] = None) -> datetime:
    """
    Linear extrapolation from the instantaneous rate at start.
    cap_degrees bounds the remaining angle (one angam span at most).
    """
    remaining = forward_distance(fn(start), target)
    if cap_degrees is not None:
        remaining = min(remaining, cap_degrees)

    rate = angular_rate(fn, start)
    if rate <= 0:
        rate = NOMINAL_RATE_DEG_PER_HOUR

    return start + timedelta(hours=remaining / rate)
