# app/core/timings.py
"""
Rahukaalam / Yamagandam / Kuligai / Nalla Neram.

The daylight interval (sunrise -> sunset) is cut into 8 equal segments; each
inauspicious period owns one segment, chosen by weekday (Sunday = 0).
"""
from __future__ import annotations

from datetime import date, datetime, time
from typing import List, Optional, Sequence, Tuple

from app.core.errors import InvalidLocation
from app.core.models import TimeWindow, TimingKind

SEGMENTS = 8

# 1-based segment per weekday: Sun, Mon, Tue, Wed, Thu, Fri, Sat
RAHUKAALAM_SEGMENTS = (8, 2, 7, 5, 6, 4, 3)
YAMAGANDAM_SEGMENTS = (5, 4, 3, 2, 1, 7, 6)
KULIGAI_SEGMENTS = (7, 6, 5, 4, 3, 2, 1)

ClockRange = Tuple[Tuple[int, int], Tuple[int, int]]

# Two local clock ranges per weekday (Sunday = 0)
NALLA_NERAM_TABLE: Tuple[Tuple[ClockRange, ClockRange], ...] = (
    (((7, 30), (8, 30)), ((15, 30), (16, 30))),   # Sunday
    (((6, 30), (7, 30)), ((16, 30), (17, 30))),   # Monday
    (((7, 30), (8, 30)), ((16, 30), (17, 30))),   # Tuesday
    (((9, 30), (10, 30)), ((16, 30), (17, 30))),  # Wednesday
    (((10, 30), (11, 30)), ((12, 30), (13, 30))), # Thursday
    (((9, 30), (10, 30)), ((16, 30), (17, 30))),  # Friday
    (((7, 30), (8, 30)), ((16, 30), (17, 30))),   # Saturday
)


def weekday_index(d: date) -> int:
    """Sunday = 0 ... Saturday = 6."""
    return (d.weekday() + 1) % 7


def segment_bounds(sunrise: datetime, sunset: datetime) -> List[datetime]:
    """9 boundaries; the last one is exactly sunset."""
    day = sunset - sunrise
    if day.total_seconds() <= 0:
        raise InvalidLocation(f"sunset {sunset.isoformat()} is not after sunrise {sunrise.isoformat()}")
    return [sunrise + (day * i) / SEGMENTS for i in range(SEGMENTS + 1)]


def segment_window(bounds: Sequence[datetime], segment: int, kind: TimingKind, label: Optional[str] = None) -> TimeWindow:
    return TimeWindow(start=bounds[segment - 1], end=bounds[segment], kind=kind, label=label)


def _clip(start: datetime, end: datetime, lo: datetime, hi: datetime) -> Optional[Tuple[datetime, datetime]]:
    s = max(start, lo)
    e = min(end, hi)
    if e <= s:
        return None
    return s, e


def nalla_neram(sunrise: datetime, sunset: datetime, weekday: int) -> List[TimeWindow]:
    zone = sunrise.tzinfo
    day = sunrise.date()

    out: List[TimeWindow] = []
    for (h0, m0), (h1, m1) in NALLA_NERAM_TABLE[weekday]:
        start = datetime.combine(day, time(h0, m0), tzinfo=zone)
        end = datetime.combine(day, time(h1, m1), tzinfo=zone)
        clipped = _clip(start, end, sunrise, sunset)
        if clipped is None:
            continue
        out.append(TimeWindow(start=clipped[0], end=clipped[1], kind=TimingKind.NALLA_NERAM))
    return out


def inauspicious_windows(sunrise: datetime, sunset: datetime, weekday: int) -> Tuple[TimeWindow, TimeWindow, TimeWindow]:
    """(rahukaalam, yamagandam, kuligai)"""
    bounds = segment_bounds(sunrise, sunset)
    return (
        segment_window(bounds, RAHUKAALAM_SEGMENTS[weekday], TimingKind.RAHUKAALAM),
        segment_window(bounds, YAMAGANDAM_SEGMENTS[weekday], TimingKind.YAMAGANDAM),
        segment_window(bounds, KULIGAI_SEGMENTS[weekday], TimingKind.KULIGAI),
    )
