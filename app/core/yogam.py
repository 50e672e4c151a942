# app/core/yogam.py
"""
Yogam: 27 divisions (13°20') of the Sun + Moon longitude sum.

Start/end come from a fixed-step scan, not from solver.find_crossing: the wrapped
sum jumps 360 -> 0, so only index changes are compared here.
"""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional, Tuple

from app.core.angles import angle_index, norm360
from app.core.ephemeris import EphemerisProvider
from app.core.models import Yogam, YogamType

STEP = timedelta(minutes=30)
BACK_HOURS = 24
FORWARD_HOURS = 48
DEFAULT_LENGTH = timedelta(hours=24)

YOGAM_SPAN = 360.0 / 27.0

YOGAM_NAMES = (
    "Vishkumbham", "Priti", "Ayushman", "Saubhagya", "Sobhanam",
    "Atiganda", "Sukarma", "Dhriti", "Soola", "Ganda",
    "Vriddhi", "Dhruva", "Vyagatha", "Harshana", "Vajra",
    "Siddhi", "Vyatipata", "Variyan", "Parigha", "Siva",
    "Siddha", "Sadhya", "Subha", "Sukla", "Brahma",
    "Indra", "Vaidhriti",
)

_A = YogamType.AUSPICIOUS
_I = YogamType.INAUSPICIOUS
_N = YogamType.NEUTRAL

YOGAM_TYPES = (
    _I, _A, _A, _A, _A,
    _I, _A, _A, _I, _I,
    _A, _A, _I, _A, _N,
    _A, _I, _A, _I, _A,
    _A, _A, _A, _A, _A,
    _A, _I,
)


def sun_moon_sum(eph: EphemerisProvider, t: datetime) -> float:
    return norm360(eph.sun_longitude(t) + eph.moon_longitude(t))


def yogam_index(total: float) -> int:
    return angle_index(total, YOGAM_SPAN, 27)


def _scan_start(eph: EphemerisProvider, base: datetime, idx: int) -> Optional[datetime]:
    earliest = base
    t = base - STEP
    limit = base - timedelta(hours=BACK_HOURS)
    while t >= limit:
        if yogam_index(sun_moon_sum(eph, t)) != idx:
            return earliest
        earliest = t
        t -= STEP
    # no transition inside the window
    return None


def _scan_end(eph: EphemerisProvider, base: datetime, idx: int) -> Optional[datetime]:
    t = base + STEP
    limit = base + timedelta(hours=FORWARD_HOURS)
    while t <= limit:
        if yogam_index(sun_moon_sum(eph, t)) != idx:
            return t
        t += STEP
    return None


def yogam_bounds(eph: EphemerisProvider, base: datetime, idx: int) -> Tuple[datetime, datetime, bool]:
    """(start, end, estimated)"""
    start = _scan_start(eph, base, idx)
    end = _scan_end(eph, base, idx)
    estimated = start is None or end is None
    if start is None:
        start = base
    if end is None:
        end = base + DEFAULT_LENGTH
    return start, end, estimated


def calc_yogam(eph: EphemerisProvider, base: datetime) -> Yogam:
    idx = yogam_index(sun_moon_sum(eph, base))
    start, end, estimated = yogam_bounds(eph, base, idx)

    return Yogam(
        index=idx,
        name=YOGAM_NAMES[idx],
        type=YOGAM_TYPES[idx],
        start_time=start.astimezone(base.tzinfo),
        end_time=end.astimezone(base.tzinfo),
        estimated=estimated,
    )
