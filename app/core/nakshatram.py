# app/core/nakshatram.py
"""
Nakshatram (lunar mansion).
The Moon crosses 27 nakshatrams per sidereal month, each 13°20' of the ecliptic.
"""
from __future__ import annotations

import logging
import math
from datetime import datetime

from app.core.angles import angle_index, norm360
from app.core.ephemeris import EphemerisProvider
from app.core.errors import EventNotFound
from app.core.models import Nakshatram
from app.core.solver import estimate_crossing, find_crossing

log = logging.getLogger(__name__)

STAR_SPAN = 360.0 / 27.0  # 13°20'
PADA_SPAN = STAR_SPAN / 4.0  # 3°20'
SEARCH_HOURS = 48

NAKSHATRAM_NAMES = (
    "Ashwini", "Bharani", "Krithigai", "Rohini", "Mrigashirisham",
    "Thiruvathirai", "Punarpoosam", "Poosam", "Ayilyam", "Magam",
    "Pooram", "Uthiram", "Hastham", "Chithirai", "Swathi",
    "Visagam", "Anusham", "Kettai", "Moolam", "Pooradam",
    "Uthiradam", "Thiruvonam", "Avittam", "Sathayam",
    "Poorattathi", "Uthirattathi", "Revathi",
)

# Vimshottari order, 9 lords x 3
_LORD_CYCLE = ("Ketu", "Venus", "Sun", "Moon", "Mars", "Rahu", "Jupiter", "Saturn", "Mercury")
NAKSHATRAM_LORDS = _LORD_CYCLE * 3


def nakshatram_index(moon_lon: float) -> int:
    return angle_index(moon_lon, STAR_SPAN, 27)


def nakshatram_pada(moon_lon: float) -> int:
    lon = norm360(moon_lon)
    in_star = lon - math.floor(lon / STAR_SPAN) * STAR_SPAN
    return min(int(math.floor(in_star / PADA_SPAN)) + 1, 4)


def nakshatram_name(moon_lon: float) -> str:
    return NAKSHATRAM_NAMES[nakshatram_index(moon_lon)]


def calc_nakshatram(eph: EphemerisProvider, base: datetime) -> Nakshatram:
    """Nakshatram in force at base (normally sunrise) and when it ends."""
    moon0 = eph.moon_longitude(base)
    idx = nakshatram_index(moon0)
    target = norm360((idx + 1) * STAR_SPAN)

    estimated = False
    try:
        end = find_crossing(eph.moon_longitude, target, base, SEARCH_HOURS)
    except EventNotFound:
        log.warning("nakshatram end not bracketed (target %.4f°); using linear estimate", target)
        end = estimate_crossing(eph.moon_longitude, target, base, cap_degrees=STAR_SPAN)
        estimated = True

    return Nakshatram(
        index=idx,
        name=nakshatram_name(moon0),
        lord=NAKSHATRAM_LORDS[idx],
        pada=nakshatram_pada(moon0),
        end_time=end.astimezone(base.tzinfo),
        estimated=estimated,
    )
