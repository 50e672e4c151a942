# app/core/karanam.py
"""
Karanam: half a thithi (6° of Moon-Sun elongation), 60 per lunar month.

  1        Kimstughna                 (fixed)
  2 - 57   Bava ... Vishti, 8 cycles  (recurring)
  58 - 60  Sakuni, Chatushpada, Naga  (fixed)
"""
from __future__ import annotations

import logging
import math
from datetime import datetime

from app.core.angles import norm360
from app.core.ephemeris import EphemerisProvider
from app.core.errors import EventNotFound
from app.core.models import Karanam
from app.core.solver import estimate_crossing, find_crossing
from app.core.thithi import moon_sun_angle

log = logging.getLogger(__name__)

KARANAM_SPAN = 6.0
SEARCH_HOURS = 24

RECURRING_KARANAMS = ("Bava", "Balava", "Kaulava", "Taitila", "Gara", "Vanija", "Vishti")
FIRST_KARANAM = "Kimstughna"
LAST_KARANAMS = ("Sakuni", "Chatushpada", "Naga")
VISHTI = "Vishti"


def karanam_number(angle: float) -> int:
    return min(int(math.floor(norm360(angle) / KARANAM_SPAN)) + 1, 60)


def karanam_name(number: int) -> str:
    if number <= 0 or number > 60:
        return RECURRING_KARANAMS[0]
    if number == 1:
        return FIRST_KARANAM
    if number >= 58:
        return LAST_KARANAMS[number - 58]
    return RECURRING_KARANAMS[(number - 2) % 7]


def is_vishti(number: int) -> bool:
    """Vishti (Bhadra) is the inauspicious recurring karanam."""
    return karanam_name(number) == VISHTI


def calc_karanam(eph: EphemerisProvider, base: datetime) -> Karanam:
    def angle_at(t: datetime) -> float:
        return moon_sun_angle(eph, t)

    number = karanam_number(angle_at(base))
    target = norm360(number * KARANAM_SPAN)

    estimated = False
    try:
        end = find_crossing(angle_at, target, base, SEARCH_HOURS)
    except EventNotFound:
        log.warning("karanam end not bracketed (target %.1f°); using linear estimate", target)
        end = estimate_crossing(angle_at, target, base, cap_degrees=KARANAM_SPAN)
        estimated = True

    return Karanam(
        number=number,
        name=karanam_name(number),
        is_vishti=is_vishti(number),
        end_time=end.astimezone(base.tzinfo),
        estimated=estimated,
    )
