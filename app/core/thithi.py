# app/core/thithi.py
"""
Thithi (lunar day): 12° steps of the Moon-Sun elongation, 30 per lunar month.
1-15 Shukla (waxing), 16-30 Krishna (waning).
"""
from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Tuple

from app.core.angles import norm360
from app.core.ephemeris import EphemerisProvider
from app.core.errors import EventNotFound
from app.core.models import Paksha, Thithi
from app.core.solver import estimate_crossing, find_crossing

log = logging.getLogger(__name__)

THITHI_SPAN = 12.0
SEARCH_HOURS = 48

# Shared by both pakshas; slot 15 is overridden per paksha
THITHI_NAMES = (
    "Prathama", "Dvitiya", "Tritiya", "Chaturthi", "Panchami",
    "Sashti", "Saptami", "Ashtami", "Navami", "Dasami",
    "Ekadasi", "Dvadasi", "Trayodasi", "Chaturdasi", "Pournami",
)

POURNAMI = "Pournami"
AMAVASAI = "Amavasai"


def moon_sun_angle(eph: EphemerisProvider, t: datetime) -> float:
    return norm360(eph.moon_longitude(t) - eph.sun_longitude(t))


def thithi_number(angle: float) -> int:
    return min(int(math.floor(norm360(angle) / THITHI_SPAN)) + 1, 30)


def thithi_name_paksha(number: int) -> Tuple[str, Paksha]:
    if number <= 15:
        if number == 15:
            return POURNAMI, Paksha.SHUKLA
        return THITHI_NAMES[number - 1], Paksha.SHUKLA

    krishna = number - 15
    if krishna == 15:
        return AMAVASAI, Paksha.KRISHNA
    return THITHI_NAMES[krishna - 1], Paksha.KRISHNA


def is_special_thithi(number: int) -> bool:
    """Ekadasi (both pakshas), Pournami, Amavasai."""
    return number in (11, 15, 26, 30)


def calc_thithi(eph: EphemerisProvider, base: datetime) -> Thithi:
    def angle_at(t: datetime) -> float:
        return moon_sun_angle(eph, t)

    number = thithi_number(angle_at(base))
    name, paksha = thithi_name_paksha(number)
    target = norm360(number * THITHI_SPAN)

    estimated = False
    try:
        end = find_crossing(angle_at, target, base, SEARCH_HOURS)
    except EventNotFound:
        log.warning("thithi end not bracketed (target %.1f°); using linear estimate", target)
        end = estimate_crossing(angle_at, target, base, cap_degrees=THITHI_SPAN)
        estimated = True

    return Thithi(
        number=number,
        name=name,
        paksha=paksha,
        end_time=end.astimezone(base.tzinfo),
        estimated=estimated,
    )
