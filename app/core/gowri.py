# app/core/gowri.py
"""
Gowri Panchangam: each of the 8 daylight segments gets a state from a
weekday-rotated table (Pambu Panchangam pattern).
"""
from __future__ import annotations

from datetime import datetime
from typing import List

from app.core.models import GowriSegment, TimeWindow, TimingKind
from app.core.timings import segment_bounds

AMIRDHA = "Amirdha"
UTHI = "Uthi"
LAABAM = "Laabam"
SUGAM = "Sugam"
DHANAM = "Dhanam"
ROGAM = "Rogam"
SORAM = "Soram"
VISHAM = "Visham"

AUSPICIOUS_STATES = frozenset({AMIRDHA, UTHI, LAABAM, SUGAM, DHANAM})

# Sunday = 0
GOWRI_PATTERNS = (
    (UTHI, ROGAM, VISHAM, DHANAM, SORAM, LAABAM, AMIRDHA, SUGAM),
    (AMIRDHA, VISHAM, ROGAM, DHANAM, LAABAM, SORAM, UTHI, SUGAM),
    (ROGAM, AMIRDHA, LAABAM, DHANAM, UTHI, VISHAM, SORAM, SUGAM),
    (SUGAM, SORAM, AMIRDHA, LAABAM, ROGAM, UTHI, VISHAM, DHANAM),
    (LAABAM, VISHAM, UTHI, AMIRDHA, SUGAM, ROGAM, DHANAM, SORAM),
    (DHANAM, LAABAM, SUGAM, UTHI, ROGAM, AMIRDHA, VISHAM, SORAM),
    (SORAM, SUGAM, ROGAM, VISHAM, AMIRDHA, DHANAM, LAABAM, UTHI),
)


def is_auspicious(state: str) -> bool:
    return state in AUSPICIOUS_STATES


def gowri_segments(sunrise: datetime, sunset: datetime, weekday: int) -> List[GowriSegment]:
    bounds = segment_bounds(sunrise, sunset)
    return [
        GowriSegment(
            segment=i + 1,
            state=state,
            auspicious=is_auspicious(state),
            start=bounds[i],
            end=bounds[i + 1],
        )
        for i, state in enumerate(GOWRI_PATTERNS[weekday])
    ]


def gowri_nalla_neram(segments: List[GowriSegment]) -> List[TimeWindow]:
    return [
        TimeWindow(start=s.start, end=s.end, kind=TimingKind.GOWRI_NALLA_NERAM, label=s.state)
        for s in segments
        if s.auspicious
    ]
