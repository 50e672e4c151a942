# app/core/models.py
from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from app.core.jd import fmt_hm


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# -------------------------------------------------
# Enums
# -------------------------------------------------
class Paksha(str, Enum):
    SHUKLA = "Shukla"    # waxing
    KRISHNA = "Krishna"  # waning


class YogamType(str, Enum):
    AUSPICIOUS = "auspicious"
    INAUSPICIOUS = "inauspicious"
    NEUTRAL = "neutral"


class TimingKind(str, Enum):
    NALLA_NERAM = "nalla_neram"
    GOWRI_NALLA_NERAM = "gowri_nalla_neram"
    RAHUKAALAM = "rahukaalam"
    YAMAGANDAM = "yamagandam"
    KULIGAI = "kuligai"

    @property
    def auspicious(self) -> bool:
        return self in (TimingKind.NALLA_NERAM, TimingKind.GOWRI_NALLA_NERAM)


class FoodType(str, Enum):
    REGULAR = "regular"
    FASTING = "fasting"
    AVOID_NON_VEG = "avoidNonVeg"


# -------------------------------------------------
# Angams
# -------------------------------------------------
class Nakshatram(_Frozen):
    index: int = Field(..., ge=0, le=26)
    name: str
    lord: str
    pada: int = Field(..., ge=1, le=4)
    end_time: datetime
    estimated: bool = False


class Thithi(_Frozen):
    number: int = Field(..., ge=1, le=30)
    name: str
    paksha: Paksha
    end_time: datetime
    estimated: bool = False


class Yogam(_Frozen):
    index: int = Field(..., ge=0, le=26)
    name: str
    type: YogamType
    start_time: datetime
    end_time: datetime
    estimated: bool = False


class Karanam(_Frozen):
    number: int = Field(..., ge=1, le=60)
    name: str
    is_vishti: bool
    end_time: datetime
    estimated: bool = False


# -------------------------------------------------
# Timings
# -------------------------------------------------
class TimeWindow(_Frozen):
    start: datetime
    end: datetime
    kind: TimingKind
    label: Optional[str] = None

    @property
    def auspicious(self) -> bool:
        return self.kind.auspicious

    def formatted(self) -> str:
        return f"{fmt_hm(self.start)} - {fmt_hm(self.end)}"


class GowriSegment(_Frozen):
    segment: int = Field(..., ge=1, le=8)
    state: str
    auspicious: bool
    start: datetime
    end: datetime


class Timings(_Frozen):
    sunrise: datetime
    sunset: datetime
    rahukaalam: TimeWindow
    yamagandam: TimeWindow
    kuligai: TimeWindow
    nalla_neram: List[TimeWindow]
    gowri_nalla_neram: List[TimeWindow]
    gowri: List[GowriSegment]

    @computed_field
    @property
    def ordered_windows(self) -> List[TimeWindow]:
        """Every window of the day by start time."""
        windows = [self.rahukaalam, self.yamagandam, self.kuligai, *self.nalla_neram, *self.gowri_nalla_neram]
        return sorted(windows, key=lambda w: (w.start, w.end, w.kind.value))


# -------------------------------------------------
# Tamil date / food / snapshot
# -------------------------------------------------
class TamilDate(_Frozen):
    month: str
    month_index: int = Field(..., ge=0, le=11)
    day: int = Field(..., ge=1, le=32)
    year: str
    weekday: str


class FoodStatus(_Frozen):
    type: FoodType
    message: str


class PanchangamSnapshot(_Frozen):
    date: date
    weekday: str
    timezone: str
    latitude: float
    longitude: float
    tamil_date: TamilDate
    sunrise: datetime
    sunset: datetime
    nakshatram: Nakshatram
    thithi: Thithi
    yogam: Yogam
    karanam: Karanam
    timings: Timings
    food_status: FoodStatus
