# tests/conftest.py
from datetime import date, datetime, time, timedelta
from typing import Optional

import pytest

from app.core.angles import norm360
from app.core.errors import EphemerisUnavailable
from app.core.jd import hours_between, resolve_zone

CHENNAI_LAT = 13.0827
CHENNAI_LNG = 80.2707
CHENNAI_TZ = "Asia/Kolkata"


class LinearEphemeris:
    """
    Deterministic provider: longitudes move at constant rates (deg/hour) from
    their values at `epoch`; sunrise/sunset are fixed local clock times.
    Rates of 0 freeze the sky, which forces the solver fallbacks.
    """

    def __init__(
        self,
        epoch: datetime,
        sun0: float = 0.0,
        moon0: float = 0.0,
        sun_rate: float = 0.0,
        moon_rate: float = 0.0,
        rise: time = time(6, 30),
        set_: time = time(18, 0),
    ):
        self.epoch = epoch
        self.sun0 = sun0
        self.moon0 = moon0
        self.sun_rate = sun_rate
        self.moon_rate = moon_rate
        self.rise = rise
        self.set_ = set_
        self.calls = 0

    def sun_longitude(self, t: datetime) -> float:
        self.calls += 1
        return norm360(self.sun0 + self.sun_rate * hours_between(self.epoch, t))

    def moon_longitude(self, t: datetime) -> float:
        self.calls += 1
        return norm360(self.moon0 + self.moon_rate * hours_between(self.epoch, t))

    def sunrise(self, d: date, lat: float, lon: float, tz: str) -> datetime:
        self.calls += 1
        return datetime.combine(d, self.rise, tzinfo=resolve_zone(tz))

    def sunset(self, d: date, lat: float, lon: float, tz: str) -> datetime:
        self.calls += 1
        return datetime.combine(d, self.set_, tzinfo=resolve_zone(tz))


class PolarEphemeris(LinearEphemeris):
    """No sunrise at all (polar night)."""

    def sunrise(self, d: date, lat: float, lon: float, tz: str) -> datetime:
        raise EphemerisUnavailable(f"no sunrise on {d} at ({lat}, {lon})")


def sunrise_at(d: date, tz: str = CHENNAI_TZ, rise: time = time(6, 30)) -> datetime:
    return datetime.combine(d, rise, tzinfo=resolve_zone(tz))


def make_stub(d: date, tz: str = CHENNAI_TZ, rise: Optional[time] = None, **kwargs) -> LinearEphemeris:
    rise = rise or time(6, 30)
    return LinearEphemeris(epoch=sunrise_at(d, tz, rise), rise=rise, **kwargs)


@pytest.fixture
def base() -> datetime:
    return sunrise_at(date(2026, 1, 4))


@pytest.fixture
def one_minute() -> timedelta:
    return timedelta(minutes=1)
