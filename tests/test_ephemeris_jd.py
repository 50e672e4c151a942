# tests/test_ephemeris_jd.py
import os
from datetime import date, datetime, time, timezone

import pytest

from app.core import config
from app.core.ephemeris import (
    EphemerisProvider,
    SkyfieldEphemeris,
    ayanamsa_deg,
    ayanamsa_lahiri_approx_deg,
)
from app.core.errors import InvalidLocation, InvalidTimezone
from app.core.jd import hours_between, julian_day, resolve_zone, to_utc, validate_location
from conftest import LinearEphemeris, sunrise_at

J2000 = 2451545.0


def test_julian_day_j2000():
    assert julian_day(datetime(2000, 1, 1, 12, tzinfo=timezone.utc)) == J2000
    ist_noon = datetime(2000, 1, 1, 17, 30, tzinfo=resolve_zone("Asia/Kolkata"))
    assert julian_day(ist_noon) == pytest.approx(J2000)


def test_naive_datetime_rejected():
    with pytest.raises(ValueError):
        to_utc(datetime(2026, 1, 4, 6, 30))


def test_hours_between():
    a = sunrise_at(date(2026, 1, 4))
    b = sunrise_at(date(2026, 1, 5))
    assert hours_between(a, b) == 24.0


def test_resolve_zone():
    assert resolve_zone(" Asia/Kolkata ").key == "Asia/Kolkata"
    for bad in ("", None, "Nowhere/City", "../etc/passwd"):
        with pytest.raises(InvalidTimezone):
            resolve_zone(bad)


def test_validate_location():
    validate_location(90.0, 180.0)
    validate_location(-90.0, -180.0)
    with pytest.raises(InvalidLocation):
        validate_location(90.01, 0.0)
    with pytest.raises(ValueError):
        validate_location(0.0, -180.01)


def test_ayanamsa_modes():
    assert ayanamsa_lahiri_approx_deg(J2000) == pytest.approx(23.85675)
    assert ayanamsa_deg(J2000, "TROPICAL") == 0.0
    assert ayanamsa_deg(J2000, "lahiri") == pytest.approx(23.85675)
    assert ayanamsa_deg(J2000, "KP") == pytest.approx(23.85675 - 0.1015)
    # ~50.3"/year precession
    later = ayanamsa_deg(J2000 + 36525.0, "LAHIRI")
    assert later - 23.85675 == pytest.approx(50.290966 * 100 / 3600)
    with pytest.raises(ValueError):
        ayanamsa_deg(J2000, "RAMAN")


def test_provider_protocol():
    assert isinstance(SkyfieldEphemeris(), EphemerisProvider)
    assert isinstance(LinearEphemeris(epoch=sunrise_at(date(2026, 1, 4))), EphemerisProvider)
    assert not isinstance(object(), EphemerisProvider)


def test_unknown_ayanamsa_rejected_without_loading():
    with pytest.raises(ValueError):
        SkyfieldEphemeris(ayanamsa="raman")


KERNEL = os.path.join(config.EPHEMERIS_DIR, config.EPHEMERIS_FILE)


@pytest.mark.skipif(not os.path.exists(KERNEL), reason="JPL kernel not present")
def test_skyfield_chennai_sunrise_and_sun():
    eph = SkyfieldEphemeris(ayanamsa="LAHIRI")
    d = date(2026, 1, 4)
    rise = eph.sunrise(d, 13.0827, 80.2707, "Asia/Kolkata")
    sset = eph.sunset(d, 13.0827, 80.2707, "Asia/Kolkata")
    assert rise.date() == d
    assert time(6, 15) <= rise.time() <= time(6, 45)
    assert time(17, 45) <= sset.time() <= time(18, 15)

    # sidereal Sun in Dhanu (Margazhi) in early January
    lon = eph.sun_longitude(rise)
    assert 240.0 <= lon < 270.0
    assert 0.0 <= eph.moon_longitude(rise) < 360.0
