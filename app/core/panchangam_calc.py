# app/core/panchangam_calc.py
from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from datetime import date, timedelta
from typing import List, Optional, Tuple

from app.core import config
from app.core.ephemeris import EphemerisProvider, get_default_ephemeris
from app.core.errors import InvalidLocation
from app.core.gowri import gowri_nalla_neram, gowri_segments
from app.core.jd import resolve_zone, validate_location
from app.core.karanam import calc_karanam
from app.core.models import FoodStatus, FoodType, PanchangamSnapshot, Thithi, Timings
from app.core.nakshatram import calc_nakshatram
from app.core.tamil_calendar import calc_tamil_date
from app.core.thithi import AMAVASAI, POURNAMI, calc_thithi, is_special_thithi
from app.core.timings import inauspicious_windows, nalla_neram, weekday_index
from app.core.yogam import calc_yogam

log = logging.getLogger(__name__)

WEEK_DAYS = 7

# Sunday = 0
VAARA_EN = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")

# ----------------- Panchangam result cache -----------------
# same local date + tz + lat/lon + ayanamsa -> reuse snapshot (default provider only)
# insertion order == age order; oldest entries sit at the front
_PANCH_CACHE: OrderedDict[str, Tuple[float, PanchangamSnapshot]] = OrderedDict()
_PANCH_LOCK = threading.Lock()


def _panch_key(d: date, tz: str, lat: float, lon: float, ayanamsa: str) -> str:
    return f"{d.isoformat()}|{tz}|{float(lat):.4f}|{float(lon):.4f}|{ayanamsa}"


def _panch_gc(now: float) -> None:
    # caller holds _PANCH_LOCK
    dead = [k for k, (ts, _) in _PANCH_CACHE.items() if (now - ts) > config.CACHE_TTL_SEC]
    for k in dead:
        _PANCH_CACHE.pop(k, None)
    while len(_PANCH_CACHE) > config.CACHE_MAX_ENTRIES:
        _PANCH_CACHE.popitem(last=False)


def _panch_cache_get(key: str) -> Optional[PanchangamSnapshot]:
    with _PANCH_LOCK:
        hit = _PANCH_CACHE.get(key)
        if not hit:
            return None
        ts, snap = hit
        if (time.time() - ts) > config.CACHE_TTL_SEC:
            _PANCH_CACHE.pop(key, None)
            return None
        return snap


def _panch_cache_set(key: str, snap: PanchangamSnapshot) -> None:
    with _PANCH_LOCK:
        now = time.time()
        _PANCH_CACHE.pop(key, None)
        _PANCH_CACHE[key] = (now, snap)
        _panch_gc(now)


def clear_cache() -> None:
    with _PANCH_LOCK:
        _PANCH_CACHE.clear()


# ----------------- Food status -----------------
def food_status(thithi: Thithi) -> FoodStatus:
    if not is_special_thithi(thithi.number):
        return FoodStatus(type=FoodType.REGULAR, message="No dietary restrictions today")
    name = thithi.name
    if name == AMAVASAI:
        return FoodStatus(type=FoodType.AVOID_NON_VEG, message="Amavasai - Avoid non-vegetarian food")
    if name == POURNAMI:
        return FoodStatus(type=FoodType.AVOID_NON_VEG, message="Pournami - Avoid non-vegetarian food")
    if "Ekadasi" in name:
        return FoodStatus(type=FoodType.FASTING, message="Ekadasi - Fasting recommended")
    return FoodStatus(type=FoodType.REGULAR, message="No dietary restrictions today")


# ----------------- Core -----------------
def _build_snapshot(eph: EphemerisProvider, d: date, lat: float, lon: float, tz: str) -> PanchangamSnapshot:
    zone = resolve_zone(tz)

    sunrise = eph.sunrise(d, lat, lon, tz).astimezone(zone)
    sunset = eph.sunset(d, lat, lon, tz).astimezone(zone)
    if sunset <= sunrise:
        raise InvalidLocation(f"no daylight interval on {d} at ({lat}, {lon}): sunrise {sunrise}, sunset {sunset}")

    wd = weekday_index(d)

    # every angam + window below is keyed off this one sunrise
    tamil_date = calc_tamil_date(eph, d, sunrise)
    nakshatram = calc_nakshatram(eph, sunrise)
    thithi = calc_thithi(eph, sunrise)
    yogam = calc_yogam(eph, sunrise)
    karanam = calc_karanam(eph, sunrise)

    rahu, yama, kuligai = inauspicious_windows(sunrise, sunset, wd)
    segments = gowri_segments(sunrise, sunset, wd)
    timings = Timings(
        sunrise=sunrise,
        sunset=sunset,
        rahukaalam=rahu,
        yamagandam=yama,
        kuligai=kuligai,
        nalla_neram=nalla_neram(sunrise, sunset, wd),
        gowri_nalla_neram=gowri_nalla_neram(segments),
        gowri=segments,
    )

    return PanchangamSnapshot(
        date=d,
        weekday=VAARA_EN[wd],
        timezone=tz,
        latitude=float(lat),
        longitude=float(lon),
        tamil_date=tamil_date,
        sunrise=sunrise,
        sunset=sunset,
        nakshatram=nakshatram,
        thithi=thithi,
        yogam=yogam,
        karanam=karanam,
        timings=timings,
        food_status=food_status(thithi),
    )


def compute_daily(
    d: date,
    lat: float,
    lon: float,
    tz: str,
    eph: Optional[EphemerisProvider] = None,
) -> PanchangamSnapshot:
    """
    Daily panchangam for a Gregorian date at (lat, lon) in timezone tz.

    Raises InvalidLocation / InvalidTimezone before touching the ephemeris,
    and EphemerisUnavailable when sunrise or sunset cannot be computed.
    """
    validate_location(lat, lon)
    resolve_zone(tz)

    default = get_default_ephemeris()
    if eph is not None and eph is not default:
        return _build_snapshot(eph, d, lat, lon, tz)

    key = _panch_key(d, tz, lat, lon, default.ayanamsa)
    hit = _panch_cache_get(key)
    if hit is not None:
        log.debug("panchangam cache hit %s", key)
        return hit

    log.debug("panchangam cache miss %s", key)
    snap = _build_snapshot(default, d, lat, lon, tz)
    _panch_cache_set(key, snap)
    return snap


def compute_weekly(
    start: date,
    lat: float,
    lon: float,
    tz: str,
    eph: Optional[EphemerisProvider] = None,
) -> List[PanchangamSnapshot]:
    return [compute_daily(start + timedelta(days=i), lat, lon, tz, eph=eph) for i in range(WEEK_DAYS)]
