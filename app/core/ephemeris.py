# app/core/ephemeris.py
from __future__ import annotations

import logging
import threading
from datetime import date, datetime, timedelta
from typing import Optional, Protocol, runtime_checkable

from skyfield import almanac
from skyfield.api import Loader, wgs84
from skyfield.framelib import ecliptic_frame
from skyfield.searchlib import find_discrete

from app.core import config
from app.core.angles import norm360
from app.core.errors import EphemerisUnavailable
from app.core.jd import julian_day, local_midnight, resolve_zone, to_utc

log = logging.getLogger(__name__)

# Disc centre on the horizon, standard refraction (34')
SUN_CENTRE_HORIZON_DEG = -34.0 / 60.0

AYANAMSA_MODES = ("LAHIRI", "KP", "TROPICAL")


@runtime_checkable
class EphemerisProvider(Protocol):
    """
    Everything the calculators need from an ephemeris.
    Longitudes: geocentric, apparent, ecliptic of date, degrees [0, 360).
    sunrise/sunset raise EphemerisUnavailable when the event does not happen that local day.
    """

    def sun_longitude(self, t: datetime) -> float: ...

    def moon_longitude(self, t: datetime) -> float: ...

    def sunrise(self, d: date, lat: float, lon: float, tz: str) -> datetime: ...

    def sunset(self, d: date, lat: float, lon: float, tz: str) -> datetime: ...


def _jd_T(jd: float) -> float:
    # Julian centuries from J2000.0
    return (jd - 2451545.0) / 36525.0


# ---------------------------------------------------------
# Lahiri/KP Ayanamsa (approx, date-based)
# ---------------------------------------------------------
def ayanamsa_lahiri_approx_deg(jd_ut: float) -> float:
    """
    Practical Lahiri-ish ayanamsa approximation.
    Typical value around ~24° in 2025.
    """
    years = _jd_T(jd_ut) * 100.0
    rate_deg_per_year = 50.290966 / 3600.0
    return norm360(23.85675 + years * rate_deg_per_year)


def ayanamsa_deg(jd_ut: float, mode: str) -> float:
    mode = str(mode or "LAHIRI").strip().upper()
    if mode == "TROPICAL":
        return 0.0
    lahiri = ayanamsa_lahiri_approx_deg(jd_ut)
    if mode == "KP":
        return lahiri - 0.1015
    if mode == "LAHIRI":
        return lahiri
    raise ValueError(f"Unknown ayanamsa {mode!r}; expected one of {AYANAMSA_MODES}")


class SkyfieldEphemeris:
    """
    JPL kernel via Skyfield.

    The timescale and kernel are loaded lazily and once. Skyfield objects are not
    documented as thread-safe, so every public call holds one re-entrant lock.
    """

    def __init__(
        self,
        ephemeris_file: str = config.EPHEMERIS_FILE,
        ephemeris_dir: str = config.EPHEMERIS_DIR,
        ayanamsa: str = config.AYANAMSA,
    ):
        ayanamsa = str(ayanamsa).strip().upper()
        if ayanamsa not in AYANAMSA_MODES:
            raise ValueError(f"Unknown ayanamsa {ayanamsa!r}; expected one of {AYANAMSA_MODES}")
        self.ephemeris_file = ephemeris_file
        self.ephemeris_dir = ephemeris_dir
        self.ayanamsa = ayanamsa
        self._lock = threading.RLock()
        self._ts = None
        self._eph = None

    # ----------------- loading -----------------
    def _ensure_loaded(self):
        with self._lock:
            if self._ts is None or self._eph is None:
                load = Loader(self.ephemeris_dir)
                self._ts = load.timescale()
                self._eph = load(self.ephemeris_file)
                log.info("ephemeris loaded: %s (ayanamsa=%s)", self.ephemeris_file, self.ayanamsa)
            return self._ts, self._eph

    # ----------------- longitudes -----------------
    def _ecliptic_lon(self, t: datetime, body_key: str) -> float:
        with self._lock:
            ts, eph = self._ensure_loaded()
            t_sf = ts.from_datetime(to_utc(t))
            apparent = eph["earth"].at(t_sf).observe(eph[body_key]).apparent()
            _, lon, _ = apparent.frame_latlon(ecliptic_frame)
            tropical = norm360(lon.degrees)
        return norm360(tropical - ayanamsa_deg(julian_day(t), self.ayanamsa))

    def sun_longitude(self, t: datetime) -> float:
        return self._ecliptic_lon(t, "sun")

    def moon_longitude(self, t: datetime) -> float:
        return self._ecliptic_lon(t, "moon")

    # ----------------- rise / set -----------------
    def _rise_set(self, d: date, lat: float, lon: float, tz: str, rising: bool) -> datetime:
        zone = resolve_zone(tz)
        start_local = local_midnight(d, zone)
        end_local = local_midnight(d + timedelta(days=1), zone)

        with self._lock:
            ts, eph = self._ensure_loaded()
            topos = wgs84.latlon(latitude_degrees=float(lat), longitude_degrees=float(lon))
            f = almanac.risings_and_settings(eph, eph["sun"], topos, horizon_degrees=SUN_CENTRE_HORIZON_DEG)
            try:
                times, events = find_discrete(ts.from_datetime(to_utc(start_local)), ts.from_datetime(to_utc(end_local)), f)
            except Exception as exc:
                raise EphemerisUnavailable(f"rise/set search failed for {d} at ({lat}, {lon}): {exc}") from exc

        wanted = 1 if rising else 0
        for ti, ev in zip(times, events):
            if int(ev) == wanted:
                return ti.utc_datetime().astimezone(zone)

        what = "sunrise" if rising else "sunset"
        raise EphemerisUnavailable(f"no {what} on {d} at ({lat}, {lon}) in {tz}")

    def sunrise(self, d: date, lat: float, lon: float, tz: str) -> datetime:
        return self._rise_set(d, lat, lon, tz, rising=True)

    def sunset(self, d: date, lat: float, lon: float, tz: str) -> datetime:
        return self._rise_set(d, lat, lon, tz, rising=False)


# Global provider (loads once)
_DEFAULT: Optional[SkyfieldEphemeris] = None
_DEFAULT_LOCK = threading.Lock()


def get_default_ephemeris() -> SkyfieldEphemeris:
    global _DEFAULT
    with _DEFAULT_LOCK:
        if _DEFAULT is None:
            _DEFAULT = SkyfieldEphemeris()
        return _DEFAULT
