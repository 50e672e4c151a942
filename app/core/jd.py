# app/core/jd.py
from __future__ import annotations
from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from app.core.errors import InvalidLocation, InvalidTimezone

JD_UNIX_EPOCH = 2440587.5  # JD of 1970-01-01T00:00:00Z


def resolve_zone(tz: str) -> ZoneInfo:
    """
    IANA name -> ZoneInfo.
    Unknown names are rejected (no silent fallback to a fixed offset).
    """
    name = str(tz or "").strip()
    if not name:
        raise InvalidTimezone("timezone is required")
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise InvalidTimezone(f"Unknown timezone: {tz!r}") from exc


def validate_location(lat: float, lon: float) -> None:
    lat = float(lat)
    lon = float(lon)
    if not (-90.0 <= lat <= 90.0):
        raise InvalidLocation(f"latitude {lat} out of range [-90, 90]")
    if not (-180.0 <= lon <= 180.0):
        raise InvalidLocation(f"longitude {lon} out of range [-180, 180]")


def local_midnight(d: date, zone: ZoneInfo) -> datetime:
    return datetime.combine(d, time(0, 0), tzinfo=zone)


def to_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        raise ValueError("naive datetime; attach a timezone first")
    return dt.astimezone(timezone.utc)


def julian_day(dt: datetime) -> float:
    """UTC datetime -> Julian Day (UT)."""
    delta = to_utc(dt) - datetime(1970, 1, 1, tzinfo=timezone.utc)
    return JD_UNIX_EPOCH + delta / timedelta(days=1)


def hours_between(a: datetime, b: datetime) -> float:
    return (b - a) / timedelta(hours=1)


def fmt_hm(dt_local: datetime) -> str:
    return dt_local.strftime("%H:%M")
