# app/core/config.py
import os


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return float(raw)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


# -------------------------------------------------
# Ephemeris
# -------------------------------------------------
EPHEMERIS_FILE = os.getenv("PANCHANGAM_EPHEMERIS_FILE", "de440s.bsp")
EPHEMERIS_DIR = os.getenv("PANCHANGAM_EPHEMERIS_DIR", ".")

# LAHIRI | KP | TROPICAL
AYANAMSA = os.getenv("PANCHANGAM_AYANAMSA", "LAHIRI").strip().upper()

# -------------------------------------------------
# Snapshot cache
# -------------------------------------------------
CACHE_TTL_SEC = _env_float("PANCHANGAM_CACHE_TTL_SEC", 6 * 60 * 60)  # 6 hours
CACHE_MAX_ENTRIES = _env_int("PANCHANGAM_CACHE_MAX_ENTRIES", 2048)

# -------------------------------------------------
# API
# -------------------------------------------------
LOG_LEVEL = os.getenv("PANCHANGAM_LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [o.strip() for o in os.getenv("PANCHANGAM_CORS_ORIGINS", "*").split(",") if o.strip()]

# Chennai (most common reference for Tamil panchangam)
DEFAULT_LAT = 13.0827
DEFAULT_LNG = 80.2707
DEFAULT_TZ = "Asia/Kolkata"
