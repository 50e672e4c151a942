# main.py: Tamil Panchangam API (daily / weekly snapshots + health)
import logging
from contextlib import asynccontextmanager
from datetime import date, datetime, timezone
from typing import List

from fastapi import Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core import config
from app.core.ephemeris import EphemerisProvider, get_default_ephemeris
from app.core.errors import EphemerisUnavailable, InvalidLocation, InvalidTimezone
from app.core.models import PanchangamSnapshot
from app.core.panchangam_calc import compute_daily, compute_weekly

logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger("panchangam.api")


def get_ephemeris() -> EphemerisProvider:
    return get_default_ephemeris()


# -------------------------------------------------
# Startup warm-up (kernel load on first request is slow)
# -------------------------------------------------
def _startup_warm():
    try:
        eph = get_default_ephemeris()
        eph.sun_longitude(datetime.now(timezone.utc))
        log.info("startup warm ok")
    except Exception as e:
        log.warning("startup warm fail: %s", e)


@asynccontextmanager
async def lifespan(app: FastAPI):
    _startup_warm()
    yield


# -------------------------------------------------
# App
# -------------------------------------------------
app = FastAPI(title="Tamil Panchangam Backend", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# -------------------------------------------------
# Error mapping (problem+json style)
# -------------------------------------------------
def _problem(status: int, title: str, slug: str, detail: str) -> JSONResponse:
    return JSONResponse(
        status_code=status,
        content={
            "type": f"/errors/{slug}",
            "title": title,
            "status": status,
            "detail": detail,
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        },
    )


@app.exception_handler(InvalidLocation)
def _invalid_location(request: Request, exc: InvalidLocation):
    log.warning("invalid location: %s", exc)
    return _problem(400, "Invalid Location", "invalid-location", str(exc))


@app.exception_handler(InvalidTimezone)
def _invalid_timezone(request: Request, exc: InvalidTimezone):
    log.warning("invalid timezone: %s", exc)
    return _problem(400, "Invalid Timezone", "invalid-timezone", str(exc))


@app.exception_handler(EphemerisUnavailable)
def _ephemeris_unavailable(request: Request, exc: EphemerisUnavailable):
    log.warning("ephemeris unavailable: %s", exc)
    return _problem(422, "Ephemeris Unavailable", "ephemeris-unavailable", str(exc))


@app.exception_handler(Exception)
def _unexpected(request: Request, exc: Exception):
    log.error("unexpected error on %s", request.url.path, exc_info=exc)
    return _problem(500, "Internal Server Error", "internal-error", "An unexpected error occurred. Please try again later.")


# -------------------------------------------------
# Health
# -------------------------------------------------
@app.get("/health")
def health():
    return {"ok": True, "service": "tamil-panchangam-backend"}


# -------------------------------------------------
# Panchangam API
# -------------------------------------------------
@app.get("/api/panchangam/daily", response_model=PanchangamSnapshot)
def panchangam_daily(
    date_: date = Query(..., alias="date", description="Date in YYYY-MM-DD format"),
    lat: float = Query(config.DEFAULT_LAT, description="Latitude"),
    lng: float = Query(config.DEFAULT_LNG, description="Longitude (east positive)"),
    tz: str = Query(config.DEFAULT_TZ, alias="timezone", description="IANA timezone, e.g. Asia/Kolkata"),
    eph: EphemerisProvider = Depends(get_ephemeris),
):
    return compute_daily(date_, lat, lng, tz, eph=eph)


@app.get("/api/panchangam/weekly", response_model=List[PanchangamSnapshot])
def panchangam_weekly(
    start_date: date = Query(..., alias="startDate", description="Start date in YYYY-MM-DD format"),
    lat: float = Query(config.DEFAULT_LAT, description="Latitude"),
    lng: float = Query(config.DEFAULT_LNG, description="Longitude (east positive)"),
    tz: str = Query(config.DEFAULT_TZ, alias="timezone", description="IANA timezone, e.g. Asia/Kolkata"),
    eph: EphemerisProvider = Depends(get_ephemeris),
):
    return compute_weekly(start_date, lat, lng, tz, eph=eph)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
