"""FastAPI application exposing Sun/Moon positions and rise/set events."""

from __future__ import annotations

import json
import logging
import os
import time
from datetime import UTC
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import fastephem
from fastephem import moon
from fastephem.altitude import GeographicLocation, horizontal_position
from fastephem.body import Body
from fastephem.dates import (
    datetime_from_j2000,
    default_offset_hours,
    j2000_from_datetime,
    local_midnight,
    utc_offset,
)
from fastephem.events import RiseThreshold, events
from fastephem.timebase import century_from_j2000, deg_from_rad
from models import (
    ErrorResponse,
    EventQueryParams,
    EventResponse,
    HealthResponse,
    IlluminationQueryParams,
    IlluminationResponse,
    PositionQueryParams,
    PositionResponse,
)

logging.basicConfig(
    level=os.environ.get("FASTEPHEM_LOG_LEVEL", "INFO").upper(),
    format="%(message)s",
)
LOGGER = logging.getLogger("fastephem-api")

APP_DESCRIPTION = "Fast Sun and Moon positions, illumination, and rise/set/twilight events"


def _cors_origins() -> List[str]:
    raw = os.environ.get("FASTEPHEM_CORS_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


app = FastAPI(
    title="fastephem API",
    description=APP_DESCRIPTION,
    version=fastephem.__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _format_utc(value: Optional[float]) -> Optional[str]:
    if value is None:
        return None
    return datetime_from_j2000(value).isoformat().replace("+00:00", "Z")


def _format_local(value: Optional[float], offset_hours: float) -> Optional[str]:
    if value is None:
        return None
    return datetime_from_j2000(value).astimezone(utc_offset(offset_hours)).isoformat()


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    payload = ErrorResponse(code=code, error=message)
    LOGGER.error(json.dumps({"event": "error", "code": code, "message": message}))
    return JSONResponse(status_code=status_code, content=payload.model_dump())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    messages = ", ".join(error["msg"] for error in exc.errors())
    return _error_response(422, "validation_error", messages)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    detail = exc.detail
    if isinstance(detail, dict):
        message = detail.get("error") or detail.get("message") or str(detail)
    elif isinstance(detail, list):
        message = ", ".join(str(item) for item in detail)
    else:
        message = str(detail)
    return _error_response(exc.status_code, f"http_{exc.status_code}", message)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    LOGGER.exception("Unhandled exception", exc_info=exc)
    return _error_response(500, "internal_error", "Unhandled server error")


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(ok=True, bodies=list(Body), thresholds=list(RiseThreshold))


@app.get(
    "/events",
    response_model=EventResponse,
    responses={
        400: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
def events_endpoint(params: EventQueryParams = Depends()) -> EventResponse:
    start_time = time.perf_counter()
    offset_hours = (
        params.offset_hours if params.offset_hours is not None else default_offset_hours(params.lon)
    )
    try:
        location = GeographicLocation(longitude=params.lon, latitude=params.lat)
        start = local_midnight(params.local_date, offset_hours)
        result = events(params.body, start, params.threshold, location)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    duration_ms = (time.perf_counter() - start_time) * 1000.0

    response = EventResponse(
        status=result.kind,
        body=params.body,
        threshold=params.threshold,
        local_date=params.local_date,
        latitude=params.lat,
        longitude=params.lon,
        offset_hours=offset_hours,
        rise_utc=_format_utc(result.rise),
        set_utc=_format_utc(result.set_time),
        rise_local=_format_local(result.rise, offset_hours),
        set_local=_format_local(result.set_time, offset_hours),
    )

    LOGGER.info(
        json.dumps(
            {
                "event": "events",
                "body": params.body.value,
                "threshold": params.threshold.value,
                "lat": params.lat,
                "lon": params.lon,
                "date": params.local_date.isoformat(),
                "status": result.kind.value,
                "duration_ms": round(duration_ms, 3),
            }
        )
    )
    return response


@app.get(
    "/position",
    response_model=PositionResponse,
    responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
def position_endpoint(params: PositionQueryParams = Depends()) -> PositionResponse:
    if (params.lat is None) != (params.lon is None):
        raise HTTPException(status_code=400, detail="lat and lon must be given together")
    try:
        date = j2000_from_datetime(params.at)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    equatorial = params.body.equatorial_position(century_from_j2000(date))
    azimuth = altitude = None
    if params.lat is not None and params.lon is not None:
        location = GeographicLocation(longitude=params.lon, latitude=params.lat)
        horizontal = horizontal_position(equatorial, date, location)
        azimuth, altitude = horizontal.azimuth, horizontal.altitude

    LOGGER.info(json.dumps({"event": "position", "body": params.body.value, "date": date}))
    return PositionResponse(
        body=params.body,
        at_utc=params.at.astimezone(UTC).isoformat().replace("+00:00", "Z"),
        right_ascension=equatorial.right_ascension,
        declination=equatorial.declination,
        distance_km=equatorial.radius,
        azimuth=azimuth,
        altitude=altitude,
    )


@app.get(
    "/moon/illumination",
    response_model=IlluminationResponse,
    responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
def illumination_endpoint(params: IlluminationQueryParams = Depends()) -> IlluminationResponse:
    try:
        date = j2000_from_datetime(params.at)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    illumination = moon.fast_illumination_j2000(date)
    LOGGER.info(json.dumps({"event": "illumination", "date": date, "fraction": illumination.fraction}))
    return IlluminationResponse(
        at_utc=params.at.astimezone(UTC).isoformat().replace("+00:00", "Z"),
        fraction=illumination.fraction,
        phase_angle_rad=illumination.phase_angle,
        phase_angle_deg=deg_from_rad(illumination.phase_angle),
    )
