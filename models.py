"""Pydantic models for API requests and responses."""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from fastephem.body import Body
from fastephem.events import EventKind, RiseThreshold


class EventQueryParams(BaseModel):
    """Validated query parameters for the ``/events`` endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    lat: float = Field(..., ge=-90.0, le=90.0, description="Latitude in degrees")
    lon: float = Field(..., ge=-180.0, le=180.0, description="Longitude in degrees")
    local_date: date = Field(..., alias="date", description="Local calendar date (YYYY-MM-DD)")
    body: Body = Field(Body.sun, description="Body to search")
    threshold: RiseThreshold = Field(RiseThreshold.sunrise, description="Rise/set altitude threshold")
    offset_hours: Optional[float] = Field(
        None,
        gt=-24.0,
        lt=24.0,
        description="Fixed UTC offset of the local day in hours (default: round(lon / 15))",
    )


class PositionQueryParams(BaseModel):
    """Validated query parameters for the ``/position`` endpoint."""

    body: Body = Field(Body.sun, description="Body to locate")
    at: datetime = Field(..., description="Instant (ISO-8601 with offset)")
    lat: Optional[float] = Field(None, ge=-90.0, le=90.0, description="Observer latitude")
    lon: Optional[float] = Field(None, ge=-180.0, le=180.0, description="Observer longitude")


class IlluminationQueryParams(BaseModel):
    at: datetime = Field(..., description="Instant (ISO-8601 with offset)")


class EventResponse(BaseModel):
    """Rise/set classification for one local day."""

    ok: bool = True
    status: EventKind = Field(..., description="Rise/set classification")
    body: Body
    threshold: RiseThreshold
    local_date: date = Field(..., description="Requested local date")
    latitude: float
    longitude: float
    offset_hours: float = Field(..., description="UTC offset applied to the local day")
    rise_utc: Optional[str] = Field(None, description="Rise time in UTC (ISO-8601)")
    set_utc: Optional[str] = Field(None, description="Set time in UTC (ISO-8601)")
    rise_local: Optional[str] = Field(None, description="Rise time at the local offset")
    set_local: Optional[str] = Field(None, description="Set time at the local offset")


class PositionResponse(BaseModel):
    ok: bool = True
    body: Body
    at_utc: str
    right_ascension: float = Field(..., description="Right ascension of date in degrees")
    declination: float = Field(..., description="Declination of date in degrees")
    distance_km: float = Field(..., description="Model geocentric distance")
    azimuth: Optional[float] = Field(None, description="Azimuth from north through east in degrees")
    altitude: Optional[float] = Field(None, description="Geocentric altitude in degrees")


class IlluminationResponse(BaseModel):
    ok: bool = True
    at_utc: str
    fraction: float = Field(..., description="Illuminated fraction of the lunar disk")
    phase_angle_rad: float
    phase_angle_deg: float


class HealthResponse(BaseModel):
    """Health-check response."""

    ok: bool = True
    bodies: List[Body]
    thresholds: List[RiseThreshold]


class ErrorResponse(BaseModel):
    """Error payload."""

    ok: bool = False
    code: str
    error: str
