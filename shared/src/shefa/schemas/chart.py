"""Pydantic schemas for chart requests, positions, and computed charts."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from shefa.enums import AspectQuality, AspectType, Illumination, Intensity, Planet, Sign
from shefa.errors import CalculationIssue


class ChartRequest(BaseModel):
    """Birth (or event) data a chart is calculated from."""

    birth_date: str = Field(description="Civil date, YYYY-MM-DD")
    birth_time: str | None = Field(default=None, description="Civil time, HH:MM[:SS]; noon when unknown")
    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)
    timezone: str | None = Field(
        default=None,
        description="IANA zone, abbreviation, or UTC offset; inferred from coordinates when omitted",
    )
    city: str = ""
    country: str = ""

    @field_validator("birth_date")
    @classmethod
    def _require_date(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("birth_date is required")
        return value

    @field_validator("birth_time", "timezone")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        return value or None


class CelestialPosition(BaseModel):
    """Geocentric ecliptic position of a body as the ephemeris reports it."""

    body: Planet
    longitude: float
    latitude: float = 0.0
    distance: float = 0.0
    speed_deg_day: float = 0.0
    retrograde: bool = False


class ZodiacPlacement(BaseModel):
    """Sign and degree-in-sign for an absolute ecliptic longitude."""

    sign: Sign
    degree_in_sign: float
    absolute_degree: float


class PlanetPlacement(BaseModel):
    """A planet placed in a chart: sign, degree and house."""

    body: Planet
    sign: Sign
    degree_in_sign: float
    longitude: float
    speed_deg_day: float = 0.0
    retrograde: bool = False
    house: int | None = Field(default=None, ge=1, le=12)


class ChartAngle(BaseModel):
    """An angular point (ASC, MC)."""

    name: str
    sign: Sign
    degree: float
    longitude: float


class AspectRecord(BaseModel):
    """An aspect between two placements."""

    body1: Planet
    body2: Planet
    type: AspectType
    angle: float
    actual_angle: float
    orb: float
    orb_tolerance: float
    quality: AspectQuality
    illumination: Illumination
    symbol: str = ""
    meaning: str = ""


class TransitAspectRecord(BaseModel):
    """An aspect from a transiting planet to a natal planet."""

    transit_planet: Planet
    natal_planet: Planet
    type: AspectType
    orb: float
    quality: AspectQuality
    intensity: Intensity
    meaning: str = ""


class ChartSnapshot(BaseModel):
    """Everything computed for one instant and observer location."""

    instant: datetime
    julian_day: float
    latitude: float
    longitude: float
    local_sidereal_time: float
    ascendant: ChartAngle
    midheaven: ChartAngle
    house_cusps: list[float] = Field(min_length=12, max_length=12)
    placements: list[PlanetPlacement]
    aspects: list[AspectRecord] = Field(default_factory=list)
    issues: list[CalculationIssue] = Field(default_factory=list)

    def placement_for(self, body: Planet) -> PlanetPlacement | None:
        for placement in self.placements:
            if placement.body == body:
                return placement
        return None


class CalculationMetadata(BaseModel):
    birth_datetime_local: str
    birth_datetime_utc: str
    timezone: str
    time_known: bool = False
    julian_day_ut: float
    ephemeris_engine: str = "swisseph"
    house_system: str = "quadrant_trisection"
    unavailable_bodies: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class NatalChart(BaseModel):
    """A chart calculated from a ChartRequest."""

    request: ChartRequest
    chart: ChartSnapshot
    calculation_metadata: CalculationMetadata


class TransitReport(BaseModel):
    """Current sky measured against a natal chart."""

    natal: NatalChart
    transit: ChartSnapshot
    aspects: list[TransitAspectRecord] = Field(default_factory=list)
    active_houses: list[int] = Field(default_factory=list)


class AspectPattern(BaseModel):
    """A multi-planet configuration such as a grand trine or T-square."""

    type: Literal["stellium", "grand_trine", "t_square", "grand_cross"]
    planets: list[Planet]
    description: str
    guidance: str
    apex: Planet | None = None
