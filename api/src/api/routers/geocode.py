"""Advisory place names for coordinates."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field
from shefa.config import Settings
from shefa.errors import CalculationIssue
from shefa.services.geocoding import reverse_geocode

from api.dependencies import get_app_settings

router = APIRouter()


class PlaceName(BaseModel):
    latitude: float
    longitude: float
    place_name: str | None = None
    issues: list[CalculationIssue] = Field(default_factory=list)


@router.get("/reverse", response_model=PlaceName)
async def reverse(
    latitude: float = Query(ge=-90.0, le=90.0),
    longitude: float = Query(ge=-180.0, le=180.0),
    settings: Settings = Depends(get_app_settings),
):
    result = await reverse_geocode(latitude, longitude, settings=settings)
    return PlaceName(
        latitude=latitude,
        longitude=longitude,
        place_name=result.value,
        issues=result.issues,
    )
