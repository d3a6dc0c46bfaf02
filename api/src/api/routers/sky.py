"""Current sky with its Kabbalistic reading."""

from __future__ import annotations

from datetime import UTC, datetime

from ephemeris.calculator import EphemerisProvider, calculate_current_sky
from ephemeris.timeutil import resolve_timezone, timezone_label
from fastapi import APIRouter, Depends, Query
from kabbalah.worlds import world_activation
from pydantic import BaseModel, Field
from readings.narrative import aspect_guidance, divine_message, divine_pattern, kabbalistic_reading
from shefa.errors import CalculationIssue
from shefa.schemas.chart import ChartSnapshot
from shefa.schemas.kabbalah import KabbalisticReading, WorldActivation
from shefa.schemas.readings import AspectGuidance, DivineMessage

from api.dependencies import get_ephemeris_provider

router = APIRouter()


class SkyResponse(BaseModel):
    local_time: str
    timezone: str
    chart: ChartSnapshot
    reading: KabbalisticReading
    world_activation: WorldActivation
    aspect_guidance: AspectGuidance
    divine_message: DivineMessage | None = None
    issues: list[CalculationIssue] = Field(default_factory=list)


@router.get("/current", response_model=SkyResponse)
async def current_sky(
    latitude: float | None = Query(default=None, ge=-90.0, le=90.0),
    longitude: float | None = Query(default=None, ge=-180.0, le=180.0),
    timezone: str | None = Query(default=None),
    provider: EphemerisProvider = Depends(get_ephemeris_provider),
):
    now = datetime.now(UTC)
    chart = calculate_current_sky(latitude, longitude, now=now, provider=provider)
    tz = resolve_timezone(timezone or "UTC")

    message = divine_message(divine_pattern(chart.placements)) if chart.placements else None
    return SkyResponse(
        local_time=now.astimezone(tz.value).isoformat(),
        timezone=timezone_label(tz.value),
        chart=chart,
        reading=kabbalistic_reading(chart.placements),
        world_activation=world_activation(chart.placements),
        aspect_guidance=aspect_guidance(chart.aspects),
        divine_message=message,
        issues=chart.issues + tz.issues,
    )
