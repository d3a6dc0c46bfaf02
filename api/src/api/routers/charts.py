"""Natal charts and transits."""

from __future__ import annotations

from datetime import datetime

from ephemeris.calculator import EphemerisProvider
from ephemeris.natal import calculate_natal_chart, calculate_transits
from ephemeris.patterns import find_aspect_patterns
from fastapi import APIRouter, Depends
from kabbalah.diagnostics import diagnose_pathways
from kabbalah.paths import (
    calculate_path_activations,
    path_activation_summary,
    retrograde_themes,
    zodiac_path_activations,
)
from kabbalah.worlds import natal_signature
from pydantic import BaseModel, Field
from readings.narrative import aspect_guidance, kabbalistic_reading, transit_message
from shefa.schemas.chart import AspectPattern, ChartRequest, NatalChart, TransitReport
from shefa.schemas.kabbalah import (
    KabbalisticReading,
    NatalSignature,
    PathActivationSummary,
    PathwayDiagnostics,
    RetrogradeTheme,
    ZodiacPathActivation,
)
from shefa.schemas.readings import AspectGuidance, TransitMessage
from shefa.schemas.tree import PathActivation

from api.dependencies import get_ephemeris_provider

router = APIRouter()


class NatalResponse(BaseModel):
    natal: NatalChart
    signature: NatalSignature
    reading: KabbalisticReading
    aspect_guidance: AspectGuidance
    path_activations: list[PathActivation] = Field(default_factory=list)
    path_summary: PathActivationSummary
    patterns: list[AspectPattern] = Field(default_factory=list)
    retrograde_themes: list[RetrogradeTheme] = Field(default_factory=list)
    diagnostics: PathwayDiagnostics


class TransitRequest(BaseModel):
    natal: ChartRequest
    at: datetime | None = None


class TransitResponse(BaseModel):
    report: TransitReport
    message: TransitMessage
    zodiac_paths: list[ZodiacPathActivation] = Field(default_factory=list)


@router.post("/natal", response_model=NatalResponse)
async def natal_chart(
    request: ChartRequest,
    provider: EphemerisProvider = Depends(get_ephemeris_provider),
):
    natal = calculate_natal_chart(request, provider=provider)
    placements = natal.chart.placements
    paths = calculate_path_activations(natal.chart.aspects)
    return NatalResponse(
        natal=natal,
        signature=natal_signature(placements),
        reading=kabbalistic_reading(placements),
        aspect_guidance=aspect_guidance(natal.chart.aspects),
        path_activations=paths,
        path_summary=path_activation_summary(paths),
        patterns=find_aspect_patterns(placements, natal.chart.aspects),
        retrograde_themes=retrograde_themes(placements),
        diagnostics=diagnose_pathways(placements),
    )


@router.post("/transits", response_model=TransitResponse)
async def transits(
    body: TransitRequest,
    provider: EphemerisProvider = Depends(get_ephemeris_provider),
):
    natal = calculate_natal_chart(body.natal, provider=provider)
    report = calculate_transits(natal, at=body.at, provider=provider)
    return TransitResponse(
        report=report,
        message=transit_message(report.aspects),
        zodiac_paths=zodiac_path_activations(report.transit.placements),
    )
