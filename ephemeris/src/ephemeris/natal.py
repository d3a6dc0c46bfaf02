"""Natal chart calculator - birth chart positions, houses, and aspects."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from shefa.config import Settings, get_settings
from shefa.errors import CalculationIssue, ErrorKind
from shefa.schemas.chart import CalculationMetadata, ChartRequest, NatalChart, TransitReport

from ephemeris.aspects import find_transit_aspects
from ephemeris.calculator import EphemerisProvider, active_natal_houses, calculate_chart
from ephemeris.timeutil import (
    infer_timezone,
    parse_civil_time,
    resolve_timezone,
    resolve_utc_instant,
    timezone_label,
)

logger = logging.getLogger(__name__)


def _timezone_for(request: ChartRequest, settings: Settings) -> tuple[str, list[str]]:
    """Timezone label to use, inferring from coordinates when the request has none."""
    if request.timezone:
        return request.timezone, []
    inferred = infer_timezone(request.latitude, request.longitude)
    if inferred:
        return inferred, [f"timezone inferred from coordinates: {inferred}"]
    return settings.default_timezone, [
        f"timezone not given and not inferable, fallback to {settings.default_timezone}"
    ]


def calculate_natal_chart(
    request: ChartRequest,
    provider: EphemerisProvider | None = None,
    settings: Settings | None = None,
) -> NatalChart:
    """Calculate a full natal chart.

    Raises:
        InvalidInputError: If the birth date or time is malformed.
    """
    settings = settings or get_settings()
    label, warnings = _timezone_for(request, settings)

    instant = resolve_utc_instant(request.birth_date, request.birth_time, label)
    tz = resolve_timezone(label).value
    time_known = parse_civil_time(request.birth_time) is not None

    chart = calculate_chart(instant.value, request.latitude, request.longitude, provider)
    chart.issues = list(instant.issues) + chart.issues

    # Houses are meaningless without a birth time
    if not time_known:
        warnings.append("birth time unknown, using noon; houses omitted")
        for placement in chart.placements:
            placement.house = None

    warnings.extend(issue.message for issue in chart.issues)
    unavailable = sorted(
        issue.subject for issue in chart.issues if issue.kind == ErrorKind.EPHEMERIS_FAILURE
    )

    metadata = CalculationMetadata(
        birth_datetime_local=instant.value.astimezone(tz).isoformat(),
        birth_datetime_utc=instant.value.isoformat(),
        timezone=timezone_label(tz),
        time_known=time_known,
        julian_day_ut=chart.julian_day,
        unavailable_bodies=unavailable,
        warnings=warnings,
    )
    return NatalChart(request=request, chart=chart, calculation_metadata=metadata)


def calculate_transits(
    natal: NatalChart,
    at: datetime | None = None,
    provider: EphemerisProvider | None = None,
) -> TransitReport:
    """Sky at ``at`` (default now) over the birth place, aspected to the natal planets."""
    transit = calculate_chart(
        at or datetime.now(UTC),
        natal.request.latitude,
        natal.request.longitude,
        provider,
    )
    aspects = find_transit_aspects(
        {p.body: p.longitude for p in transit.placements},
        {p.body: p.longitude for p in natal.chart.placements},
    )
    if not aspects:
        logger.info("No transit aspects for %s", transit.instant.isoformat())
    houses: list[int] = []
    if natal.calculation_metadata.time_known:
        houses = active_natal_houses(transit, natal.chart.house_cusps)
    else:
        transit.issues.append(
            CalculationIssue(
                kind=ErrorKind.INVALID_INPUT,
                subject="birth_time",
                message="birth time unknown, natal houses not activated",
            )
        )
    return TransitReport(natal=natal, transit=transit, aspects=aspects, active_houses=houses)
