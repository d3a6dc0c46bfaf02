"""Planetary positions and chart snapshots for an instant and observer."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Protocol

import swisseph as swe
from shefa.config import get_settings
from shefa.enums import Planet
from shefa.errors import CalculationIssue, ErrorKind, Result
from shefa.schemas.chart import CelestialPosition, ChartAngle, ChartSnapshot, PlanetPlacement

from ephemeris.aspects import find_aspects
from ephemeris.bodies import ALL_BODIES, BODY_IDS, to_zodiac
from ephemeris.houses import (
    ascendant_midheaven_from_jd,
    compute_house_cusps,
    house_of,
    quadrants_degenerate,
)
from ephemeris.timeutil import datetime_to_jd

logger = logging.getLogger(__name__)

_ephe_path = get_settings().swisseph_ephe_path.strip()
swe.set_ephe_path(_ephe_path if _ephe_path else None)


class EphemerisProvider(Protocol):
    """Geocentric ecliptic position of one body at a Julian Day (UT)."""

    def __call__(self, body: Planet, jd_ut: float) -> CelestialPosition: ...


def swisseph_provider(body: Planet, jd_ut: float) -> CelestialPosition:
    """Swiss Ephemeris files first, then the built-in Moshier theory."""
    body_id = BODY_IDS[body]
    try:
        result, _ = swe.calc_ut(jd_ut, body_id, swe.FLG_SWIEPH | swe.FLG_SPEED)
    except swe.Error:
        # Fallback to Moshier (no external files needed)
        result, _ = swe.calc_ut(jd_ut, body_id, swe.FLG_MOSEPH | swe.FLG_SPEED)

    longitude, latitude, distance, speed = result[0], result[1], result[2], result[3]
    return CelestialPosition(
        body=body,
        longitude=longitude % 360.0,
        latitude=latitude,
        distance=distance,
        speed_deg_day=speed,
        retrograde=speed < 0,
    )


def calculate_positions(
    jd_ut: float,
    provider: EphemerisProvider | None = None,
    bodies: tuple[Planet, ...] = ALL_BODIES,
) -> Result[dict[Planet, CelestialPosition]]:
    """Positions for every body; a body that fails is omitted with an issue."""
    provider = provider or swisseph_provider
    result: Result[dict[Planet, CelestialPosition]] = Result(value={})
    for body in bodies:
        try:
            result.value[body] = provider(body, jd_ut)
        except Exception as exc:
            logger.error("Ephemeris failed for %s at jd=%.5f: %s", body, jd_ut, exc)
            result.add_issue(ErrorKind.EPHEMERIS_FAILURE, str(body), f"{body} unavailable: {exc}")
    return result


def _angle(name: str, longitude: float) -> ChartAngle:
    placement = to_zodiac(longitude)
    return ChartAngle(
        name=name,
        sign=placement.sign,
        degree=placement.degree_in_sign,
        longitude=placement.absolute_degree,
    )


def calculate_chart(
    instant: datetime,
    latitude: float,
    longitude: float,
    provider: EphemerisProvider | None = None,
) -> ChartSnapshot:
    """Angles, houses, placements and aspects for one instant and place.

    Pure for a given provider: identical inputs give identical snapshots.
    """
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=UTC)
    instant = instant.astimezone(UTC)
    jd = datetime_to_jd(instant)

    angles = ascendant_midheaven_from_jd(jd, latitude, longitude)
    issues = list(angles.issues)
    if quadrants_degenerate(angles.ascendant, angles.midheaven):
        logger.warning("Degenerate angles at lat=%.4f, using equal houses", latitude)
        issues.append(
            CalculationIssue(
                kind=ErrorKind.POLAR_LATITUDE,
                subject="houses",
                message="ascendant and midheaven coincide, using equal houses",
            )
        )
    cusps = compute_house_cusps(angles.ascendant, angles.midheaven, latitude)

    positions = calculate_positions(jd, provider)
    issues.extend(positions.issues)

    placements: list[PlanetPlacement] = []
    for body, position in positions.value.items():
        zodiac = to_zodiac(position.longitude)
        placements.append(
            PlanetPlacement(
                body=body,
                sign=zodiac.sign,
                degree_in_sign=zodiac.degree_in_sign,
                longitude=zodiac.absolute_degree,
                speed_deg_day=position.speed_deg_day,
                retrograde=position.retrograde,
                house=house_of(zodiac.absolute_degree, cusps),
            )
        )

    aspects = find_aspects({p.body: p.longitude for p in placements})

    return ChartSnapshot(
        instant=instant,
        julian_day=jd,
        latitude=latitude,
        longitude=longitude,
        local_sidereal_time=angles.local_sidereal_time,
        ascendant=_angle("Ascendant", angles.ascendant),
        midheaven=_angle("Midheaven", angles.midheaven),
        house_cusps=cusps,
        placements=placements,
        aspects=aspects,
        issues=issues,
    )


def calculate_current_sky(
    latitude: float | None = None,
    longitude: float | None = None,
    now: datetime | None = None,
    provider: EphemerisProvider | None = None,
) -> ChartSnapshot:
    """Chart of the sky right now; missing coordinates use configured defaults."""
    settings = get_settings()
    lat = settings.default_latitude if latitude is None else latitude
    lon = settings.default_longitude if longitude is None else longitude
    return calculate_chart(now or datetime.now(UTC), lat, lon, provider)


def active_natal_houses(transit: ChartSnapshot, natal_cusps: list[float]) -> list[int]:
    """Natal houses currently occupied by transiting planets."""
    return sorted({house_of(p.longitude, natal_cusps) for p in transit.placements})
