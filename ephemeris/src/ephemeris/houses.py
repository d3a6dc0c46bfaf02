"""Ascendant, midheaven and quadrant-trisection house cusps.

The angles come from Swiss Ephemeris. The ascendant is undefined at the
geographic poles, where every point of the ecliptic is on the horizon.
Latitudes beyond ``POLAR_LATITUDE_LIMIT`` are clamped to that limit and the
result carries a ``polar_latitude`` issue.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime

import swisseph as swe
from shefa.errors import CalculationIssue, ErrorKind

from ephemeris.bodies import normalize_longitude
from ephemeris.timeutil import datetime_to_jd

logger = logging.getLogger(__name__)

POLAR_LATITUDE_LIMIT = 89.9
HOUSE_COUNT = 12

# Cusp indexes of the four angles
ASC_INDEX = 0
IC_INDEX = 3
DSC_INDEX = 6
MC_INDEX = 9

_EPSILON = 1e-9


@dataclass
class AnglesResult:
    ascendant: float
    midheaven: float
    local_sidereal_time: float
    obliquity: float
    issues: list[CalculationIssue] = field(default_factory=list)


def forward_arc(start: float, end: float) -> float:
    """Degrees travelled going forward (increasing longitude) from start to end."""
    return normalize_longitude(end - start)


def local_sidereal_time(jd_ut: float, longitude: float) -> float:
    """Local apparent sidereal time in degrees; east longitude positive."""
    return normalize_longitude(swe.sidtime(jd_ut) * 15.0 + longitude)


def obliquity_of_ecliptic(jd_ut: float) -> float:
    """True obliquity of the ecliptic in degrees (mean obliquity plus nutation)."""
    nutation, _ = swe.calc_ut(jd_ut, swe.ECL_NUT)
    return nutation[0]


def ascendant_midheaven_from_jd(jd_ut: float, latitude: float, longitude: float) -> AnglesResult:
    issues: list[CalculationIssue] = []
    if abs(latitude) > POLAR_LATITUDE_LIMIT:
        clamped = math.copysign(POLAR_LATITUDE_LIMIT, latitude)
        logger.warning("Latitude %.4f is polar, clamping to %.1f", latitude, clamped)
        issues.append(
            CalculationIssue(
                kind=ErrorKind.POLAR_LATITUDE,
                subject="latitude",
                message=(
                    f"ascendant is undefined at latitude {latitude:.4f}; "
                    f"computed at {clamped:.1f} instead"
                ),
            )
        )
        latitude = clamped

    # Porphyry: the angles are the same for every quadrant system
    _, ascmc = swe.houses_ex(jd_ut, latitude, longitude, b"O")

    return AnglesResult(
        ascendant=normalize_longitude(ascmc[0]),
        midheaven=normalize_longitude(ascmc[1]),
        local_sidereal_time=normalize_longitude(ascmc[2]),
        obliquity=obliquity_of_ecliptic(jd_ut),
        issues=issues,
    )


def compute_ascendant_midheaven(instant: datetime, latitude: float, longitude: float) -> AnglesResult:
    """Ascendant, midheaven and local sidereal time for an instant and place."""
    return ascendant_midheaven_from_jd(datetime_to_jd(instant), latitude, longitude)


def quadrants_degenerate(ascendant: float, midheaven: float) -> bool:
    """True when ASC coincides with MC or IC, leaving an empty quadrant."""
    arc = forward_arc(midheaven, ascendant)
    return arc < _EPSILON or abs(arc - 180.0) < _EPSILON or arc > 360.0 - _EPSILON


def equal_house_cusps(ascendant: float) -> list[float]:
    return [normalize_longitude(ascendant + 30.0 * i) for i in range(HOUSE_COUNT)]


def compute_house_cusps(ascendant: float, midheaven: float, latitude: float | None = None) -> list[float]:
    """Twelve cusps by trisecting the four quadrants between the angles.

    cusp[0] is the ascendant, cusp[3] the IC, cusp[6] the descendant and
    cusp[9] the midheaven. Degenerate angles fall back to equal houses from
    the ascendant.
    """
    ascendant = normalize_longitude(ascendant)
    midheaven = normalize_longitude(midheaven)
    if quadrants_degenerate(ascendant, midheaven):
        logger.warning(
            "Degenerate angles asc=%.4f mc=%.4f lat=%s, using equal houses",
            ascendant,
            midheaven,
            latitude,
        )
        return equal_house_cusps(ascendant)

    cusps = [0.0] * HOUSE_COUNT
    cusps[ASC_INDEX] = ascendant
    cusps[IC_INDEX] = normalize_longitude(midheaven + 180.0)
    cusps[DSC_INDEX] = normalize_longitude(ascendant + 180.0)
    cusps[MC_INDEX] = midheaven

    for start in (ASC_INDEX, IC_INDEX, DSC_INDEX, MC_INDEX):
        end = (start + 3) % HOUSE_COUNT
        arc = forward_arc(cusps[start], cusps[end])
        cusps[start + 1] = normalize_longitude(cusps[start] + arc / 3.0)
        cusps[start + 2] = normalize_longitude(cusps[start] + 2.0 * arc / 3.0)

    if not validate_cusps(cusps):
        logger.warning("Trisected cusps not monotonic for asc=%.4f mc=%.4f, using equal houses", ascendant, midheaven)
        return equal_house_cusps(ascendant)
    return cusps


def validate_cusps(cusps: list[float]) -> bool:
    """Check 12 distinct cusps that wrap forward exactly once around the circle."""
    if len(cusps) != HOUSE_COUNT:
        return False
    arcs = [forward_arc(cusps[i], cusps[(i + 1) % HOUSE_COUNT]) for i in range(HOUSE_COUNT)]
    if any(arc < _EPSILON for arc in arcs):
        return False
    return abs(sum(arcs) - 360.0) < 1e-6


def house_of(longitude: float, cusps: list[float]) -> int:
    """House number 1..12 containing a longitude.

    House i covers [cusp[i], cusp[i+1]) going forward; the twelfth house
    wraps past 360 back to cusp[0]. Measuring every cusp as an offset from
    cusp[0] makes the houses a partition of the circle.
    """
    if len(cusps) != HOUSE_COUNT:
        raise ValueError(f"expected {HOUSE_COUNT} cusps, got {len(cusps)}")
    origin = cusps[0]
    target = forward_arc(origin, longitude)
    house = 1
    for i in range(1, HOUSE_COUNT):
        if forward_arc(origin, cusps[i]) <= target:
            house = i + 1
        else:
            break
    return house
