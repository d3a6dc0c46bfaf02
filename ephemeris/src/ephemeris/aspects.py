"""Aspect detection and orb calculations."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType

from shefa.enums import AspectQuality, AspectType, Illumination, Intensity, Planet
from shefa.schemas.chart import AspectRecord, TransitAspectRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AspectDefinition:
    type: AspectType
    angle: float
    orb: float
    quality: AspectQuality
    symbol: str
    meaning: str
    kabbalistic_effect: str


# Iteration order is the match order
ASPECT_DEFINITIONS: tuple[AspectDefinition, ...] = (
    AspectDefinition(
        AspectType.CONJUNCTION, 0.0, 8.0, AspectQuality.NEUTRAL, "☌",
        "Fusion of energies",
        "Two planetary forces merge into one unified expression in a single Sephirah",
    ),
    AspectDefinition(
        AspectType.OPPOSITION, 180.0, 8.0, AspectQuality.CHALLENGING, "☍",
        "Polarization requiring balance",
        "Opposite Sephirot mirror each other, creating tension that demands conscious integration",
    ),
    AspectDefinition(
        AspectType.TRINE, 120.0, 8.0, AspectQuality.HARMONIOUS, "△",
        "Effortless flow of energy",
        "Divine grace flows freely between Sephirot, illuminating the path with golden light",
    ),
    AspectDefinition(
        AspectType.SQUARE, 90.0, 7.0, AspectQuality.CHALLENGING, "□",
        "Dynamic tension and growth",
        "Creative friction between Sephirot generates spiritual heat, requiring conscious work",
    ),
    AspectDefinition(
        AspectType.SEXTILE, 60.0, 6.0, AspectQuality.HARMONIOUS, "⚹",
        "Opportunity for connection",
        "Supportive bridge between Sephirot, opportunities waiting to be activated",
    ),
    AspectDefinition(
        AspectType.QUINCUNX, 150.0, 3.0, AspectQuality.CHALLENGING, "⚻",
        "Adjustment and adaptation needed",
        "Sephirot speak different languages, requiring translation and conscious bridging",
    ),
)

ASPECTS_BY_TYPE: MappingProxyType[AspectType, AspectDefinition] = MappingProxyType(
    {definition.type: definition for definition in ASPECT_DEFINITIONS}
)

TRANSIT_MEANINGS: MappingProxyType[AspectType, str] = MappingProxyType(
    {
        AspectType.CONJUNCTION: "Intensification and new beginnings",
        AspectType.OPPOSITION: "Awareness through polarity and relationship",
        AspectType.TRINE: "Natural flow and ease of expression",
        AspectType.SQUARE: "Friction that demands action",
        AspectType.SEXTILE: "Opportunity that rewards initiative",
        AspectType.QUINCUNX: "Adjustment between parts of life that do not meet",
    }
)

_INTENSITY_ORDER = {Intensity.STRONG: 0, Intensity.MODERATE: 1, Intensity.WEAK: 2}


def angular_distance(lon1: float, lon2: float) -> float:
    """Calculate the shortest angular distance between two longitudes."""
    diff = abs(lon1 - lon2) % 360.0
    if diff > 180.0:
        diff = 360.0 - diff
    return diff


def illumination_for(quality: AspectQuality, deviation: float, orb: float) -> Illumination:
    """How brightly an aspect lights its path, scaled by deviation / orb."""
    closeness = deviation / orb if orb else 0.0
    if quality == AspectQuality.HARMONIOUS:
        return Illumination.FULL if closeness < 0.5 else Illumination.PARTIAL
    if quality == AspectQuality.CHALLENGING:
        return Illumination.SHADOW
    return Illumination.FULL if closeness < 0.3 else Illumination.PARTIAL


def match_aspect(separation: float) -> tuple[AspectDefinition, float] | None:
    """First table entry whose orb contains the separation, with its deviation."""
    for definition in ASPECT_DEFINITIONS:
        deviation = abs(separation - definition.angle)
        if deviation <= definition.orb:
            return definition, deviation
    return None


def detect_aspect(
    lon1: float,
    lon2: float,
    body1: Planet = Planet.SUN,
    body2: Planet = Planet.MOON,
) -> AspectRecord | None:
    """Aspect between two longitudes, or None if no aspect is within orb."""
    separation = angular_distance(lon1, lon2)
    matched = match_aspect(separation)
    if matched is None:
        return None
    definition, deviation = matched
    return AspectRecord(
        body1=body1,
        body2=body2,
        type=definition.type,
        angle=definition.angle,
        actual_angle=round(separation, 4),
        orb=round(deviation, 4),
        orb_tolerance=definition.orb,
        quality=definition.quality,
        illumination=illumination_for(definition.quality, deviation, definition.orb),
        symbol=definition.symbol,
        meaning=definition.meaning,
    )


def find_aspects(longitudes: Mapping[Planet, float]) -> list[AspectRecord]:
    """Find all aspects between every unordered pair of bodies.

    Args:
        longitudes: Body -> ecliptic longitude, in the order pairs are formed

    Returns:
        Aspects sorted by deviation from exact, tightest first
    """
    bodies = list(longitudes)
    aspects_found: list[AspectRecord] = []
    for i, body1 in enumerate(bodies):
        for body2 in bodies[i + 1 :]:
            aspect = detect_aspect(longitudes[body1], longitudes[body2], body1, body2)
            if aspect is not None:
                aspects_found.append(aspect)

    aspects_found.sort(key=lambda a: a.orb)
    return aspects_found


def transit_intensity(deviation: float, orb: float) -> Intensity:
    closeness = deviation / orb if orb else 0.0
    if closeness < 0.3:
        return Intensity.STRONG
    if closeness < 0.6:
        return Intensity.MODERATE
    return Intensity.WEAK


def find_transit_aspects(
    transit_longitudes: Mapping[Planet, float],
    natal_longitudes: Mapping[Planet, float],
    bodies: Sequence[Planet] | None = None,
) -> list[TransitAspectRecord]:
    """Aspects from each transiting planet to each natal planet.

    Sorted strongest first, then by deviation.
    """
    aspects_found: list[TransitAspectRecord] = []
    transit_bodies = [b for b in (bodies or list(transit_longitudes)) if b in transit_longitudes]

    for transit_body in transit_bodies:
        t_lon = transit_longitudes[transit_body]
        for natal_body, n_lon in natal_longitudes.items():
            matched = match_aspect(angular_distance(t_lon, n_lon))
            if matched is None:
                continue
            definition, deviation = matched
            aspects_found.append(
                TransitAspectRecord(
                    transit_planet=transit_body,
                    natal_planet=natal_body,
                    type=definition.type,
                    orb=round(deviation, 4),
                    quality=definition.quality,
                    intensity=transit_intensity(deviation, definition.orb),
                    meaning=TRANSIT_MEANINGS[definition.type],
                )
            )

    aspects_found.sort(key=lambda a: (_INTENSITY_ORDER[a.intensity], a.orb))
    return aspects_found
