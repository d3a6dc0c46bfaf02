"""Planet definitions, sign data, and zodiac coordinate conversion."""

from __future__ import annotations

import math
from types import MappingProxyType

from shefa.enums import Element, Planet, Sign
from shefa.schemas.chart import ZodiacPlacement

# Celestial body IDs for pyswisseph
# These map to swisseph constants
BODY_IDS: MappingProxyType[Planet, int] = MappingProxyType(
    {
        Planet.SUN: 0,  # SE_SUN
        Planet.MOON: 1,  # SE_MOON
        Planet.MERCURY: 2,  # SE_MERCURY
        Planet.VENUS: 3,  # SE_VENUS
        Planet.MARS: 4,  # SE_MARS
        Planet.JUPITER: 5,  # SE_JUPITER
        Planet.SATURN: 6,  # SE_SATURN
        Planet.URANUS: 7,  # SE_URANUS
        Planet.NEPTUNE: 8,  # SE_NEPTUNE
        Planet.PLUTO: 9,  # SE_PLUTO
    }
)

ALL_BODIES: tuple[Planet, ...] = tuple(Planet)

# Zodiac signs in order
SIGNS: tuple[Sign, ...] = tuple(Sign)

SIGN_ELEMENTS: MappingProxyType[Sign, Element] = MappingProxyType(
    {
        Sign.ARIES: Element.FIRE,
        Sign.TAURUS: Element.EARTH,
        Sign.GEMINI: Element.AIR,
        Sign.CANCER: Element.WATER,
        Sign.LEO: Element.FIRE,
        Sign.VIRGO: Element.EARTH,
        Sign.LIBRA: Element.AIR,
        Sign.SCORPIO: Element.WATER,
        Sign.SAGITTARIUS: Element.FIRE,
        Sign.CAPRICORN: Element.EARTH,
        Sign.AQUARIUS: Element.AIR,
        Sign.PISCES: Element.WATER,
    }
)


def normalize_longitude(longitude: float) -> float:
    """Wrap any longitude into [0, 360)."""
    value = ((longitude % 360.0) + 360.0) % 360.0
    # -1e-15 % 360 rounds to 360.0 in floating point
    return 0.0 if value >= 360.0 else value


def to_zodiac(longitude: float) -> ZodiacPlacement:
    """Convert ecliptic longitude to sign, degree-in-sign and absolute degree."""
    absolute = normalize_longitude(longitude)
    sign_index = min(max(int(math.floor(absolute / 30.0)), 0), len(SIGNS) - 1)
    return ZodiacPlacement(
        sign=SIGNS[sign_index],
        degree_in_sign=absolute - sign_index * 30.0,
        absolute_degree=absolute,
    )


def longitude_to_sign(longitude: float) -> tuple[Sign, float]:
    """Convert ecliptic longitude to sign and degree within sign."""
    placement = to_zodiac(longitude)
    return placement.sign, placement.degree_in_sign


def absolute_degree(sign: Sign | str, degree_in_sign: float) -> float:
    """Inverse of ``to_zodiac``: sign index * 30 + degree in sign."""
    return SIGNS.index(Sign(sign)) * 30.0 + float(degree_in_sign)


def sign_element(sign: Sign | str) -> Element:
    return SIGN_ELEMENTS[Sign(sign)]
