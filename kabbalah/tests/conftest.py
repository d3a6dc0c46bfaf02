"""Kabbalah test configuration."""

from __future__ import annotations

import pytest
from ephemeris.bodies import to_zodiac
from shefa.enums import Planet
from shefa.schemas.chart import PlanetPlacement


def placement(
    body: Planet,
    longitude: float,
    house: int | None = None,
    retrograde: bool = False,
) -> PlanetPlacement:
    zodiac = to_zodiac(longitude)
    return PlanetPlacement(
        body=body,
        sign=zodiac.sign,
        degree_in_sign=zodiac.degree_in_sign,
        longitude=zodiac.absolute_degree,
        speed_deg_day=-0.1 if retrograde else 1.0,
        retrograde=retrograde,
        house=house,
    )


@pytest.fixture
def make_placement():
    return placement


@pytest.fixture
def sample_placements() -> list[PlanetPlacement]:
    """A full chart: Sun 15 Aries in the 10th down to Pluto 0 Aquarius in the 8th."""
    return [
        placement(Planet.SUN, 15.0, house=10),
        placement(Planet.MOON, 135.0, house=2),
        placement(Planet.MERCURY, 20.0, house=10, retrograde=True),
        placement(Planet.VENUS, 75.0, house=12),
        placement(Planet.MARS, 195.0, house=4),
        placement(Planet.JUPITER, 255.0, house=6),
        placement(Planet.SATURN, 322.0, house=8),
        placement(Planet.URANUS, 48.0, house=11),
        placement(Planet.NEPTUNE, 357.0, house=9),
        placement(Planet.PLUTO, 300.0, house=8),
    ]
