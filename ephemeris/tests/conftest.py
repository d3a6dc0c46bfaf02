"""Ephemeris test configuration."""

from __future__ import annotations

import pytest
from shefa.enums import Planet
from shefa.schemas.chart import CelestialPosition


class FixedProvider:
    """Ephemeris stand-in returning fixed longitudes; listed bodies raise."""

    def __init__(self, longitudes: dict[Planet, float], failing: tuple[Planet, ...] = ()) -> None:
        self.longitudes = longitudes
        self.failing = failing
        self.calls: list[tuple[Planet, float]] = []

    def __call__(self, body: Planet, jd_ut: float) -> CelestialPosition:
        self.calls.append((body, jd_ut))
        if body in self.failing or body not in self.longitudes:
            raise RuntimeError(f"missing ephemeris file for {body}")
        speed = -0.2 if body == Planet.MERCURY else 1.0
        return CelestialPosition(
            body=body,
            longitude=self.longitudes[body],
            speed_deg_day=speed,
            retrograde=speed < 0,
        )


SAMPLE_LONGITUDES: dict[Planet, float] = {
    Planet.SUN: 15.0,
    Planet.MOON: 135.0,
    Planet.MERCURY: 20.0,
    Planet.VENUS: 75.0,
    Planet.MARS: 195.0,
    Planet.JUPITER: 255.0,
    Planet.SATURN: 322.0,
    Planet.URANUS: 48.0,
    Planet.NEPTUNE: 357.0,
    Planet.PLUTO: 300.0,
}


@pytest.fixture
def sample_longitudes() -> dict[Planet, float]:
    return dict(SAMPLE_LONGITUDES)


@pytest.fixture
def make_provider():
    def _make(longitudes: dict[Planet, float] | None = None, failing: tuple[Planet, ...] = ()) -> FixedProvider:
        return FixedProvider(dict(longitudes or SAMPLE_LONGITUDES), failing)

    return _make


@pytest.fixture
def provider(make_provider) -> FixedProvider:
    return make_provider()
