"""Pydantic schemas for Kabbalistic mappings, world scoring and diagnostics."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from shefa.enums import (
    HebrewLetter,
    Pillar,
    Planet,
    Sephirah,
    Sign,
    World,
)


class SephiroticInfluence(BaseModel):
    """A planet's sephirah, its sign's path and its house's life domain."""

    planet: Planet
    sephirah: Sephirah
    sign: Sign
    letter: HebrewLetter
    house: int | None = None
    manifestation_area: str | None = None
    kabbalistic_meaning: str | None = None
    synthesis: str


class WorldScore(BaseModel):
    """Weighted world points for one placement."""

    primary: World
    contributions: dict[World, int]
    ranking: list[World]


class WorldActivation(BaseModel):
    percentages: dict[World, float]
    dominant: World | None = None
    secondary: World | None = None


class PillarBalance(BaseModel):
    counts: dict[Pillar, int]
    balanced: bool


class NatalSignature(BaseModel):
    """World and pillar emphasis of a natal chart."""

    active_sephiroth: list[Sephirah]
    world_scores: dict[World, int]
    world_percentages: dict[World, float]
    dominant_world: World | None = None
    secondary_world: World | None = None
    balanced: bool
    pillars: PillarBalance


class ReadingDetail(BaseModel):
    planet: Planet
    sephirah: Sephirah
    sign: Sign
    house: int | None = None
    world: World


class KabbalisticReading(BaseModel):
    """Planet-by-planet reading of the Tree for one chart."""

    active_sephiroth: list[Sephirah]
    influences: list[str] = Field(default_factory=list)
    primary_influences: list[str] = Field(default_factory=list)
    tree_activation: str
    details: list[ReadingDetail] = Field(default_factory=list)


class ZodiacPathActivation(BaseModel):
    """A path lit by a planet standing in the path's sign."""

    sign: Sign
    letter: HebrewLetter
    glyph: str = ""
    path_number: int
    connects: tuple[Sephirah, Sephirah]
    meaning: str
    planets: list[Planet] = Field(default_factory=list)


class PathActivationSummary(BaseModel):
    total: int = 0
    fully_illuminated: int = 0
    partially_illuminated: int = 0
    shadow_paths: int = 0
    harmonious: int = 0
    challenging: int = 0
    neutral: int = 0


class RetrogradeTheme(BaseModel):
    planet: Planet
    sephirah: Sephirah
    sign: Sign
    house: int | None = None
    theme: str
    guidance: str


class SephirahState(BaseModel):
    """Balance of harmonious against challenging aspects touching a sephirah."""

    sephirah: Sephirah
    state: Literal["illuminated", "shadow", "neutral"]
    harmonious: int = 0
    challenging: int = 0
    description: str


class StrandedSephirah(BaseModel):
    name: Sephirah
    planet: Planet | None = None
    spiritual_diagnosis: str
    integration_guidance: str


class UngroundedPathway(BaseModel):
    from_sephirah: Sephirah
    to_sephirah: Sephirah
    inactive_sephirah: Sephirah
    sign: Sign
    letter: HebrewLetter
    path_meaning: str
    blockage: Literal["destination_inactive", "source_inactive"]
    spiritual_diagnosis: str
    manifestation_guidance: str


class PathwayDiagnostics(BaseModel):
    """Isolated spheres and paths that lead into unlit spheres."""

    stranded_sephiroth: list[StrandedSephirah] = Field(default_factory=list)
    ungrounded_pathways: list[UngroundedPathway] = Field(default_factory=list)
    has_isolated_energy: bool = False
    has_blocked_manifestation: bool = False
    overall_pattern: str
    spiritual_work: str
