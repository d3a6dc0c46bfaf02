"""Pydantic schemas for narrative readings and LLM-backed interpretations."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from shefa.enums import Sephirah, World
from shefa.errors import CalculationIssue
from shefa.schemas.kabbalah import ReadingDetail, ZodiacPathActivation
from shefa.schemas.tree import DivineKey, DivineUtterance, TreeGraph, TreeInsightResponse


class AspectGuidance(BaseModel):
    illuminated_paths: list[str]
    shadow_paths: list[str]
    summary: str


class DivinePattern(BaseModel):
    """What the daily message is synthesised from."""

    active_sephiroth: list[Sephirah]
    active_paths: list[ZodiacPathActivation] = Field(default_factory=list)
    dominant_world: World
    world_percentages: dict[World, float]
    placements: list[ReadingDetail] = Field(default_factory=list)


class DivineMessage(BaseModel):
    """The daily Shefa message assembled from templates."""

    title: str
    opening: str
    shefa_flow: str
    pathway_guidance: str
    world_manifestation: str
    practical_wisdom: str
    closing_blessing: str


class TransitMessage(BaseModel):
    title: str
    personalized_opening: str
    key_transits: list[str] = Field(default_factory=list)
    soul_work: str


class TarotCard(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    upright_meaning: str = Field(default="", alias="uprightMeaning")
    reversed_meaning: str = Field(default="", alias="reversedMeaning")
    keywords: list[str] = Field(default_factory=list)
    description: str = ""


class DrawnCard(BaseModel):
    card: TarotCard
    orientation: Literal["upright", "reversed"] = "upright"


class TarotRequest(BaseModel):
    question: str = Field(min_length=1)
    cards: list[DrawnCard] = Field(min_length=1)


class TarotInterpretation(BaseModel):
    interpretation: str
    issues: list[CalculationIssue] = Field(default_factory=list)


class TreeInsight(BaseModel):
    """Locally computed tree analysis plus the (optional) LLM embellishment."""

    graph: TreeGraph
    divine_key: DivineKey
    divine_utterance: DivineUtterance
    final_interpretation: str
    full_response: TreeInsightResponse | None = None
    issues: list[CalculationIssue] = Field(default_factory=list)
