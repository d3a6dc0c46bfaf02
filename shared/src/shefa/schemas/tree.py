"""Pydantic schemas for the Tree of Life graph and the tree-insight exchange."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from shefa.enums import (
    AspectQuality,
    AspectType,
    EdgeState,
    HebrewLetter,
    Illumination,
    NodeState,
    Planet,
    Sephirah,
)


class TreeEdge(BaseModel):
    """A candidate path between two sephiroth."""

    sephirah1: Sephirah
    sephirah2: Sephirah
    letter: HebrewLetter | None = None
    source: Literal["aspect", "zodiac"] = "aspect"
    label: str = ""


class ClassifiedEdge(TreeEdge):
    state: EdgeState


class NodeStatus(BaseModel):
    name: Sephirah
    state: NodeState


class GraphComponent(BaseModel):
    """A connected subgraph of illuminated sephiroth and connected paths."""

    sephiroth: list[Sephirah] = Field(default_factory=list)
    edges: list[ClassifiedEdge] = Field(default_factory=list)


class TreeGraph(BaseModel):
    """Illumination state of every node and path, plus the largest component."""

    illuminated: list[Sephirah]
    unlit: list[Sephirah]
    nodes: list[NodeStatus]
    edges: list[ClassifiedEdge]
    component: GraphComponent


class TokenValue(BaseModel):
    token: str
    value: int
    known: bool = True


class GematriaSum(BaseModel):
    total: int
    breakdown: list[TokenValue] = Field(default_factory=list)


class KeySum(BaseModel):
    total: int
    digit_root: int
    meaning: str
    letters: list[TokenValue] = Field(default_factory=list)
    sephiroth: list[TokenValue] = Field(default_factory=list)


class DivineKey(BaseModel):
    sum_overall: KeySum
    sum_connected: KeySum


class PathActivation(BaseModel):
    """A Tree path lit by a natal aspect between the planets of its two spheres."""

    sephirah1: Sephirah
    sephirah2: Sephirah
    planets: tuple[Planet, Planet]
    aspect_type: AspectType
    quality: AspectQuality
    illumination: Illumination
    orb: float
    hebrew_letter: HebrewLetter
    tarot_card: str
    meaning: str


# LLM exchange ---------------------------------------------------------------


class UtterancePath(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    letter: str
    from_: str = Field(alias="from")
    to: str
    status: EdgeState


class UtteranceGraph(BaseModel):
    illuminated_sephiroth: list[str]
    unlit_sephiroth: list[str]
    illuminated_paths: list[UtterancePath]


class UtteranceOptions(BaseModel):
    mode: Literal["explicit", "infer_connections"] = "explicit"
    gematria_method: Literal["mispar_hechrechi"] = "mispar_hechrechi"
    include_working: bool = True
    include_structure_note: bool = True


class DivineUtterance(BaseModel):
    """Structured input sent to the tree-insight LLM."""

    utterance_date: str
    graph: UtteranceGraph
    options: UtteranceOptions = Field(default_factory=UtteranceOptions)


class InsightSephirah(BaseModel):
    name: str
    state: NodeState


class InsightPath(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    letter: str
    from_: str = Field(alias="from")
    to: str
    state: EdgeState


class InsightComponent(BaseModel):
    sephiroth: list[str] = Field(default_factory=list)
    paths: list[str] = Field(default_factory=list)


class GraphSummary(BaseModel):
    sephiroth: list[InsightSephirah] = Field(default_factory=list)
    paths: list[InsightPath] = Field(default_factory=list)
    connected_component: InsightComponent = Field(default_factory=InsightComponent)


class InsightSum(BaseModel):
    total: int
    digit_root: int
    meaning: str = ""


class InsightKey(BaseModel):
    sum_overall: InsightSum
    sum_connected: InsightSum
    working: dict | None = None


class TreeInsightResponse(BaseModel):
    """JSON the tree-insight LLM must return."""

    structure_note: str | None = None
    graph_summary: GraphSummary
    symbolic_reading: str
    final_interpretation: str
    divine_key: InsightKey
