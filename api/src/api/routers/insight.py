"""Tree-of-Life insight from lit spheres and paths."""

from __future__ import annotations

from datetime import date

from ephemeris.aspects import find_aspects
from fastapi import APIRouter, Depends
from kabbalah.tree import analyze_tree, aspect_edges
from pydantic import BaseModel, Field
from readings.interpretation import interpret_tree
from shefa.schemas.chart import PlanetPlacement
from shefa.schemas.readings import TreeInsight
from shefa.schemas.tree import TreeEdge
from shefa.services.llm_client import LLMClient

from api.dependencies import get_llm_client

router = APIRouter()


class TreeInsightRequest(BaseModel):
    placements: list[PlanetPlacement] = Field(min_length=1)
    edges: list[TreeEdge] | None = Field(
        default=None,
        description="Candidate paths; derived from the placements' aspects when omitted",
    )
    utterance_date: date | None = None


@router.post("/tree-insight", response_model=TreeInsight)
async def tree_insight(
    body: TreeInsightRequest,
    client: LLMClient = Depends(get_llm_client),
):
    edges = body.edges
    if edges is None:
        edges = aspect_edges(find_aspects({p.body: p.longitude for p in body.placements}))
    graph = analyze_tree(body.placements, edges)
    return await interpret_tree(client, graph, utterance_date=body.utterance_date)
