"""LLM-backed interpretations that fall back to a fixed message on failure."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date

from kabbalah.gematria import divine_key
from kabbalah.tree import analyze_tree, aspect_edges
from shefa.errors import CalculationIssue, ErrorKind, LLMResponseError
from shefa.schemas.chart import ChartSnapshot
from shefa.schemas.readings import DrawnCard, TarotInterpretation, TreeInsight
from shefa.schemas.tree import TreeGraph, TreeInsightResponse
from shefa.services.llm_client import LLMClient, generate_with_validation

from readings.prompts import build_divine_utterance, build_tarot_messages, build_tree_insight_messages

logger = logging.getLogger(__name__)

FALLBACK_INTERPRETATION = "Unable to generate interpretation at this time."


def tree_for_chart(chart: ChartSnapshot) -> TreeGraph:
    """Tree graph lit by a chart's planets and joined by its aspect paths."""
    return analyze_tree(chart.placements, aspect_edges(chart.aspects))


async def interpret_tree(
    client: LLMClient,
    source: TreeGraph | ChartSnapshot,
    *,
    utterance_date: date | str | None = None,
) -> TreeInsight:
    """Ask the LLM to read the tree; the local analysis is returned regardless.

    The divine key in the result is always the locally computed one. The
    model's own arithmetic only appears inside ``full_response``.
    """
    graph = tree_for_chart(source) if isinstance(source, ChartSnapshot) else source
    key = divine_key(graph)
    utterance = build_divine_utterance(graph, utterance_date)

    insight = TreeInsight(
        graph=graph,
        divine_key=key,
        divine_utterance=utterance,
        final_interpretation=FALLBACK_INTERPRETATION,
    )

    try:
        data = await generate_with_validation(
            client,
            build_tree_insight_messages(utterance),
            TreeInsightResponse.model_validate,
            response_format={"type": "json_object"},
        )
    except LLMResponseError as exc:
        logger.error("Tree insight generation failed: %s", exc)
        insight.issues.append(_llm_issue("tree_insight", exc))
        return insight

    response = TreeInsightResponse.model_validate(data)
    insight.full_response = response
    insight.final_interpretation = response.final_interpretation.strip() or FALLBACK_INTERPRETATION
    return insight


async def interpret_tarot(
    client: LLMClient,
    question: str,
    cards: Sequence[DrawnCard],
) -> TarotInterpretation:
    """Interpret a drawn spread in the context of the querent's question."""
    try:
        text = await client.generate(build_tarot_messages(question, cards))
    except LLMResponseError as exc:
        logger.error("Tarot interpretation failed: %s", exc)
        return TarotInterpretation(
            interpretation=FALLBACK_INTERPRETATION,
            issues=[_llm_issue("tarot", exc)],
        )
    return TarotInterpretation(interpretation=text.strip())


def _llm_issue(subject: str, exc: Exception) -> CalculationIssue:
    return CalculationIssue(kind=ErrorKind.LLM_FAILURE, subject=subject, message=str(exc))
