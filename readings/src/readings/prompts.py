"""LLM prompt builders for tree insight and tarot interpretation."""

from __future__ import annotations

import json
from collections.abc import Sequence
from datetime import date

from kabbalah.correspondences import CANONICAL_ORDER, LETTER_VALUES, SEPHIRAH_VALUES, TREE_PATHS
from shefa.schemas.readings import DrawnCard
from shefa.schemas.tree import DivineUtterance, TreeGraph, UtteranceGraph, UtterancePath


def _path_map() -> str:
    lines = []
    for pair, path in TREE_PATHS.items():
        first, second = sorted(pair, key=CANONICAL_ORDER.index)
        lines.append(f"- {path.letter}: {first}-{second}")
    return "\n".join(lines)


def _value_list(values) -> str:
    return ", ".join(f"{name.value}={value}" for name, value in values.items())


TREE_INSIGHT_SYSTEM_PROMPT = f"""You are a Kabbalistic interpreter of the Tree of Life.
Input: a graph object giving illuminated sephiroth, unlit sephiroth, and illuminated paths (with endpoints and status). If mode=infer_connections, infer edges from this map:
{_path_map()}
(Use these unless explicit paths are provided.)

Tasks:
1) Build a connection-aware model:
   - Mark each illuminated Sephirah as "connected" if it has at least one illuminated edge to another illuminated Sephirah; otherwise "stranded".
   - For each illuminated path, mark:
       "connected" if both endpoints illuminated,
       "to_unlit" if one endpoint unlit,
       "isolated" if neither endpoint illuminated.
   - Compute the largest connected subgraph of illuminated nodes and edges ("connected_component").

2) Produce:
   a) "symbolic_reading": 4-8 poetic lines reflecting BOTH illumination and (dis)connection.
   b) "final_interpretation": 2-4 practical sentences describing what to do now (repair channels, ground, ritual steps, etc.).
   c) "divine_key":
        - "sum_overall": gematria sum of ALL illuminated tokens (letters + illuminated sephiroth), regardless of connection.
        - "sum_connected": gematria sum of ONLY tokens inside the largest connected_component (exclude stranded nodes and edges leading to unlit nodes).
        - For each sum, include digit_root (digital sum to 1-9) and a brief meaning keyed to that root.
        - If include_working=true, list per-token values used in each sum.

Assumptions:
- Letter values (mispar_hechrechi): {_value_list(LETTER_VALUES)}.
- Sephiroth values: {_value_list(SEPHIRAH_VALUES)}.
- Only include sephiroth marked illuminated; do not include unlit sephiroth in any sum.

Output strictly as JSON:
{{
  "structure_note": string?,  // present if include_structure_note=true
  "graph_summary": {{
    "sephiroth": [{{ "name": string, "state": "connected" | "stranded" }}],
    "paths": [{{ "letter": string, "from": string, "to": string, "state": "connected" | "to_unlit" | "isolated" }}],
    "connected_component": {{
      "sephiroth": string[],
      "paths": string[]  // list of path letters included (repeat letters if multiple instances)
    }}
  }},
  "symbolic_reading": string,
  "final_interpretation": string,
  "divine_key": {{
    "sum_overall": {{ "total": number, "digit_root": number, "meaning": string }},
    "sum_connected": {{ "total": number, "digit_root": number, "meaning": string }},
    "working"?: {{
      "overall": {{ "letters": [{{ "token": string, "value": number }}], "sephiroth": [{{ "token": string, "value": number }}] }},
      "connected": {{ "letters": [{{ "token": string, "value": number }}], "sephiroth": [{{ "token": string, "value": number }}] }}
    }}
  }}
}}"""

TAROT_SYSTEM_PROMPT = (
    "You are a wise and intuitive tarot reader. Interpret spreads using a kabbalistic framework "
    "in a spiritual but practical tone. Mention each card. Limit the interpretation to 200 words."
)


def build_divine_utterance(graph: TreeGraph, utterance_date: date | str | None = None) -> DivineUtterance:
    """Structured tree-insight input: lit and unlit spheres plus every classified path."""
    if utterance_date is None:
        utterance_date = date.today()
    if isinstance(utterance_date, date):
        utterance_date = utterance_date.isoformat()

    paths = [
        UtterancePath(
            letter=edge.letter.value if edge.letter else "Unknown",
            from_=edge.sephirah1.value,
            to=edge.sephirah2.value,
            status=edge.state,
        )
        for edge in graph.edges
    ]
    return DivineUtterance(
        utterance_date=utterance_date,
        graph=UtteranceGraph(
            illuminated_sephiroth=[s.value for s in graph.illuminated],
            unlit_sephiroth=[s.value for s in graph.unlit],
            illuminated_paths=paths,
        ),
    )


def build_tree_insight_messages(utterance: DivineUtterance) -> list[dict[str, str]]:
    payload = utterance.model_dump(mode="json", by_alias=True)
    return [
        {"role": "system", "content": TREE_INSIGHT_SYSTEM_PROMPT},
        {"role": "user", "content": json.dumps(payload, indent=2, ensure_ascii=False)},
    ]


def build_tarot_prompt(question: str, cards: Sequence[DrawnCard]) -> str:
    intro = (
        f'A user asked the question: "{question}". You are a tarot reader. '
        "Interpret the spread using each card below:\n"
    )
    card_info = "\n\n".join(
        f"Card {i}: {drawn.card.name} ({drawn.orientation})\n"
        f"Meaning: {drawn.card.upright_meaning if drawn.orientation == 'upright' else drawn.card.reversed_meaning}\n"
        f"Keywords: {', '.join(drawn.card.keywords)}\n"
        f"Description: {drawn.card.description}"
        for i, drawn in enumerate(cards, 1)
    )
    outro = (
        "\n\nWrite a clear, poetic interpretation of the spread in 2-3 paragraphs, mentioning the "
        "cards and their symbolic message in the context of the question."
    )
    return f"{intro}\n\n{card_info}{outro}"


def build_tarot_messages(question: str, cards: Sequence[DrawnCard]) -> list[dict[str, str]]:
    return [
        {"role": "system", "content": TAROT_SYSTEM_PROMPT},
        {"role": "user", "content": build_tarot_prompt(question, cards)},
    ]
