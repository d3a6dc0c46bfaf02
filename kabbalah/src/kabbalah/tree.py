"""Tree of Life graph: illumination, edge and node states, largest component."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable, Sequence

from shefa.enums import EdgeState, NodeState, Sephirah
from shefa.schemas.chart import AspectRecord, PlanetPlacement
from shefa.schemas.tree import ClassifiedEdge, GraphComponent, NodeStatus, TreeEdge, TreeGraph

from kabbalah.correspondences import CANONICAL_ORDER, PLANET_SEPHIRAH, ZODIAC_PATHS, tree_path_between

logger = logging.getLogger(__name__)

_POSITION = {sephirah: i for i, sephirah in enumerate(CANONICAL_ORDER)}


def _canonical(nodes: Iterable[Sephirah]) -> list[Sephirah]:
    return sorted(set(nodes), key=_POSITION.__getitem__)


def illuminated_nodes(placements: Iterable[PlanetPlacement]) -> frozenset[Sephirah]:
    """Sephiroth occupied by at least one planet."""
    return frozenset(PLANET_SEPHIRAH[p.body] for p in placements)


def aspect_edges(aspects: Iterable[AspectRecord]) -> list[TreeEdge]:
    """Paths lit by aspects whose planets' spheres share a traditional path."""
    edges = []
    for aspect in aspects:
        first, second = PLANET_SEPHIRAH[aspect.body1], PLANET_SEPHIRAH[aspect.body2]
        path = tree_path_between(first, second)
        if path is None:
            continue
        edges.append(
            TreeEdge(
                sephirah1=first,
                sephirah2=second,
                letter=path.letter,
                source="aspect",
                label=f"{aspect.body1} {aspect.type} {aspect.body2}",
            )
        )
    return edges


def zodiac_edges(placements: Iterable[PlanetPlacement]) -> list[TreeEdge]:
    """One path per occupied sign, in zodiac order."""
    occupied = {p.sign for p in placements}
    edges = []
    for sign, path in ZODIAC_PATHS.items():
        if sign not in occupied:
            continue
        upper, lower = path.connects
        edges.append(
            TreeEdge(sephirah1=upper, sephirah2=lower, letter=path.letter, source="zodiac", label=str(sign))
        )
    return edges


def edge_state(edge: TreeEdge, illuminated: frozenset[Sephirah]) -> EdgeState:
    lit = (edge.sephirah1 in illuminated) + (edge.sephirah2 in illuminated)
    if lit == 2:
        return EdgeState.CONNECTED
    if lit == 1:
        return EdgeState.TO_UNLIT
    return EdgeState.ISOLATED


def classify_edges(edges: Iterable[TreeEdge], illuminated: frozenset[Sephirah]) -> list[ClassifiedEdge]:
    return [
        ClassifiedEdge(**edge.model_dump(), state=edge_state(edge, illuminated))
        for edge in edges
    ]


def classify_nodes(
    illuminated: frozenset[Sephirah],
    edges: Sequence[ClassifiedEdge],
) -> dict[Sephirah, NodeState]:
    """Connected if the sphere has a connected edge, otherwise stranded."""
    linked = set()
    for edge in edges:
        if edge.state == EdgeState.CONNECTED:
            linked.update((edge.sephirah1, edge.sephirah2))
    return {
        sephirah: NodeState.CONNECTED if sephirah in linked else NodeState.STRANDED
        for sephirah in _canonical(illuminated)
    }


def largest_connected_component(
    illuminated: frozenset[Sephirah],
    edges: Sequence[ClassifiedEdge],
) -> GraphComponent:
    """Largest subgraph of illuminated spheres joined by connected edges.

    Components are discovered by BFS in canonical tree order; on equal size
    the first one found wins. A lone illuminated sphere is a component of
    one. No illuminated spheres gives an empty component.
    """
    connected = [
        e for e in edges
        if e.state == EdgeState.CONNECTED and e.sephirah1 in illuminated and e.sephirah2 in illuminated
    ]
    adjacency: dict[Sephirah, set[Sephirah]] = {s: set() for s in illuminated}
    for edge in connected:
        if edge.sephirah1 == edge.sephirah2:
            continue
        adjacency[edge.sephirah1].add(edge.sephirah2)
        adjacency[edge.sephirah2].add(edge.sephirah1)

    best: list[Sephirah] = []
    seen: set[Sephirah] = set()
    for start in _canonical(illuminated):
        if start in seen:
            continue
        component = []
        queue = deque([start])
        seen.add(start)
        while queue:
            node = queue.popleft()
            component.append(node)
            for neighbour in _canonical(adjacency[node]):
                if neighbour not in seen:
                    seen.add(neighbour)
                    queue.append(neighbour)
        if len(component) > len(best):
            best = component

    members = set(best)
    return GraphComponent(
        sephiroth=_canonical(members),
        edges=[e for e in connected if e.sephirah1 in members and e.sephirah2 in members],
    )


def analyze_tree(placements: Iterable[PlanetPlacement], edges: Iterable[TreeEdge]) -> TreeGraph:
    """Full graph state for a set of placements and candidate paths."""
    illuminated = illuminated_nodes(placements)
    classified = classify_edges(edges, illuminated)
    nodes = classify_nodes(illuminated, classified)
    component = largest_connected_component(illuminated, classified)

    stranded = [s for s, state in nodes.items() if state == NodeState.STRANDED]
    if stranded:
        logger.debug("Stranded sephiroth: %s", ", ".join(stranded))

    return TreeGraph(
        illuminated=_canonical(illuminated),
        unlit=[s for s in CANONICAL_ORDER if s not in illuminated],
        nodes=[NodeStatus(name=s, state=state) for s, state in nodes.items()],
        edges=classified,
        component=component,
    )
