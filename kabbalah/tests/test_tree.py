"""Tests for the Tree of Life graph analysis."""

from ephemeris.aspects import find_aspects
from kabbalah.tree import (
    analyze_tree,
    aspect_edges,
    classify_edges,
    classify_nodes,
    illuminated_nodes,
    largest_connected_component,
    zodiac_edges,
)
from shefa.enums import EdgeState, HebrewLetter, NodeState, Planet, Sephirah
from shefa.schemas.tree import TreeEdge


def _edge(a: Sephirah, b: Sephirah) -> TreeEdge:
    return TreeEdge(sephirah1=a, sephirah2=b)


def test_two_lit_spheres_form_one_component():
    illuminated = frozenset({Sephirah.TIPHERETH, Sephirah.NETZACH})
    edges = classify_edges([_edge(Sephirah.TIPHERETH, Sephirah.NETZACH)], illuminated)
    assert edges[0].state == EdgeState.CONNECTED

    component = largest_connected_component(illuminated, edges)
    assert component.sephiroth == [Sephirah.TIPHERETH, Sephirah.NETZACH]
    assert len(component.edges) == 1


def test_edge_states():
    illuminated = frozenset({Sephirah.TIPHERETH})
    edges = classify_edges(
        [
            _edge(Sephirah.TIPHERETH, Sephirah.YESOD),
            _edge(Sephirah.YESOD, Sephirah.MALKUTH),
        ],
        illuminated,
    )
    assert [e.state for e in edges] == [EdgeState.TO_UNLIT, EdgeState.ISOLATED]


def test_nodes_without_connected_edges_are_stranded():
    illuminated = frozenset({Sephirah.TIPHERETH, Sephirah.NETZACH, Sephirah.HOD})
    edges = classify_edges(
        [
            _edge(Sephirah.TIPHERETH, Sephirah.NETZACH),
            _edge(Sephirah.HOD, Sephirah.YESOD),
        ],
        illuminated,
    )
    nodes = classify_nodes(illuminated, edges)
    assert list(nodes) == [Sephirah.TIPHERETH, Sephirah.NETZACH, Sephirah.HOD]
    assert nodes[Sephirah.HOD] == NodeState.STRANDED
    assert nodes[Sephirah.TIPHERETH] == NodeState.CONNECTED


def test_largest_component_wins_over_earlier_smaller_one():
    illuminated = frozenset(
        {Sephirah.CHOKMAH, Sephirah.BINAH, Sephirah.TIPHERETH, Sephirah.NETZACH, Sephirah.HOD}
    )
    edges = classify_edges(
        [
            _edge(Sephirah.CHOKMAH, Sephirah.BINAH),
            _edge(Sephirah.TIPHERETH, Sephirah.NETZACH),
            _edge(Sephirah.TIPHERETH, Sephirah.HOD),
        ],
        illuminated,
    )
    component = largest_connected_component(illuminated, edges)
    assert component.sephiroth == [Sephirah.TIPHERETH, Sephirah.NETZACH, Sephirah.HOD]
    assert len(component.edges) == 2


def test_equal_components_tie_to_first_in_tree_order():
    illuminated = frozenset(
        {Sephirah.CHOKMAH, Sephirah.BINAH, Sephirah.TIPHERETH, Sephirah.NETZACH, Sephirah.HOD}
    )
    edges = classify_edges(
        [
            _edge(Sephirah.TIPHERETH, Sephirah.NETZACH),
            _edge(Sephirah.CHOKMAH, Sephirah.BINAH),
        ],
        illuminated,
    )
    component = largest_connected_component(illuminated, edges)
    assert component.sephiroth == [Sephirah.CHOKMAH, Sephirah.BINAH]


def test_lone_sphere_is_a_component_of_one():
    component = largest_connected_component(frozenset({Sephirah.YESOD}), [])
    assert component.sephiroth == [Sephirah.YESOD]
    assert component.edges == []


def test_nothing_lit_gives_empty_component():
    component = largest_connected_component(frozenset(), [])
    assert component.sephiroth == []
    assert component.edges == []


def test_aspect_edges_skip_pairs_without_a_path():
    aspects = find_aspects({Planet.SUN: 0.0, Planet.VENUS: 120.0, Planet.MARS: 90.0, Planet.NEPTUNE: 180.0})
    edges = aspect_edges(aspects)
    by_pair = {frozenset((e.sephirah1, e.sephirah2)): e for e in edges}

    samech = by_pair[frozenset((Sephirah.TIPHERETH, Sephirah.NETZACH))]
    assert samech.letter == HebrewLetter.SAMECH
    assert samech.label == "Sun trine Venus"
    # Mars-Neptune: Geburah and Kether share no path
    assert frozenset((Sephirah.GEBURAH, Sephirah.KETHER)) not in by_pair


def test_zodiac_edges_once_per_occupied_sign(make_placement):
    placements = [make_placement(Planet.SUN, 5.0), make_placement(Planet.MOON, 25.0)]
    edges = zodiac_edges(placements)
    assert len(edges) == 1
    assert edges[0].letter == HebrewLetter.HE
    assert (edges[0].sephirah1, edges[0].sephirah2) == (Sephirah.CHOKMAH, Sephirah.TIPHERETH)
    assert edges[0].source == "zodiac"


def test_component_is_inside_the_lit_set(sample_placements):
    aspects = find_aspects({p.body: p.longitude for p in sample_placements})
    graph = analyze_tree(sample_placements, aspect_edges(aspects) + zodiac_edges(sample_placements))

    illuminated = set(graph.illuminated)
    members = set(graph.component.sephiroth)
    assert members <= illuminated
    for edge in graph.component.edges:
        assert edge.sephirah1 in members and edge.sephirah2 in members
    assert set(graph.illuminated) | set(graph.unlit) == set(Sephirah)
    assert graph.unlit == [Sephirah.MALKUTH]


def test_illuminated_nodes(make_placement):
    lit = illuminated_nodes([make_placement(Planet.SUN, 0.0), make_placement(Planet.PLUTO, 10.0)])
    assert lit == frozenset({Sephirah.TIPHERETH, Sephirah.DAATH})
