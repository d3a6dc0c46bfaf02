"""Tests for Four Worlds scoring and pillar balance."""

import pytest
from kabbalah.worlds import (
    aggregate_world_percentages,
    dominant_world,
    natal_signature,
    pillar_balance,
    secondary_world,
    world_activation,
    world_score_for,
)
from shefa.enums import Pillar, Planet, Sephirah, World


def test_score_weights_planet_element_and_house(make_placement):
    """Saturn in Aquarius, 8th house: Briah 3 + 1, Yetzirah 2."""
    score = world_score_for(make_placement(Planet.SATURN, 322.0, house=8))
    assert score.contributions == {
        World.ATZILUTH: 0,
        World.BRIAH: 4,
        World.YETZIRAH: 2,
        World.ASSIAH: 0,
    }
    assert score.primary == World.BRIAH
    assert score.ranking[:2] == [World.BRIAH, World.YETZIRAH]


def test_ties_go_to_the_higher_world(make_placement):
    """Sun in Aries, 10th house: Yetzirah 3 against Atziluth 2 + 1."""
    score = world_score_for(make_placement(Planet.SUN, 15.0, house=10))
    assert score.contributions[World.ATZILUTH] == score.contributions[World.YETZIRAH] == 3
    assert score.primary == World.ATZILUTH


def test_unknown_house_scores_no_house_point(make_placement):
    score = world_score_for(make_placement(Planet.MOON, 135.0))
    assert sum(score.contributions.values()) == 5


def test_aggregate_percentages(make_placement):
    placements = [make_placement(Planet.SUN, 15.0, house=10), make_placement(Planet.MOON, 135.0, house=2)]
    percentages = aggregate_world_percentages(placements)
    assert percentages == {
        World.ATZILUTH: 50.0,
        World.BRIAH: 0.0,
        World.YETZIRAH: 50.0,
        World.ASSIAH: 0.0,
    }
    assert sum(percentages.values()) == pytest.approx(100.0)
    assert dominant_world(percentages) == World.ATZILUTH
    assert secondary_world(percentages) == World.YETZIRAH


def test_no_placements_gives_all_zero():
    percentages = aggregate_world_percentages([])
    assert percentages == dict.fromkeys(World, 0.0)
    assert dominant_world(percentages) is None
    assert secondary_world(percentages) is None

    activation = world_activation([])
    assert activation.dominant is None


def test_full_chart_percentages_sum_to_100(sample_placements):
    activation = world_activation(sample_placements)
    assert sum(activation.percentages.values()) == pytest.approx(100.0)
    assert activation.dominant is not None
    assert activation.secondary != activation.dominant


def test_pillar_balance(sample_placements):
    balance = pillar_balance(sample_placements)
    assert balance.counts == {Pillar.LEFT: 3, Pillar.RIGHT: 3, Pillar.MIDDLE: 4}
    assert balance.balanced


def test_pillar_balance_detects_lean(make_placement):
    placements = [
        make_placement(Planet.MERCURY, 10.0),
        make_placement(Planet.MARS, 40.0),
        make_placement(Planet.SATURN, 70.0),
    ]
    balance = pillar_balance(placements)
    assert balance.counts[Pillar.LEFT] == 3
    assert not balance.balanced


def test_natal_signature(make_placement):
    placements = [make_placement(Planet.SUN, 15.0, house=10), make_placement(Planet.MOON, 135.0, house=2)]
    signature = natal_signature(placements)
    assert signature.world_scores == {
        World.ATZILUTH: 5,
        World.BRIAH: 0,
        World.YETZIRAH: 5,
        World.ASSIAH: 0,
    }
    assert signature.dominant_world == World.ATZILUTH
    assert signature.active_sephiroth == [Sephirah.TIPHERETH, Sephirah.YESOD]
    assert not signature.balanced


def test_empty_natal_signature():
    signature = natal_signature([])
    assert signature.dominant_world is None
    assert signature.world_percentages == dict.fromkeys(World, 0.0)
