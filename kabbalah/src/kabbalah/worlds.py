"""Four Worlds scoring and pillar balance.

Each placement gives points to the worlds it touches: 3 for the world of
its planet's sephirah, 2 for the world of its sign's element and 1 for the
world of its house quadrant. The placement's primary world is the argmax,
with ties going to the higher world (Atziluth, Briah, Yetzirah, Assiah).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from ephemeris.bodies import sign_element
from shefa.enums import Pillar, World
from shefa.schemas.chart import PlanetPlacement
from shefa.schemas.kabbalah import NatalSignature, PillarBalance, WorldActivation, WorldScore

from kabbalah.correspondences import (
    CANONICAL_ORDER,
    ELEMENT_WORLDS,
    PILLARS,
    PLANET_SEPHIRAH,
    WORLD_ORDER,
    house_world,
    planet_world,
)

PLANET_WEIGHT = 3
ELEMENT_WEIGHT = 2
HOUSE_WEIGHT = 1

# Max spread of world scores, as a share of the total, for a balanced chart
BALANCE_TOLERANCE = 0.15


def _rank(scores: Mapping[World, float]) -> list[World]:
    # sorted() is stable, so equal scores keep WORLD_ORDER
    return sorted(WORLD_ORDER, key=lambda world: -scores.get(world, 0))


def world_score_for(placement: PlanetPlacement) -> WorldScore:
    contributions = dict.fromkeys(WORLD_ORDER, 0)
    contributions[planet_world(placement.body)] += PLANET_WEIGHT
    contributions[ELEMENT_WORLDS[sign_element(placement.sign)]] += ELEMENT_WEIGHT
    if placement.house is not None:
        contributions[house_world(placement.house)] += HOUSE_WEIGHT

    ranking = _rank(contributions)
    return WorldScore(primary=ranking[0], contributions=contributions, ranking=ranking)


def aggregate_world_percentages(placements: Iterable[PlanetPlacement]) -> dict[World, float]:
    """Share of each world in the chart, from every placement's primary-world points.

    With no placements (or no points) every world is 0.0.
    """
    totals = dict.fromkeys(WORLD_ORDER, 0)
    for placement in placements:
        score = world_score_for(placement)
        totals[score.primary] += score.contributions[score.primary]

    grand_total = sum(totals.values())
    if grand_total == 0:
        return dict.fromkeys(WORLD_ORDER, 0.0)
    return {world: totals[world] / grand_total * 100.0 for world in WORLD_ORDER}


def dominant_world(percentages: Mapping[World, float]) -> World | None:
    if not any(percentages.values()):
        return None
    return _rank(percentages)[0]


def secondary_world(percentages: Mapping[World, float]) -> World | None:
    if not any(percentages.values()):
        return None
    return _rank(percentages)[1]


def world_activation(placements: Iterable[PlanetPlacement]) -> WorldActivation:
    percentages = aggregate_world_percentages(placements)
    return WorldActivation(
        percentages=percentages,
        dominant=dominant_world(percentages),
        secondary=secondary_world(percentages),
    )


def pillar_balance(placements: Iterable[PlanetPlacement]) -> PillarBalance:
    """Planets on the pillars of Severity, Mercy and Mildness.

    Balanced when the two side pillars differ by at most one planet.
    """
    counts = dict.fromkeys(Pillar, 0)
    for placement in placements:
        counts[PILLARS[PLANET_SEPHIRAH[placement.body]]] += 1
    return PillarBalance(
        counts=counts,
        balanced=abs(counts[Pillar.LEFT] - counts[Pillar.RIGHT]) <= 1,
    )


def natal_signature(placements: Iterable[PlanetPlacement]) -> NatalSignature:
    """Energetic signature of a birth chart.

    Every placement gives 3 points to its primary world and 2 to its
    runner-up. The chart is balanced when the spread between the strongest
    and weakest world is within 15% of the total.
    """
    placements = list(placements)
    scores = dict.fromkeys(WORLD_ORDER, 0)
    for placement in placements:
        ranking = world_score_for(placement).ranking
        scores[ranking[0]] += 3
        scores[ranking[1]] += 2

    total = sum(scores.values())
    if total:
        percentages = {world: scores[world] / total * 100.0 for world in WORLD_ORDER}
    else:
        percentages = dict.fromkeys(WORLD_ORDER, 0.0)

    spread = max(scores.values()) - min(scores.values())
    active = {PLANET_SEPHIRAH[p.body] for p in placements}

    return NatalSignature(
        active_sephiroth=[s for s in CANONICAL_ORDER if s in active],
        world_scores=scores,
        world_percentages=percentages,
        dominant_world=dominant_world(percentages),
        secondary_world=secondary_world(percentages),
        balanced=spread <= total * BALANCE_TOLERANCE,
        pillars=pillar_balance(placements),
    )
