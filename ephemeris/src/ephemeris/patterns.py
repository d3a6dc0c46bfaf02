"""Multi-planet aspect configurations."""

from __future__ import annotations

from collections.abc import Sequence
from itertools import combinations

from shefa.enums import AspectType, Planet, Sign
from shefa.schemas.chart import AspectPattern, AspectRecord, PlanetPlacement

_PLANET_ORDER = {planet: i for i, planet in enumerate(Planet)}


def _ordered(planets) -> list[Planet]:
    return sorted(planets, key=_PLANET_ORDER.__getitem__)


def _aspect_index(aspects: Sequence[AspectRecord]) -> dict[frozenset[Planet], AspectType]:
    return {frozenset((a.body1, a.body2)): a.type for a in aspects}


def find_stelliums(placements: Sequence[PlanetPlacement]) -> list[AspectPattern]:
    """Three or more planets in one sign."""
    by_sign: dict[Sign, list[Planet]] = {}
    for placement in placements:
        by_sign.setdefault(placement.sign, []).append(placement.body)

    patterns = []
    for sign in Sign:
        planets = by_sign.get(sign, [])
        if len(planets) < 3:
            continue
        patterns.append(
            AspectPattern(
                type="stellium",
                planets=_ordered(planets),
                description=f"{len(planets)} planets concentrated in {sign}",
                guidance=(
                    f"Intense focus in {sign}. This stellium creates a powerful energetic vortex "
                    f"where multiple aspects of self merge. The themes of {sign} are central to "
                    "your life purpose."
                ),
            )
        )
    return patterns


def find_grand_trines(aspects: Sequence[AspectRecord]) -> list[AspectPattern]:
    index = _aspect_index(aspects)
    planets = _ordered({p for a in aspects if a.type == AspectType.TRINE for p in (a.body1, a.body2)})
    patterns = []
    for trio in combinations(planets, 3):
        if all(index.get(frozenset(pair)) == AspectType.TRINE for pair in combinations(trio, 2)):
            patterns.append(
                AspectPattern(
                    type="grand_trine",
                    planets=list(trio),
                    description=f"Grand Trine: {', '.join(trio)}",
                    guidance=(
                        "Effortless flow of energy between these three areas. This is a gift that "
                        "may need conscious activation to avoid complacency. Your natural talents "
                        "lie here."
                    ),
                )
            )
    return patterns


def find_t_squares(aspects: Sequence[AspectRecord]) -> list[AspectPattern]:
    """An opposition whose two ends both square a third planet, the apex."""
    index = _aspect_index(aspects)
    seen: set[frozenset[Planet]] = set()
    patterns = []
    for opposition in aspects:
        if opposition.type != AspectType.OPPOSITION:
            continue
        for apex in Planet:
            if apex in (opposition.body1, opposition.body2):
                continue
            if (
                index.get(frozenset((apex, opposition.body1))) == AspectType.SQUARE
                and index.get(frozenset((apex, opposition.body2))) == AspectType.SQUARE
            ):
                key = frozenset((opposition.body1, opposition.body2, apex))
                if key in seen:
                    continue
                seen.add(key)
                planets = [opposition.body1, opposition.body2, apex]
                patterns.append(
                    AspectPattern(
                        type="t_square",
                        planets=planets,
                        apex=apex,
                        description=f"T-Square: {', '.join(planets)} (apex: {apex})",
                        guidance=(
                            f"Dynamic tension creates growth. The {apex} is your point of release - "
                            "where you must take conscious action to resolve the opposition. "
                            "This pattern drives achievement."
                        ),
                    )
                )
    return patterns


def find_grand_crosses(aspects: Sequence[AspectRecord]) -> list[AspectPattern]:
    """Two oppositions whose four planets are all square or opposed to each other."""
    index = _aspect_index(aspects)
    oppositions = [a for a in aspects if a.type == AspectType.OPPOSITION]
    tense = {AspectType.SQUARE, AspectType.OPPOSITION}
    seen: set[frozenset[Planet]] = set()
    patterns = []
    for first, second in combinations(oppositions, 2):
        planets = {first.body1, first.body2, second.body1, second.body2}
        if len(planets) != 4 or frozenset(planets) in seen:
            continue
        if all(index.get(frozenset(pair)) in tense for pair in combinations(planets, 2)):
            seen.add(frozenset(planets))
            ordered = _ordered(planets)
            patterns.append(
                AspectPattern(
                    type="grand_cross",
                    planets=ordered,
                    description=f"Grand Cross: {', '.join(ordered)}",
                    guidance=(
                        "Powerful tension in four directions demands integration. You are here to "
                        "master balancing opposing forces. This configuration builds extraordinary "
                        "strength through challenge."
                    ),
                )
            )
    return patterns


def find_aspect_patterns(
    placements: Sequence[PlanetPlacement],
    aspects: Sequence[AspectRecord],
) -> list[AspectPattern]:
    return (
        find_stelliums(placements)
        + find_grand_trines(aspects)
        + find_t_squares(aspects)
        + find_grand_crosses(aspects)
    )
