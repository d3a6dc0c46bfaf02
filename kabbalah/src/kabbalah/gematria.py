"""Gematria sums over letters and sephiroth, with digit-root reduction."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from shefa.schemas.tree import DivineKey, GematriaSum, KeySum, TreeGraph

from kabbalah.correspondences import GEMATRIA_VALUES

logger = logging.getLogger(__name__)

# Keyed to the sephirah of the same number
ROOT_MEANINGS: dict[int, str] = {
    0: "Silence - nothing is illuminated yet, the word is still unspoken",
    1: "Unity - a single point of will, the Crown beginning something new",
    2: "Polarity - wisdom seeking its counterpart, partnership and exchange",
    3: "Understanding - potential taking form, patience that gives shape",
    4: "Mercy - foundations laid with generosity and an open hand",
    5: "Severity - discernment, the courage to cut away what is finished",
    6: "Beauty - the heart reconciling opposites into harmony",
    7: "Victory - feeling carried forward by endurance and desire",
    8: "Splendor - the mind that names, orders and communicates",
    9: "Foundation - a cycle gathered and ready to manifest",
}


def gematria_sum(
    tokens: Iterable[str],
    value_table: Mapping[str, int] = GEMATRIA_VALUES,
) -> GematriaSum:
    """Sum token values; an unknown token counts 0 and is flagged ``known=False``."""
    breakdown = []
    total = 0
    for token in tokens:
        key = str(token)
        value = value_table.get(key)
        if value is None:
            logger.warning("No gematria value for token '%s', counting 0", key)
            breakdown.append({"token": key, "value": 0, "known": False})
            continue
        total += value
        breakdown.append({"token": key, "value": value, "known": True})
    return GematriaSum(total=total, breakdown=breakdown)


def digit_sum(n: int) -> int:
    return sum(int(d) for d in str(abs(n)))


def digit_root(n: int) -> int:
    """Repeated digit sum down to one digit: 1..9 for n > 0, 0 for 0."""
    if n < 0:
        raise ValueError(f"digit_root is defined for n >= 0, got {n}")
    while n >= 10:
        n = digit_sum(n)
    return n


def _key_sum(letters: list[str], sephiroth: list[str]) -> KeySum:
    letter_sum = gematria_sum(letters)
    sephirah_sum = gematria_sum(sephiroth)
    total = letter_sum.total + sephirah_sum.total
    root = digit_root(total)
    return KeySum(
        total=total,
        digit_root=root,
        meaning=ROOT_MEANINGS[root],
        letters=letter_sum.breakdown,
        sephiroth=sephirah_sum.breakdown,
    )


def divine_key(graph: TreeGraph) -> DivineKey:
    """Sums over every illuminated token and over the largest component only.

    ``sum_overall`` takes every illuminated sephirah and the letter of every
    lit path; ``sum_connected`` only what lies inside the component.
    """
    overall_letters = [str(e.letter) for e in graph.edges if e.letter is not None]
    connected_letters = [str(e.letter) for e in graph.component.edges if e.letter is not None]
    return DivineKey(
        sum_overall=_key_sum(overall_letters, [str(s) for s in graph.illuminated]),
        sum_connected=_key_sum(connected_letters, [str(s) for s in graph.component.sephiroth]),
    )
