"""Paths on the Tree lit by natal aspects and by planets in signs."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from shefa.enums import AspectQuality, Illumination, Planet, Sign
from shefa.schemas.chart import AspectRecord, PlanetPlacement
from shefa.schemas.kabbalah import PathActivationSummary, RetrogradeTheme, ZodiacPathActivation
from shefa.schemas.tree import PathActivation

from kabbalah.correspondences import HEBREW_GLYPHS, PLANET_SEPHIRAH, ZODIAC_PATHS, tree_path_between

_ILLUMINATION_ORDER = {Illumination.FULL: 0, Illumination.PARTIAL: 1, Illumination.SHADOW: 2}

RETROGRADE_GUIDANCE: dict[Planet, tuple[str, str]] = {
    Planet.MERCURY: (
        "Internal Processing & Review",
        "Your mind naturally reviews, refines, and processes internally before expressing. "
        "Trust your need to think things through deeply.",
    ),
    Planet.VENUS: (
        "Inner Worth & Self-Love",
        "Your values and sense of beauty are cultivated from within. You teach others about "
        "authentic self-worth through your journey.",
    ),
    Planet.MARS: (
        "Internalized Action & Willpower",
        "Your drive works through strategy and careful planning. Anger or passion may need "
        "conscious expression rather than impulsive action.",
    ),
    Planet.JUPITER: (
        "Philosophical Introspection",
        "Growth comes through inner expansion and personal meaning-making. Your wisdom is "
        "cultivated through reflection.",
    ),
    Planet.SATURN: (
        "Internal Structure & Authority",
        "You build authority from within, creating your own rules. Mastery comes through "
        "patient self-discipline.",
    ),
    Planet.URANUS: (
        "Revolutionary Inner Vision",
        "Your rebellion and innovation operate on deep levels. You transform from the inside "
        "out, changing paradigms through inner work.",
    ),
    Planet.NEPTUNE: (
        "Mystical Withdrawal",
        "Your spirituality is deeply personal. Boundaries dissolve inward, creating space for "
        "profound inner connection with the divine.",
    ),
    Planet.PLUTO: (
        "Alchemical Self-Transformation",
        "Your power transforms you first. Deep psychological work and shadow integration are "
        "your paths to empowerment.",
    ),
}


def calculate_path_activations(aspects: Iterable[AspectRecord]) -> list[PathActivation]:
    """Tree paths whose two spheres are joined by a natal aspect.

    Sorted full, partial, shadow, then by tightest orb.
    """
    paths = []
    for aspect in aspects:
        first, second = PLANET_SEPHIRAH[aspect.body1], PLANET_SEPHIRAH[aspect.body2]
        path = tree_path_between(first, second)
        if path is None:
            continue
        paths.append(
            PathActivation(
                sephirah1=first,
                sephirah2=second,
                planets=(aspect.body1, aspect.body2),
                aspect_type=aspect.type,
                quality=aspect.quality,
                illumination=aspect.illumination,
                orb=aspect.orb,
                hebrew_letter=path.letter,
                tarot_card=path.tarot,
                meaning=path.meaning,
            )
        )
    return sorted(paths, key=lambda p: (_ILLUMINATION_ORDER[p.illumination], p.orb))


def zodiac_path_activations(placements: Iterable[PlanetPlacement]) -> list[ZodiacPathActivation]:
    """Sign paths occupied by at least one planet, in zodiac order."""
    by_sign: dict[Sign, list[Planet]] = {}
    for placement in placements:
        by_sign.setdefault(placement.sign, []).append(placement.body)

    activations = []
    for sign, path in ZODIAC_PATHS.items():
        if sign not in by_sign:
            continue
        activations.append(
            ZodiacPathActivation(
                sign=sign,
                letter=path.letter,
                glyph=HEBREW_GLYPHS[path.letter],
                path_number=path.path_number,
                connects=path.connects,
                meaning=path.meaning,
                planets=by_sign[sign],
            )
        )
    return activations


def path_activation_summary(paths: Sequence[PathActivation]) -> PathActivationSummary:
    return PathActivationSummary(
        total=len(paths),
        fully_illuminated=sum(p.illumination == Illumination.FULL for p in paths),
        partially_illuminated=sum(p.illumination == Illumination.PARTIAL for p in paths),
        shadow_paths=sum(p.illumination == Illumination.SHADOW for p in paths),
        harmonious=sum(p.quality == AspectQuality.HARMONIOUS for p in paths),
        challenging=sum(p.quality == AspectQuality.CHALLENGING for p in paths),
        neutral=sum(p.quality == AspectQuality.NEUTRAL for p in paths),
    )


def retrograde_themes(placements: Iterable[PlanetPlacement]) -> list[RetrogradeTheme]:
    """Themes for retrograde planets; the luminaries never retrograde."""
    themes = []
    for placement in placements:
        if not placement.retrograde or placement.body not in RETROGRADE_GUIDANCE:
            continue
        theme, guidance = RETROGRADE_GUIDANCE[placement.body]
        themes.append(
            RetrogradeTheme(
                planet=placement.body,
                sephirah=PLANET_SEPHIRAH[placement.body],
                sign=placement.sign,
                house=placement.house,
                theme=theme,
                guidance=guidance,
            )
        )
    return themes
