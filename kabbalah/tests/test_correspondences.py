"""Tests for the correspondence tables."""

import pytest
from kabbalah.correspondences import (
    ELEMENT_WORLDS,
    FOUR_WORLDS,
    GEMATRIA_VALUES,
    HOUSE_DOMAINS,
    LETTER_VALUES,
    PILLARS,
    PLANET_SEPHIRAH,
    SEPHIRAH_PLANET,
    SEPHIROTH,
    TREE_HIERARCHY,
    TREE_PATHS,
    ZODIAC_PATHS,
    house_world,
    normalize_letter,
    planet_world,
    sephirotic_influence,
    tree_path_between,
)
from shefa.enums import Element, HebrewLetter, Pillar, Planet, Sephirah, Sign, World


def test_planet_mapping_is_bijective_and_leaves_malkuth_unmapped():
    sephiroth = list(PLANET_SEPHIRAH.values())
    assert len(sephiroth) == len(set(sephiroth)) == 10
    assert set(PLANET_SEPHIRAH) == set(Planet)
    assert Sephirah.MALKUTH not in sephiroth
    assert PLANET_SEPHIRAH[Planet.PLUTO] == Sephirah.DAATH
    assert SEPHIRAH_PLANET[Sephirah.DAATH] == Planet.PLUTO
    assert Sephirah.MALKUTH not in SEPHIRAH_PLANET


def test_tables_are_read_only():
    with pytest.raises(TypeError):
        PLANET_SEPHIRAH[Planet.SUN] = Sephirah.KETHER  # type: ignore[index]


def test_every_sign_has_a_path_between_two_distinct_sephiroth():
    assert set(ZODIAC_PATHS) == set(Sign)
    for path in ZODIAC_PATHS.values():
        upper, lower = path.connects
        assert upper != lower
    assert ZODIAC_PATHS[Sign.ARIES].letter == HebrewLetter.HE
    assert ZODIAC_PATHS[Sign.PISCES].connects == (Sephirah.NETZACH, Sephirah.MALKUTH)


def test_tree_paths_are_keyed_by_unordered_pair():
    path = tree_path_between(Sephirah.NETZACH, Sephirah.TIPHERETH)
    assert path is not None
    assert path.letter == HebrewLetter.SAMECH
    assert path.tarot == "Temperance"
    assert tree_path_between(Sephirah.TIPHERETH, Sephirah.NETZACH) is path
    assert tree_path_between(Sephirah.KETHER, Sephirah.MALKUTH) is None
    assert len(TREE_PATHS) == 20


def test_houses_and_quadrant_worlds():
    assert sorted(HOUSE_DOMAINS) == list(range(1, 13))
    assert HOUSE_DOMAINS[10].sephirah == Sephirah.KETHER
    assert [house_world(h) for h in (1, 3, 4, 6, 7, 9, 10, 12)] == [
        World.ASSIAH,
        World.ASSIAH,
        World.YETZIRAH,
        World.YETZIRAH,
        World.BRIAH,
        World.BRIAH,
        World.ATZILUTH,
        World.ATZILUTH,
    ]
    with pytest.raises(ValueError):
        house_world(13)


def test_worlds_cover_every_element_once():
    assert set(FOUR_WORLDS) == set(World)
    assert ELEMENT_WORLDS[Element.FIRE] == World.ATZILUTH
    assert ELEMENT_WORLDS[Element.EARTH] == World.ASSIAH
    assert len(set(ELEMENT_WORLDS.values())) == 4


def test_planet_world_is_the_world_of_its_sephirah():
    assert planet_world(Planet.NEPTUNE) == World.ATZILUTH
    assert planet_world(Planet.SATURN) == World.BRIAH
    assert planet_world(Planet.SUN) == World.YETZIRAH


def test_pillars():
    assert PILLARS[Sephirah.BINAH] == Pillar.LEFT
    assert PILLARS[Sephirah.NETZACH] == Pillar.RIGHT
    assert PILLARS[Sephirah.DAATH] == Pillar.MIDDLE
    assert SEPHIROTH[Sephirah.GEBURAH].pillar == Pillar.LEFT


def test_gematria_values():
    assert LETTER_VALUES[HebrewLetter.ALEPH] == 1
    assert LETTER_VALUES[HebrewLetter.TAV] == 400
    assert sum(LETTER_VALUES.values()) == 1495
    assert GEMATRIA_VALUES["Kether"] == 620
    assert GEMATRIA_VALUES["Samekh"] == 60
    assert GEMATRIA_VALUES["Tau"] == 400


def test_normalize_letter_accepts_aliases_and_case():
    assert normalize_letter("heh") == HebrewLetter.HE
    assert normalize_letter("ZAYIN") == HebrewLetter.ZAIN
    assert normalize_letter("Aleph") == HebrewLetter.ALEPH
    assert normalize_letter("Omega") is None
    assert normalize_letter(None) is None


def test_hierarchy_lists_daath_last():
    assert TREE_HIERARCHY[0] == Sephirah.KETHER
    assert TREE_HIERARCHY[-1] == Sephirah.DAATH
    assert set(TREE_HIERARCHY) == set(Sephirah)


def test_sephirotic_influence_synthesis():
    influence = sephirotic_influence(Planet.SUN, Sign.ARIES, 10)
    assert influence.sephirah == Sephirah.TIPHERETH
    assert influence.letter == HebrewLetter.HE
    assert influence.synthesis == (
        "Tiphereth (Sun) expressing through the path of He (Aries) in the realm of Career & public life"
    )


def test_sephirotic_influence_without_house():
    influence = sephirotic_influence(Planet.MOON, Sign.CANCER)
    assert influence.house is None
    assert influence.manifestation_area is None
    assert influence.synthesis.endswith("path of Cheth (Cancer)")
