"""Tests for the template-driven narrative text."""

import pytest
from ephemeris.aspects import find_aspects
from kabbalah.paths import zodiac_path_activations
from readings.narrative import (
    aspect_guidance,
    divine_message,
    divine_pattern,
    kabbalistic_reading,
    primary_flow,
    sephirah_state,
    transit_meaning,
    transit_message,
)
from shefa.enums import AspectQuality, AspectType, Intensity, Planet, Sephirah, World
from shefa.errors import InvalidInputError
from shefa.schemas.chart import TransitAspectRecord
from shefa.schemas.readings import DivinePattern


def _aspects():
    return find_aspects({Planet.SUN: 0.0, Planet.VENUS: 120.0, Planet.MARS: 92.0, Planet.NEPTUNE: 183.0})


def _transit(transit, natal, aspect_type, quality, intensity=Intensity.STRONG, orb=0.5):
    return TransitAspectRecord(
        transit_planet=transit,
        natal_planet=natal,
        type=aspect_type,
        orb=orb,
        quality=quality,
        intensity=intensity,
    )


def test_aspect_guidance_leans_challenging():
    guidance = aspect_guidance(_aspects())
    assert guidance.illuminated_paths[0] == (
        "Sun △ Venus (Tiphereth↔Netzach): Divine grace flows freely between Sephirot, "
        "illuminating the path with golden light"
    )
    assert len(guidance.shadow_paths) == 3
    assert guidance.summary.startswith("Today requires conscious spiritual work: 3 challenging aspects")
    assert guidance.summary.endswith("there lies your greatest growth.")


def test_aspect_guidance_balanced_without_shadow_note():
    guidance = aspect_guidance([])
    assert guidance.illuminated_paths == []
    assert guidance.summary == (
        "Today holds perfect balance: 0 harmonious and 0 challenging aspects. "
        "Walk the middle pillar with awareness."
    )


def test_sephirah_state():
    aspects = _aspects()

    tiphereth = sephirah_state(Sephirah.TIPHERETH, aspects)
    assert tiphereth.state == "shadow"
    assert (tiphereth.harmonious, tiphereth.challenging) == (1, 2)
    assert tiphereth.description == "Deep shadow work needed, multiple tensions require integration"

    netzach = sephirah_state(Sephirah.NETZACH, aspects)
    assert netzach.state == "illuminated"
    assert netzach.description == "Radiating with grace, multiple harmonious flows converge"

    malkuth = sephirah_state(Sephirah.MALKUTH, aspects)
    assert malkuth.state == "neutral"
    assert malkuth.description == "Standing in potential, awaiting activation"


def test_kabbalistic_reading(make_placement):
    placements = [
        make_placement(Planet.SUN, 15.0, house=10),
        make_placement(Planet.MOON, 135.0, house=2),
        make_placement(Planet.NEPTUNE, 357.0, house=9),
        make_placement(Planet.MARS, 195.0),
    ]
    reading = kabbalistic_reading(placements)

    assert reading.active_sephiroth == [
        Sephirah.TIPHERETH,
        Sephirah.YESOD,
        Sephirah.KETHER,
        Sephirah.GEBURAH,
    ]
    assert reading.tree_activation == "Today, 4 spheres of the Tree of Life are actively illuminated."
    assert len(reading.influences) == 3
    assert reading.primary_influences[0] == (
        "**Sun in Tiphereth:** Consciousness, balance, integration of opposites, the authentic "
        "self is expressing through Aries, activating Crown - Your highest calling manifested."
    )
    assert [d.sephirah for d in reading.details] == [
        Sephirah.KETHER,
        Sephirah.GEBURAH,
        Sephirah.TIPHERETH,
        Sephirah.YESOD,
    ]
    assert reading.details[2].world == World.ATZILUTH


@pytest.mark.parametrize(
    ("sephiroth", "theme"),
    [
        ([Sephirah.KETHER, Sephirah.HOD], "divine union and transcendence"),
        ([Sephirah.CHOKMAH, Sephirah.BINAH], "wisdom through polarity"),
        ([Sephirah.GEBURAH], "power through mercy and strength"),
        ([Sephirah.HOD], "victory through thought and feeling"),
        ([Sephirah.YESOD], "foundation and manifestation"),
        ([Sephirah.TIPHERETH], "integration and balance"),
    ],
)
def test_primary_flow_theme(sephiroth, theme):
    assert primary_flow(sephiroth)[2] == theme


def test_primary_flow_centres_in_tiphereth_when_lit():
    assert primary_flow([Sephirah.HOD, Sephirah.TIPHERETH, Sephirah.BINAH])[:2] == (
        Sephirah.BINAH,
        Sephirah.TIPHERETH,
    )
    assert primary_flow([Sephirah.HOD])[:2] == (Sephirah.HOD, Sephirah.HOD)


def test_divine_message(make_placement):
    placements = [make_placement(Planet.SUN, 220.0), make_placement(Planet.VENUS, 225.0)]
    pattern = DivinePattern(
        active_sephiroth=[Sephirah.TIPHERETH, Sephirah.NETZACH],
        active_paths=zodiac_path_activations(placements),
        dominant_world=World.YETZIRAH,
        world_percentages={
            World.ATZILUTH: 0.0,
            World.BRIAH: 40.0,
            World.YETZIRAH: 60.0,
            World.ASSIAH: 0.0,
        },
        placements=kabbalistic_reading(placements).details,
    )
    message = divine_message(pattern)

    assert message.title == "The Shefa Flows Through the Formative Realm: victory through thought and feeling"
    assert "illuminates 60% of the cosmic pattern" in message.opening
    assert message.shefa_flow.startswith("The divine flow descends from Tiphereth, centering in Tiphereth.")
    assert "The path of Nun (Scorpio) connects Tiphereth to Netzach, activating the fish of faith" in (
        message.pathway_guidance
    )
    assert "40% flows through Briah" in message.world_manifestation
    assert "Center yourself in your heart" in message.practical_wisdom
    assert message.practical_wisdom.endswith("themes of Scorpio.")
    assert "Baruch HaShem." in message.closing_blessing


def test_divine_message_without_key_paths(make_placement):
    pattern = divine_pattern([make_placement(Planet.MERCURY, 10.0, house=3)])
    message = divine_message(pattern)
    assert message.pathway_guidance == (
        "The paths between spheres shimmer with potential, waiting for conscious engagement."
    )
    assert "Honor Hod by aligning with its quality today." in message.practical_wisdom
    assert "themes of" not in message.practical_wisdom


def test_divine_pattern_needs_placements():
    with pytest.raises(InvalidInputError):
        divine_pattern([])


def test_transit_message_quiet_sky():
    message = transit_message(
        [_transit(Planet.MARS, Planet.SUN, AspectType.SQUARE, AspectQuality.CHALLENGING, Intensity.WEAK)]
    )
    assert message.title == "Your Personal Sky Today"
    assert message.personalized_opening.startswith("Today's transits flow gently")
    assert message.key_transits == []
    assert message.soul_work.startswith("Today, your personal work is to stay present")


def test_transit_message_planetary_return():
    message = transit_message(
        [_transit(Planet.SATURN, Planet.SATURN, AspectType.CONJUNCTION, AspectQuality.NEUTRAL)]
    )
    assert message.title == "Cosmic Alignment - Transits Meet Your Natal Sky"
    assert message.personalized_opening.startswith("A planetary return is activating your chart")
    assert message.key_transits == [
        "**Saturn ☌ Natal Saturn** (Binah↔Binah): Saturn return: the great maturation, "
        "reaping what you've sown"
    ]
    assert "honor the completion of a cosmic cycle" in message.soul_work


def test_transit_message_powerful_day():
    aspects = [
        _transit(Planet.JUPITER, Planet.SUN, AspectType.TRINE, AspectQuality.HARMONIOUS),
        _transit(Planet.SATURN, Planet.SUN, AspectType.SQUARE, AspectQuality.CHALLENGING),
        _transit(Planet.MARS, Planet.MOON, AspectType.SEXTILE, AspectQuality.HARMONIOUS),
        _transit(Planet.VENUS, Planet.MOON, AspectType.OPPOSITION, AspectQuality.CHALLENGING),
    ]
    message = transit_message(aspects)
    assert message.title == "A Day of Powerful Transits - Major Shifts Underway"
    assert len(message.key_transits) == 3
    # only the first three strong aspects count, so no opposition
    assert message.personalized_opening.startswith("Grace flows through your natal chart today.")
    assert "embrace the creative friction" in message.soul_work


def test_transit_meaning_pair_and_fallback():
    assert transit_meaning(Planet.PLUTO, Planet.SUN, AspectType.SQUARE) == (
        "Pluto squares your Sun: deep transformation of self"
    )
    assert transit_meaning(Planet.MARS, Planet.MOON, AspectType.TRINE) == (
        "Transit Mars △ Natal Moon: Effortless flow of energy"
    )
