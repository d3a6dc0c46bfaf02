"""Template-driven narrative text for charts, skies and transits.

Every function here is pure: the same placements and aspects always produce
the same text. Nothing in this module talks to the LLM.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from ephemeris.aspects import ASPECTS_BY_TYPE
from kabbalah.correspondences import (
    FOUR_WORLDS,
    HOUSE_DOMAINS,
    PLANET_INFLUENCES,
    PLANET_SEPHIRAH,
    TREE_HIERARCHY,
    WORLD_ORDER,
)
from kabbalah.paths import zodiac_path_activations
from kabbalah.worlds import world_activation, world_score_for
from shefa.enums import AspectQuality, AspectType, HebrewLetter, Intensity, Planet, Sephirah, World
from shefa.errors import InvalidInputError
from shefa.schemas.chart import AspectRecord, PlanetPlacement, TransitAspectRecord
from shefa.schemas.kabbalah import KabbalisticReading, ReadingDetail, SephirahState, ZodiacPathActivation
from shefa.schemas.readings import AspectGuidance, DivineMessage, DivinePattern, TransitMessage


def _plural(count: int) -> str:
    return "s" if count > 1 else ""


def _percent(value: float) -> int:
    return int(value + 0.5)


# --- Aspects ---------------------------------------------------------------


def _aspect_line(aspect: AspectRecord) -> str:
    definition = ASPECTS_BY_TYPE[aspect.type]
    first, second = PLANET_SEPHIRAH[aspect.body1], PLANET_SEPHIRAH[aspect.body2]
    return (
        f"{aspect.body1} {definition.symbol} {aspect.body2} "
        f"({first}↔{second}): {definition.kabbalistic_effect}"
    )


def aspect_guidance(aspects: Sequence[AspectRecord]) -> AspectGuidance:
    """Top illuminated and shadow paths plus a one-paragraph summary."""
    harmonious = [a for a in aspects if a.quality == AspectQuality.HARMONIOUS]
    challenging = [a for a in aspects if a.quality == AspectQuality.CHALLENGING]

    if len(harmonious) > len(challenging):
        summary = (
            f"Today's sky flows with grace: {len(harmonious)} harmonious "
            f"aspect{_plural(len(harmonious))} illuminate the Tree. The Shefa cascades easily "
            "through these blessed channels."
        )
    elif len(challenging) > len(harmonious):
        summary = (
            f"Today requires conscious spiritual work: {len(challenging)} challenging "
            f"aspect{_plural(len(challenging))} create friction on the Tree. This tension is the "
            "forge of transformation."
        )
    else:
        summary = (
            f"Today holds perfect balance: {len(harmonious)} harmonious and {len(challenging)} "
            "challenging aspects. Walk the middle pillar with awareness."
        )

    if challenging:
        summary += (
            " Remember: shadow work is holy work. Where you feel resistance, there lies your "
            "greatest growth."
        )

    return AspectGuidance(
        illuminated_paths=[_aspect_line(a) for a in harmonious[:3]],
        shadow_paths=[_aspect_line(a) for a in challenging[:3]],
        summary=summary,
    )


def sephirah_state(sephirah: Sephirah, aspects: Iterable[AspectRecord]) -> SephirahState:
    """Net harmonious against challenging aspects touching one sephirah."""
    related = [
        a
        for a in aspects
        if sephirah in (PLANET_SEPHIRAH[a.body1], PLANET_SEPHIRAH[a.body2])
    ]
    if not related:
        return SephirahState(
            sephirah=sephirah,
            state="neutral",
            description="Standing in potential, awaiting activation",
        )

    harmonious = sum(a.quality == AspectQuality.HARMONIOUS for a in related)
    challenging = sum(a.quality == AspectQuality.CHALLENGING for a in related)
    weight = harmonious - challenging

    if weight > 0:
        state = "illuminated"
        description = (
            "Radiating with grace, multiple harmonious flows converge"
            if harmonious > 1
            else "Blessed with supportive energy, flow comes naturally"
        )
    elif weight < 0:
        state = "shadow"
        description = (
            "Deep shadow work needed, multiple tensions require integration"
            if challenging > 1
            else "In creative tension, conscious work transforms challenge into strength"
        )
    else:
        state = "neutral"
        description = "Balanced between light and shadow, holding the middle way"

    return SephirahState(
        sephirah=sephirah,
        state=state,
        harmonious=harmonious,
        challenging=challenging,
        description=description,
    )


# --- Planet-by-planet reading ----------------------------------------------


def kabbalistic_reading(placements: Sequence[PlanetPlacement]) -> KabbalisticReading:
    """Which spheres are lit and how each planet expresses through its sign.

    Influence lines need a house; placements without one still light their
    sphere and appear in the details.
    """
    active: list[Sephirah] = []
    influences = []
    details = []

    for placement in placements:
        sephirah = PLANET_SEPHIRAH[placement.body]
        if sephirah not in active:
            active.append(sephirah)
        details.append(
            ReadingDetail(
                planet=placement.body,
                sephirah=sephirah,
                sign=placement.sign,
                house=placement.house,
                world=world_score_for(placement).primary,
            )
        )
        if placement.house is None:
            continue
        domain = HOUSE_DOMAINS[placement.house]
        influences.append(
            f"**{placement.body} in {sephirah}:** {PLANET_INFLUENCES[placement.body]} is "
            f"expressing through {placement.sign}, activating {domain.kabbalistic_meaning}."
        )

    details.sort(key=lambda d: TREE_HIERARCHY.index(d.sephirah))

    return KabbalisticReading(
        active_sephiroth=active,
        influences=influences,
        primary_influences=influences[:3],
        tree_activation=f"Today, {len(active)} spheres of the Tree of Life are actively illuminated.",
        details=details,
    )


# --- Daily divine message --------------------------------------------------

WORLD_OPENINGS: dict[World, str] = {
    World.ATZILUTH: (
        "The most exalted realm of pure spirit is dominant today. Divine archetypes are seeking "
        "to birth themselves through you."
    ),
    World.BRIAH: (
        "The realm of thought and creation is dominant today. Ideas from the highest mind are "
        "forming and crystallizing."
    ),
    World.YETZIRAH: (
        "The realm of formation and emotion is dominant today. Feelings are the bridge between "
        "spirit and matter."
    ),
    World.ASSIAH: (
        "The realm of action and manifestation is dominant today. The divine seeks embodiment "
        "through physical reality."
    ),
}

FLOW_DESCRIPTIONS: dict[Sephirah, str] = {
    Sephirah.KETHER: "The Crown radiates pure unity consciousness, the undifferentiated source of all",
    Sephirah.CHOKMAH: 'Wisdom streams forth as raw creative potential, the divine spark of "what could be"',
    Sephirah.BINAH: "Understanding receives and shapes, giving form to infinite possibility",
    Sephirah.CHESED: "Mercy expands outward with boundless grace and generosity",
    Sephirah.GEBURAH: "Strength contracts inward with holy discrimination and boundaries",
    Sephirah.TIPHERETH: "Beauty harmonizes all opposites in the sacred heart center",
    Sephirah.NETZACH: "Victory persists through instinct, passion, and endurance",
    Sephirah.HOD: "Splendor analyzes and articulates through mind and word",
    Sephirah.YESOD: "Foundation channels all energies into the astral blueprint",
    Sephirah.MALKUTH: "Kingdom grounds everything into tangible earthly form",
    Sephirah.DAATH: "Knowledge reveals hidden connections across the abyss",
}

LETTER_TEACHINGS: dict[HebrewLetter, str] = {
    HebrewLetter.ALEPH: "the breath of creation, teaching unity in multiplicity",
    HebrewLetter.BETH: "the vessel of containment, building sacred structures",
    HebrewLetter.GIMEL: "the bridge of giving, connecting higher to lower",
    HebrewLetter.DALETH: "the door of receptivity, opening to divine nourishment",
    HebrewLetter.HE: "the window of revelation, seeing with divine eyes",
    HebrewLetter.VAV: "the nail of connection, joining heaven to earth",
    HebrewLetter.ZAIN: "the sword of discernment, cutting through illusion",
    HebrewLetter.CHETH: "the fence of protection, creating holy boundaries",
    HebrewLetter.TETH: "the serpent of transformation, kundalini rising",
    HebrewLetter.YOD: "the hand of manifestation, divine action through you",
    HebrewLetter.KAPH: "the palm of receptivity, holding divine gifts",
    HebrewLetter.LAMED: "the ox-goad of learning, teaching through experience",
    HebrewLetter.MEM: "the waters of consciousness, flowing and adapting",
    HebrewLetter.NUN: "the fish of faith, swimming in unseen depths",
    HebrewLetter.SAMECH: "the prop of support, divine assistance available",
    HebrewLetter.AYIN: "the eye of witness, seeing from higher perspective",
    HebrewLetter.PEH: "the mouth of expression, speaking truth into being",
    HebrewLetter.TZADDI: "the fish-hook of insight, catching spiritual understanding",
    HebrewLetter.QOPH: "the back of the head, intuition and dreamwork",
    HebrewLetter.RESH: "the head of intellect, illuminating consciousness",
    HebrewLetter.SHIN: "the tooth of transformation, holy fire refining",
    HebrewLetter.TAV: "the cross of manifestation, sealing intention into form",
}

MANIFESTATION_GUIDANCE: dict[World, str] = {
    World.ATZILUTH: (
        "This is a day for visioning, meditation, and connecting with your highest purpose. The "
        "spiritual realm is very close, so set intentions that align with your soul's calling."
    ),
    World.BRIAH: (
        "This is a day for thinking, planning, and intellectual clarity. Ideas have power now: "
        "journal, strategize, and allow divine intelligence to flow through your mind."
    ),
    World.YETZIRAH: (
        "This is a day for feeling, creating, and artistic expression. Honor your emotions as "
        "messengers from the divine. Creative work channels the Shefa directly."
    ),
    World.ASSIAH: (
        "This is a day for doing, building, and physical action. The spiritual wants to become "
        "tangible, so take concrete steps toward your visions."
    ),
}

PRACTICES: dict[World, tuple[str, ...]] = {
    World.ATZILUTH: (
        "Spend time in silent meditation or contemplative prayer",
        'Ask: "What is the highest expression of my soul today?"',
        "Work with symbols, archetypal images, or sacred art",
    ),
    World.BRIAH: (
        "Journal your insights and revelations",
        "Study wisdom teachings or engage in meaningful dialogue",
        "Create mental models or frameworks for spiritual understanding",
    ),
    World.YETZIRAH: (
        "Express yourself through art, music, or movement",
        "Process emotions consciously through feeling practices",
        "Work with visualization, active imagination, or dreamwork",
    ),
    World.ASSIAH: (
        "Take concrete action on a spiritual intention",
        "Engage in ritual, ceremony, or embodied practice",
        "Build or create something tangible that serves others",
    ),
}

BLESSINGS: dict[World, str] = {
    World.ATZILUTH: "May you rest in the eternal presence of the Divine today. Baruch HaShem.",
    World.BRIAH: "May your mind be illuminated with holy wisdom today. Baruch HaShem.",
    World.YETZIRAH: "May your heart overflow with sacred feeling today. Baruch HaShem.",
    World.ASSIAH: "May your hands become vessels of divine action today. Baruch HaShem.",
}


def divine_pattern(placements: Sequence[PlanetPlacement]) -> DivinePattern:
    """Collect what the daily message needs from a set of placements."""
    if not placements:
        raise InvalidInputError("placements", "at least one placement is required")
    reading = kabbalistic_reading(placements)
    activation = world_activation(placements)
    return DivinePattern(
        active_sephiroth=reading.active_sephiroth,
        active_paths=zodiac_path_activations(placements),
        dominant_world=activation.dominant or WORLD_ORDER[0],
        world_percentages=activation.percentages,
        placements=reading.details,
    )


def primary_flow(sephiroth: Iterable[Sephirah]) -> tuple[Sephirah, Sephirah, str]:
    """Highest lit sphere, the sphere the flow centres in, and its theme."""
    active = set(sephiroth)
    top = next((s for s in TREE_HIERARCHY if s in active), Sephirah.TIPHERETH)
    central = Sephirah.TIPHERETH if Sephirah.TIPHERETH in active else top

    if Sephirah.KETHER in active:
        theme = "divine union and transcendence"
    elif Sephirah.CHOKMAH in active and Sephirah.BINAH in active:
        theme = "wisdom through polarity"
    elif Sephirah.CHESED in active or Sephirah.GEBURAH in active:
        theme = "power through mercy and strength"
    elif Sephirah.NETZACH in active or Sephirah.HOD in active:
        theme = "victory through thought and feeling"
    elif Sephirah.YESOD in active:
        theme = "foundation and manifestation"
    else:
        theme = "integration and balance"
    return top, central, theme


def key_paths(
    paths: Iterable[ZodiacPathActivation], active: Iterable[Sephirah]
) -> list[ZodiacPathActivation]:
    """First three sign paths with both spheres lit."""
    lit = set(active)
    return [p for p in paths if p.connects[0] in lit and p.connects[1] in lit][:3]


def _runner_up(percentages: dict[World, float], dominant: World) -> World:
    ranked = sorted(WORLD_ORDER, key=lambda w: -percentages.get(w, 0.0))
    return ranked[1] if ranked[0] == dominant else ranked[0]


def divine_message(pattern: DivinePattern) -> DivineMessage:
    """Assemble the seven sections of the daily Shefa message."""
    world = pattern.dominant_world
    info = FOUR_WORLDS[world]
    percentages = pattern.world_percentages
    top, central, theme = primary_flow(p.sephirah for p in pattern.placements)
    paths = key_paths(pattern.active_paths, pattern.active_sephiroth)

    opening = (
        f"Today, the {info.name} ({info.hebrew}) illuminates {_percent(percentages.get(world, 0.0))}% "
        f"of the cosmic pattern. {WORLD_OPENINGS[world]} The Tree of Life pulses with energy as "
        "the Shefa, the divine overflow, cascades through specific channels of expression."
    )

    flows = ". ".join(FLOW_DESCRIPTIONS[s] for s in pattern.active_sephiroth[:3])
    shefa_flow = f"The divine flow descends from {top}, centering in {central}. "
    if flows:
        shefa_flow += f"{flows}. "
    shefa_flow += f"This creates a pattern of {theme}, inviting you to align with this cosmic current."

    if paths:
        guidance = ". ".join(
            f"The path of {p.letter} ({p.sign}) connects {p.connects[0]} to {p.connects[1]}, "
            f"activating {LETTER_TEACHINGS.get(p.letter, p.meaning.lower())}"
            for p in paths
        )
        pathway_guidance = (
            f"Sacred pathways illuminate the Tree today. {guidance}. Walk these paths "
            "consciously: they are invitations to specific spiritual work."
        )
    else:
        pathway_guidance = (
            "The paths between spheres shimmer with potential, waiting for conscious engagement."
        )

    second = _runner_up(percentages, world)
    second_info = FOUR_WORLDS[second]
    world_manifestation = (
        f"{MANIFESTATION_GUIDANCE[world]} While {info.realm} dominates, "
        f"{_percent(percentages.get(second, 0.0))}% flows through {second_info.name}, suggesting "
        f"a bridge between {info.realm.lower()} and {second_info.realm.lower()}. Work at this "
        "intersection for maximum alignment."
    )

    if central == Sephirah.TIPHERETH:
        sphere_practice = "Center yourself in your heart and let all decisions flow from this sacred place."
    else:
        sphere_practice = f"Honor {central} by aligning with its quality today."
    practical_wisdom = (
        f"Practical ways to align with today's pattern: {'; '.join(PRACTICES[world][:2])}. "
        f"{sphere_practice}"
    )
    if paths:
        practical_wisdom += (
            " The paths that are active suggest specific work, so pay attention to themes of "
            f"{', '.join(p.sign for p in paths)}."
        )

    closing_blessing = (
        "The Tree of Life is alive within you, and these cosmic patterns reflect your own inner "
        f"landscape. {BLESSINGS[world]} Remember: you are not separate from this flow. You ARE "
        "the Shefa expressing itself in this moment, in this place. Walk consciously through the "
        "day as a living blessing."
    )

    return DivineMessage(
        title=f"The Shefa Flows Through {info.realm}: {theme}",
        opening=opening,
        shefa_flow=shefa_flow,
        pathway_guidance=pathway_guidance,
        world_manifestation=world_manifestation,
        practical_wisdom=practical_wisdom,
        closing_blessing=closing_blessing,
    )


# --- Transits --------------------------------------------------------------

# (transit planet, natal planet) -> meaning, per aspect type
TRANSIT_PAIR_MEANINGS: dict[AspectType, dict[tuple[Planet, Planet], str]] = {
    AspectType.CONJUNCTION: {
        (Planet.SUN, Planet.SUN): "Solar return energy: a year of new beginnings and self-renewal",
        (Planet.MOON, Planet.MOON): "Lunar return: emotional cycles complete and renew",
        (Planet.SATURN, Planet.SUN): "Saturn return to natal Sun: taking responsibility for your identity",
        (Planet.JUPITER, Planet.JUPITER): "Jupiter return: expansion and blessing cycle completes",
        (Planet.SATURN, Planet.SATURN): "Saturn return: the great maturation, reaping what you've sown",
    },
    AspectType.OPPOSITION: {
        (Planet.SUN, Planet.MOON): "Full Moon energy in your chart: illumination of inner/outer balance",
        (Planet.SATURN, Planet.SUN): "Saturn opposes your natal Sun: testing your foundations",
        (Planet.MARS, Planet.MARS): "Mars opposition: confronting your will and desires",
    },
    AspectType.TRINE: {
        (Planet.JUPITER, Planet.SUN): "Jupiter trines your Sun: blessings flow to your core identity",
        (Planet.VENUS, Planet.VENUS): "Venus trine: harmonious relationships and pleasure",
        (Planet.SUN, Planet.MOON): "Emotional and conscious self flow in harmony",
    },
    AspectType.SQUARE: {
        (Planet.SATURN, Planet.SUN): "Saturn squares your Sun: friction creates growth in identity",
        (Planet.MARS, Planet.MARS): "Mars square: dynamic tension in how you assert yourself",
        (Planet.PLUTO, Planet.SUN): "Pluto squares your Sun: deep transformation of self",
    },
    AspectType.SEXTILE: {
        (Planet.JUPITER, Planet.VENUS): "Jupiter sextiles Venus: opportunities for love and abundance",
        (Planet.MERCURY, Planet.MERCURY): "Mental connections and communication opportunities",
        (Planet.SUN, Planet.MARS): "Opportunities to assert yourself with confidence",
    },
}


def transit_meaning(transit_planet: Planet, natal_planet: Planet, aspect_type: AspectType) -> str:
    """Pair-specific meaning, or a generic line built from the aspect definition."""
    meaning = TRANSIT_PAIR_MEANINGS.get(aspect_type, {}).get((transit_planet, natal_planet))
    if meaning is not None:
        return meaning
    definition = ASPECTS_BY_TYPE[aspect_type]
    return f"Transit {transit_planet} {definition.symbol} Natal {natal_planet}: {definition.meaning}"


def _transit_line(aspect: TransitAspectRecord) -> str:
    symbol = ASPECTS_BY_TYPE[aspect.type].symbol
    transit_sephirah = PLANET_SEPHIRAH[aspect.transit_planet]
    natal_sephirah = PLANET_SEPHIRAH[aspect.natal_planet]
    meaning = transit_meaning(aspect.transit_planet, aspect.natal_planet, aspect.type)
    return (
        f"**{aspect.transit_planet} {symbol} Natal {aspect.natal_planet}** "
        f"({transit_sephirah}↔{natal_sephirah}): {meaning}"
    )


def transit_message(transit_aspects: Sequence[TransitAspectRecord]) -> TransitMessage:
    """Personal message from the strongest transits to a natal chart.

    Only the first three strong aspects (in the given order) are considered.
    """
    strong = [a for a in transit_aspects if a.intensity == Intensity.STRONG][:3]
    types = {a.type for a in strong}
    has_return = any(a.transit_planet == a.natal_planet for a in strong)

    title = "Your Personal Sky Today"
    if len(strong) > 2:
        title = "A Day of Powerful Transits - Major Shifts Underway"
    elif AspectType.CONJUNCTION in types:
        title = "Cosmic Alignment - Transits Meet Your Natal Sky"

    if not strong:
        opening = (
            "Today's transits flow gently across your natal chart. This is a time for integration "
            "and rest, allowing recent shifts to settle into your soul's architecture."
        )
    elif has_return:
        opening = (
            "A planetary return is activating your chart today, a cosmic completion and new "
            "beginning. The universe invites you to honor the cycles you've completed and "
            "consciously step into the next spiral."
        )
    elif AspectType.OPPOSITION in types:
        opening = (
            "The cosmos presents you with a mirror today. Transiting planets oppose points in your "
            "natal chart, illuminating what needs balance and integration. This is sacred tension "
            "that births wisdom."
        )
    elif AspectType.TRINE in types:
        opening = (
            "Grace flows through your natal chart today. Transiting planets form harmonious angles "
            "to your birth positions, opening channels of blessing and effortless manifestation."
        )
    else:
        opening = (
            "The celestial bodies transit across sensitive points in your natal chart, activating "
            "your soul's blueprint. Pay attention to what arises: the universe speaks your "
            "personal language today."
        )

    soul_work = "Today, your personal work is to "
    if AspectType.SQUARE in types:
        soul_work += (
            "embrace the creative friction in your chart. Where you feel resistance between "
            "transits and your natal positions, lean in with consciousness: this is where your "
            "growth lives."
        )
    elif types & {AspectType.TRINE, AspectType.SEXTILE}:
        soul_work += (
            "receive the blessings flowing through your natal chart. Allow grace to work through "
            "you without effort or forcing. Trust the harmonious alignments."
        )
    elif has_return:
        soul_work += (
            "honor the completion of a cosmic cycle. Reflect on the journey this planet has taken "
            "you on, and consciously set intentions for the next spiral."
        )
    else:
        soul_work += (
            "stay present to how the current sky touches your birth blueprint. Notice what "
            "activates and what asks to be seen."
        )

    return TransitMessage(
        title=title,
        personalized_opening=opening,
        key_transits=[_transit_line(a) for a in strong],
        soul_work=soul_work,
    )
