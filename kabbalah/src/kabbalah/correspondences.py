"""Planetary, zodiacal and house correspondences on the Tree of Life.

All tables are read-only mappings keyed by the closed enums in
``shefa.enums``. Planet to sephirah follows the Hermetic Qabalah
attributions with the outer planets on the supernals; Malkuth carries no
planet and Pluto sits on the hidden sephirah Daath. Sign paths follow the
Golden Dawn letter attributions.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

from shefa.enums import Element, HebrewLetter, Pillar, Planet, Sephirah, Sign, World
from shefa.schemas.kabbalah import SephiroticInfluence


@dataclass(frozen=True)
class SephirahInfo:
    name: Sephirah
    hebrew: str
    meaning: str
    archetype: str
    pillar: Pillar
    world: World
    value: int
    color: str


@dataclass(frozen=True)
class ZodiacPath:
    sign: Sign
    letter: HebrewLetter
    path_number: int
    connects: tuple[Sephirah, Sephirah]
    meaning: str


@dataclass(frozen=True)
class TreePath:
    sephiroth: tuple[Sephirah, Sephirah]
    letter: HebrewLetter
    tarot: str
    meaning: str


@dataclass(frozen=True)
class HouseDomain:
    house: int
    sephirah: Sephirah
    manifestation_area: str
    kabbalistic_meaning: str


@dataclass(frozen=True)
class WorldInfo:
    name: World
    hebrew: str
    realm: str
    element: Element
    description: str
    color: str


# Canonical tree order, top to bottom with Daath under the supernals
CANONICAL_ORDER: tuple[Sephirah, ...] = tuple(Sephirah)

# Order of precedence used when ranking active spheres
TREE_HIERARCHY: tuple[Sephirah, ...] = (
    Sephirah.KETHER,
    Sephirah.CHOKMAH,
    Sephirah.BINAH,
    Sephirah.CHESED,
    Sephirah.GEBURAH,
    Sephirah.TIPHERETH,
    Sephirah.NETZACH,
    Sephirah.HOD,
    Sephirah.YESOD,
    Sephirah.MALKUTH,
    Sephirah.DAATH,
)

# Fixed tie-break order for world scoring
WORLD_ORDER: tuple[World, ...] = (World.ATZILUTH, World.BRIAH, World.YETZIRAH, World.ASSIAH)

HEBREW_GLYPHS: MappingProxyType[HebrewLetter, str] = MappingProxyType(
    {
        HebrewLetter.ALEPH: "א",
        HebrewLetter.BETH: "ב",
        HebrewLetter.GIMEL: "ג",
        HebrewLetter.DALETH: "ד",
        HebrewLetter.HE: "ה",
        HebrewLetter.VAV: "ו",
        HebrewLetter.ZAIN: "ז",
        HebrewLetter.CHETH: "ח",
        HebrewLetter.TETH: "ט",
        HebrewLetter.YOD: "י",
        HebrewLetter.KAPH: "כ",
        HebrewLetter.LAMED: "ל",
        HebrewLetter.MEM: "מ",
        HebrewLetter.NUN: "נ",
        HebrewLetter.SAMECH: "ס",
        HebrewLetter.AYIN: "ע",
        HebrewLetter.PEH: "פ",
        HebrewLetter.TZADDI: "צ",
        HebrewLetter.QOPH: "ק",
        HebrewLetter.RESH: "ר",
        HebrewLetter.SHIN: "ש",
        HebrewLetter.TAV: "ת",
    }
)

# Mispar hechrechi (standard) letter values
LETTER_VALUES: MappingProxyType[HebrewLetter, int] = MappingProxyType(
    {
        HebrewLetter.ALEPH: 1,
        HebrewLetter.BETH: 2,
        HebrewLetter.GIMEL: 3,
        HebrewLetter.DALETH: 4,
        HebrewLetter.HE: 5,
        HebrewLetter.VAV: 6,
        HebrewLetter.ZAIN: 7,
        HebrewLetter.CHETH: 8,
        HebrewLetter.TETH: 9,
        HebrewLetter.YOD: 10,
        HebrewLetter.KAPH: 20,
        HebrewLetter.LAMED: 30,
        HebrewLetter.MEM: 40,
        HebrewLetter.NUN: 50,
        HebrewLetter.SAMECH: 60,
        HebrewLetter.AYIN: 70,
        HebrewLetter.PEH: 80,
        HebrewLetter.TZADDI: 90,
        HebrewLetter.QOPH: 100,
        HebrewLetter.RESH: 200,
        HebrewLetter.SHIN: 300,
        HebrewLetter.TAV: 400,
    }
)

# Alternate transliterations seen in source texts
LETTER_ALIASES: MappingProxyType[str, HebrewLetter] = MappingProxyType(
    {
        "heh": HebrewLetter.HE,
        "hé": HebrewLetter.HE,
        "zayin": HebrewLetter.ZAIN,
        "chet": HebrewLetter.CHETH,
        "heth": HebrewLetter.CHETH,
        "kaf": HebrewLetter.KAPH,
        "samekh": HebrewLetter.SAMECH,
        "pe": HebrewLetter.PEH,
        "tsadi": HebrewLetter.TZADDI,
        "koph": HebrewLetter.QOPH,
        "tau": HebrewLetter.TAV,
        "taw": HebrewLetter.TAV,
    }
)

SEPHIRAH_VALUES: MappingProxyType[Sephirah, int] = MappingProxyType(
    {
        Sephirah.KETHER: 620,
        Sephirah.CHOKMAH: 73,
        Sephirah.BINAH: 67,
        Sephirah.DAATH: 474,
        Sephirah.CHESED: 72,
        Sephirah.GEBURAH: 216,
        Sephirah.TIPHERETH: 1081,
        Sephirah.NETZACH: 148,
        Sephirah.HOD: 15,
        Sephirah.YESOD: 80,
        Sephirah.MALKUTH: 496,
    }
)

PILLARS: MappingProxyType[Sephirah, Pillar] = MappingProxyType(
    {
        Sephirah.KETHER: Pillar.MIDDLE,
        Sephirah.CHOKMAH: Pillar.RIGHT,
        Sephirah.BINAH: Pillar.LEFT,
        Sephirah.DAATH: Pillar.MIDDLE,
        Sephirah.CHESED: Pillar.RIGHT,
        Sephirah.GEBURAH: Pillar.LEFT,
        Sephirah.TIPHERETH: Pillar.MIDDLE,
        Sephirah.NETZACH: Pillar.RIGHT,
        Sephirah.HOD: Pillar.LEFT,
        Sephirah.YESOD: Pillar.MIDDLE,
        Sephirah.MALKUTH: Pillar.MIDDLE,
    }
)


def _sephirah(
    name: Sephirah,
    hebrew: str,
    meaning: str,
    archetype: str,
    world: World,
    color: str,
) -> SephirahInfo:
    return SephirahInfo(
        name=name,
        hebrew=hebrew,
        meaning=meaning,
        archetype=archetype,
        pillar=PILLARS[name],
        world=world,
        value=SEPHIRAH_VALUES[name],
        color=color,
    )


SEPHIROTH: MappingProxyType[Sephirah, SephirahInfo] = MappingProxyType(
    {
        Sephirah.KETHER: _sephirah(
            Sephirah.KETHER, "כֶּתֶר", "Crown", "The Divine Unity", World.ATZILUTH, "#FFFFFF"
        ),
        Sephirah.CHOKMAH: _sephirah(
            Sephirah.CHOKMAH, "חָכְמָה", "Wisdom", "The Divine Father", World.ATZILUTH, "#C0C0C0"
        ),
        Sephirah.BINAH: _sephirah(
            Sephirah.BINAH, "בִּינָה", "Understanding", "The Divine Mother", World.BRIAH, "#000000"
        ),
        Sephirah.DAATH: _sephirah(
            Sephirah.DAATH, "דַּעַת", "Knowledge", "The Hidden Sephirah", World.YETZIRAH, "#4B0082"
        ),
        Sephirah.CHESED: _sephirah(
            Sephirah.CHESED, "חֶסֶד", "Mercy / Loving-kindness", "Divine Grace", World.BRIAH, "#4169E1"
        ),
        Sephirah.GEBURAH: _sephirah(
            Sephirah.GEBURAH, "גְּבוּרָה", "Strength / Severity", "Divine Power", World.BRIAH, "#DC143C"
        ),
        Sephirah.TIPHERETH: _sephirah(
            Sephirah.TIPHERETH, "תִּפְאֶרֶת", "Beauty / Harmony", "The Heart Center", World.YETZIRAH, "#FFD700"
        ),
        Sephirah.NETZACH: _sephirah(
            Sephirah.NETZACH, "נֶצַח", "Victory / Eternity", "Emotion & Desire", World.YETZIRAH, "#32CD32"
        ),
        Sephirah.HOD: _sephirah(
            Sephirah.HOD, "הוֹד", "Splendor / Glory", "Intellect & Communication", World.YETZIRAH, "#FF8C00"
        ),
        Sephirah.YESOD: _sephirah(
            Sephirah.YESOD, "יְסוֹד", "Foundation", "The Subconscious Gateway", World.YETZIRAH, "#9370DB"
        ),
        Sephirah.MALKUTH: _sephirah(
            Sephirah.MALKUTH, "מַלְכוּת", "Kingdom", "The Embodied World", World.ASSIAH, "#8B4513"
        ),
    }
)

PLANET_SEPHIRAH: MappingProxyType[Planet, Sephirah] = MappingProxyType(
    {
        Planet.SUN: Sephirah.TIPHERETH,
        Planet.MOON: Sephirah.YESOD,
        Planet.MERCURY: Sephirah.HOD,
        Planet.VENUS: Sephirah.NETZACH,
        Planet.MARS: Sephirah.GEBURAH,
        Planet.JUPITER: Sephirah.CHESED,
        Planet.SATURN: Sephirah.BINAH,
        Planet.URANUS: Sephirah.CHOKMAH,
        Planet.NEPTUNE: Sephirah.KETHER,
        Planet.PLUTO: Sephirah.DAATH,
    }
)

SEPHIRAH_PLANET: MappingProxyType[Sephirah, Planet] = MappingProxyType(
    {sephirah: planet for planet, sephirah in PLANET_SEPHIRAH.items()}
)

PLANET_INFLUENCES: MappingProxyType[Planet, str] = MappingProxyType(
    {
        Planet.SUN: "Consciousness, balance, integration of opposites, the authentic self",
        Planet.MOON: "Dreams, intuition, emotional patterns, connection to the collective unconscious",
        Planet.MERCURY: "Rational mind, language, analysis, intellectual understanding, magic",
        Planet.VENUS: "Love, art, beauty, instinct, victory through persistence",
        Planet.MARS: "Will, discipline, boundaries, destruction of the old, courageous action",
        Planet.JUPITER: "Expansion, generosity, abundance, wisdom, spiritual growth",
        Planet.SATURN: "Form, structure, limitation, maturity, deep wisdom through experience",
        Planet.URANUS: "Revolution, inspiration, breakthrough, cosmic consciousness, pure potential",
        Planet.NEPTUNE: "Transcendence, dissolution of ego, mystical union, divine inspiration",
        Planet.PLUTO: "Transformation, shadow work, death and rebirth, occult knowledge",
    }
)


def _zodiac(
    sign: Sign,
    letter: HebrewLetter,
    number: int,
    upper: Sephirah,
    lower: Sephirah,
    meaning: str,
) -> ZodiacPath:
    return ZodiacPath(sign=sign, letter=letter, path_number=number, connects=(upper, lower), meaning=meaning)


ZODIAC_PATHS: MappingProxyType[Sign, ZodiacPath] = MappingProxyType(
    {
        Sign.ARIES: _zodiac(
            Sign.ARIES, HebrewLetter.HE, 15, Sephirah.CHOKMAH, Sephirah.TIPHERETH,
            "The Window - Divine sight and vision",
        ),
        Sign.TAURUS: _zodiac(
            Sign.TAURUS, HebrewLetter.VAV, 16, Sephirah.CHOKMAH, Sephirah.CHESED,
            "The Nail - Connection and manifestation",
        ),
        Sign.GEMINI: _zodiac(
            Sign.GEMINI, HebrewLetter.ZAIN, 17, Sephirah.BINAH, Sephirah.TIPHERETH,
            "The Sword - Discrimination and choice",
        ),
        Sign.CANCER: _zodiac(
            Sign.CANCER, HebrewLetter.CHETH, 18, Sephirah.BINAH, Sephirah.GEBURAH,
            "The Fence - Protection and boundaries",
        ),
        Sign.LEO: _zodiac(
            Sign.LEO, HebrewLetter.TETH, 19, Sephirah.CHESED, Sephirah.GEBURAH,
            "The Serpent - Primal life force",
        ),
        Sign.VIRGO: _zodiac(
            Sign.VIRGO, HebrewLetter.YOD, 20, Sephirah.CHESED, Sephirah.TIPHERETH,
            "The Hand - Divine action and service",
        ),
        Sign.LIBRA: _zodiac(
            Sign.LIBRA, HebrewLetter.LAMED, 22, Sephirah.GEBURAH, Sephirah.TIPHERETH,
            "The Ox Goad - Justice and balance",
        ),
        Sign.SCORPIO: _zodiac(
            Sign.SCORPIO, HebrewLetter.NUN, 24, Sephirah.TIPHERETH, Sephirah.NETZACH,
            "The Fish - Death, transformation, regeneration",
        ),
        Sign.SAGITTARIUS: _zodiac(
            Sign.SAGITTARIUS, HebrewLetter.SAMECH, 25, Sephirah.TIPHERETH, Sephirah.YESOD,
            "The Prop - Divine support and temperance",
        ),
        Sign.CAPRICORN: _zodiac(
            Sign.CAPRICORN, HebrewLetter.AYIN, 26, Sephirah.TIPHERETH, Sephirah.HOD,
            "The Eye - Material manifestation",
        ),
        Sign.AQUARIUS: _zodiac(
            Sign.AQUARIUS, HebrewLetter.TZADDI, 28, Sephirah.NETZACH, Sephirah.YESOD,
            "The Fish Hook - Meditation and insight",
        ),
        Sign.PISCES: _zodiac(
            Sign.PISCES, HebrewLetter.QOPH, 29, Sephirah.NETZACH, Sephirah.MALKUTH,
            "The Back of the Head - Dreams and illusion",
        ),
    }
)


def _tree(a: Sephirah, b: Sephirah, letter: HebrewLetter, tarot: str, meaning: str) -> tuple:
    return frozenset((a, b)), TreePath(sephiroth=(a, b), letter=letter, tarot=tarot, meaning=meaning)


# Paths lit by natal aspects, keyed by the unordered pair of endpoints
TREE_PATHS: MappingProxyType[frozenset[Sephirah], TreePath] = MappingProxyType(
    dict(
        [
            _tree(Sephirah.KETHER, Sephirah.CHOKMAH, HebrewLetter.ALEPH, "The Fool",
                  "Divine breath initiating wisdom"),
            _tree(Sephirah.KETHER, Sephirah.BINAH, HebrewLetter.BETH, "The Magician",
                  "Structure emerging from source"),
            _tree(Sephirah.KETHER, Sephirah.TIPHERETH, HebrewLetter.GIMEL, "The High Priestess",
                  "Direct divine connection to heart"),
            _tree(Sephirah.CHOKMAH, Sephirah.BINAH, HebrewLetter.DALETH, "The Empress",
                  "Wisdom meets form"),
            _tree(Sephirah.CHOKMAH, Sephirah.TIPHERETH, HebrewLetter.VAV, "The Hierophant",
                  "Teaching flows from wisdom"),
            _tree(Sephirah.CHOKMAH, Sephirah.CHESED, HebrewLetter.HE, "The Emperor",
                  "Cosmic wisdom manifests as mercy"),
            _tree(Sephirah.BINAH, Sephirah.TIPHERETH, HebrewLetter.ZAIN, "The Lovers",
                  "Understanding guides the heart"),
            _tree(Sephirah.BINAH, Sephirah.GEBURAH, HebrewLetter.CHETH, "The Chariot",
                  "Structure requires discipline"),
            _tree(Sephirah.CHESED, Sephirah.TIPHERETH, HebrewLetter.YOD, "The Hermit",
                  "Grace centering in beauty"),
            _tree(Sephirah.CHESED, Sephirah.NETZACH, HebrewLetter.KAPH, "Wheel of Fortune",
                  "Expansion into feeling"),
            _tree(Sephirah.GEBURAH, Sephirah.TIPHERETH, HebrewLetter.LAMED, "Justice",
                  "Severity balanced by beauty"),
            _tree(Sephirah.GEBURAH, Sephirah.HOD, HebrewLetter.NUN, "Death",
                  "Discipline of thought"),
            _tree(Sephirah.TIPHERETH, Sephirah.NETZACH, HebrewLetter.SAMECH, "Temperance",
                  "Heart opens to desire"),
            _tree(Sephirah.TIPHERETH, Sephirah.HOD, HebrewLetter.AYIN, "The Devil",
                  "Consciousness and intellect unite"),
            _tree(Sephirah.TIPHERETH, Sephirah.YESOD, HebrewLetter.PEH, "The Tower",
                  "Truth shatters illusion"),
            _tree(Sephirah.NETZACH, Sephirah.YESOD, HebrewLetter.TZADDI, "The Star",
                  "Emotion grounds in foundation"),
            _tree(Sephirah.HOD, Sephirah.YESOD, HebrewLetter.QOPH, "The Moon",
                  "Mind descends to unconscious"),
            _tree(Sephirah.YESOD, Sephirah.MALKUTH, HebrewLetter.TAV, "The World",
                  "Foundation manifests in matter"),
            _tree(Sephirah.NETZACH, Sephirah.MALKUTH, HebrewLetter.RESH, "The Sun",
                  "Desire becomes tangible"),
            _tree(Sephirah.HOD, Sephirah.MALKUTH, HebrewLetter.SHIN, "Judgement",
                  "Thought crystallizes in action"),
        ]
    )
)


def _house(house: int, sephirah: Sephirah, area: str, meaning: str) -> HouseDomain:
    return HouseDomain(house=house, sephirah=sephirah, manifestation_area=area, kabbalistic_meaning=meaning)


HOUSE_DOMAINS: MappingProxyType[int, HouseDomain] = MappingProxyType(
    {
        1: _house(1, Sephirah.MALKUTH, "Physical presence & identity",
                  "The Kingdom - Your embodied self in the material world"),
        2: _house(2, Sephirah.YESOD, "Resources & values",
                  "Foundation - What supports and sustains you"),
        3: _house(3, Sephirah.HOD, "Communication & learning",
                  "Splendor - The mental realm and intellectual exchange"),
        4: _house(4, Sephirah.BINAH, "Home & roots",
                  "Understanding - The foundation of your inner world"),
        5: _house(5, Sephirah.TIPHERETH, "Creativity & self-expression",
                  "Beauty - The heart's creative overflow"),
        6: _house(6, Sephirah.NETZACH, "Service & daily work",
                  "Victory - Persistence in daily practice"),
        7: _house(7, Sephirah.CHESED, "Relationships & partnerships",
                  "Mercy - Grace in relationship with others"),
        8: _house(8, Sephirah.GEBURAH, "Transformation & shared resources",
                  "Strength - Power through deep change"),
        9: _house(9, Sephirah.CHOKMAH, "Philosophy & expansion",
                  "Wisdom - Higher knowledge and vision"),
        10: _house(10, Sephirah.KETHER, "Career & public life",
                   "Crown - Your highest calling manifested"),
        11: _house(11, Sephirah.DAATH, "Community & aspirations",
                   "Knowledge - Collective consciousness and hidden connections"),
        12: _house(12, Sephirah.MALKUTH, "Unconscious & spirituality",
                   "Kingdom - The hidden realm before manifestation"),
    }
)

FOUR_WORLDS: MappingProxyType[World, WorldInfo] = MappingProxyType(
    {
        World.ATZILUTH: WorldInfo(
            name=World.ATZILUTH,
            hebrew="אֲצִילוּת",
            realm="the Divine Realm",
            element=Element.FIRE,
            description="Emanation: pure spirit and the divine archetypes",
            color="#FFD700",
        ),
        World.BRIAH: WorldInfo(
            name=World.BRIAH,
            hebrew="בְּרִיאָה",
            realm="the Creative Realm",
            element=Element.WATER,
            description="Creation: thought, understanding and the highest mind",
            color="#4169E1",
        ),
        World.YETZIRAH: WorldInfo(
            name=World.YETZIRAH,
            hebrew="יְצִירָה",
            realm="the Formative Realm",
            element=Element.AIR,
            description="Formation: emotion, imagination and the astral patterns",
            color="#9370DB",
        ),
        World.ASSIAH: WorldInfo(
            name=World.ASSIAH,
            hebrew="עֲשִׂיָּה",
            realm="the Material Realm",
            element=Element.EARTH,
            description="Action: the body, deeds and physical reality",
            color="#8B4513",
        ),
    }
)

ELEMENT_WORLDS: MappingProxyType[Element, World] = MappingProxyType(
    {info.element: world for world, info in FOUR_WORLDS.items()}
)

# Token -> value for gematria over letter names, aliases and sephirah names
GEMATRIA_VALUES: MappingProxyType[str, int] = MappingProxyType(
    {
        **{letter.value: value for letter, value in LETTER_VALUES.items()},
        **{alias.title(): LETTER_VALUES[letter] for alias, letter in LETTER_ALIASES.items()},
        **{sephirah.value: value for sephirah, value in SEPHIRAH_VALUES.items()},
    }
)


def normalize_letter(name: str | HebrewLetter | None) -> HebrewLetter | None:
    """Canonical letter for a name or alias (case-insensitive), else None."""
    if name is None:
        return None
    text = str(name).strip()
    for letter in HebrewLetter:
        if letter.value.lower() == text.lower():
            return letter
    return LETTER_ALIASES.get(text.lower())


def house_world(house: int) -> World:
    """World of a house by quadrant: 1-3 Assiah up to 10-12 Atziluth."""
    if not 1 <= house <= 12:
        raise ValueError(f"house must be 1..12, got {house}")
    return (World.ASSIAH, World.YETZIRAH, World.BRIAH, World.ATZILUTH)[(house - 1) // 3]


def planet_world(planet: Planet) -> World:
    return SEPHIROTH[PLANET_SEPHIRAH[planet]].world


def tree_path_between(a: Sephirah, b: Sephirah) -> TreePath | None:
    return TREE_PATHS.get(frozenset((a, b)))


def sephirotic_influence(planet: Planet, sign: Sign, house: int | None = None) -> SephiroticInfluence:
    """How a planet's sephirah expresses through its sign's path and house."""
    sephirah = PLANET_SEPHIRAH[planet]
    path = ZODIAC_PATHS[sign]
    domain = HOUSE_DOMAINS.get(house) if house is not None else None

    synthesis = f"{sephirah} ({planet}) expressing through the path of {path.letter} ({sign})"
    if domain is not None:
        synthesis += f" in the realm of {domain.manifestation_area}"

    return SephiroticInfluence(
        planet=planet,
        sephirah=sephirah,
        sign=sign,
        letter=path.letter,
        house=house,
        manifestation_area=domain.manifestation_area if domain else None,
        kabbalistic_meaning=domain.kabbalistic_meaning if domain else None,
        synthesis=synthesis,
    )
