"""Closed vocabularies used across the chart, tree and reading schemas."""

from __future__ import annotations

from enum import StrEnum


class Planet(StrEnum):
    SUN = "Sun"
    MOON = "Moon"
    MERCURY = "Mercury"
    VENUS = "Venus"
    MARS = "Mars"
    JUPITER = "Jupiter"
    SATURN = "Saturn"
    URANUS = "Uranus"
    NEPTUNE = "Neptune"
    PLUTO = "Pluto"


class Sign(StrEnum):
    ARIES = "Aries"
    TAURUS = "Taurus"
    GEMINI = "Gemini"
    CANCER = "Cancer"
    LEO = "Leo"
    VIRGO = "Virgo"
    LIBRA = "Libra"
    SCORPIO = "Scorpio"
    SAGITTARIUS = "Sagittarius"
    CAPRICORN = "Capricorn"
    AQUARIUS = "Aquarius"
    PISCES = "Pisces"


class Element(StrEnum):
    FIRE = "Fire"
    EARTH = "Earth"
    AIR = "Air"
    WATER = "Water"


class AspectType(StrEnum):
    CONJUNCTION = "conjunction"
    OPPOSITION = "opposition"
    TRINE = "trine"
    SQUARE = "square"
    SEXTILE = "sextile"
    QUINCUNX = "quincunx"


class AspectQuality(StrEnum):
    HARMONIOUS = "harmonious"
    CHALLENGING = "challenging"
    NEUTRAL = "neutral"


class Illumination(StrEnum):
    FULL = "full"
    PARTIAL = "partial"
    SHADOW = "shadow"


class Intensity(StrEnum):
    STRONG = "strong"
    MODERATE = "moderate"
    WEAK = "weak"


class Sephirah(StrEnum):
    KETHER = "Kether"
    CHOKMAH = "Chokmah"
    BINAH = "Binah"
    DAATH = "Daath"
    CHESED = "Chesed"
    GEBURAH = "Geburah"
    TIPHERETH = "Tiphereth"
    NETZACH = "Netzach"
    HOD = "Hod"
    YESOD = "Yesod"
    MALKUTH = "Malkuth"


class Pillar(StrEnum):
    LEFT = "Left"
    RIGHT = "Right"
    MIDDLE = "Middle"


class World(StrEnum):
    ATZILUTH = "Atziluth"
    BRIAH = "Briah"
    YETZIRAH = "Yetzirah"
    ASSIAH = "Assiah"


class HebrewLetter(StrEnum):
    ALEPH = "Aleph"
    BETH = "Beth"
    GIMEL = "Gimel"
    DALETH = "Daleth"
    HE = "He"
    VAV = "Vav"
    ZAIN = "Zain"
    CHETH = "Cheth"
    TETH = "Teth"
    YOD = "Yod"
    KAPH = "Kaph"
    LAMED = "Lamed"
    MEM = "Mem"
    NUN = "Nun"
    SAMECH = "Samech"
    AYIN = "Ayin"
    PEH = "Peh"
    TZADDI = "Tzaddi"
    QOPH = "Qoph"
    RESH = "Resh"
    SHIN = "Shin"
    TAV = "Tav"


class EdgeState(StrEnum):
    CONNECTED = "connected"
    TO_UNLIT = "to_unlit"
    ISOLATED = "isolated"


class NodeState(StrEnum):
    CONNECTED = "connected"
    STRANDED = "stranded"
