"""Pathway diagnostics: stranded sephiroth and ungrounded sign paths.

A sephirah is stranded when it holds a planet but no lit sign path joins it
to another lit sephirah. A sign path is ungrounded when exactly one of its
two spheres holds a planet: either the energy has nowhere to land
(destination inactive) or nothing feeds it (source inactive).
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from shefa.enums import Planet, Sephirah
from shefa.schemas.chart import PlanetPlacement
from shefa.schemas.kabbalah import (
    PathwayDiagnostics,
    StrandedSephirah,
    UngroundedPathway,
    ZodiacPathActivation,
)

from kabbalah.correspondences import CANONICAL_ORDER, PLANET_SEPHIRAH, SEPHIRAH_PLANET
from kabbalah.paths import zodiac_path_activations

logger = logging.getLogger(__name__)

STRANDED_DIAGNOSES: dict[Sephirah, tuple[str, str]] = {
    Sephirah.KETHER: (
        "{planet} in Kether operates in complete isolation, pure divine consciousness "
        "disconnected from the rest of the Tree. You have access to transcendent awareness but "
        "it exists apart from your embodied life.",
        "Consciously bridge the gap between your highest spiritual insights and daily reality. "
        "Practice bringing mystical awareness into ordinary moments. Create rituals that connect "
        "the transcendent to the tangible.",
    ),
    Sephirah.CHOKMAH: (
        "{planet} in Chokmah is an isolated fountain of wisdom, raw creative potential that "
        "isn't flowing through the Tree. You have brilliant insights and revolutionary ideas "
        "that remain ungrounded.",
        "Channel your cosmic wisdom into structured form. Write down your insights, share your "
        "visions with others, and create systems to capture fleeting inspirations. Connect divine "
        "wisdom to practical application.",
    ),
    Sephirah.BINAH: (
        "{planet} in Binah represents isolated understanding, deep comprehension that hasn't "
        "integrated with the heart or descended into manifestation. Your wisdom is "
        "self-contained.",
        "Share your understanding with others. Let your deep knowledge inform your relationships "
        "and creative expression. Practice teaching what you know, which creates pathways for "
        "energy to flow outward.",
    ),
    Sephirah.CHESED: (
        "{planet} in Chesed is mercy and grace operating in isolation, abundance that cannot "
        "find channels to express. You have generosity and expansion that feels blocked or "
        "contained.",
        "Create deliberate channels for giving. Establish regular practices of generosity, "
        "mentoring, or blessing others. Your Chesed energy needs active outlets to flow through "
        "the Tree.",
    ),
    Sephirah.GEBURAH: (
        "{planet} in Geburah is isolated strength and discipline, power and boundaries that "
        "aren't integrated with the rest of your being. Your capacity for discernment operates "
        "separately from heart or action.",
        "Integrate your strength with compassion (connect to Chesed) and authentic "
        "self-expression (connect to Tiphereth). Use your discipline to support your whole Tree, "
        "not just one sphere.",
    ),
    Sephirah.TIPHERETH: (
        "{planet} in Tiphereth is an isolated heart center. Your authentic self and "
        "consciousness exist in their own sphere, disconnected from mind, emotion, or "
        "manifestation. You know who you are but cannot express it.",
        "This is a critical blockage requiring conscious work. Practice expressing your "
        "authentic self through creativity, relationships, and physical action. Bridge your "
        "heart to mind (Hod), emotions (Netzach), and body (Malkuth).",
    ),
    Sephirah.NETZACH: (
        "{planet} in Netzach represents isolated desire and emotion, feelings and creative "
        "impulses that aren't connected to conscious direction or grounding. Your passions "
        "operate independently.",
        "Connect your desires to your heart center (Tiphereth) through conscious awareness. "
        "Ground your emotions through body practices. Let your feelings inform your thinking "
        "(connect to Hod) and manifest (connect to Malkuth).",
    ),
    Sephirah.HOD: (
        "{planet} in Hod is an isolated mind. Intellectual activity, analysis, and "
        "communication happen in a bubble separate from emotion, intuition, or manifestation. "
        "Your thoughts don't connect to the rest of you.",
        "Integrate thinking with feeling. Practice embodied cognition and notice how thoughts "
        "feel in your body. Connect ideas to desires (Netzach) and bring mental clarity into "
        "your authentic self (Tiphereth). Ground thoughts into action.",
    ),
    Sephirah.YESOD: (
        "{planet} in Yesod is an isolated foundation. Your subconscious, dreams, and intuitive "
        "patterns operate separately from conscious awareness and physical manifestation. "
        "Inner knowing remains hidden.",
        "Bring unconscious material into consciousness through dreamwork, journaling, and "
        "therapy. Create bridges between your inner world and outer expression. Let intuition "
        "inform action.",
    ),
    Sephirah.MALKUTH: (
        "{planet} in Malkuth is isolated physicality. Your body and material reality are "
        "disconnected from higher consciousness, emotion, or mental understanding.",
        "Practice embodied spirituality through yoga, tai chi or conscious movement. Recognize "
        "your body as a sacred vessel. Connect physical sensations to emotions, thoughts, and "
        "spirit.",
    ),
    Sephirah.DAATH: (
        "{planet} in Daath (the hidden sephirah) operates in profound isolation, knowledge "
        "that exists in the abyss, transformation happening in the void. This is shadow work "
        "territory.",
        "Honor the mystery. Daath is the point where the known dissolves into the unknown. "
        "Practice sitting with uncertainty. Shadow work and deep introspection will help "
        "integrate this energy.",
    ),
}

# How to receive energy into a sphere that holds no planet
RECEIVING_GUIDANCE: dict[Sephirah, str] = {
    Sephirah.KETHER: "Connect to pure consciousness through meditation and contemplative practice.",
    Sephirah.CHOKMAH: "Open to creative inspiration and revolutionary wisdom through brainstorming and visioning.",
    Sephirah.BINAH: "Develop structured understanding through study, reflection, and building mental frameworks.",
    Sephirah.CHESED: "Create channels for abundance and mercy through generosity, blessing others, and expanding your worldview.",
    Sephirah.GEBURAH: "Establish boundaries and exercise discernment through saying no, cutting away excess, and focused discipline.",
    Sephirah.TIPHERETH: "Cultivate authentic self-expression through creative work, heart-centered practices, and conscious living.",
    Sephirah.NETZACH: "Activate desire and emotion through artistic expression, relationship, and allowing yourself to want.",
    Sephirah.HOD: "Engage the mind through study, communication, writing, and intellectual pursuits.",
    Sephirah.YESOD: "Ground into the unconscious through dreamwork, imagination, and connecting to cyclical patterns.",
    Sephirah.MALKUTH: "Manifest in physical reality through embodied action, material creation, and grounding practices.",
    Sephirah.DAATH: "Embrace shadow work, face the unknown, and allow transformation through the void.",
}

# How to awaken a dormant sphere that should feed a path
ACTIVATION_GUIDANCE: dict[Sephirah, str] = {
    Sephirah.KETHER: "Awaken divine consciousness through deep meditation, mystical practices, and ego dissolution.",
    Sephirah.CHOKMAH: "Activate wisdom through embracing inspiration, studying sacred texts, and opening to cosmic intelligence.",
    Sephirah.BINAH: "Develop understanding through contemplation, patience, and allowing structures of meaning to form.",
    Sephirah.CHESED: "Open the flow of mercy through practicing generosity, gratitude, and expansive thinking.",
    Sephirah.GEBURAH: "Strengthen discipline through setting boundaries, exercising will, and pruning what no longer serves.",
    Sephirah.TIPHERETH: "Activate your heart center through authenticity, creativity, and integrating all aspects of self.",
    Sephirah.NETZACH: "Awaken desire through art, relationship, perseverance, and honoring your feelings.",
    Sephirah.HOD: "Engage the intellect through learning, communication, analysis, and sharing knowledge.",
    Sephirah.YESOD: "Connect to the foundation through dreamwork, unconscious exploration, and honoring cycles.",
    Sephirah.MALKUTH: "Ground into physicality through embodiment, material creation, and conscious presence in your body.",
    Sephirah.DAATH: "Enter the abyss through shadow work, facing fears, and allowing dissolution of known structures.",
}

HEALTHY_PATTERN = (
    "Your Tree of Life shows healthy integration. All active sephiroth have connecting "
    "pathways, and all illuminated paths connect active spheres. Energy flows freely through "
    "your spiritual architecture."
)
HEALTHY_WORK = (
    "Your primary work is to maintain the integration you have achieved and deepen the flow "
    "through existing pathways."
)


def _stranded(sephirah: Sephirah, planet: Planet | None) -> StrandedSephirah:
    diagnosis, guidance = STRANDED_DIAGNOSES[sephirah]
    return StrandedSephirah(
        name=sephirah,
        planet=planet,
        spiritual_diagnosis=diagnosis.format(planet=planet or "The energy"),
        integration_guidance=guidance,
    )


def _ungrounded(path: ZodiacPathActivation, source_active: bool) -> UngroundedPathway:
    upper, lower = path.connects
    name = f"{path.letter} ({path.sign})"
    if source_active:
        diagnosis = (
            f"The pathway {name} is illuminated from {upper} toward {lower}, but {lower} has no "
            f"planetary presence to receive this energy. {path.meaning}. Energy is flowing but "
            "cannot ground or manifest, like lightning seeking earth but finding no conductor."
        )
        guidance = (
            "Your spiritual work: Create conscious vessels to receive what's trying to descend. "
            f"{lower} represents an area of life that needs activation. {RECEIVING_GUIDANCE[lower]} "
            f"Without this work, the energy flowing through {path.sign} will remain ungrounded."
        )
        inactive, blockage = lower, "destination_inactive"
    else:
        diagnosis = (
            f"The pathway {name} connects {upper} to {lower}, but {upper} has no planetary "
            f"presence to send energy through this channel. {lower} is active and receptive, but "
            "the source sphere is dark, like a dam with nothing flowing into the reservoir."
        )
        guidance = (
            f"Your spiritual work: Activate the source sphere {upper} through conscious practice. "
            f"{ACTIVATION_GUIDANCE[upper]} Until {upper} is awakened, {lower} cannot receive the "
            f"full blessing that wants to flow through the {path.sign} pathway."
        )
        inactive, blockage = upper, "source_inactive"

    return UngroundedPathway(
        from_sephirah=upper,
        to_sephirah=lower,
        inactive_sephirah=inactive,
        sign=path.sign,
        letter=path.letter,
        path_meaning=path.meaning,
        blockage=blockage,
        spiritual_diagnosis=diagnosis,
        manifestation_guidance=guidance,
    )


def _overall_pattern(stranded: list[StrandedSephirah], ungrounded: list[UngroundedPathway]) -> str:
    if not stranded and not ungrounded:
        return HEALTHY_PATTERN
    parts = []
    if stranded:
        names = ", ".join(s.name for s in stranded)
        parts.append(
            f"{len(stranded)} sphere(s) are operating in isolation ({names}), indicating areas of "
            "your being that need conscious integration"
        )
    to_inactive = sum(p.blockage == "destination_inactive" for p in ungrounded)
    from_inactive = len(ungrounded) - to_inactive
    if to_inactive:
        parts.append(
            f"{to_inactive} pathway(s) are flowing toward inactive spheres, energy seeking "
            "manifestation but finding no vessel"
        )
    if from_inactive:
        parts.append(
            f"{from_inactive} pathway(s) originate from inactive spheres, potential blessings "
            "that cannot flow due to a dormant source"
        )
    return "; ".join(parts) + "."


def _spiritual_work(stranded: list[StrandedSephirah], ungrounded: list[UngroundedPathway]) -> str:
    if not stranded and not ungrounded:
        return HEALTHY_WORK
    work = []
    if stranded:
        work.append(
            "**Integration Work**: Consciously create bridges from isolated spheres to the rest of "
            "your Tree. Each stranded sephirah is energy operating in a bubble, and your work is "
            "to let that energy flow."
        )
    if any(p.blockage == "destination_inactive" for p in ungrounded):
        work.append(
            "**Manifestation Work**: Energy is trying to descend but finding no receiving vessel. "
            "Create conscious structures, practices, and commitments that allow ungrounded energy "
            "to land in your life."
        )
    if any(p.blockage == "source_inactive" for p in ungrounded):
        work.append(
            "**Activation Work**: Dormant spheres need awakening so energy can flow from them. "
            "Identify which areas of life you've neglected and deliberately engage them through "
            "practice."
        )
    return " ".join(work)


def diagnose_pathways(
    placements: Sequence[PlanetPlacement],
    zodiac_paths: Sequence[ZodiacPathActivation] | None = None,
) -> PathwayDiagnostics:
    """Stranded spheres and ungrounded sign paths for a set of placements.

    ``zodiac_paths`` defaults to the sign paths the placements occupy.
    """
    if zodiac_paths is None:
        zodiac_paths = zodiac_path_activations(placements)

    active = {PLANET_SEPHIRAH[placement.body] for placement in placements}

    neighbours: dict[Sephirah, set[Sephirah]] = {}
    for path in zodiac_paths:
        upper, lower = path.connects
        neighbours.setdefault(upper, set()).add(lower)
        neighbours.setdefault(lower, set()).add(upper)

    stranded = [
        _stranded(sephirah, SEPHIRAH_PLANET[sephirah])
        for sephirah in CANONICAL_ORDER
        if sephirah in active and not (neighbours.get(sephirah, set()) & active)
    ]

    ungrounded = []
    for path in zodiac_paths:
        upper, lower = path.connects
        if (upper in active) != (lower in active):
            ungrounded.append(_ungrounded(path, source_active=upper in active))

    if stranded:
        logger.debug("Stranded sephiroth: %s", ", ".join(s.name for s in stranded))

    return PathwayDiagnostics(
        stranded_sephiroth=stranded,
        ungrounded_pathways=ungrounded,
        has_isolated_energy=bool(stranded),
        has_blocked_manifestation=bool(ungrounded),
        overall_pattern=_overall_pattern(stranded, ungrounded),
        spiritual_work=_spiritual_work(stranded, ungrounded),
    )
