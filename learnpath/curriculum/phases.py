"""
Curriculum phase table.

Structured curriculum with phased progression and mastery gates, taking a
student from absolute beginner to national-competition ready.

Each phase focuses on a tier + set of phonics patterns. A student must master
a minimum number of words (box >= 3) and reach a target overall accuracy
before the next phase unlocks. Gates are cumulative totals, not per-phase.

CURRICULUM is loaded once at import and never modified.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from learnpath.core.exceptions import CurriculumConfigError


@dataclass(frozen=True)
class CurriculumPhase:
    """One step of the curriculum."""

    id: str
    name: str
    description: str
    tier: str  # grade band this phase focuses on
    categories: tuple[str, ...]  # recommended practice order
    mastery_gate: int  # cumulative words at box >= 3
    accuracy_gate: float  # minimum overall accuracy (0-1)


TIER_LABELS: dict[str, str] = {
    "tier-1": "Tier 1 (K-1st)",
    "tier-2": "Tier 2 (2nd-3rd)",
    "tier-3": "Tier 3 (4th-5th)",
    "tier-4": "Tier 4 (6th-8th)",
    "tier-5": "Tier 5 (Competition)",
}


CURRICULUM: tuple[CurriculumPhase, ...] = (
    # Phase 1-3: Tier 1 (K-1st)
    CurriculumPhase(
        id="foundations-1",
        name="Foundations",
        description="Short words with simple sounds",
        tier="tier-1",
        categories=("cvc", "blends"),
        mastery_gate=20,
        accuracy_gate=0.7,
    ),
    CurriculumPhase(
        id="foundations-2",
        name="Sound Pairs",
        description="Digraphs and consonant combos",
        tier="tier-1",
        categories=("digraphs", "blends"),
        mastery_gate=40,
        accuracy_gate=0.7,
    ),
    CurriculumPhase(
        id="foundations-3",
        name="Tier 1 Mastery",
        description="Master all Kindergarten-1st patterns",
        tier="tier-1",
        categories=("tier-1",),
        mastery_gate=60,
        accuracy_gate=0.75,
    ),
    # Phase 4-6: Tier 2 (2nd-3rd)
    CurriculumPhase(
        id="developing-1",
        name="Silent Letters",
        description="Silent-e and tricky vowels",
        tier="tier-2",
        categories=("silent-e", "vowel-teams"),
        mastery_gate=80,
        accuracy_gate=0.7,
    ),
    CurriculumPhase(
        id="developing-2",
        name="Vowel Patterns",
        description="R-controlled vowels and diphthongs",
        tier="tier-2",
        categories=("r-controlled", "diphthongs"),
        mastery_gate=100,
        accuracy_gate=0.75,
    ),
    CurriculumPhase(
        id="developing-3",
        name="Tier 2 Mastery",
        description="Master all 2nd-3rd grade patterns",
        tier="tier-2",
        categories=("tier-2",),
        mastery_gate=130,
        accuracy_gate=0.8,
    ),
    # Phase 7-9: Tier 3 (4th-5th)
    CurriculumPhase(
        id="intermediate-1",
        name="Word Building",
        description="Prefixes, suffixes, and compound words",
        tier="tier-3",
        categories=("prefixes", "suffixes"),
        mastery_gate=160,
        accuracy_gate=0.7,
    ),
    CurriculumPhase(
        id="intermediate-2",
        name="Big Words",
        description="Multisyllable and irregular spellings",
        tier="tier-3",
        categories=("multisyllable",),
        mastery_gate=190,
        accuracy_gate=0.75,
    ),
    CurriculumPhase(
        id="intermediate-3",
        name="Tier 3 Mastery",
        description="Master all 4th-5th grade patterns",
        tier="tier-3",
        categories=("tier-3",),
        mastery_gate=220,
        accuracy_gate=0.8,
    ),
    # Phase 10-12: Tier 4 (6th-8th)
    CurriculumPhase(
        id="advanced-1",
        name="Latin Roots",
        description="Words from Latin origins",
        tier="tier-4",
        categories=("latin-roots",),
        mastery_gate=260,
        accuracy_gate=0.7,
    ),
    CurriculumPhase(
        id="advanced-2",
        name="Greek & French",
        description="Greek and French origin words",
        tier="tier-4",
        categories=("greek-roots", "french-origin"),
        mastery_gate=300,
        accuracy_gate=0.75,
    ),
    CurriculumPhase(
        id="advanced-3",
        name="Tier 4 Mastery",
        description="Master all middle-school patterns",
        tier="tier-4",
        categories=("tier-4",),
        mastery_gate=350,
        accuracy_gate=0.8,
    ),
    # Phase 13-14: Tier 5 (Competition)
    CurriculumPhase(
        id="competition-1",
        name="Competition Prep",
        description="Competition-level words and etymology",
        tier="tier-5",
        categories=("tier-5", "etymology"),
        mastery_gate=420,
        accuracy_gate=0.75,
    ),
    CurriculumPhase(
        id="competition-2",
        name="Championship",
        description="National competition words, the final frontier",
        tier="tier-5",
        categories=("tier-5", "etymology"),
        mastery_gate=500,
        accuracy_gate=0.85,
    ),
)


def validate_phases(phases: Sequence[CurriculumPhase]) -> None:
    """
    Check the ordering and range rules of a phase table.

    Raises:
        CurriculumConfigError: If the table is empty, ids repeat, a mastery
            gate is negative or decreases, or an accuracy gate is outside [0, 1]
    """
    if not phases:
        raise CurriculumConfigError("Curriculum must contain at least one phase")

    seen: set[str] = set()
    previous_gate = 0
    for phase in phases:
        if phase.id in seen:
            raise CurriculumConfigError(f"Duplicate phase id {phase.id!r}")
        seen.add(phase.id)
        if phase.mastery_gate < previous_gate:
            raise CurriculumConfigError(
                f"Phase {phase.id!r} mastery gate {phase.mastery_gate} "
                f"is below the previous gate {previous_gate}"
            )
        if not 0.0 <= phase.accuracy_gate <= 1.0:
            raise CurriculumConfigError(
                f"Phase {phase.id!r} accuracy gate {phase.accuracy_gate} is outside [0, 1]"
            )
        previous_gate = phase.mastery_gate


validate_phases(CURRICULUM)
