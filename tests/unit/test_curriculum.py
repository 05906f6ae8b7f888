"""
Unit tests for the curriculum table and evaluator.

Tests:
- Verbatim gate table and its validation
- Unlock / complete / progress rules
- Current-phase pointer
- Tier grouping
"""

import pytest

from learnpath.core.exceptions import CurriculumConfigError
from learnpath.curriculum import (
    CURRICULUM,
    CurriculumPhase,
    count_mastered,
    evaluate_curriculum,
    group_by_tier,
    validate_phases,
)


def _phase(id, gate, accuracy=0.7, tier="tier-1"):
    return CurriculumPhase(
        id=id,
        name=id.title(),
        description="",
        tier=tier,
        categories=("cvc",),
        mastery_gate=gate,
        accuracy_gate=accuracy,
    )


class TestCurriculumTable:
    def test_gates_reproduced_verbatim(self):
        gates = [(p.mastery_gate, p.accuracy_gate) for p in CURRICULUM]
        assert gates == [
            (20, 0.7), (40, 0.7), (60, 0.75),
            (80, 0.7), (100, 0.75), (130, 0.8),
            (160, 0.7), (190, 0.75), (220, 0.8),
            (260, 0.7), (300, 0.75), (350, 0.8),
            (420, 0.75), (500, 0.85),
        ]

    def test_fourteen_phases_in_five_tiers(self):
        assert len(CURRICULUM) == 14
        assert [p.tier for p in CURRICULUM][::3] == ["tier-1", "tier-2", "tier-3", "tier-4", "tier-5"]

    def test_decreasing_gate_rejected(self):
        with pytest.raises(CurriculumConfigError, match="below the previous gate"):
            validate_phases([_phase("a", 20), _phase("b", 10)])

    def test_accuracy_gate_out_of_range_rejected(self):
        with pytest.raises(CurriculumConfigError, match="outside"):
            validate_phases([_phase("a", 20, accuracy=1.5)])

    def test_empty_table_rejected(self):
        with pytest.raises(CurriculumConfigError):
            validate_phases([])

    def test_duplicate_ids_rejected(self):
        with pytest.raises(CurriculumConfigError, match="Duplicate"):
            validate_phases([_phase("a", 20), _phase("a", 30)])


class TestEvaluateCurriculum:
    def test_empty_history(self):
        """Scenario A: no records."""
        progress = evaluate_curriculum({})

        assert progress.mastered_words == 0
        assert progress.accuracy == 0.0
        assert progress.current_phase_index == 0
        first = progress.phases[0]
        assert first.unlocked is True
        assert first.complete is False
        assert first.progress == 0.0
        assert all(pp.locked for pp in progress.phases[1:])

    def test_first_phase_complete_second_in_progress(self, mastered_snapshot):
        """Scenario B: 25 mastered words, 27/30 correct."""
        records = mastered_snapshot(25, attempts=30, correct=27)

        progress = evaluate_curriculum(records)

        assert progress.mastered_words == 25
        assert progress.accuracy == pytest.approx(0.9)
        assert progress.phases[0].complete is True
        assert progress.phases[1].unlocked is True
        assert progress.phases[1].progress == pytest.approx(0.625)
        assert progress.phases[2].unlocked is False
        assert progress.current_phase_index == 1

    def test_accuracy_gate_blocks_unlock(self, mastered_snapshot):
        # 25 mastered but only 50% accuracy
        records = mastered_snapshot(25, attempts=50, correct=25)

        progress = evaluate_curriculum(records)

        assert progress.phases[0].complete is False
        assert progress.phases[1].unlocked is False
        assert progress.current_phase_index == 0
        assert progress.phases[0].progress == 1.0

    def test_all_phases_complete_clamps_to_last(self, mastered_snapshot):
        progress = evaluate_curriculum(mastered_snapshot(500))

        assert all(pp.complete for pp in progress.phases)
        assert progress.current_phase_index == len(CURRICULUM) - 1

    def test_gates_are_cumulative(self, mastered_snapshot):
        # 40 mastered words completes phases 0 and 1, current is 2
        progress = evaluate_curriculum(mastered_snapshot(40))

        assert [pp.complete for pp in progress.phases[:3]] == [True, True, False]
        assert progress.current_phase_index == 2
        assert progress.phases[2].progress == pytest.approx(40 / 60)

    def test_custom_phase_table(self, mastered_snapshot):
        phases = (_phase("a", 0), _phase("b", 5))

        progress = evaluate_curriculum(mastered_snapshot(0), phases)

        # Gate 0 counts as full progress; accuracy 0 still blocks completion
        assert progress.phases[0].progress == 1.0
        assert progress.phases[0].complete is False
        assert progress.current_phase_index == 0

    def test_locked_phase_blocks_later_phases(self, mastered_snapshot):
        # 72% clears Silent Letters' 0.7 gate but not Tier 1 Mastery's 0.75
        records = mastered_snapshot(80, attempts=200, correct=144)

        progress = evaluate_curriculum(records)
        flags = [(pp.phase.id, pp.unlocked, pp.complete) for pp in progress.phases[2:5]]

        assert flags == [
            ("foundations-3", True, False),
            ("developing-1", False, False),
            ("developing-2", False, False),
        ]
        assert progress.current_phase_index == 2

    def test_empty_custom_table_rejected(self):
        with pytest.raises(CurriculumConfigError):
            evaluate_curriculum({}, ())

    def test_malformed_custom_table_rejected(self):
        with pytest.raises(CurriculumConfigError, match="below the previous gate"):
            evaluate_curriculum({}, (_phase("a", 20), _phase("b", 10)))

    def test_count_mastered(self, make_record):
        records = {
            "a": make_record(box=3),
            "b": make_record(box=4),
            "c": make_record(box=2),
        }
        assert count_mastered(records) == 2


class TestCurriculumProperties:
    @pytest.mark.parametrize("mastered", [0, 5, 19, 20, 39, 61, 129, 221, 349, 420, 499, 500, 640])
    @pytest.mark.parametrize("accuracy_pct", [0, 60, 72, 78, 84, 100])
    def test_invariants(self, mastered_snapshot, mastered, accuracy_pct):
        attempts = max(mastered, 1) * 2
        correct = max(mastered, attempts * accuracy_pct // 100)
        progress = evaluate_curriculum(mastered_snapshot(mastered, attempts, correct))

        assert 0 <= progress.current_phase_index < len(CURRICULUM)
        assert 0.0 <= progress.accuracy <= 1.0
        for i, pp in enumerate(progress.phases):
            assert 0.0 <= pp.progress <= 1.0
            if i > 0 and pp.unlocked:
                prev = progress.phases[i - 1]
                assert prev.unlocked
                assert pp.mastered_words >= prev.phase.mastery_gate
                assert pp.accuracy >= prev.phase.accuracy_gate

    def test_mastered_count_monotonic(self, mastered_snapshot):
        counts = [evaluate_curriculum(mastered_snapshot(n, 100, 100)).mastered_words for n in range(0, 100, 7)]
        assert counts == sorted(counts)

    def test_idempotent(self, mastered_snapshot):
        records = mastered_snapshot(33, attempts=50, correct=41)
        assert evaluate_curriculum(records) == evaluate_curriculum(records)


class TestGroupByTier:
    def test_five_tiers_in_order(self):
        tiers = group_by_tier(evaluate_curriculum({}))

        assert [t.tier for t in tiers] == ["tier-1", "tier-2", "tier-3", "tier-4", "tier-5"]
        assert [len(t.phases) for t in tiers] == [3, 3, 3, 3, 2]

    def test_tier_flags_and_progress(self, mastered_snapshot):
        # 45 mastered: phases 0-1 complete, phase 2 in progress
        tiers = group_by_tier(evaluate_curriculum(mastered_snapshot(45)))
        first, second = tiers[0], tiers[1]

        assert first.complete is False
        assert first.locked is False
        assert first.current is True
        assert first.progress == pytest.approx(45 / 60)  # last member, not an average
        assert first.label == "Tier 1 (K-1st)"
        assert second.locked is True
        assert second.current is False

    def test_complete_tier(self, mastered_snapshot):
        tiers = group_by_tier(evaluate_curriculum(mastered_snapshot(60)))

        assert tiers[0].complete is True
        assert tiers[1].locked is False
        assert tiers[1].current is True
