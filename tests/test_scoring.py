"""Tests for the scoring engine.

Tests verify:
1. Incorrect diagnoses score nothing
2. Reference Detective breakdown (hard case, instant solve, no clues)
3. Streak bonus cap at 250
4. Floor semantics for negative accuracy bonuses
5. Command breakdowns for each outcome class
6. Rank titles and score formatting
"""

import pytest

from eisgames.engine.scoring import (
    ScoreBreakdown,
    calculate_streak_bonus,
    format_score,
    get_difficulty_multiplier,
    get_rank_title,
    score_command,
    score_detective,
)
from eisgames.models.content import OutcomeClass


class TestScoreDetective:
    """Tests for score_detective."""

    def test_reference_breakdown(self, hard_case):
        """Hard case, 100 base, no time used, no clues: 100 + 50 + 30 + 0 at 1.5x = 270."""
        breakdown = score_detective(hard_case, 0, 0, True, 0)
        assert breakdown == ScoreBreakdown(
            base_points=100,
            time_bonus=50,
            accuracy_bonus=30,
            streak_bonus=0,
            difficulty_multiplier=1.5,
            total_score=270,
        )

    @pytest.mark.parametrize("streak", [0, 3, 6])
    def test_incorrect_scores_zero(self, hard_case, streak):
        """An incorrect diagnosis zeroes every field except the multiplier."""
        breakdown = score_detective(hard_case, 10, 2, False, streak)
        assert breakdown.total_score == 0
        assert breakdown.base_points == 0
        assert breakdown.time_bonus == 0
        assert breakdown.accuracy_bonus == 0
        assert breakdown.streak_bonus == 0
        assert breakdown.difficulty_multiplier == 1

    @pytest.mark.parametrize(
        "streak,expected",
        [(0, 0), (1, 50), (4, 200), (5, 250), (6, 250), (20, 250)],
    )
    def test_streak_bonus_cap(self, hard_case, streak, expected):
        """Streak bonus grows 50 per win and caps at 250."""
        assert score_detective(hard_case, 0, 0, True, streak).streak_bonus == expected
        assert calculate_streak_bonus(streak) == expected

    def test_medium_case_partial_bonuses(self, case_factory):
        """Half the time and half the clues on a medium case.

        time 25, accuracy 15, streak 100: (100 + 25 + 15 + 100) * 1.2 = 288
        """
        case = case_factory(difficulty="medium")
        breakdown = score_detective(case, 60, 2, True, 2)
        assert breakdown.time_bonus == 25
        assert breakdown.accuracy_bonus == 15
        assert breakdown.streak_bonus == 100
        assert breakdown.difficulty_multiplier == pytest.approx(1.2)
        assert breakdown.total_score == 288

    def test_overtime_gives_no_time_bonus(self, hard_case):
        """Time spent past the limit clamps the time ratio at zero."""
        assert score_detective(hard_case, 500, 0, True, 0).time_bonus == 0

    def test_too_many_clues_floors_toward_negative_infinity(self, case_factory):
        """Revealing more clues than the case has produces a floored penalty.

        clue ratio 1 - 5/4 = -0.25, 10 * 0.3 * -0.25 = -0.75, floor -> -1 (not 0)
        """
        case = case_factory(difficulty="easy", base_points=10, time_limit=100)
        breakdown = score_detective(case, 100, 5, True, 0)
        assert breakdown.accuracy_bonus == -1
        assert breakdown.total_score == 9

    def test_case_without_clues_earns_full_accuracy_bonus(self, case_factory):
        case = case_factory(difficulty="easy", clue_count=0)
        assert score_detective(case, 0, 0, True, 0).accuracy_bonus == 30

    def test_to_dict(self, hard_case):
        data = score_detective(hard_case, 0, 0, True, 0).to_dict()
        assert data["total_score"] == 270
        assert set(data) == {
            "base_points",
            "time_bonus",
            "accuracy_bonus",
            "streak_bonus",
            "difficulty_multiplier",
            "total_score",
        }


class TestScoreCommand:
    """Tests for score_command."""

    def test_reference_victory(self):
        """Victory in half the turns with 50 resources left: 1000 + 150 + 100."""
        breakdown = score_command(4, 8, "victory", 50)
        assert breakdown.base_points == 1000
        assert breakdown.time_bonus == 150
        assert breakdown.accuracy_bonus == 100
        assert breakdown.streak_bonus == 0
        assert breakdown.difficulty_multiplier == 1
        assert breakdown.total_score == 1250

    def test_partial_using_every_turn(self):
        breakdown = score_command(8, 8, OutcomeClass.PARTIAL, 0)
        assert breakdown.base_points == 500
        assert breakdown.time_bonus == 0
        assert breakdown.total_score == 500

    def test_failure_in_debt_is_negative(self):
        """Negative resources floor toward negative infinity: floor(-20.5) = -21."""
        breakdown = score_command(2, 8, "failure", -10.25)
        assert breakdown.base_points == 0
        assert breakdown.time_bonus == 0
        assert breakdown.accuracy_bonus == -21
        assert breakdown.total_score == -21

    def test_turn_overrun_gives_no_time_bonus(self):
        assert score_command(12, 8, "victory", 0).time_bonus == 0

    def test_invalid_total_turns_raises(self):
        with pytest.raises(ValueError, match="total_turns must be positive"):
            score_command(1, 0, "victory", 0)

    def test_unknown_outcome_raises(self):
        with pytest.raises(ValueError):
            score_command(1, 8, "stalemate", 0)


class TestHelpers:
    """Tests for multiplier, rank and formatting helpers."""

    @pytest.mark.parametrize(
        "difficulty,expected",
        [("easy", 1.0), ("medium", 1.2), ("hard", 1.5)],
    )
    def test_difficulty_multiplier(self, difficulty, expected):
        assert get_difficulty_multiplier(difficulty) == pytest.approx(expected)

    @pytest.mark.parametrize(
        "score,title",
        [
            (0, "Rookie"),
            (999, "Rookie"),
            (1000, "Trainee"),
            (2500, "Junior Detective"),
            (5000, "Field Officer"),
            (7499, "Field Officer"),
            (7500, "Senior Investigator"),
            (10000, "Master Epidemiologist"),
        ],
    )
    def test_rank_title(self, score, title):
        assert get_rank_title(score) == title

    def test_format_score(self):
        assert format_score(1234567) == "1,234,567"
        assert format_score(42) == "42"
