"""Scoring engine for EIS Games.

Pure functions turning a finished attempt's parameters into a point
breakdown. Nothing here touches session state; callers invoke these with the
same values they used to drive the session transition.

Detective formulas:
- time_bonus = floor(base * 0.5 * max(0, 1 - time_spent / time_limit))
- accuracy_bonus = floor(base * 0.3 * (1 - clues_revealed / clue_count))
- streak_bonus = min(streak * 50, 250)
- total = floor((base + time_bonus + accuracy_bonus + streak_bonus) * multiplier)
- multiplier: hard 1.5, medium 1.2, easy 1.0

Command formulas:
- base = 1000 (victory), 500 (partial), 0 (failure)
- time_bonus = floor(base * 0.3 * max(0, 1 - turns_used / total_turns))
- accuracy_bonus = floor(resources_remaining * 2)
- total = base + time_bonus + accuracy_bonus

Every rounding step is a floor, so negative bonuses round toward negative
infinity. Bonuses are never clamped: revealing more clues than a case has, or
finishing a mission in resource debt, yields a penalty.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Union

from eisgames.models.content import Difficulty, OutcomeClass

if TYPE_CHECKING:
    from eisgames.models.content import Case

TIME_BONUS_RATE = 0.5
ACCURACY_BONUS_RATE = 0.3
STREAK_BONUS_PER_WIN = 50
STREAK_BONUS_CAP = 250

COMMAND_BASE_POINTS = {
    OutcomeClass.VICTORY: 1000,
    OutcomeClass.PARTIAL: 500,
    OutcomeClass.FAILURE: 0,
}
COMMAND_TIME_BONUS_RATE = 0.3
COMMAND_RESOURCE_RATE = 2

DIFFICULTY_MULTIPLIERS = {
    Difficulty.HARD: 1.5,
    Difficulty.MEDIUM: 1.2,
    Difficulty.EASY: 1.0,
}

RANK_TITLES = (
    (10000, "Master Epidemiologist"),
    (7500, "Senior Investigator"),
    (5000, "Field Officer"),
    (2500, "Junior Detective"),
    (1000, "Trainee"),
)
DEFAULT_RANK_TITLE = "Rookie"


@dataclass(frozen=True)
class ScoreBreakdown:
    """Decomposition of a total score into its contributing parts.

    Attributes:
        base_points: Points before bonuses
        time_bonus: Reward for finishing quickly
        accuracy_bonus: Reward for using few clues (Detective) or for
            resources left over (Command); may be negative
        streak_bonus: Reward for consecutive correct diagnoses
        difficulty_multiplier: Factor applied to the Detective subtotal
        total_score: Final points
    """

    base_points: int
    time_bonus: int
    accuracy_bonus: int
    streak_bonus: int
    difficulty_multiplier: float
    total_score: int

    def to_dict(self) -> dict:
        """Serialize breakdown to dictionary."""
        return asdict(self)


ZERO_BREAKDOWN = ScoreBreakdown(
    base_points=0,
    time_bonus=0,
    accuracy_bonus=0,
    streak_bonus=0,
    difficulty_multiplier=1.0,
    total_score=0,
)


def get_difficulty_multiplier(difficulty: Union[Difficulty, str]) -> float:
    """Return the Detective score multiplier for a difficulty.

    Examples:
        >>> get_difficulty_multiplier("hard")
        1.5
        >>> get_difficulty_multiplier(Difficulty.EASY)
        1.0
    """
    return DIFFICULTY_MULTIPLIERS.get(Difficulty(difficulty), 1.0)


def calculate_streak_bonus(current_streak: int) -> int:
    """Streak bonus, capped at STREAK_BONUS_CAP.

    Examples:
        >>> calculate_streak_bonus(4)
        200
        >>> calculate_streak_bonus(6)
        250
    """
    return min(current_streak * STREAK_BONUS_PER_WIN, STREAK_BONUS_CAP)


def score_detective(
    case: Case,
    time_spent_seconds: float,
    clues_revealed_count: int,
    is_correct: bool,
    current_streak: int,
) -> ScoreBreakdown:
    """Score a Detective attempt.

    An incorrect diagnosis scores nothing. A case without clues earns the
    full accuracy bonus.

    Args:
        case: The case that was played
        time_spent_seconds: Seconds used out of case.time_limit
        clues_revealed_count: Number of distinct clues revealed
        is_correct: Whether the submitted diagnosis was correct
        current_streak: Streak value to reward

    Returns:
        ScoreBreakdown for display

    Examples:
        A hard case with 100 base points solved instantly with no clues
        scores floor((100 + 50 + 30 + 0) * 1.5) = 270.
    """
    if not is_correct:
        return ZERO_BREAKDOWN

    base_points = case.base_points

    time_ratio = max(0.0, 1 - (time_spent_seconds / case.time_limit))
    time_bonus = math.floor(base_points * TIME_BONUS_RATE * time_ratio)

    if case.clues:
        clue_ratio = 1 - (clues_revealed_count / len(case.clues))
    else:
        clue_ratio = 1.0
    accuracy_bonus = math.floor(base_points * ACCURACY_BONUS_RATE * clue_ratio)

    streak_bonus = calculate_streak_bonus(current_streak)
    difficulty_multiplier = get_difficulty_multiplier(case.difficulty)

    subtotal = base_points + time_bonus + accuracy_bonus + streak_bonus
    total_score = math.floor(subtotal * difficulty_multiplier)

    return ScoreBreakdown(
        base_points=base_points,
        time_bonus=time_bonus,
        accuracy_bonus=accuracy_bonus,
        streak_bonus=streak_bonus,
        difficulty_multiplier=difficulty_multiplier,
        total_score=total_score,
    )


def score_command(
    turns_used: int,
    total_turns: int,
    outcome: Union[OutcomeClass, str],
    resources_remaining: float,
) -> ScoreBreakdown:
    """Score a finished Command mission.

    Args:
        turns_used: Turns taken to reach the outcome
        total_turns: Turns the mission allows
        outcome: victory, partial or failure
        resources_remaining: Caller-chosen scalar summary of leftover
            resources; negative values produce a penalty

    Returns:
        ScoreBreakdown for display

    Raises:
        ValueError: If total_turns is not positive or outcome is unknown

    Examples:
        >>> score_command(4, 8, "victory", 50).total_score
        1250
    """
    if total_turns <= 0:
        raise ValueError(f"total_turns must be positive, got {total_turns}")

    base_points = COMMAND_BASE_POINTS[OutcomeClass(outcome)]

    turn_ratio = max(0.0, 1 - (turns_used / total_turns))
    time_bonus = math.floor(base_points * COMMAND_TIME_BONUS_RATE * turn_ratio)

    accuracy_bonus = math.floor(resources_remaining * COMMAND_RESOURCE_RATE)

    return ScoreBreakdown(
        base_points=base_points,
        time_bonus=time_bonus,
        accuracy_bonus=accuracy_bonus,
        streak_bonus=0,
        difficulty_multiplier=1.0,
        total_score=base_points + time_bonus + accuracy_bonus,
    )


def format_score(score: int) -> str:
    """Format a score with thousands separators.

    Examples:
        >>> format_score(12345)
        '12,345'
    """
    return f"{score:,}"


def get_rank_title(total_score: int) -> str:
    """Return the rank title earned by a lifetime score.

    Examples:
        >>> get_rank_title(999)
        'Rookie'
        >>> get_rank_title(7500)
        'Senior Investigator'
    """
    for threshold, title in RANK_TITLES:
        if total_score >= threshold:
            return title
    return DEFAULT_RANK_TITLE
