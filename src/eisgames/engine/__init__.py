"""Game engine module for EIS Games.

This module contains the core game logic:
- session_store: The session state machine for Detective and Command modes
- scoring: Pure score calculations for finished attempts

Usage:
    from eisgames.engine import SessionStore, score_detective

    store = SessionStore(random_seed=42)
    store.start_case(case)
    store.reveal_clue(case.clues[0].id)
    store.select_diagnosis(case.correct_diagnosis)
    streak_before = store.streak
    if store.submit_diagnosis():
        detective = store.detective
        breakdown = score_detective(
            case,
            detective.time_spent,
            detective.clues_revealed_count,
            True,
            streak_before,
        )
        store.add_score(breakdown.total_score)
"""

from eisgames.engine.scoring import (
    ScoreBreakdown,
    calculate_streak_bonus,
    format_score,
    get_difficulty_multiplier,
    get_rank_title,
    score_command,
    score_detective,
)
from eisgames.engine.session_store import (
    ActionResult,
    ProgressHook,
    RandomSource,
    SessionStore,
)

__all__ = [
    # Session store
    "SessionStore",
    "ActionResult",
    "ProgressHook",
    "RandomSource",
    # Scoring
    "ScoreBreakdown",
    "score_detective",
    "score_command",
    "calculate_streak_bonus",
    "get_difficulty_multiplier",
    "format_score",
    "get_rank_title",
]
