"""EIS Games models.

This module exports the content, session and progress data structures.
"""

from .content import (
    RESOURCE_FIELDS,
    ActionOutcome,
    ActionOutcomes,
    Case,
    Clue,
    ClueType,
    DiagnosisOption,
    Difficulty,
    Era,
    Mission,
    MissionAction,
    MissionEvent,
    MissionOutcome,
    MissionResources,
    OutcomeClass,
    ResourceDelta,
)
from .progress import Player, PlayerBadge, PlayerStats, Progress
from .session import (
    ActionRecord,
    ActionResultKind,
    CommandState,
    DetectiveState,
    GameSession,
    GameStatus,
    GameType,
    apply_resource_delta,
)

__all__ = [
    # Enums
    "Era",
    "Difficulty",
    "ClueType",
    "OutcomeClass",
    "GameType",
    "GameStatus",
    "ActionResultKind",
    # Content
    "Case",
    "Clue",
    "DiagnosisOption",
    "Mission",
    "MissionAction",
    "MissionEvent",
    "MissionOutcome",
    "MissionResources",
    "ResourceDelta",
    "ActionOutcome",
    "ActionOutcomes",
    "RESOURCE_FIELDS",
    # Session
    "GameSession",
    "DetectiveState",
    "CommandState",
    "ActionRecord",
    "apply_resource_delta",
    # Progress
    "Progress",
    "Player",
    "PlayerStats",
    "PlayerBadge",
]
