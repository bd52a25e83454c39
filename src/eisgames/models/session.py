"""Game session models for EIS Games.

A GameSession is the one live play-through owned by a SessionStore. Only the
sub-state for the active mode is populated: ``detective`` while a case is in
play, ``command`` while a mission is.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from eisgames.models.content import (
    RESOURCE_FIELDS,
    Case,
    Mission,
    MissionResources,
    ResourceDelta,
)


class GameType(str, Enum):
    """Which mode the live session is playing."""

    DETECTIVE = "detective"
    COMMAND = "command"
    NONE = "none"


class GameStatus(str, Enum):
    """Top-level session status.

    Command missions never enter FAILED; their victory/partial/failure
    classification lives in the final score, not in the status.
    """

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (GameStatus.COMPLETED, GameStatus.FAILED)


class ActionResultKind(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


class ActionRecord(BaseModel):
    """One resolved Command action, kept in chronological order."""

    turn: int = Field(..., ge=1)
    action_id: str
    result: ActionResultKind
    message: str = Field(default="")


class DetectiveState(BaseModel):
    """Detective sub-state.

    Attributes:
        case: The case being played
        revealed_clues: Ids of revealed clues (membership only)
        selected_diagnosis: Currently selected diagnosis id, if any
        time_remaining: Seconds left on the externally driven countdown
    """

    case: Case
    revealed_clues: set[str] = Field(default_factory=set)
    selected_diagnosis: Optional[str] = Field(default=None)
    time_remaining: float = Field(default=0.0)

    @property
    def clues_revealed_count(self) -> int:
        return len(self.revealed_clues)

    @property
    def time_spent(self) -> float:
        """Seconds elapsed since the case started, per the countdown."""
        return self.case.time_limit - self.time_remaining


class CommandState(BaseModel):
    """Command sub-state.

    Attributes:
        mission: The mission being played
        current_turn: Turn counter, starts at 1
        resources: Current resource snapshot (may be negative)
        action_history: Resolved actions in the order they were taken
    """

    mission: Mission
    current_turn: int = Field(default=1, ge=1)
    resources: MissionResources = Field(default_factory=MissionResources)
    action_history: list[ActionRecord] = Field(default_factory=list)


class GameSession(BaseModel):
    """The single live session held by a SessionStore."""

    game_type: GameType = Field(default=GameType.NONE)
    status: GameStatus = Field(default=GameStatus.NOT_STARTED)
    score: int = Field(default=0)
    detective: Optional[DetectiveState] = Field(default=None)
    command: Optional[CommandState] = Field(default=None)

    @property
    def is_in_progress(self) -> bool:
        return self.status == GameStatus.IN_PROGRESS

    def to_dict(self) -> dict:
        """Serialize session to a JSON-compatible dictionary."""
        return self.model_dump(mode="json")


def apply_resource_delta(
    resources: MissionResources,
    delta: ResourceDelta,
    sign: int = 1,
) -> MissionResources:
    """Apply a partial resource delta and return the new snapshot.

    Fields left undefined on ``delta`` are untouched. ``sign=-1`` subtracts,
    which is how action costs are charged. Results are not clamped.

    Args:
        resources: Current resources
        delta: Partial change to apply
        sign: +1 to add the delta, -1 to subtract it

    Returns:
        New MissionResources with the delta applied
    """
    updated = {name: getattr(resources, name) for name in RESOURCE_FIELDS}
    for name, value in delta.defined_fields().items():
        updated[name] += sign * value
    return MissionResources(**updated)
