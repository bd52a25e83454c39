"""Durable cross-session progress for EIS Games.

Progress is the subset of store state that survives between sessions and is
handed to the durable progress store after every mutation.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Player(BaseModel):
    """Player identity, injected by the external auth layer."""

    id: str = Field(..., min_length=1)
    email: str = Field(default="")
    display_name: str = Field(default="")
    avatar_url: Optional[str] = Field(default=None)
    created_at: Optional[datetime] = Field(default=None)


class PlayerStats(BaseModel):
    """Aggregate stats owned by the external profile subsystem."""

    player_id: str
    total_score: int = Field(default=0)
    games_played: int = Field(default=0, ge=0)
    games_completed: int = Field(default=0, ge=0)
    detective_cases_completed: int = Field(default=0, ge=0)
    command_missions_completed: int = Field(default=0, ge=0)
    average_accuracy: float = Field(default=0.0)
    fastest_case_time: Optional[float] = Field(default=None)
    streak: int = Field(default=0, ge=0)
    longest_streak: int = Field(default=0, ge=0)


class PlayerBadge(BaseModel):
    """A badge awarded to a player."""

    player_id: str
    badge_id: str = Field(..., min_length=1)
    earned_at: datetime = Field(default_factory=_utcnow)


class Progress(BaseModel):
    """Durable progress.

    The completed id lists have set semantics: an id is recorded at most
    once, in the order it was first earned.

    Attributes:
        completed_case_ids: Cases diagnosed correctly
        completed_mission_ids: Missions completed
        streak: Consecutive correct Detective diagnoses
        player: Injected player identity
        player_stats: Aggregate stats from the profile subsystem
        badges: Awarded badges, unique by badge_id
    """

    completed_case_ids: list[str] = Field(default_factory=list)
    completed_mission_ids: list[str] = Field(default_factory=list)
    streak: int = Field(default=0, ge=0)
    player: Optional[Player] = Field(default=None)
    player_stats: Optional[PlayerStats] = Field(default=None)
    badges: list[PlayerBadge] = Field(default_factory=list)

    def mark_case_completed(self, case_id: str) -> bool:
        """Record a completed case. Returns False if it was already recorded."""
        if case_id in self.completed_case_ids:
            return False
        self.completed_case_ids.append(case_id)
        return True

    def mark_mission_completed(self, mission_id: str) -> bool:
        """Record a completed mission. Returns False if it was already recorded."""
        if mission_id in self.completed_mission_ids:
            return False
        self.completed_mission_ids.append(mission_id)
        return True

    def add_badge(self, badge: PlayerBadge) -> bool:
        """Award a badge unless one with the same badge_id is already held."""
        if any(held.badge_id == badge.badge_id for held in self.badges):
            return False
        self.badges.append(badge)
        return True

    def to_dict(self) -> dict:
        """Serialize progress to a JSON-compatible dictionary."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict) -> Progress:
        """Deserialize progress from a dictionary."""
        return cls.model_validate(data)
