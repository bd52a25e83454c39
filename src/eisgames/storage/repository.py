"""Abstract repository interfaces for EIS Games storage.

This module defines the abstract base classes for the content catalog and the
durable progress store. The session store only depends on these interfaces,
so the backing storage can be swapped without touching game logic.
"""

from abc import ABC, abstractmethod
from typing import Optional

from eisgames.models.content import Case, Era, Mission


class ContentRepository(ABC):
    """Abstract base class for read-only case and mission content."""

    @abstractmethod
    def list_cases(self, era: Optional[Era] = None) -> list[Case]:
        """Return all cases, optionally restricted to one era.

        Args:
            era: Era to filter by

        Returns:
            Cases ordered by year, then id
        """
        pass

    @abstractmethod
    def get_case(self, case_id: str) -> Optional[Case]:
        """Load a case by ID.

        Args:
            case_id: Unique identifier for the case

        Returns:
            The case, or None if not found
        """
        pass

    @abstractmethod
    def list_missions(self) -> list[Mission]:
        """Return all missions ordered by id."""
        pass

    @abstractmethod
    def get_mission(self, mission_id: str) -> Optional[Mission]:
        """Load a mission by ID.

        Args:
            mission_id: Unique identifier for the mission

        Returns:
            The mission, or None if not found
        """
        pass


class ProgressRepository(ABC):
    """Abstract base class for durable player progress."""

    @abstractmethod
    def save_progress(self, player_id: str, progress: dict) -> None:
        """Persist a player's complete progress, replacing what was stored.

        Args:
            player_id: Player the progress belongs to
            progress: Progress dict as produced by Progress.to_dict()
        """
        pass

    @abstractmethod
    def load_progress(self, player_id: str) -> Optional[dict]:
        """Load a player's progress.

        Args:
            player_id: Player to load

        Returns:
            Progress dict, or None if nothing was saved yet
        """
        pass

    @abstractmethod
    def list_players(self) -> list[str]:
        """Return ids of all players with saved progress."""
        pass

    @abstractmethod
    def delete_progress(self, player_id: str) -> bool:
        """Delete a player's progress.

        Args:
            player_id: Player whose progress to delete

        Returns:
            True if deleted, False if not found
        """
        pass
