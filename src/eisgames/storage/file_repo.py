"""File-based repository implementations using JSON files.

Content lives under ``<content_path>/cases/*.json`` and
``<content_path>/missions/*.json``; each file holds one case or mission, or a
list of them. Progress is stored as one JSON file per player.
"""

import hashlib
import json
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, TypeVar

from pydantic import BaseModel, ValidationError

from eisgames.models.content import Case, Era, Mission

from .repository import ContentRepository, ProgressRepository

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def safe_filename(player_id: str) -> str:
    """Map a player id onto a filesystem-safe file stem.

    Examples:
        >>> safe_filename("ada@example.org")
        'ada-example.org'
        >>> safe_filename("../etc/passwd")
        'etc-passwd'
    """
    stem = re.sub(r"[^A-Za-z0-9._-]+", "-", player_id)
    stem = re.sub(r"-+", "-", stem)
    return stem.strip("-.") or "player"


def progress_file_stem(player_id: str) -> str:
    """Map a player id onto a unique progress file stem.

    The sanitized id stays readable; a short digest of the raw id keeps two
    ids that sanitize alike (``ada@example.org`` and ``ada-example.org``)
    in separate files.
    """
    digest = hashlib.blake2b(player_id.encode("utf-8"), digest_size=6).hexdigest()
    return f"{safe_filename(player_id)}-{digest}"


def _load_models(directory: Path, model: type[ModelT]) -> list[ModelT]:
    """Load and validate every model stored in the JSON files of a directory."""
    items: list[ModelT] = []
    for path in sorted(directory.glob("*.json")):
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        entries = data if isinstance(data, list) else [data]
        try:
            items.extend(model.model_validate(entry) for entry in entries)
        except ValidationError as e:
            raise ValueError(f"Invalid {model.__name__.lower()} content in {path}: {e}") from e
    return items


class FileContentRepository(ContentRepository):
    """JSON file-based content catalog.

    Files are read once, on first access, and cached for the lifetime of the
    repository since content never changes at runtime.
    """

    def __init__(self, content_path: str | Path = "content"):
        """Initialize repository.

        Args:
            content_path: Directory containing cases/ and missions/
        """
        self.content_path = Path(content_path)
        self.cases_path = self.content_path / "cases"
        self.missions_path = self.content_path / "missions"
        self._cases: Optional[dict[str, Case]] = None
        self._missions: Optional[dict[str, Mission]] = None

    def _load_cases(self) -> dict[str, Case]:
        if self._cases is None:
            cases = _load_models(self.cases_path, Case) if self.cases_path.is_dir() else []
            self._cases = {case.id: case for case in cases}
            logger.info(f"Loaded {len(self._cases)} cases from {self.cases_path}")
        return self._cases

    def _load_missions(self) -> dict[str, Mission]:
        if self._missions is None:
            missions = (
                _load_models(self.missions_path, Mission) if self.missions_path.is_dir() else []
            )
            self._missions = {mission.id: mission for mission in missions}
            logger.info(f"Loaded {len(self._missions)} missions from {self.missions_path}")
        return self._missions

    def list_cases(self, era: Optional[Era] = None) -> list[Case]:
        """Return all cases, optionally restricted to one era."""
        cases = self._load_cases().values()
        if era is not None:
            era = Era(era)
            cases = [case for case in cases if case.era == era]
        return sorted(cases, key=lambda c: (c.year, c.id))

    def get_case(self, case_id: str) -> Optional[Case]:
        """Load a case by ID."""
        return self._load_cases().get(case_id)

    def list_missions(self) -> list[Mission]:
        """Return all missions ordered by id."""
        return sorted(self._load_missions().values(), key=lambda m: m.id)

    def get_mission(self, mission_id: str) -> Optional[Mission]:
        """Load a mission by ID."""
        return self._load_missions().get(mission_id)


class FileProgressRepository(ProgressRepository):
    """JSON file-based progress repository.

    Stores each player's progress as ``<player>-<digest>.json`` in the
    progress directory.
    """

    def __init__(self, progress_path: str | Path = "progress"):
        """Initialize repository.

        Args:
            progress_path: Path to progress directory
        """
        self.progress_path = Path(progress_path)
        self.progress_path.mkdir(parents=True, exist_ok=True)

    def _get_progress_path(self, player_id: str) -> Path:
        """Get path to a player's progress file."""
        return self.progress_path / f"{progress_file_stem(player_id)}.json"

    def save_progress(self, player_id: str, progress: dict) -> None:
        """Persist a player's complete progress.

        Writes to a temporary file first and renames it into place so a
        crash mid-write never leaves a truncated file behind.
        """
        path = self._get_progress_path(player_id)
        record = {
            **progress,
            "player_id": player_id,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        tmp_path = path.with_suffix(".json.tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(record, f, indent=2)
        tmp_path.replace(path)

    def load_progress(self, player_id: str) -> Optional[dict]:
        """Load a player's progress."""
        path = self._get_progress_path(player_id)
        if not path.exists():
            return None
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        data.pop("player_id", None)
        data.pop("updated_at", None)
        return data

    def list_players(self) -> list[str]:
        """Return ids of all players with saved progress."""
        players = []
        for path in self.progress_path.glob("*.json"):
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
            players.append(data.get("player_id", path.stem))
        return sorted(players)

    def delete_progress(self, player_id: str) -> bool:
        """Delete a player's progress."""
        path = self._get_progress_path(player_id)
        if path.exists():
            path.unlink()
            return True
        return False
