"""Save-after-mutation hook connecting a SessionStore to a progress repository."""

import logging
from typing import Callable

from eisgames.models.progress import Progress

from .repository import ProgressRepository

logger = logging.getLogger(__name__)


def persist_progress_hook(
    repo: ProgressRepository,
    player_id: str,
) -> Callable[[Progress], None]:
    """Build an ``on_progress_change`` hook that writes progress to ``repo``.

    Args:
        repo: Repository to write to
        player_id: Player the progress belongs to

    Returns:
        Callable taking a Progress snapshot
    """

    def save(progress: Progress) -> None:
        repo.save_progress(player_id, progress.to_dict())
        logger.debug(f"Saved progress for player {player_id} (streak {progress.streak})")

    return save
