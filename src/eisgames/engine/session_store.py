"""Session store for EIS Games.

The SessionStore owns the single live GameSession and the player's durable
Progress, and enforces the state machines of both game modes.

Detective:  not_started -> in_progress -> completed | failed
Command:    not_started -> in_progress -> completed

Every operation validates against the current state before mutating anything,
so a rejected intent leaves the store exactly as it was. Transitions that
change Progress end by handing a snapshot to the ``on_progress_change`` hook;
the in-memory state is already updated at that point and stays authoritative
even if the hook fails.

Scoring is not chained from here. After a transition, callers pass the same
inputs to the functions in ``eisgames.engine.scoring``.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Optional, Protocol

from eisgames.exceptions import (
    InvalidAction,
    InvalidClue,
    InvalidDiagnosis,
    InvalidState,
)
from eisgames.models.content import Case, Mission
from eisgames.models.progress import Player, PlayerBadge, PlayerStats, Progress
from eisgames.models.session import (
    ActionRecord,
    ActionResultKind,
    CommandState,
    DetectiveState,
    GameSession,
    GameStatus,
    GameType,
    apply_resource_delta,
)

if TYPE_CHECKING:
    from eisgames.storage import ProgressRepository

logger = logging.getLogger(__name__)

ProgressHook = Callable[[Progress], None]


class RandomSource(Protocol):
    """Anything with a ``random()`` method returning a float in [0, 1)."""

    def random(self) -> float: ...


@dataclass
class ActionResult:
    """Result of executing a Command action.

    Attributes:
        success: Whether the draw resolved to the success outcome
        message: Message of the chosen outcome
    """

    success: bool
    message: str


class SessionStore:
    """Owner of the live game session and the player's progress.

    Attributes:
        session: The live game session
        progress: Durable progress (completed items, streak, player data)
        validate_ids: Reject clue and diagnosis ids that are not part of the
            active case. Disable to accept any id unchecked.
    """

    def __init__(
        self,
        progress: Optional[Progress] = None,
        on_progress_change: Optional[ProgressHook] = None,
        rng: Optional[RandomSource] = None,
        random_seed: Optional[int] = None,
        validate_ids: bool = True,
    ) -> None:
        """Initialize the store.

        Args:
            progress: Previously persisted progress (empty if None)
            on_progress_change: Called with a copy of Progress after each
                mutation of it
            rng: Random source for action outcomes; takes precedence over
                random_seed
            random_seed: Seed for a private random.Random (for reproducibility)
            validate_ids: Whether clue and diagnosis ids are checked against
                the active case
        """
        self.session = GameSession()
        self.progress = progress.model_copy(deep=True) if progress is not None else Progress()
        self.validate_ids = validate_ids
        self._on_progress_change = on_progress_change
        self._random: RandomSource = rng if rng is not None else random.Random(random_seed)

    @classmethod
    def from_repository(
        cls,
        repo: ProgressRepository,
        player_id: str,
        **kwargs: Any,
    ) -> SessionStore:
        """Create a store initialized from persisted progress.

        The returned store writes its progress back to ``repo`` after every
        mutation of it.

        Args:
            repo: Progress repository to load from and save to
            player_id: Player whose progress to load
            **kwargs: Forwarded to SessionStore()

        Returns:
            SessionStore with loaded (or empty) progress
        """
        from eisgames.storage.hooks import persist_progress_hook

        data = repo.load_progress(player_id)
        progress = Progress.from_dict(data) if data else Progress()
        logger.info(
            f"Loaded progress for player {player_id}: "
            f"{len(progress.completed_case_ids)} cases, "
            f"{len(progress.completed_mission_ids)} missions, streak {progress.streak}"
        )
        return cls(
            progress=progress,
            on_progress_change=persist_progress_hook(repo, player_id),
            **kwargs,
        )

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def status(self) -> GameStatus:
        return self.session.status

    @property
    def game_type(self) -> GameType:
        return self.session.game_type

    @property
    def score(self) -> int:
        return self.session.score

    @property
    def streak(self) -> int:
        return self.progress.streak

    @property
    def detective(self) -> Optional[DetectiveState]:
        return self.session.detective

    @property
    def command(self) -> Optional[CommandState]:
        return self.session.command

    def progress_snapshot(self) -> Progress:
        """Return a deep copy of progress for readers."""
        return self.progress.model_copy(deep=True)

    # ------------------------------------------------------------------
    # Detective mode
    # ------------------------------------------------------------------

    def start_case(self, case: Case) -> None:
        """Start a Detective case, discarding whatever session was live."""
        self.session = GameSession(
            game_type=GameType.DETECTIVE,
            status=GameStatus.IN_PROGRESS,
            score=0,
            detective=DetectiveState(case=case, time_remaining=case.time_limit),
        )
        logger.info(f"Started case {case.id} ({case.difficulty.value}, {case.time_limit}s)")

    def reveal_clue(self, clue_id: str) -> None:
        """Reveal a clue. Revealing an already revealed clue does nothing.

        Raises:
            InvalidState: If no Detective case is in progress
            InvalidClue: If validate_ids is on and the case has no such clue
        """
        detective = self._require_detective("reveal a clue")
        if self.validate_ids and clue_id not in detective.case.clue_ids:
            logger.warning(f"Rejected unknown clue {clue_id} for case {detective.case.id}")
            raise InvalidClue(clue_id, detective.case.id)
        detective.revealed_clues.add(clue_id)

    def select_diagnosis(self, diagnosis_id: str) -> None:
        """Select a diagnosis, replacing any earlier selection.

        Raises:
            InvalidState: If no Detective case is in progress
            InvalidDiagnosis: If validate_ids is on and the id is not an option
        """
        detective = self._require_detective("select a diagnosis")
        if self.validate_ids and diagnosis_id not in detective.case.diagnosis_ids:
            logger.warning(
                f"Rejected unknown diagnosis {diagnosis_id} for case {detective.case.id}"
            )
            raise InvalidDiagnosis(diagnosis_id, detective.case.id)
        detective.selected_diagnosis = diagnosis_id

    def submit_diagnosis(self) -> bool:
        """Submit the selected diagnosis and resolve the case.

        A correct diagnosis completes the case, extends the streak and records
        the case in progress. An incorrect one fails the case and resets the
        streak.

        Returns:
            Whether the diagnosis was correct

        Raises:
            InvalidState: If no case is in progress or nothing is selected
        """
        detective = self._require_detective("submit a diagnosis")
        if detective.selected_diagnosis is None:
            raise InvalidState("No diagnosis selected; nothing to submit")

        case = detective.case
        is_correct = detective.selected_diagnosis == case.correct_diagnosis

        if is_correct:
            self.session.status = GameStatus.COMPLETED
            self.progress.streak += 1
            self.progress.mark_case_completed(case.id)
        else:
            self.session.status = GameStatus.FAILED
            self.progress.streak = 0

        logger.info(
            f"Case {case.id} {'solved' if is_correct else 'failed'} "
            f"with {detective.selected_diagnosis}; streak now {self.progress.streak}"
        )
        self._notify_progress()
        return is_correct

    def update_time_remaining(self, seconds: float) -> None:
        """Set the countdown value. Driven by an external ticker.

        Reaching zero does not end the case; expiry handling is up to the caller.

        Raises:
            InvalidState: If the live session is not a Detective case
        """
        if self.session.game_type != GameType.DETECTIVE or self.session.detective is None:
            raise InvalidState("Cannot update the timer without an active Detective case")
        self.session.detective.time_remaining = seconds

    # ------------------------------------------------------------------
    # Command mode
    # ------------------------------------------------------------------

    def start_mission(self, mission: Mission) -> None:
        """Start a Command mission, discarding whatever session was live."""
        self.session = GameSession(
            game_type=GameType.COMMAND,
            status=GameStatus.IN_PROGRESS,
            score=0,
            command=CommandState(
                mission=mission,
                current_turn=1,
                resources=mission.initial_resources.model_copy(),
            ),
        )
        logger.info(f"Started mission {mission.id} ({mission.total_turns} turns)")

    def execute_action(self, action_id: str) -> ActionResult:
        """Resolve one of the current turn's actions.

        Costs are charged unconditionally, then a single draw in [0, 1)
        decides the outcome: success if the draw is strictly below the
        success probability. The chosen outcome's effect is added and the
        action is appended to the history. Resources are never clamped.

        Args:
            action_id: Id of an option of the current turn's event

        Returns:
            ActionResult with the outcome and its message

        Raises:
            InvalidState: If no Command mission is in progress
            InvalidAction: If the current turn has no event or the event does
                not offer this action
        """
        command = self._require_command("execute an action")
        turn = command.current_turn

        event = command.mission.event_for_turn(turn)
        if event is None:
            logger.warning(f"Rejected action {action_id}: no event on turn {turn}")
            raise InvalidAction(action_id, turn, f"No event is scheduled for turn {turn}")
        action = event.get_option(action_id)
        if action is None:
            logger.warning(f"Rejected action {action_id}: not offered by event {event.id}")
            raise InvalidAction(action_id, turn)

        resources = apply_resource_delta(command.resources, action.cost, sign=-1)

        roll = self._random.random()
        is_success = roll < action.outcomes.success.probability
        outcome = action.outcomes.success if is_success else action.outcomes.failure

        resources = apply_resource_delta(resources, outcome.effect)

        command.resources = resources
        command.action_history.append(
            ActionRecord(
                turn=turn,
                action_id=action_id,
                result=ActionResultKind.SUCCESS if is_success else ActionResultKind.FAILURE,
                message=outcome.message,
            )
        )
        logger.debug(
            f"Turn {turn} action {action_id}: roll={roll:.4f} "
            f"p={action.outcomes.success.probability} -> {'success' if is_success else 'failure'}"
        )
        return ActionResult(success=is_success, message=outcome.message)

    def advance_turn(self) -> int:
        """Move to the next turn.

        Mission outcomes are not evaluated here; deciding when the mission is
        over and calling complete_game is the caller's job.

        Returns:
            The new turn number

        Raises:
            InvalidState: If no Command mission is in progress
        """
        command = self._require_command("advance the turn")
        command.current_turn += 1
        return command.current_turn

    # ------------------------------------------------------------------
    # Common operations
    # ------------------------------------------------------------------

    def complete_game(self, final_score: int) -> None:
        """Mark the live session completed with its final score.

        When a mission is active it is recorded in progress, once.

        A Detective case that has already been solved or failed keeps its
        result; only a completed mission may be completed again.

        Raises:
            InvalidState: If there is no live session, or the live Detective
                case has already ended
        """
        if self.session.game_type == GameType.NONE:
            raise InvalidState("Cannot complete a game when no game has been started")
        if self.session.game_type == GameType.DETECTIVE and self.session.status.is_terminal:
            raise InvalidState(
                f"Cannot complete a Detective case that has already ended "
                f"(status={self.session.status.value})"
            )

        self.session.status = GameStatus.COMPLETED
        self.session.score = final_score

        command = self.session.command
        if command is not None:
            if not self.progress.mark_mission_completed(command.mission.id):
                logger.info(f"Mission {command.mission.id} already recorded as completed")
            logger.info(f"Mission {command.mission.id} completed with score {final_score}")
            self._notify_progress()

    def add_score(self, points: int) -> int:
        """Add points to the live session's score and return the new score."""
        self.session.score += points
        return self.session.score

    def reset_game(self) -> None:
        """Drop the live session. Progress is untouched."""
        self.session = GameSession()

    def set_player(self, player: Optional[Player]) -> None:
        self.progress.player = player
        self._notify_progress()

    def set_player_stats(self, stats: PlayerStats) -> None:
        self.progress.player_stats = stats
        self._notify_progress()

    def add_badge(self, badge: PlayerBadge) -> bool:
        """Award a badge. Returns False if the player already holds it."""
        added = self.progress.add_badge(badge)
        if added:
            self._notify_progress()
        return added

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_detective(self, operation: str) -> DetectiveState:
        detective = self.session.detective
        if (
            self.session.game_type != GameType.DETECTIVE
            or detective is None
            or not self.session.is_in_progress
        ):
            raise InvalidState(
                f"Cannot {operation}: no Detective case in progress "
                f"(game_type={self.session.game_type.value}, status={self.session.status.value})"
            )
        return detective

    def _require_command(self, operation: str) -> CommandState:
        command = self.session.command
        if (
            self.session.game_type != GameType.COMMAND
            or command is None
            or not self.session.is_in_progress
        ):
            raise InvalidState(
                f"Cannot {operation}: no Command mission in progress "
                f"(game_type={self.session.game_type.value}, status={self.session.status.value})"
            )
        return command

    def _notify_progress(self) -> None:
        """Hand a progress snapshot to the hook. Failures are logged, not raised."""
        if self._on_progress_change is None:
            return
        try:
            self._on_progress_change(self.progress_snapshot())
        except Exception:
            logger.exception("Failed to persist progress; in-memory progress is kept")
