"""Content definitions for EIS Games.

Cases and missions are read-only reference data supplied by the content
catalog. The session store reads them but never mutates them, so every model
here is frozen.

Content JSON may use either snake_case field names or the camelCase keys of
the bundled content files (timeLimit, basePoints, isCorrect, publicTrust, ...).
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

RESOURCE_FIELDS = ("budget", "personnel", "public_trust", "time")


class Era(str, Enum):
    """Historical decade bucket used to group Detective cases."""

    FIFTIES = "1950s"
    EIGHTIES = "1980s"
    TWENTY_TENS = "2010s"


class Difficulty(str, Enum):
    """Difficulty rating shared by cases and missions."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class ClueType(str, Enum):
    """Kind of evidence a clue represents."""

    LAB = "lab"
    EPI = "epi"
    CLINICAL = "clinical"
    ENVIRONMENTAL = "environmental"
    HISTORICAL = "historical"


class OutcomeClass(str, Enum):
    """Result class of a finished Command mission."""

    VICTORY = "victory"
    PARTIAL = "partial"
    FAILURE = "failure"


class ContentModel(BaseModel):
    """Base for immutable content models accepting camelCase aliases."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class Clue(ContentModel):
    """A single piece of evidence within a case.

    Attributes:
        id: Unique clue identifier within the case
        type: Kind of evidence
        order: Ordinal position in the case's clue list
        content: Text shown when the clue is revealed
        title: Optional short heading
    """

    id: str = Field(..., min_length=1)
    type: ClueType
    order: int = Field(..., ge=0)
    content: str
    title: str = Field(default="")


class DiagnosisOption(ContentModel):
    """One of the diagnoses a player can choose for a case."""

    id: str = Field(..., min_length=1)
    name: str
    description: str = Field(default="")
    is_correct: bool = Field(default=False)


class Case(ContentModel):
    """A Detective mode case.

    Exactly one diagnosis option is correct and its id must equal
    ``correct_diagnosis``; construction fails otherwise.

    Attributes:
        id: Unique case identifier
        era: Decade bucket the case belongs to
        title: Display title
        year: Year the outbreak took place
        difficulty: Drives the scoring multiplier
        time_limit: Countdown length in seconds
        base_points: Points awarded for a correct diagnosis before bonuses
        clues: Clues in presentation order
        diagnosis_options: Choices offered to the player
        correct_diagnosis: Id of the correct option
        real_outcome: Narrative shown once the case is resolved
    """

    id: str = Field(..., min_length=1)
    era: Era
    title: str
    year: int
    difficulty: Difficulty
    time_limit: float = Field(..., gt=0)
    base_points: int = Field(..., ge=0)
    clues: list[Clue] = Field(default_factory=list)
    diagnosis_options: list[DiagnosisOption] = Field(..., min_length=1)
    correct_diagnosis: str
    real_outcome: str = Field(default="")

    location: str = Field(default="")
    description: str = Field(default="")
    historical_context: str = Field(default="")
    lessons: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_correct_diagnosis(self) -> Case:
        """Exactly one option is flagged correct and it matches correct_diagnosis."""
        correct = [option for option in self.diagnosis_options if option.is_correct]
        if len(correct) != 1:
            raise ValueError(
                f"Case '{self.id}' must have exactly one correct diagnosis option, "
                f"found {len(correct)}"
            )
        if correct[0].id != self.correct_diagnosis:
            raise ValueError(
                f"Case '{self.id}' correct_diagnosis '{self.correct_diagnosis}' "
                f"does not match the option flagged correct ('{correct[0].id}')"
            )
        return self

    @property
    def clue_ids(self) -> set[str]:
        return {clue.id for clue in self.clues}

    @property
    def diagnosis_ids(self) -> set[str]:
        return {option.id for option in self.diagnosis_options}

    def get_clue(self, clue_id: str) -> Optional[Clue]:
        """Look up a clue by id, or None if the case has no such clue."""
        for clue in self.clues:
            if clue.id == clue_id:
                return clue
        return None


class MissionResources(BaseModel):
    """Resource snapshot tracked through a Command mission.

    Values are never clamped; a mission may run any resource into debt.
    """

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    budget: float = Field(default=0.0)
    personnel: float = Field(default=0.0)
    public_trust: float = Field(default=0.0)
    time: float = Field(default=0.0)

    @property
    def total(self) -> float:
        """Sum of all resources, a convenient scalar for score_command."""
        return sum(getattr(self, name) for name in RESOURCE_FIELDS)


class ResourceDelta(ContentModel):
    """Partial resource change. Fields left as None are untouched."""

    budget: Optional[float] = None
    personnel: Optional[float] = None
    public_trust: Optional[float] = None
    time: Optional[float] = None

    def defined_fields(self) -> dict[str, float]:
        """Return only the fields this delta actually sets."""
        return {
            name: getattr(self, name)
            for name in RESOURCE_FIELDS
            if getattr(self, name) is not None
        }


class ActionOutcome(ContentModel):
    """One branch (success or failure) of a mission action."""

    probability: float = Field(..., ge=0.0, le=1.0)
    effect: ResourceDelta = Field(default_factory=ResourceDelta)
    message: str = Field(default="")


class ActionOutcomes(ContentModel):
    """The success/failure pair of a mission action.

    Only ``success.probability`` decides the draw; the failure probability is
    informational and need not complement it.
    """

    success: ActionOutcome
    failure: ActionOutcome


class MissionAction(ContentModel):
    """An option offered by a mission event."""

    id: str = Field(..., min_length=1)
    label: str = Field(default="")
    description: str = Field(default="")
    cost: ResourceDelta = Field(default_factory=ResourceDelta)
    outcomes: ActionOutcomes


class MissionEvent(ContentModel):
    """The event scheduled for a single mission turn."""

    id: str = Field(..., min_length=1)
    turn: int = Field(..., ge=1)
    title: str = Field(default="")
    description: str = Field(default="")
    options: list[MissionAction] = Field(default_factory=list)

    def get_option(self, action_id: str) -> Optional[MissionAction]:
        for option in self.options:
            if option.id == action_id:
                return option
        return None


class MissionOutcome(ContentModel):
    """A terminal mission outcome. ``condition`` is descriptive text only."""

    condition: str
    result: OutcomeClass
    message: str = Field(default="")
    points: int = Field(default=0)


class Mission(ContentModel):
    """A Command mode mission.

    Attributes:
        id: Unique mission identifier
        title: Display title
        difficulty: Difficulty rating
        total_turns: Number of turns the mission is designed for
        initial_resources: Resources at turn 1
        events: Turn-keyed events, at most one per turn
        outcomes: Terminal outcomes the caller classifies against
    """

    id: str = Field(..., min_length=1)
    title: str = Field(default="")
    description: str = Field(default="")
    scenario: str = Field(default="")
    difficulty: Difficulty = Field(default=Difficulty.MEDIUM)
    total_turns: int = Field(..., gt=0)
    initial_resources: MissionResources = Field(default_factory=MissionResources)
    events: list[MissionEvent] = Field(default_factory=list)
    outcomes: list[MissionOutcome] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_unique_event_turns(self) -> Mission:
        """Each turn maps to at most one event."""
        seen: set[int] = set()
        for event in self.events:
            if event.turn in seen:
                raise ValueError(
                    f"Mission '{self.id}' schedules more than one event on turn {event.turn}"
                )
            seen.add(event.turn)
        return self

    def event_for_turn(self, turn: int) -> Optional[MissionEvent]:
        """Return the event scheduled for ``turn``, or None."""
        for event in self.events:
            if event.turn == turn:
                return event
        return None

    def get_outcome(self, result: OutcomeClass) -> Optional[MissionOutcome]:
        """Return the first outcome declared for a result class."""
        for outcome in self.outcomes:
            if outcome.result == result:
                return outcome
        return None
