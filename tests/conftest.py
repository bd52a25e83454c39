"""Shared pytest fixtures and markers for all tests."""

import pytest

from eisgames.models.content import (
    Case,
    Clue,
    DiagnosisOption,
    Mission,
    MissionAction,
    MissionEvent,
    MissionOutcome,
    MissionResources,
)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests that play full sessions against real storage"
    )


class SequenceRandom:
    """Deterministic random source replaying a fixed sequence of draws."""

    def __init__(self, values):
        self._values = list(values)
        self.calls = 0

    def random(self) -> float:
        value = self._values[self.calls % len(self._values)]
        self.calls += 1
        return value


def make_case(
    case_id: str = "case-1",
    difficulty: str = "hard",
    base_points: int = 100,
    time_limit: float = 120,
    clue_count: int = 4,
) -> Case:
    """Build a case with ``clue_count`` clues and three diagnosis options."""
    return Case(
        id=case_id,
        era="1980s",
        title=f"Test case {case_id}",
        year=1982,
        difficulty=difficulty,
        time_limit=time_limit,
        base_points=base_points,
        clues=[
            Clue(id=f"{case_id}-clue-{i}", type="lab", order=i, content=f"Clue {i}")
            for i in range(1, clue_count + 1)
        ],
        diagnosis_options=[
            DiagnosisOption(id="tylenol", name="Cyanide-laced capsules", is_correct=True),
            DiagnosisOption(id="botulism", name="Botulism"),
            DiagnosisOption(id="legionella", name="Legionella"),
        ],
        correct_diagnosis="tylenol",
        real_outcome="Tamper-resistant packaging became the national standard.",
    )


def _action(action_id, probability, cost=None, success_effect=None, failure_effect=None):
    return MissionAction(
        id=action_id,
        label=action_id.replace("-", " ").title(),
        cost=cost or {},
        outcomes={
            "success": {
                "probability": probability,
                "effect": success_effect or {},
                "message": f"{action_id} worked",
            },
            "failure": {
                "probability": 1 - probability,
                "effect": failure_effect or {},
                "message": f"{action_id} fell flat",
            },
        },
    )


def make_mission(mission_id: str = "mission-1") -> Mission:
    """Build a four-turn mission with events on turns 1 and 2 only."""
    return Mission(
        id=mission_id,
        title="Salmonella Surge",
        difficulty="medium",
        total_turns=4,
        initial_resources=MissionResources(budget=100, personnel=10, public_trust=50, time=14),
        events=[
            MissionEvent(
                id="case-reports",
                turn=1,
                title="Case reports",
                options=[
                    _action(
                        "sure-thing",
                        1.0,
                        cost={"budget": 30, "personnel": 2},
                        success_effect={"public_trust": 10},
                        failure_effect={"public_trust": -10},
                    ),
                    _action(
                        "long-shot",
                        0.0,
                        cost={"budget": 150},
                        success_effect={"budget": 500},
                        failure_effect={"public_trust": -60},
                    ),
                    _action(
                        "coin-flip",
                        0.5,
                        cost={"time": 1},
                        success_effect={"personnel": 3},
                        failure_effect={"personnel": -3},
                    ),
                ],
            ),
            MissionEvent(
                id="media-inquiry",
                turn=2,
                title="Media inquiry",
                options=[_action("press-release", 0.8, success_effect={"public_trust": 5})],
            ),
        ],
        outcomes=[
            MissionOutcome(condition="Outbreak contained", result="victory", points=1000),
            MissionOutcome(condition="Contained late", result="partial", points=500),
            MissionOutcome(condition="Not contained", result="failure", points=0),
        ],
    )


@pytest.fixture
def hard_case():
    """A hard case worth 100 base points with a 120 second limit and four clues."""
    return make_case()


@pytest.fixture
def mission():
    """A four-turn mission with events scheduled on turns 1 and 2."""
    return make_mission()


@pytest.fixture
def case_factory():
    """Provide make_case for tests that need custom cases."""
    return make_case


@pytest.fixture
def mission_factory():
    """Provide make_mission for tests that need several missions."""
    return make_mission


@pytest.fixture
def sequence_random():
    """Provide a factory for deterministic random sources."""
    return SequenceRandom
