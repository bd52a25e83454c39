"""Tests for content, session and progress models.

Tests cover:
- Case invariant: exactly one correct option matching correct_diagnosis
- Mission invariant: at most one event per turn
- camelCase aliases accepted when loading content
- Resource deltas leaving undefined fields untouched
- Progress set semantics
"""

import pytest
from pydantic import ValidationError

from eisgames.models import (
    Case,
    DiagnosisOption,
    GameSession,
    GameStatus,
    Mission,
    MissionEvent,
    MissionResources,
    PlayerBadge,
    Progress,
    ResourceDelta,
    apply_resource_delta,
)


class TestCase:
    """Tests for the Case model."""

    def _options(self, *correct_flags):
        return [
            DiagnosisOption(id=f"dx-{i}", name=f"Diagnosis {i}", is_correct=flag)
            for i, flag in enumerate(correct_flags)
        ]

    def _case(self, options, correct="dx-0"):
        return Case(
            id="c",
            era="2010s",
            title="t",
            year=2014,
            difficulty="medium",
            time_limit=60,
            base_points=200,
            diagnosis_options=options,
            correct_diagnosis=correct,
        )

    def test_valid_case(self):
        case = self._case(self._options(True, False))
        assert case.diagnosis_ids == {"dx-0", "dx-1"}

    def test_no_correct_option_rejected(self):
        with pytest.raises(ValidationError, match="exactly one correct diagnosis"):
            self._case(self._options(False, False))

    def test_two_correct_options_rejected(self):
        with pytest.raises(ValidationError, match="exactly one correct diagnosis"):
            self._case(self._options(True, True))

    def test_correct_diagnosis_mismatch_rejected(self):
        with pytest.raises(ValidationError, match="does not match"):
            self._case(self._options(True, False), correct="dx-1")

    def test_case_is_frozen(self, hard_case):
        with pytest.raises(ValidationError):
            hard_case.base_points = 5

    def test_get_clue(self, hard_case):
        assert hard_case.get_clue("case-1-clue-2").order == 2
        assert hard_case.get_clue("missing") is None

    def test_camel_case_aliases(self):
        case = Case.model_validate({
            "id": "oswego",
            "era": "1950s",
            "title": "Church supper",
            "year": 1940,
            "difficulty": "easy",
            "timeLimit": 300,
            "basePoints": 400,
            "clues": [{"id": "k1", "type": "epi", "order": 1, "content": "attack rates"}],
            "diagnosisOptions": [
                {"id": "staph", "name": "Staph toxin", "isCorrect": True},
                {"id": "salmonella", "name": "Salmonella"},
            ],
            "correctDiagnosis": "staph",
            "realOutcome": "Vanilla ice cream",
        })
        assert case.time_limit == 300
        assert case.base_points == 400
        assert case.correct_diagnosis == "staph"


class TestMission:
    """Tests for the Mission model."""

    def test_duplicate_event_turn_rejected(self):
        with pytest.raises(ValidationError, match="more than one event on turn 2"):
            Mission(
                id="m",
                total_turns=3,
                events=[
                    MissionEvent(id="a", turn=2),
                    MissionEvent(id="b", turn=2),
                ],
            )

    def test_event_for_turn(self, mission):
        assert mission.event_for_turn(1).id == "case-reports"
        assert mission.event_for_turn(3) is None

    def test_get_outcome(self, mission):
        assert mission.get_outcome("partial").points == 500

    def test_nested_camel_case_resources(self):
        mission = Mission.model_validate({
            "id": "m",
            "totalTurns": 5,
            "initialResources": {"budget": 10, "personnel": 2, "publicTrust": 60, "time": 7},
        })
        assert mission.initial_resources.public_trust == 60
        assert mission.initial_resources.total == 79


class TestResourceDelta:
    """Tests for partial resource arithmetic."""

    def test_undefined_fields_untouched(self):
        resources = MissionResources(budget=10, personnel=5, public_trust=50, time=3)
        result = apply_resource_delta(resources, ResourceDelta(budget=4), sign=-1)
        assert result == MissionResources(budget=6, personnel=5, public_trust=50, time=3)

    def test_no_clamping(self):
        resources = MissionResources(budget=10)
        result = apply_resource_delta(resources, ResourceDelta(budget=25), sign=-1)
        assert result.budget == -15

    def test_input_snapshot_unchanged(self):
        resources = MissionResources(time=3)
        apply_resource_delta(resources, ResourceDelta(time=1))
        assert resources.time == 3


class TestProgress:
    """Tests for Progress set semantics and serialization."""

    def test_mark_case_completed_once(self):
        progress = Progress()
        assert progress.mark_case_completed("a") is True
        assert progress.mark_case_completed("a") is False
        assert progress.completed_case_ids == ["a"]

    def test_mark_mission_completed_once(self):
        progress = Progress()
        progress.mark_mission_completed("m")
        progress.mark_mission_completed("m")
        assert progress.completed_mission_ids == ["m"]

    def test_badges_unique_by_id(self):
        progress = Progress()
        assert progress.add_badge(PlayerBadge(player_id="p", badge_id="first-case"))
        assert not progress.add_badge(PlayerBadge(player_id="p", badge_id="first-case"))
        assert len(progress.badges) == 1

    def test_dict_roundtrip(self):
        progress = Progress(completed_case_ids=["a", "b"], streak=2)
        progress.add_badge(PlayerBadge(player_id="p", badge_id="streak-2"))
        restored = Progress.from_dict(progress.to_dict())
        assert restored == progress


class TestGameSession:
    def test_defaults(self):
        session = GameSession()
        assert session.status == GameStatus.NOT_STARTED
        assert session.detective is None
        assert session.command is None
        assert not session.is_in_progress

    def test_terminal_statuses(self):
        assert GameStatus.COMPLETED.is_terminal
        assert GameStatus.FAILED.is_terminal
        assert not GameStatus.IN_PROGRESS.is_terminal
