"""Exceptions raised by the EIS Games session store.

All of these are local and recoverable: the UI is expected to re-present
valid choices and carry on.
"""

from typing import Optional


class GameError(Exception):
    """Base exception for EIS Games."""


class InvalidState(GameError):
    """Raised when an operation is attempted outside its legal status."""


class InvalidAction(GameError):
    """Raised when an action id is not offered by the current turn's event."""

    def __init__(self, action_id: str, turn: int, reason: Optional[str] = None):
        self.action_id = action_id
        self.turn = turn
        message = reason or f"Action '{action_id}' is not available on turn {turn}"
        super().__init__(message)


class InvalidClue(GameError):
    """Raised when a clue id does not belong to the active case."""

    def __init__(self, clue_id: str, case_id: str):
        self.clue_id = clue_id
        self.case_id = case_id
        super().__init__(f"Clue '{clue_id}' is not part of case '{case_id}'")


class InvalidDiagnosis(GameError):
    """Raised when a diagnosis id is not one of the active case's options."""

    def __init__(self, diagnosis_id: str, case_id: str):
        self.diagnosis_id = diagnosis_id
        self.case_id = case_id
        super().__init__(f"Diagnosis '{diagnosis_id}' is not an option for case '{case_id}'")
