"""EIS Games: session state machine and scoring engine.

Two game modes share one session store:
- Detective: a timed case-diagnosis puzzle
- Command: a turn-based outbreak resource-management mission
"""

__version__ = "0.1.0"
