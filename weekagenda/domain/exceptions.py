"""
Domain-specific exception hierarchy for the week agenda.
"""

from typing import List


class WeekAgendaError(Exception):
    """Base class for all application-level errors."""


class InvalidParameters(WeekAgendaError):
    """Raised when a week agenda is built from unusable arguments."""

    def __init__(self, problems: List[str]):
        self.problems = list(problems)
        super().__init__("Invalid parameters: " + "; ".join(self.problems))


class AgendaFileError(WeekAgendaError):
    """Raised when an agenda file cannot be read or has the wrong shape."""
