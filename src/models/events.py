"""
Data models for availability checks.

Per-request values are plain dataclasses; service payloads use TypedDict
for type hints on dictionaries.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal, TypedDict

Status = Literal["available", "busy", "error"]


@dataclass(frozen=True)
class TimeWindow:
    """Requested window [start, end); both instants are timezone-aware."""

    start: datetime
    end: datetime


class BusyInterval(TypedDict):
    """Busy block as returned by the calendar service (ISO-8601 strings)."""
    start: str
    end: str


class FreeBusyResponse(TypedDict):
    """Normalized free/busy answer for a single calendar."""
    errors: list[str]
    busy: list[BusyInterval]


class UserError(TypedDict):
    """A user whose availability could not be determined."""
    user: str
    reason: str


@dataclass
class LookupOutcome:
    """Result of checking one user."""

    user: str
    status: Status
    reason: str = ""


@dataclass
class ClassificationResult:
    """Users partitioned by availability, each list in input order."""

    available: list[str] = field(default_factory=list)
    busy: list[str] = field(default_factory=list)
    errors: list[UserError] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.available) + len(self.busy) + len(self.errors)

    def totals_line(self) -> str:
        return (
            f"Checked: {self.total}, Available: {len(self.available)}, "
            f"Busy: {len(self.busy)}, Errors: {len(self.errors)}"
        )
