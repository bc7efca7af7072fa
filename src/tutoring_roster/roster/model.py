from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Balance
from ..sessions.model import Session
from ..students.model import Student


@dataclass(frozen=True)
class ContextOverview:
    """One entry of the context switcher."""

    name: str
    student_count: int


@dataclass(frozen=True)
class ContextSummary:
    """Read-model for the statistics cards of one context."""

    context: str
    student_count: int
    total_hours: float
    used_hours: float
    session_count: int
    normal_count: int
    low_count: int


@dataclass(frozen=True)
class StudentRow:
    """Read-model for one roster table row (student plus derived fields)."""

    student: Student
    progress: float
    balance: Balance
    session_count: int


@dataclass(frozen=True)
class HistoryEntry:
    number: int
    session: Session


@dataclass(frozen=True)
class StudentHistory:
    """A student's sessions, newest first, numbered from the oldest (1)."""

    student: Student
    entries: tuple[HistoryEntry, ...]
