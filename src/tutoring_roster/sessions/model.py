from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Session:
    """Domain entity: one recorded teaching event. Immutable once created."""

    session_id: str
    student_id: str
    session_date: date
    hours_used: float
    content: str
    teacher: str
