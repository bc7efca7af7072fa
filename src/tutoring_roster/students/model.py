from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import CourseType


@dataclass(frozen=True)
class Student:
    """Domain entity: a tutoring client with a contracted hour allotment.

    Note: ``remaining_hours`` is always ``total_hours - used_hours``; only the
    ledger functions produce updated copies.
    """

    student_id: str
    name: str
    grade: str
    contact: str
    course_type: CourseType
    total_hours: float
    used_hours: float = 0.0
    remaining_hours: float = 0.0
