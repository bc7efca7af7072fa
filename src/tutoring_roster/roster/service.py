from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, replace
from datetime import date
from typing import Optional, Sequence, Union

from ..common.validators import FieldErrors
from ..core.enums import Balance, CourseType
from ..ledger.hours import apply_session, classify, compute_progress, recompute, round_hours
from ..sessions.model import Session
from ..students.model import Student
from .model import ContextOverview, ContextSummary, HistoryEntry, StudentHistory, StudentRow
from .repository import RosterRepository

logger = logging.getLogger(__name__)

Hours = Union[str, int, float, None]


@dataclass(frozen=True)
class StudentForm:
    """Validated add/edit student input."""

    name: str
    grade: str
    contact: str
    course_type: CourseType
    total_hours: float


def _new_id() -> str:
    return uuid.uuid4().hex


def validate_student_form(
    *,
    name: Optional[str],
    grade: Optional[str],
    contact: Optional[str],
    course_type: Union[str, CourseType, None],
    total_hours: Hours,
) -> tuple[Optional[StudentForm], FieldErrors]:
    errors = FieldErrors()
    name_v = errors.require_non_empty(name, "name", "Name is required")
    grade_v = errors.require_non_empty(grade, "grade", "Grade is required")
    contact_v = errors.require_non_empty(contact, "contact", "Contact is required")

    course_v: Optional[CourseType] = None
    try:
        course_v = CourseType(course_type)
    except ValueError:
        errors.add("course_type", "Course type must be theory or practical")

    total_v = errors.require_positive_hours(total_hours, "total_hours", "Total hours must be greater than 0")

    if errors:
        return None, errors
    return StudentForm(name=name_v, grade=grade_v, contact=contact_v, course_type=course_v, total_hours=total_v), errors


class RosterService:
    """Use cases: manage students and record sessions for one context at a time.

    Commands validate every field first and raise ``ValidationError`` with the
    full field -> message mapping; nothing is written unless all fields pass.
    Unknown contexts and unknown students in edit/delete are silent no-ops.
    """

    def __init__(self, roster: RosterRepository):
        self._roster = roster

    # Queries

    def get_contexts(self) -> Sequence[str]:
        return self._roster.list_contexts()

    def has_context(self, context: str) -> bool:
        return self._roster.has_context(context)

    def context_overview(self) -> list[ContextOverview]:
        return [
            ContextOverview(name=name, student_count=len(self._roster.list_students(name)))
            for name in self._roster.list_contexts()
        ]

    def list_students(self, context: str) -> Sequence[Student]:
        if not self._roster.has_context(context):
            return ()
        return self._roster.list_students(context)

    def get_student(self, context: str, student_id: str) -> Optional[Student]:
        if not self._roster.has_context(context):
            return None
        return self._roster.get_student(context, student_id)

    def list_sessions(self, context: str, student_id: str) -> Sequence[Session]:
        if not self._roster.has_context(context):
            return ()
        return self._roster.list_sessions(context, student_id)

    def roster_rows(self, context: str) -> list[StudentRow]:
        if not self._roster.has_context(context):
            return []

        counts: dict[str, int] = {}
        for s in self._roster.list_sessions(context):
            counts[s.student_id] = counts.get(s.student_id, 0) + 1

        return [
            StudentRow(
                student=st,
                progress=compute_progress(st.used_hours, st.total_hours),
                balance=classify(st.remaining_hours),
                session_count=counts.get(st.student_id, 0),
            )
            for st in self._roster.list_students(context)
        ]

    def summarize(self, context: str) -> Optional[ContextSummary]:
        if not self._roster.has_context(context):
            return None

        students = self._roster.list_students(context)
        low = sum(1 for s in students if classify(s.remaining_hours) is Balance.LOW)
        return ContextSummary(
            context=context,
            student_count=len(students),
            total_hours=sum(s.total_hours for s in students),
            used_hours=sum(s.used_hours for s in students),
            session_count=len(self._roster.list_sessions(context)),
            normal_count=len(students) - low,
            low_count=low,
        )

    def student_history(self, context: str, student_id: str) -> Optional[StudentHistory]:
        student = self.get_student(context, student_id)
        if not student:
            return None

        sessions = list(self._roster.list_sessions(context, student_id))
        # Same-date sessions: the later-recorded one comes first.
        newest_first = sorted(reversed(sessions), key=lambda s: s.session_date, reverse=True)
        total = len(newest_first)
        entries = tuple(HistoryEntry(number=total - i, session=s) for i, s in enumerate(newest_first))
        return StudentHistory(student=student, entries=entries)

    # Commands

    def add_student(
        self,
        context: str,
        *,
        name: Optional[str],
        grade: Optional[str],
        contact: Optional[str],
        course_type: Union[str, CourseType, None],
        total_hours: Hours,
    ) -> Optional[Student]:
        form, errors = validate_student_form(
            name=name, grade=grade, contact=contact, course_type=course_type, total_hours=total_hours
        )
        if form is None:
            logger.debug("add_student rejected in %s: %s", context, errors.as_dict())
            errors.raise_if_any()

        if not self._roster.has_context(context):
            return None

        student = Student(
            student_id=_new_id(),
            name=form.name,
            grade=form.grade,
            contact=form.contact,
            course_type=form.course_type,
            total_hours=form.total_hours,
            used_hours=0.0,
            remaining_hours=form.total_hours,
        )
        self._roster.add_student(context, student)
        logger.info("Added student %s to %s (%.2f h)", student.student_id, context, student.total_hours)
        return student

    def edit_student(
        self,
        context: str,
        student_id: str,
        *,
        name: Optional[str],
        grade: Optional[str],
        contact: Optional[str],
        course_type: Union[str, CourseType, None],
        total_hours: Hours,
    ) -> Optional[Student]:
        form, errors = validate_student_form(
            name=name, grade=grade, contact=contact, course_type=course_type, total_hours=total_hours
        )
        if form is None:
            logger.debug("edit_student rejected in %s: %s", context, errors.as_dict())
            errors.raise_if_any()

        if not self._roster.has_context(context):
            return None

        with self._roster.transaction(context):
            current = self._roster.get_student(context, student_id)
            if not current:
                return None

            if form.total_hours < current.used_hours:
                errors.add("total_hours", f"Total hours cannot be less than the {current.used_hours:g} hours already used")
                logger.debug("edit_student rejected in %s: %s", context, errors.as_dict())
                errors.raise_if_any()

            updated = replace(
                recompute(current, form.total_hours),
                name=form.name,
                grade=form.grade,
                contact=form.contact,
                course_type=form.course_type,
            )
            self._roster.replace_student(context, updated)

        logger.info("Updated student %s in %s", student_id, context)
        return updated

    def delete_student(self, context: str, student_id: str) -> bool:
        if not self._roster.has_context(context):
            return False

        deleted = self._roster.delete_student(context, student_id)
        if deleted:
            logger.info("Deleted student %s and their sessions from %s", student_id, context)
        return deleted

    def record_session(
        self,
        context: str,
        *,
        student_id: str,
        session_date: Union[str, date, None],
        hours_used: Hours,
        content: Optional[str],
        teacher: Optional[str],
    ) -> Optional[Session]:
        errors = FieldErrors()
        date_v = errors.require_date(session_date, "session_date", "Session date is required")
        hours_v = errors.require_positive_hours(hours_used, "hours_used", "Hours used must be greater than 0")
        content_v = errors.require_non_empty(content, "content", "Content is required")
        teacher_v = errors.require_non_empty(teacher, "teacher", "Teacher is required")
        if hours_v is not None:
            hours_v = round_hours(hours_v)

        if not self._roster.has_context(context):
            errors.raise_if_any()
            return None

        with self._roster.transaction(context):
            student = self._roster.get_student(context, student_id)
            if not student:
                errors.add("student_id", "Student not found")
            elif hours_v is not None and hours_v > student.remaining_hours:
                errors.add("hours_used", f"Hours used cannot exceed the {student.remaining_hours:g} hours remaining")

            if errors:
                logger.debug("record_session rejected in %s: %s", context, errors.as_dict())
                errors.raise_if_any()

            session = Session(
                session_id=_new_id(),
                student_id=student.student_id,
                session_date=date_v,
                hours_used=hours_v,
                content=content_v,
                teacher=teacher_v,
            )
            self._roster.add_session(context, session, student=apply_session(student, hours_v))

        logger.info("Recorded %.2f h for student %s in %s", hours_v, student_id, context)
        return session
