"""Demo records materialized at startup for the Login and Meta contexts.

Seeded ``used_hours`` are opening balances carried over from before the
logged sessions, so they need not equal the sum of the seeded sessions.
"""

from __future__ import annotations

from datetime import date

from ..core.enums import CourseType
from ..sessions.model import Session
from ..students.model import Student
from .memory_repository import InMemoryRosterRepository

SEED_STUDENTS: dict[str, tuple[Student, ...]] = {
    "Login": (
        Student(
            student_id="1",
            name="นางสาวสมใจ ใจดี",
            grade="ม.6",
            contact="081-234-5678",
            course_type=CourseType.THEORY,
            total_hours=20,
            used_hours=8,
            remaining_hours=12,
        ),
        Student(
            student_id="2",
            name="นายวิชัย เก่งมาก",
            grade="ม.5",
            contact="082-345-6789",
            course_type=CourseType.PRACTICAL,
            total_hours=15,
            used_hours=5,
            remaining_hours=10,
        ),
    ),
    "Meta": (
        Student(
            student_id="3",
            name="นางสาวปัญญา ฉลาด",
            grade="ม.4",
            contact="083-456-7890",
            course_type=CourseType.THEORY,
            total_hours=25,
            used_hours=18,
            remaining_hours=7,
        ),
    ),
}

SEED_SESSIONS: dict[str, tuple[Session, ...]] = {
    "Login": (
        Session(
            session_id="1",
            student_id="1",
            session_date=date(2024, 1, 15),
            hours_used=2,
            content="สมการกำลังสอง และการแยกตัวประกอบ",
            teacher="อาจารย์สมชาย",
        ),
        Session(
            session_id="2",
            student_id="1",
            session_date=date(2024, 1, 18),
            hours_used=3,
            content="ฟังก์ชันและกราฟ",
            teacher="อาจารย์สมหญิง",
        ),
    ),
    "Meta": (
        Session(
            session_id="3",
            student_id="3",
            session_date=date(2024, 1, 16),
            hours_used=2.5,
            content="เรขาคณิตวิเคราะห์",
            teacher="อาจารย์วิชัย",
        ),
    ),
}


def seed_demo_data(repo: InMemoryRosterRepository) -> None:
    """Load the demo records into contexts the repository knows about."""

    for context, students in SEED_STUDENTS.items():
        if not repo.has_context(context):
            continue
        for student in students:
            repo.add_student(context, student)

    for context, sessions in SEED_SESSIONS.items():
        if not repo.has_context(context):
            continue
        with repo.transaction(context):
            for session in sessions:
                student = repo.get_student(context, session.student_id)
                if student:
                    repo.add_session(context, session, student=student)
