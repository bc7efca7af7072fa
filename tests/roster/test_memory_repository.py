from __future__ import annotations

import threading
from datetime import date

import pytest

from tutoring_roster.core.enums import CourseType
from tutoring_roster.core.exceptions import ValidationError
from tutoring_roster.roster.memory_repository import InMemoryRosterRepository
from tutoring_roster.roster.seed import seed_demo_data
from tutoring_roster.roster.service import RosterService
from tutoring_roster.sessions.model import Session
from tutoring_roster.students.model import Student


def _student(student_id="s1", total=10.0) -> Student:
    return Student(
        student_id=student_id,
        name="A",
        grade="M.6",
        contact="x",
        course_type=CourseType.PRACTICAL,
        total_hours=total,
        used_hours=0.0,
        remaining_hours=total,
    )


def test_reads_are_snapshots(repo):
    repo.add_student("Login", _student())
    snapshot = repo.list_students("Login")

    repo.add_student("Login", _student("s2"))

    assert len(snapshot) == 1
    assert isinstance(snapshot, tuple)


def test_replace_student_reports_missing(repo):
    assert repo.replace_student("Login", _student()) is False


def test_add_session_requires_known_student(repo):
    session = Session("x1", "missing", date(2024, 1, 1), 1.0, "c", "t")
    with pytest.raises(KeyError):
        repo.add_session("Login", session, student=_student("missing"))
    assert repo.list_sessions("Login") == ()


def test_seed_materializes_login_and_meta_only():
    repo = InMemoryRosterRepository(["Login", "Meta", "Med", "IRE", "Ed-tech"])
    seed_demo_data(repo)

    assert len(repo.list_students("Login")) == 2
    assert len(repo.list_sessions("Login")) == 2
    assert len(repo.list_students("Meta")) == 1
    assert len(repo.list_sessions("Meta")) == 1
    for name in ("Med", "IRE", "Ed-tech"):
        assert repo.list_students(name) == ()
        assert repo.list_sessions(name) == ()

    somjai = repo.get_student("Login", "1")
    assert (somjai.total_hours, somjai.used_hours, somjai.remaining_hours) == (20, 8, 12)


def test_concurrent_sessions_never_overdraw(repo):
    service = RosterService(repo)
    s = service.add_student("Login", name="A", grade="B", contact="C", course_type="theory", total_hours=10)
    accepted = []

    def worker():
        try:
            service.record_session(
                "Login", student_id=s.student_id, session_date="2024-01-01", hours_used=1, content="c", teacher="t"
            )
            accepted.append(1)
        except ValidationError:
            pass

    threads = [threading.Thread(target=worker) for _ in range(25)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    after = repo.get_student("Login", s.student_id)
    assert len(accepted) == 10
    assert after.used_hours == 10
    assert after.remaining_hours == 0
    assert len(repo.list_sessions("Login", s.student_id)) == 10
