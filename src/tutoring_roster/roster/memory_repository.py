from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional, Sequence

from ..sessions.model import Session
from ..students.model import Student
from .repository import RosterRepository


@dataclass
class _ContextData:
    students: list[Student] = field(default_factory=list)
    sessions: list[Session] = field(default_factory=list)
    lock: threading.RLock = field(default_factory=threading.RLock)


class InMemoryRosterRepository(RosterRepository):
    """Process-lifetime store: one roster and one session log per context.

    Writes are serialized per context; reads return tuples so callers never
    hold a reference to the live lists.
    """

    def __init__(self, contexts: Iterable[str]):
        self._contexts: dict[str, _ContextData] = {name: _ContextData() for name in contexts}

    def list_contexts(self) -> Sequence[str]:
        return tuple(self._contexts)

    def has_context(self, context: str) -> bool:
        return context in self._contexts

    @contextmanager
    def transaction(self, context: str) -> Iterator[None]:
        with self._contexts[context].lock:
            yield

    def list_students(self, context: str) -> Sequence[Student]:
        data = self._contexts[context]
        with data.lock:
            return tuple(data.students)

    def get_student(self, context: str, student_id: str) -> Optional[Student]:
        data = self._contexts[context]
        with data.lock:
            for s in data.students:
                if s.student_id == student_id:
                    return s
        return None

    def add_student(self, context: str, student: Student) -> None:
        data = self._contexts[context]
        with data.lock:
            data.students.append(student)

    def replace_student(self, context: str, student: Student) -> bool:
        data = self._contexts[context]
        with data.lock:
            for i, s in enumerate(data.students):
                if s.student_id == student.student_id:
                    data.students[i] = student
                    return True
        return False

    def delete_student(self, context: str, student_id: str) -> bool:
        data = self._contexts[context]
        with data.lock:
            remaining = [s for s in data.students if s.student_id != student_id]
            if len(remaining) == len(data.students):
                return False
            data.students = remaining
            data.sessions = [s for s in data.sessions if s.student_id != student_id]
            return True

    def list_sessions(self, context: str, student_id: Optional[str] = None) -> Sequence[Session]:
        data = self._contexts[context]
        with data.lock:
            if student_id is None:
                return tuple(data.sessions)
            return tuple(s for s in data.sessions if s.student_id == student_id)

    def add_session(self, context: str, session: Session, *, student: Student) -> None:
        data = self._contexts[context]
        with data.lock:
            for i, s in enumerate(data.students):
                if s.student_id == student.student_id:
                    data.students[i] = student
                    break
            else:
                raise KeyError(student.student_id)
            data.sessions.append(session)
