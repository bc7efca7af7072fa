from __future__ import annotations

from typing import ContextManager, Optional, Protocol, Sequence

from ..sessions.model import Session
from ..students.model import Student


class RosterRepository(Protocol):
    """Repository interface for per-context rosters and session logs.

    Note (DIP): the service depends on this interface, not on a concrete store.
    Every method taking ``context`` assumes the context exists; callers check
    with ``has_context`` first.
    """

    def list_contexts(self) -> Sequence[str]:
        raise NotImplementedError

    def has_context(self, context: str) -> bool:
        raise NotImplementedError

    def transaction(self, context: str) -> ContextManager[None]:
        """Hold the context's write lock for a read-check-write sequence."""

        raise NotImplementedError

    def list_students(self, context: str) -> Sequence[Student]:
        raise NotImplementedError

    def get_student(self, context: str, student_id: str) -> Optional[Student]:
        raise NotImplementedError

    def add_student(self, context: str, student: Student) -> None:
        raise NotImplementedError

    def replace_student(self, context: str, student: Student) -> bool:
        raise NotImplementedError

    def delete_student(self, context: str, student_id: str) -> bool:
        """Delete the student and every session referencing it."""

        raise NotImplementedError

    def list_sessions(self, context: str, student_id: Optional[str] = None) -> Sequence[Session]:
        """Sessions in insertion order, optionally for one student."""

        raise NotImplementedError

    def add_session(self, context: str, session: Session, *, student: Student) -> None:
        """Append ``session`` and store the ledger-updated ``student`` together."""

        raise NotImplementedError
