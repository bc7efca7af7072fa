from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import ModalState

_NEEDS_STUDENT = {ModalState.EDIT_STUDENT, ModalState.RECORD_SESSION, ModalState.VIEW_HISTORY}


@dataclass(frozen=True)
class ViewState:
    """Which overlay is open on the roster page. At most one at a time.

    Opening a modal replaces whatever was open before. Edit, record and
    history modals always carry the student they act on.
    """

    modal: ModalState = ModalState.NONE
    student_id: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.modal is not ModalState.NONE

    def open(self, modal: ModalState, student_id: Optional[str] = None) -> "ViewState":
        if modal in _NEEDS_STUDENT and not student_id:
            raise ValueError(f"{modal.value} requires a student")
        if modal not in _NEEDS_STUDENT:
            student_id = None
        return ViewState(modal=modal, student_id=student_id)

    def close(self) -> "ViewState":
        return ViewState()

    @classmethod
    def from_query(cls, modal: Optional[str], student_id: Optional[str]) -> "ViewState":
        """Build from request args; anything malformed means no modal."""
        try:
            state = ModalState(modal or ModalState.NONE.value)
        except ValueError:
            return cls()
        try:
            return cls().open(state, student_id)
        except ValueError:
            return cls()
