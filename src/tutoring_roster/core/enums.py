from __future__ import annotations

from enum import Enum


class CourseType(str, Enum):
    """Course category a student is enrolled in."""

    THEORY = "theory"
    PRACTICAL = "practical"

    @property
    def label(self) -> str:
        return {
            CourseType.THEORY: "Theory",
            CourseType.PRACTICAL: "Practical",
        }[self]


class Balance(str, Enum):
    """Remaining-hours classification used for visual flagging."""

    NORMAL = "normal"
    LOW = "low"


class ModalState(str, Enum):
    """Which overlay the roster page is showing."""

    NONE = "none"
    ADD_STUDENT = "add_student"
    EDIT_STUDENT = "edit_student"
    RECORD_SESSION = "record_session"
    VIEW_HISTORY = "view_history"
