"""Hour ledger: derived-hour arithmetic for a student's allotment.

Every function here is pure. Callers that write (the roster service) check
preconditions before calling; nothing here clamps or validates input ranges.
"""

from __future__ import annotations

from dataclasses import replace

from ..core.constants import HOURS_DECIMALS, LOW_BALANCE_THRESHOLD_HOURS
from ..core.enums import Balance
from ..students.model import Student


def round_hours(hours: float) -> float:
    """Drop binary-float noise so sums like 10 - 8.9 compare equal to 1.1."""
    return round(hours, HOURS_DECIMALS)


def compute_progress(used_hours: float, total_hours: float) -> float:
    """Percentage of the allotment consumed."""
    if total_hours <= 0:
        raise ValueError("total_hours must be positive")
    return used_hours / total_hours * 100


def apply_session(student: Student, hours_used: float) -> Student:
    """Return ``student`` with ``hours_used`` added to the used balance.

    Assumes ``hours_used <= student.remaining_hours`` was already checked.
    """
    used = round_hours(student.used_hours + hours_used)
    return replace(student, used_hours=used, remaining_hours=round_hours(student.total_hours - used))


def recompute(student: Student, total_hours: float) -> Student:
    """Return ``student`` with a new allotment, keeping hours already used."""
    return replace(student, total_hours=total_hours, remaining_hours=round_hours(total_hours - student.used_hours))


def classify(remaining_hours: float) -> Balance:
    """Low when the remaining balance is at or under the fixed threshold."""
    if remaining_hours <= LOW_BALANCE_THRESHOLD_HOURS:
        return Balance.LOW
    return Balance.NORMAL
