from __future__ import annotations

import math
from datetime import date
from typing import Optional, Union

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date


class FieldErrors:
    """Collects per-field validation messages for one command.

    Each ``require_*`` helper returns the normalized value, or ``None`` after
    recording a message when the value is invalid. The first message recorded
    for a field wins.
    """

    def __init__(self):
        self._errors: dict[str, str] = {}

    def __bool__(self) -> bool:
        return bool(self._errors)

    def __contains__(self, field_name: str) -> bool:
        return field_name in self._errors

    def add(self, field_name: str, message: str) -> None:
        self._errors.setdefault(field_name, message)

    def as_dict(self) -> dict[str, str]:
        return dict(self._errors)

    def raise_if_any(self) -> None:
        if self._errors:
            raise ValidationError(self._errors)

    def require_non_empty(self, value: Optional[str], field_name: str, message: str) -> Optional[str]:
        if value is None or not str(value).strip():
            self.add(field_name, message)
            return None
        return str(value).strip()

    def require_positive_hours(
        self, value: Union[str, int, float, None], field_name: str, message: str
    ) -> Optional[float]:
        hours = parse_hours(value)
        if hours is None or hours <= 0:
            self.add(field_name, message)
            return None
        return hours

    def require_date(self, value: Union[str, date, None], field_name: str, message: str) -> Optional[date]:
        if isinstance(value, date):
            return value
        v = str(value).strip() if value is not None else ""
        if not v:
            self.add(field_name, message)
            return None
        try:
            return parse_iso_date(v)
        except ValueError:
            self.add(field_name, "Date must use the YYYY-MM-DD format")
            return None


def parse_hours(value: Union[str, int, float, None]) -> Optional[float]:
    """Coerce form/JSON input into a finite hour count, or None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            hours = float(value)
        except OverflowError:
            return None
    else:
        v = str(value).strip()
        if not v:
            return None
        try:
            hours = float(v)
        except ValueError:
            return None
    if not math.isfinite(hours):
        return None
    return hours
