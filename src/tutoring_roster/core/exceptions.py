from __future__ import annotations

from typing import Mapping


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when command input violates one or more field constraints.

    ``errors`` maps each offending field name to a human-readable message.
    """

    def __init__(self, errors: Mapping[str, str]):
        self.errors = dict(errors)
        super().__init__("; ".join(self.errors.values()))
