from __future__ import annotations

import pytest

from tutoring_roster.core.constants import CONTEXTS
from tutoring_roster.main import create_app
from tutoring_roster.roster.memory_repository import InMemoryRosterRepository
from tutoring_roster.roster.service import RosterService


@pytest.fixture
def repo() -> InMemoryRosterRepository:
    return InMemoryRosterRepository(CONTEXTS)


@pytest.fixture
def service(repo) -> RosterService:
    return RosterService(repo)


@pytest.fixture
def app():
    return create_app("tutoring_roster.config.testing")


@pytest.fixture
def client(app):
    return app.test_client()
