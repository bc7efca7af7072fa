from __future__ import annotations

from dataclasses import dataclass

from .core.constants import CONTEXTS
from .roster.memory_repository import InMemoryRosterRepository
from .roster.seed import seed_demo_data
from .roster.service import RosterService


@dataclass(frozen=True)
class Container:
    roster_repo: InMemoryRosterRepository

    roster_service: RosterService


def build_container(*, seed: bool = True) -> Container:
    roster_repo = InMemoryRosterRepository(CONTEXTS)
    if seed:
        seed_demo_data(roster_repo)

    roster_service = RosterService(roster_repo)

    return Container(
        roster_repo=roster_repo,
        roster_service=roster_service,
    )
