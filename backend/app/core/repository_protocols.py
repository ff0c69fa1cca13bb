"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO,
      but core pure functions that USE these protocols are never async themselves
"""

from collections.abc import Sequence
from datetime import datetime
from typing import Protocol
from uuid import UUID

from app.core.domain_types import UserId, WeeklistId


class TaskLike(Protocol):
    """Structural contract for Task objects passed to lifecycle rules."""
    id: UUID
    description: str
    is_completed: bool


class WeeklistLike(Protocol):
    """Structural contract for Weeklist objects handled by the engine.

    Avoids coupling the rules to the ORM model while giving mypy
    real type information (unlike Any).
    """
    id: UUID
    owner_id: UUID
    name: str
    is_active: bool
    is_completed: bool
    version: int
    created_at: datetime
    tasks: list


class UserLike(Protocol):
    id: UUID
    email: str
    mobile: str
    password_hash: str


class UserRepository(Protocol):
    """Contract for user persistence — implemented by shell."""
    async def insert(self, **fields: object) -> UserLike: ...
    async def find_by_id(self, user_id: UserId) -> UserLike | None: ...
    async def find_by_email(self, email: str) -> UserLike | None: ...
    async def find_by_email_or_mobile(
        self, email: str, mobile: str,
    ) -> UserLike | None: ...


class WeeklistRepository(Protocol):
    """Contract for weeklist persistence — implemented by shell."""
    async def insert(
        self, owner_id: UserId, name: str, task_descriptions: Sequence[str],
    ) -> WeeklistLike: ...
    async def find_one(
        self, weeklist_id: WeeklistId, owner_id: UserId,
    ) -> WeeklistLike | None: ...
    async def find_many(
        self,
        owner_id: UserId | None = None,
        is_active: bool | None = None,
        is_completed: bool | None = None,
    ) -> list[WeeklistLike]: ...
    async def count_by_owner(self, owner_id: UserId) -> int: ...
    async def count_open(self, owner_id: UserId) -> int: ...
    def append_task(self, weeklist: WeeklistLike, description: str) -> TaskLike: ...
    async def save(
        self, weeklist: WeeklistLike, expected_version: int,
    ) -> WeeklistLike: ...
    async def delete(
        self, weeklist: WeeklistLike, expected_version: int | None = None,
    ) -> None: ...
    async def deactivate_created_before(self, cutoff: datetime) -> int: ...
