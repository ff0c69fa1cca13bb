"""Repositories — SQLAlchemy implementations of the core storage protocols.

Invariants:
    - Every mutating method commits its own unit of work and refreshes the returned row
    - With optimistic locking on, a weeklist write only lands if its version is unchanged
      since it was read; otherwise ConcurrencyError and the whole unit is rolled back
    - A unique-constraint violation on user insert is a DuplicateIdentityError
    - deactivate_created_before only flips active rows (monotone, idempotent)

Design Decisions:
    - Version claim as an explicit conditional UPDATE: task edits live in another table,
      so the weeklist row must be bumped even when none of its own columns changed
    - Counting in SQL (func.count) instead of loading rows: naming and quota need numbers only
"""

import logging
from collections.abc import Sequence
from datetime import datetime
from uuid import UUID

from sqlalchemy import func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ConcurrencyError, DuplicateIdentityError, ErrorContext
from app.models.task import Task
from app.models.user import User
from app.models.weeklist import Weeklist

logger = logging.getLogger(__name__)


class SqlUserRepository:
    """User persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert(self, **fields: object) -> User:
        user = User(**fields)
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise DuplicateIdentityError()
        await self.db.refresh(user)
        return user

    async def find_by_id(self, user_id: UUID) -> User | None:
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def find_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def find_by_email_or_mobile(self, email: str, mobile: str) -> User | None:
        result = await self.db.execute(
            select(User)
            .where(or_(User.email == email, User.mobile == mobile))
            .limit(1)
        )
        return result.scalar_one_or_none()


class SqlWeeklistRepository:
    """Weeklist persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession, optimistic_locking: bool = True):
        self.db = db
        self.optimistic_locking = optimistic_locking

    async def insert(
        self, owner_id: UUID, name: str, task_descriptions: Sequence[str],
    ) -> Weeklist:
        weeklist = Weeklist(
            owner_id=owner_id,
            name=name,
            tasks=[
                Task(description=description, position=index)
                for index, description in enumerate(task_descriptions)
            ],
        )
        self.db.add(weeklist)
        await self.db.commit()
        await self.db.refresh(weeklist)
        return weeklist

    async def find_one(self, weeklist_id: UUID, owner_id: UUID) -> Weeklist | None:
        result = await self.db.execute(
            select(Weeklist)
            .where(Weeklist.id == weeklist_id)
            .where(Weeklist.owner_id == owner_id)
        )
        return result.scalar_one_or_none()

    async def find_many(
        self,
        owner_id: UUID | None = None,
        is_active: bool | None = None,
        is_completed: bool | None = None,
    ) -> list[Weeklist]:
        query = select(Weeklist).order_by(Weeklist.created_at, Weeklist.id)
        if owner_id is not None:
            query = query.where(Weeklist.owner_id == owner_id)
        if is_active is not None:
            query = query.where(Weeklist.is_active.is_(is_active))
        if is_completed is not None:
            query = query.where(Weeklist.is_completed.is_(is_completed))
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def count_by_owner(self, owner_id: UUID) -> int:
        result = await self.db.execute(
            select(func.count())
            .select_from(Weeklist)
            .where(Weeklist.owner_id == owner_id)
        )
        return result.scalar_one()

    async def count_open(self, owner_id: UUID) -> int:
        result = await self.db.execute(
            select(func.count())
            .select_from(Weeklist)
            .where(Weeklist.owner_id == owner_id)
            .where(Weeklist.is_active.is_(True))
            .where(Weeklist.is_completed.is_(False))
        )
        return result.scalar_one()

    def append_task(self, weeklist: Weeklist, description: str) -> Task:
        task = Task(description=description)
        weeklist.tasks.append(task)
        return task

    async def save(self, weeklist: Weeklist, expected_version: int) -> Weeklist:
        """Persist pending changes to a fetched weeklist and its tasks."""
        await self._claim_version(weeklist, expected_version)
        await self.db.commit()
        await self.db.refresh(weeklist)
        return weeklist

    async def delete(self, weeklist: Weeklist, expected_version: int | None = None) -> None:
        if expected_version is not None:
            await self._claim_version(weeklist, expected_version)
        await self.db.delete(weeklist)
        await self.db.commit()

    async def deactivate_created_before(self, cutoff: datetime) -> int:
        """Bulk active -> inactive for weeklists created at or before cutoff."""
        result = await self.db.execute(
            update(Weeklist)
            .where(Weeklist.is_active.is_(True))
            .where(Weeklist.created_at <= cutoff)
            .values(is_active=False, version=Weeklist.version + 1)
            .execution_options(synchronize_session="fetch")
        )
        await self.db.commit()
        return result.rowcount or 0

    async def _claim_version(self, weeklist: Weeklist, expected_version: int) -> None:
        if not self.optimistic_locking:
            weeklist.version = expected_version + 1
            return
        weeklist_id = weeklist.id
        result = await self.db.execute(
            update(Weeklist)
            .where(Weeklist.id == weeklist_id)
            .where(Weeklist.version == expected_version)
            .values(version=expected_version + 1)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            # rollback expires `weeklist`; only the id captured above is safe to read
            await self.db.rollback()
            logger.warning(
                "Stale weeklist write rejected",
                extra={"weeklist_id": str(weeklist_id)},
            )
            raise ConcurrencyError(ErrorContext(weeklist_id=str(weeklist_id)))
