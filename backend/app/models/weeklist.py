"""Weeklist ORM — a user-owned, time-boxed collection of tasks.

Invariants:
    - owner_id is set at creation and never changes
    - created_at is assigned on insert and never changes (anchors both windows)
    - is_active only goes true -> false (sweep); is_completed is derived from tasks
    - version increments on every write (optimistic locking)
    - tasks ordered by position; removing a task renumbers the rest

Design Decisions:
    - Tasks in their own table instead of a JSON column: task ids are addressable
      and task edits are row updates
    - ordering_list manages position: append/remove keep a dense 0..n-1 sequence
    - cascade delete for tasks: weeklist owns all its tasks
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Boolean, Integer, DateTime, ForeignKey
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Weeklist(Base):
    """Weeklist aggregate root — owns its tasks."""
    __tablename__ = "weeklists"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    owner_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True,
    )
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, index=True,
    )
    is_completed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow,
    )

    owner: Mapped["User"] = relationship(
        "User", back_populates="weeklists", lazy="noload",
    )
    tasks: Mapped[list["Task"]] = relationship(
        "Task", back_populates="weeklist",
        order_by="Task.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan", lazy="selectin",
    )

    @property
    def created_by(self) -> uuid.UUID:
        return self.owner_id
