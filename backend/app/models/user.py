"""User ORM — registered account with unique email and mobile.

Invariants:
    - email and mobile are each unique across all users (DB constraints)
    - password_hash is a bcrypt digest, never plaintext
    - Created once at registration; never mutated or deleted

Design Decisions:
    - mobile stored as text: keeps leading zeros and country prefixes intact
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base


class User(Base):
    """Registered user — owner of weeklists."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    fullname: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(
        String(320), nullable=False, unique=True, index=True,
    )
    mobile: Mapped[str] = mapped_column(
        String(20), nullable=False, unique=True, index=True,
    )
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    gender: Mapped[str] = mapped_column(String(30), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(100), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    weeklists: Mapped[list["Weeklist"]] = relationship(
        "Weeklist", back_populates="owner", lazy="noload",
    )
