"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Weeklist is the aggregate root for its Tasks; Users own Weeklists

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from app.models.user import User  # noqa: F401
from app.models.weeklist import Weeklist  # noqa: F401
from app.models.task import Task  # noqa: F401
