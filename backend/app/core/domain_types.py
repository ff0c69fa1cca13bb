"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, WeeklistId, TaskId wrap UUIDs — never use bare UUID in domain logic
    - Window-gated edits named by MutationAction, never by free-form strings

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
WeeklistId = NewType("WeeklistId", UUID)
TaskId = NewType("TaskId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class MutationAction(str, Enum):
    """Structural edits gated by the 24h mutation window."""
    DELETE_WEEKLIST = "delete weeklist"
    ADD_TASK = "add new task"
    DELETE_TASK = "delete task"
    EDIT_TASK = "edit task"
