"""Weeklist Lifecycle Rules — pure enforcement of quotas, windows and completion.

Invariants:
    - An owner has at most MAX_OPEN_WEEKLISTS weeklists with is_active and not is_completed
    - Structural edits allowed only while age < MUTATION_WINDOW (fixed at creation)
    - is_active only ever goes true -> false, once age >= ACTIVE_LIFETIME
    - is_completed is derived: every task complete, recomputed after each toggle
    - Toggling is blocked once a weeklist is inactive or completed
    - Every function is PURE: "now" is always an argument, never read from the clock

Design Decisions:
    - Rules raise typed WeeklistError subclasses: the shell never re-interprets flags
    - Naive datetimes treated as UTC: SQLite drops tzinfo on read
    - Completed weeklists stay completed: toggle is blocked before recomputation could
      reopen them, so AlreadyCompleted is permanent by construction
"""

from collections.abc import Sequence
from datetime import datetime, timedelta, timezone
from uuid import UUID

from app.core.domain_types import MutationAction
from app.core.errors import (
    AlreadyCompletedError,
    ErrorContext,
    InactiveWeeklistError,
    QuotaExceededError,
    TaskNotFoundError,
    WindowExpiredError,
)
from app.core.repository_protocols import TaskLike


MAX_OPEN_WEEKLISTS: int = 2
MUTATION_WINDOW: timedelta = timedelta(hours=24)
ACTIVE_LIFETIME: timedelta = timedelta(days=7)


def as_utc(moment: datetime) -> datetime:
    """Attach UTC to naive datetimes, convert aware ones."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def weeklist_age(created_at: datetime, now: datetime) -> timedelta:
    return as_utc(now) - as_utc(created_at)


def weeklist_name(existing_count: int) -> str:
    """Name for the owner's next weeklist: 'Weeklist #N', N = existing + 1."""
    return f"Weeklist #{existing_count + 1}"


def check_open_quota(
    open_count: int, context: ErrorContext | None = None,
) -> None:
    """Creation rule: refuse a new weeklist when the owner has 2 open ones."""
    if open_count >= MAX_OPEN_WEEKLISTS:
        raise QuotaExceededError(open_count, context)


def within_mutation_window(created_at: datetime, now: datetime) -> bool:
    return weeklist_age(created_at, now) < MUTATION_WINDOW


def check_mutation_window(
    created_at: datetime,
    now: datetime,
    action: MutationAction,
    context: ErrorContext | None = None,
) -> None:
    """Structural edit rule: add/edit/delete task and delete weeklist."""
    if not within_mutation_window(created_at, now):
        raise WindowExpiredError(action, context)


def check_toggle_allowed(
    is_active: bool, is_completed: bool, context: ErrorContext | None = None,
) -> None:
    """Toggle rule: inactive is checked before completed."""
    if not is_active:
        raise InactiveWeeklistError(context)
    if is_completed:
        raise AlreadyCompletedError(context)


def find_task_index(
    tasks: Sequence[TaskLike],
    task_id: UUID | None,
    context: ErrorContext | None = None,
) -> int:
    """Index of the task with this id; None never matches."""
    for index, task in enumerate(tasks):
        if task.id == task_id:
            return index
    raise TaskNotFoundError(context)


def all_tasks_completed(tasks: Sequence[TaskLike]) -> bool:
    """Completion predicate recomputed after every toggle."""
    return all(task.is_completed for task in tasks)


def expiry_cutoff(now: datetime) -> datetime:
    """Weeklists created before this instant are due for deactivation."""
    return as_utc(now) - ACTIVE_LIFETIME


def next_sweep_delay(now: datetime, hour: int = 0) -> float:
    """Seconds from now until the next hour:00 UTC, strictly in the future."""
    now = as_utc(now)
    target = now.replace(hour=hour, minute=0, second=0, microsecond=0)
    if target <= now:
        target += timedelta(days=1)
    return (target - now).total_seconds()
