"""Weeklist Lifecycle Engine — creation caps, mutation windows, completion and expiry.

Invariants:
    - Every operation is scoped to the owner; another user's weeklist is "not found"
    - Precondition order per operation: exists -> window (structural edits)
      or exists -> active -> not completed -> task exists (toggle)
    - Toggling never checks the 24h window; structural edits always do
    - is_completed recomputed from tasks after every toggle, persisted in the same write
    - sweep_expired() is monotone: only active -> inactive, safe to repeat

Design Decisions:
    - Impure shell around core/enforce_lifecycle.py: read via repository, decide with
      pure rules, write via repository (one commit per operation)
    - Clock injected: tests pin "now" to exercise the 24h and 7-day boundaries
    - Quota is enforced at creation only; add_task never counts open weeklists
"""

import logging
from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from uuid import UUID

from app.core import enforce_lifecycle as rules
from app.core.domain_types import MutationAction
from app.core.errors import ErrorContext, WeeklistNotFoundError
from app.core.repository_protocols import WeeklistLike, WeeklistRepository

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class WeeklistLifecycle:
    """Enforces the weeklist business rules over a WeeklistRepository."""

    def __init__(
        self,
        weeklists: WeeklistRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.weeklists = weeklists
        self.clock = clock

    # ─── Reads ───────────────────────────────────────────────────

    async def list_weeklists(self, owner: UUID) -> list[WeeklistLike]:
        """Every weeklist of the owner, any state; clients filter by flags."""
        return await self.weeklists.find_many(owner_id=owner)

    async def get_weeklist(self, owner: UUID, weeklist_id: UUID) -> WeeklistLike | None:
        return await self.weeklists.find_one(weeklist_id, owner)

    async def feed(self) -> list[WeeklistLike]:
        """Open weeklists across all owners."""
        return await self.weeklists.find_many(is_active=True, is_completed=False)

    # ─── Creation ────────────────────────────────────────────────

    async def create_weeklist(
        self, owner: UUID, task_descriptions: Sequence[str],
    ) -> WeeklistLike:
        context = ErrorContext(user_id=str(owner))
        existing = await self.weeklists.count_by_owner(owner)
        open_count = await self.weeklists.count_open(owner)
        rules.check_open_quota(open_count, context)

        weeklist = await self.weeklists.insert(
            owner, rules.weeklist_name(existing), list(task_descriptions),
        )
        logger.info(
            f"Created {weeklist.name} with {len(task_descriptions)} task(s)",
            extra={"user_id": str(owner), "weeklist_id": str(weeklist.id)},
        )
        return weeklist

    # ─── Structural edits (24h window) ───────────────────────────

    async def delete_weeklist(self, owner: UUID, weeklist_id: UUID) -> WeeklistLike:
        """Permanently remove a weeklist and its tasks. Returns the removed record."""
        weeklist = await self._editable(owner, weeklist_id, MutationAction.DELETE_WEEKLIST)
        await self.weeklists.delete(weeklist, weeklist.version)
        logger.info(
            f"Deleted {weeklist.name}",
            extra={"user_id": str(owner), "weeklist_id": str(weeklist_id)},
        )
        return weeklist

    async def add_task(
        self, owner: UUID, weeklist_id: UUID, description: str,
    ) -> WeeklistLike:
        weeklist = await self._editable(owner, weeklist_id, MutationAction.ADD_TASK)
        version = weeklist.version
        self.weeklists.append_task(weeklist, description)
        return await self.weeklists.save(weeklist, version)

    async def delete_task(
        self, owner: UUID, weeklist_id: UUID, task_id: UUID | None,
    ) -> WeeklistLike:
        weeklist = await self._editable(owner, weeklist_id, MutationAction.DELETE_TASK)
        index = rules.find_task_index(
            weeklist.tasks, task_id, self._context(owner, weeklist_id, task_id),
        )
        version = weeklist.version
        del weeklist.tasks[index]
        return await self.weeklists.save(weeklist, version)

    async def edit_task(
        self, owner: UUID, weeklist_id: UUID, task_id: UUID | None,
        new_description: str,
    ) -> WeeklistLike:
        weeklist = await self._editable(owner, weeklist_id, MutationAction.EDIT_TASK)
        index = rules.find_task_index(
            weeklist.tasks, task_id, self._context(owner, weeklist_id, task_id),
        )
        version = weeklist.version
        weeklist.tasks[index].description = new_description
        return await self.weeklists.save(weeklist, version)

    # ─── Completion (no window) ──────────────────────────────────

    async def toggle_task(
        self, owner: UUID, weeklist_id: UUID, task_id: UUID | None,
    ) -> WeeklistLike:
        """Flip a task's completion flag and recompute the weeklist's."""
        context = self._context(owner, weeklist_id, task_id)
        weeklist = await self._require(owner, weeklist_id)
        rules.check_toggle_allowed(weeklist.is_active, weeklist.is_completed, context)
        index = rules.find_task_index(weeklist.tasks, task_id, context)

        version = weeklist.version
        task = weeklist.tasks[index]
        task.is_completed = not task.is_completed
        weeklist.is_completed = rules.all_tasks_completed(weeklist.tasks)
        saved = await self.weeklists.save(weeklist, version)
        logger.info(
            f"Task marked {'done' if task.is_completed else 'pending'}",
            extra={
                "user_id": str(owner),
                "weeklist_id": str(weeklist_id),
                "task_id": str(task_id),
            },
        )

        if saved.is_completed:
            logger.info(
                f"{saved.name} completed",
                extra={"user_id": str(owner), "weeklist_id": str(weeklist_id)},
            )
        return saved

    # ─── Expiry ──────────────────────────────────────────────────

    async def sweep_expired(self) -> int:
        """Deactivate every active weeklist aged 7 days or more. Returns rows changed."""
        swept = await self.weeklists.deactivate_created_before(
            rules.expiry_cutoff(self.clock()),
        )
        logger.info("Expiry sweep finished", extra={"swept": swept})
        return swept

    # ─── Helpers ─────────────────────────────────────────────────

    async def _require(self, owner: UUID, weeklist_id: UUID) -> WeeklistLike:
        weeklist = await self.weeklists.find_one(weeklist_id, owner)
        if weeklist is None:
            raise WeeklistNotFoundError(self._context(owner, weeklist_id))
        return weeklist

    async def _editable(
        self, owner: UUID, weeklist_id: UUID, action: MutationAction,
    ) -> WeeklistLike:
        weeklist = await self._require(owner, weeklist_id)
        rules.check_mutation_window(
            weeklist.created_at, self.clock(), action,
            self._context(owner, weeklist_id),
        )
        return weeklist

    @staticmethod
    def _context(
        owner: UUID, weeklist_id: UUID, task_id: UUID | None = None,
    ) -> ErrorContext:
        return ErrorContext(
            user_id=str(owner),
            weeklist_id=str(weeklist_id),
            task_id=str(task_id) if task_id else None,
        )
