"""Expiry Sweeper — daily background job deactivating weeklists older than 7 days.

Invariants:
    - One sweep per day at sweep_hour_utc, each in its own database session
    - A failed sweep is logged and the loop keeps running (never kills the process)
    - Cancellation (app shutdown) stops the loop cleanly

Design Decisions:
    - Plain asyncio task owned by the FastAPI lifespan instead of an external scheduler:
      the job is one idempotent UPDATE, so a per-process loop is enough
    - Delay computed by core.next_sweep_delay: pure, testable without sleeping
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime

from app.core.enforce_lifecycle import next_sweep_delay
from app.infrastructure.database import DatabaseSessionManager
from app.infrastructure.repositories import SqlWeeklistRepository
from app.services.weeklist_lifecycle import WeeklistLifecycle, utc_now

logger = logging.getLogger(__name__)


async def sweep_once(
    manager: DatabaseSessionManager,
    clock: Callable[[], datetime] = utc_now,
) -> int:
    """Run one expiry sweep in a fresh session. Returns the number of weeklists swept."""
    async with manager.session() as db:
        lifecycle = WeeklistLifecycle(SqlWeeklistRepository(db), clock=clock)
        return await lifecycle.sweep_expired()


async def run_expiry_sweeper(
    manager: DatabaseSessionManager,
    hour_utc: int = 0,
    clock: Callable[[], datetime] = utc_now,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> None:
    """Sleep until the next sweep hour, sweep, repeat. Runs until cancelled."""
    while True:
        delay = next_sweep_delay(clock(), hour_utc)
        logger.info("Next expiry sweep scheduled", extra={"delay_seconds": round(delay)})
        await sleep(delay)
        try:
            await sweep_once(manager, clock)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(f"Expiry sweep failed: {e}", exc_info=True)


def start_expiry_sweeper(
    manager: DatabaseSessionManager, hour_utc: int = 0,
) -> asyncio.Task:
    return asyncio.create_task(
        run_expiry_sweeper(manager, hour_utc), name="weeklist-expiry-sweeper",
    )


async def stop_expiry_sweeper(task: asyncio.Task) -> None:
    task.cancel()
    try:
        await task
    except asyncio.CancelledError:
        pass
