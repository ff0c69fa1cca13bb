"""Lifecycle Rules — tests for pure quota, window, toggle and expiry rules.

Tests cover:
    - check_open_quota allows 0-1 open weeklists, rejects 2+
    - check_mutation_window passes at 23h59m, fails at exactly 24h and at 24h01m
    - check_toggle_allowed: inactive wins over completed
    - all_tasks_completed / find_task_index
    - expiry cutoff sits seven days back
    - next_sweep_delay always lands on the next hour:00 UTC
    - naive datetimes treated as UTC
"""

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from uuid import uuid4

import pytest

from app.core.domain_types import MutationAction
from app.core.enforce_lifecycle import (
    ACTIVE_LIFETIME,
    MAX_OPEN_WEEKLISTS,
    MUTATION_WINDOW,
    all_tasks_completed,
    as_utc,
    check_mutation_window,
    check_open_quota,
    check_toggle_allowed,
    expiry_cutoff,
    find_task_index,
    next_sweep_delay,
    weeklist_age,
    weeklist_name,
)
from app.core.errors import (
    AlreadyCompletedError,
    InactiveWeeklistError,
    QuotaExceededError,
    TaskNotFoundError,
    WindowExpiredError,
)

CREATED = datetime(2026, 3, 2, 9, 30, tzinfo=timezone.utc)


def _task(done: bool = False):
    return SimpleNamespace(id=uuid4(), description="t", is_completed=done)


# ─── naming ─────────────────────────────────────

def test_first_weeklist_is_number_one():
    assert weeklist_name(0) == "Weeklist #1"


def test_name_counts_existing_weeklists():
    assert weeklist_name(4) == "Weeklist #5"


# ─── check_open_quota ────────────────────────────────────────────

@pytest.mark.parametrize("open_count", [0, 1])
def test_quota_allows_below_limit(open_count):
    check_open_quota(open_count)


def test_quota_rejects_at_limit():
    with pytest.raises(QuotaExceededError) as exc_info:
        check_open_quota(MAX_OPEN_WEEKLISTS)
    assert exc_info.value.open_count == 2
    assert exc_info.value.message == "Cannot create, exceeded the limit!"


def test_quota_rejects_above_limit():
    with pytest.raises(QuotaExceededError):
        check_open_quota(3)


# ─── check_mutation_window ───────────────────────────────────────

def test_window_open_right_after_creation():
    check_mutation_window(CREATED, CREATED, MutationAction.ADD_TASK)


def test_window_open_at_23h59m():
    now = CREATED + timedelta(hours=23, minutes=59)
    check_mutation_window(CREATED, now, MutationAction.EDIT_TASK)


def test_window_closed_at_exactly_24h():
    now = CREATED + MUTATION_WINDOW
    with pytest.raises(WindowExpiredError):
        check_mutation_window(CREATED, now, MutationAction.DELETE_TASK)


def test_window_closed_at_24h01m():
    now = CREATED + timedelta(hours=24, minutes=1)
    with pytest.raises(WindowExpiredError) as exc_info:
        check_mutation_window(CREATED, now, MutationAction.DELETE_WEEKLIST)
    assert exc_info.value.action == MutationAction.DELETE_WEEKLIST
    assert exc_info.value.message == (
        "Cannot delete weeklist. Exceeded modification time."
    )


def test_window_message_names_the_action():
    now = CREATED + timedelta(days=2)
    with pytest.raises(WindowExpiredError) as exc_info:
        check_mutation_window(CREATED, now, MutationAction.ADD_TASK)
    assert "add new task" in exc_info.value.message


def test_window_accepts_naive_created_at():
    naive = CREATED.replace(tzinfo=None)
    now = CREATED + timedelta(hours=25)
    with pytest.raises(WindowExpiredError):
        check_mutation_window(naive, now, MutationAction.EDIT_TASK)


# ─── check_toggle_allowed ────────────────────────────────────────

def test_toggle_allowed_on_open_weeklist():
    check_toggle_allowed(True, False)


def test_toggle_blocked_when_inactive():
    with pytest.raises(InactiveWeeklistError):
        check_toggle_allowed(False, False)


def test_toggle_blocked_when_completed():
    with pytest.raises(AlreadyCompletedError):
        check_toggle_allowed(True, True)


def test_toggle_inactive_checked_before_completed():
    with pytest.raises(InactiveWeeklistError):
        check_toggle_allowed(False, True)


# ─── tasks ───────────────────────────────────────────────────────

def test_all_tasks_completed_true_when_every_task_done():
    assert all_tasks_completed([_task(True), _task(True)])


def test_all_tasks_completed_false_with_one_pending():
    assert not all_tasks_completed([_task(True), _task(False)])


def test_find_task_index_returns_position():
    tasks = [_task(), _task(), _task()]
    assert find_task_index(tasks, tasks[2].id) == 2


def test_find_task_index_raises_for_unknown_id():
    with pytest.raises(TaskNotFoundError):
        find_task_index([_task()], uuid4())


def test_find_task_index_never_matches_none():
    with pytest.raises(TaskNotFoundError):
        find_task_index([_task()], None)


# ─── expiry ──────────────────────────────────────────────────────

def test_expiry_cutoff_is_seven_days_back():
    now = CREATED + timedelta(days=10)
    assert expiry_cutoff(now) == now - ACTIVE_LIFETIME


def test_weeklist_age_mixes_naive_and_aware():
    naive = CREATED.replace(tzinfo=None)
    assert weeklist_age(naive, CREATED + timedelta(hours=3)) == timedelta(hours=3)


def test_as_utc_converts_other_zones():
    plus_two = timezone(timedelta(hours=2))
    moment = datetime(2026, 3, 2, 11, 30, tzinfo=plus_two)
    assert as_utc(moment) == CREATED
    assert as_utc(moment).tzinfo == timezone.utc


# ─── next_sweep_delay ────────────────────────────────────────────

def test_sweep_delay_until_next_midnight():
    now = datetime(2026, 3, 2, 22, 0, tzinfo=timezone.utc)
    assert next_sweep_delay(now, 0) == 2 * 3600


def test_sweep_delay_at_exact_hour_waits_a_full_day():
    now = datetime(2026, 3, 2, 0, 0, tzinfo=timezone.utc)
    assert next_sweep_delay(now, 0) == 24 * 3600


def test_sweep_delay_later_same_day():
    now = datetime(2026, 3, 2, 1, 30, tzinfo=timezone.utc)
    assert next_sweep_delay(now, 3) == 1.5 * 3600
