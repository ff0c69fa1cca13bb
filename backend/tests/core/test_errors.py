"""Error Hierarchy — tests for envelope shape and per-condition messages.

Tests cover:
    - to_response() produces {message, data, error}
    - every domain error carries its own message and HTTP status
    - DatabaseError never exposes the internal detail
"""

import pytest

from app.core.domain_types import MutationAction
from app.core.errors import (
    AlreadyCompletedError,
    AuthError,
    ConcurrencyError,
    DatabaseError,
    DuplicateIdentityError,
    ErrorContext,
    InactiveWeeklistError,
    InvalidCredentialsError,
    QuotaExceededError,
    TaskNotFoundError,
    UserNotFoundError,
    WeeklistError,
    WeeklistNotFoundError,
    WindowExpiredError,
)


ALL_ERRORS = [
    DuplicateIdentityError(),
    UserNotFoundError(),
    WeeklistNotFoundError(),
    InvalidCredentialsError(),
    TaskNotFoundError(),
    QuotaExceededError(2),
    WindowExpiredError(MutationAction.EDIT_TASK),
    InactiveWeeklistError(),
    AlreadyCompletedError(),
    AuthError(),
    ConcurrencyError(),
]


def test_envelope_shape():
    err = WeeklistNotFoundError(ErrorContext(weeklist_id="abc"))
    body = err.to_response()
    assert body["message"] == "Weeklist does not exist!"
    assert body["data"] is None
    assert body["error"]["code"] == "WEEKLIST_NOT_FOUND"
    assert body["error"]["category"] == "resource_not_found"
    assert "timestamp" in body["error"]


def test_messages_are_distinct_per_condition():
    messages = [e.message for e in ALL_ERRORS]
    assert len(set(messages)) == len(messages)


def test_codes_are_distinct_per_condition():
    codes = [e.code for e in ALL_ERRORS]
    assert len(set(codes)) == len(codes)


@pytest.mark.parametrize("err,status", [
    (DuplicateIdentityError(), 409),
    (UserNotFoundError(), 404),
    (InvalidCredentialsError(), 401),
    (QuotaExceededError(2), 409),
    (WindowExpiredError(MutationAction.ADD_TASK), 403),
    (AuthError(), 401),
])
def test_http_status(err, status):
    assert err.http_status == status


def test_all_errors_share_the_base_class():
    assert all(isinstance(e, WeeklistError) for e in ALL_ERRORS)


def test_database_error_hides_internal_detail():
    err = DatabaseError("deadlock on weeklists", "commit")
    assert err.message == "Something went wrong!"
    assert "deadlock" not in str(err.to_response())
    assert "deadlock" in err.detail


def test_log_extra_carries_context_ids():
    err = TaskNotFoundError(ErrorContext(user_id="u", weeklist_id="w", task_id="t"))
    assert err.log_extra() == {
        "error_code": "TASK_NOT_FOUND",
        "user_id": "u",
        "weeklist_id": "w",
        "task_id": "t",
    }
