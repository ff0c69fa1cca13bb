"""Domain Types — verifies identity wrappers and enum values.

Tests:
    - NewType wrappers exist and are callable
    - MutationAction values read naturally inside the window-expired message
"""

from uuid import uuid4

from app.core.domain_types import (
    MutationAction, TaskId, UserId, WeeklistId,
)


def test_identity_types_wrap_uuid():
    uid = uuid4()
    assert UserId(uid) == uid
    assert WeeklistId(uid) == uid
    assert TaskId(uid) == uid


def test_mutation_actions_are_phrases():
    assert MutationAction.DELETE_WEEKLIST.value == "delete weeklist"
    assert MutationAction.ADD_TASK.value == "add new task"
    assert MutationAction.DELETE_TASK.value == "delete task"
    assert MutationAction.EDIT_TASK.value == "edit task"


def test_enums_are_str_subclasses():
    assert isinstance(MutationAction.ADD_TASK, str)
    assert MutationAction.ADD_TASK == "add new task"
