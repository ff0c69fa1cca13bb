"""Weeklist Routes — create, read, delete weeklists; add, edit, delete, mark tasks; feed.

Invariants:
    - Every route requires a valid token; the owner is the authenticated user's id
    - Routes hold no rules: WeeklistLifecycle raises, error handlers render
    - Weeklist payloads serialized through WeeklistOut (camelCase)
    - Ids are parsed after authentication: a malformed weeklist id is WeeklistNotFound,
      a malformed task id reaches the lifecycle as None and ends as TaskNotFound
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from app.api.dependencies import get_current_user, get_lifecycle
from app.core.errors import ErrorContext, WeeklistNotFoundError
from app.models.user import User
from app.schemas.envelope import Envelope, MessageResponse
from app.schemas.weeklist import (
    AddTaskRequest, CreateWeeklistRequest, EditTaskRequest, WeeklistOut,
)
from app.services.weeklist_lifecycle import WeeklistLifecycle

router = APIRouter(tags=["weeklists"])


def _one(message: str, weeklist) -> Envelope[WeeklistOut]:
    return Envelope[WeeklistOut](
        message=message, data=WeeklistOut.model_validate(weeklist),
    )


def _many(message: str, weeklists) -> Envelope[list[WeeklistOut]]:
    return Envelope[list[WeeklistOut]](
        message=message,
        data=[WeeklistOut.model_validate(w) for w in weeklists],
    )


def _parse_id(raw: str) -> UUID | None:
    try:
        return UUID(raw)
    except ValueError:
        return None


def _weeklist_id(raw: str, user: User) -> UUID:
    weeklist_id = _parse_id(raw)
    if weeklist_id is None:
        raise WeeklistNotFoundError(
            ErrorContext(user_id=str(user.id), weeklist_id=raw),
        )
    return weeklist_id


@router.post("/create-weeklist", response_model=Envelope[WeeklistOut])
async def create_weeklist(
    body: CreateWeeklistRequest,
    user: User = Depends(get_current_user),
    lifecycle: WeeklistLifecycle = Depends(get_lifecycle),
):
    weeklist = await lifecycle.create_weeklist(user.id, body.tasks)
    return _one("Weeklist created successfully!", weeklist)


@router.get("/display-weeklists", response_model=Envelope[list[WeeklistOut]])
async def display_weeklists(
    user: User = Depends(get_current_user),
    lifecycle: WeeklistLifecycle = Depends(get_lifecycle),
):
    weeklists = await lifecycle.list_weeklists(user.id)
    return _many("Successfully fetched weeklists.", weeklists)


@router.get("/weeklist/{weeklist_id}", response_model=Envelope[WeeklistOut])
async def get_weeklist(
    weeklist_id: str,
    user: User = Depends(get_current_user),
    lifecycle: WeeklistLifecycle = Depends(get_lifecycle),
):
    weeklist = await lifecycle.get_weeklist(user.id, _weeklist_id(weeklist_id, user))
    if weeklist is None:
        raise WeeklistNotFoundError(
            ErrorContext(user_id=str(user.id), weeklist_id=weeklist_id),
        )
    return _one("Successfully fetched weeklist information.", weeklist)


@router.delete("/delete-weeklist/{weeklist_id}", response_model=MessageResponse)
async def delete_weeklist(
    weeklist_id: str,
    user: User = Depends(get_current_user),
    lifecycle: WeeklistLifecycle = Depends(get_lifecycle),
):
    weeklist = await lifecycle.delete_weeklist(
        user.id, _weeklist_id(weeklist_id, user),
    )
    return MessageResponse(message=f"Deleted {weeklist.name} successfully!")


@router.patch("/add-task/{weeklist_id}", response_model=Envelope[WeeklistOut])
async def add_task(
    weeklist_id: str,
    body: AddTaskRequest,
    user: User = Depends(get_current_user),
    lifecycle: WeeklistLifecycle = Depends(get_lifecycle),
):
    weeklist = await lifecycle.add_task(
        user.id, _weeklist_id(weeklist_id, user), body.new_task,
    )
    return _one("Successfully added new task.", weeklist)


@router.patch(
    "/delete-task/{weeklist_id}/{task_id}", response_model=Envelope[WeeklistOut],
)
async def delete_task(
    weeklist_id: str,
    task_id: str,
    user: User = Depends(get_current_user),
    lifecycle: WeeklistLifecycle = Depends(get_lifecycle),
):
    weeklist = await lifecycle.delete_task(
        user.id, _weeklist_id(weeklist_id, user), _parse_id(task_id),
    )
    return _one("Successfully deleted task!", weeklist)


@router.patch(
    "/edit-task/{weeklist_id}/{task_id}", response_model=Envelope[WeeklistOut],
)
async def edit_task(
    weeklist_id: str,
    task_id: str,
    body: EditTaskRequest,
    user: User = Depends(get_current_user),
    lifecycle: WeeklistLifecycle = Depends(get_lifecycle),
):
    weeklist = await lifecycle.edit_task(
        user.id, _weeklist_id(weeklist_id, user), _parse_id(task_id),
        body.updated_task,
    )
    return _one("Updated task successfully.", weeklist)


@router.patch(
    "/mark-task/{weeklist_id}/{task_id}", response_model=Envelope[WeeklistOut],
)
async def mark_task(
    weeklist_id: str,
    task_id: str,
    user: User = Depends(get_current_user),
    lifecycle: WeeklistLifecycle = Depends(get_lifecycle),
):
    weeklist = await lifecycle.toggle_task(
        user.id, _weeklist_id(weeklist_id, user), _parse_id(task_id),
    )
    return _one("Marked task successfully.", weeklist)


@router.get("/feed", response_model=Envelope[list[WeeklistOut]])
async def feed(
    user: User = Depends(get_current_user),
    lifecycle: WeeklistLifecycle = Depends(get_lifecycle),
):
    weeklists = await lifecycle.feed()
    if not weeklists:
        return Envelope[list[WeeklistOut]](
            message="No active weeklists available!", data=[],
        )
    return _many("Successfully fetched all active weeklists.", weeklists)
