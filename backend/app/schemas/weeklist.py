"""Weeklist Schemas — task payloads in, camelCase weeklist documents out.

Invariants:
    - Task descriptions are stripped and non-empty
    - Output field names: id, name, createdBy, isActive, isCompleted, createdAt,
      updatedAt, tasks[] (id, description, isCompleted, createdAt, updatedAt)

Design Decisions:
    - alias_generator=to_camel + populate_by_name: built from ORM rows by attribute name,
      serialized by alias
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def _strip_description(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("task description cannot be empty or whitespace")
    return v


class CreateWeeklistRequest(BaseModel):
    tasks: list[str] = Field(default_factory=list)

    @field_validator("tasks")
    @classmethod
    def strip_tasks(cls, v: list[str]) -> list[str]:
        return [_strip_description(task) for task in v]


class AddTaskRequest(BaseModel):
    new_task: str = Field(min_length=1, max_length=2000)

    @field_validator("new_task")
    @classmethod
    def strip_task(cls, v: str) -> str:
        return _strip_description(v)


class EditTaskRequest(BaseModel):
    updated_task: str = Field(min_length=1, max_length=2000)

    @field_validator("updated_task")
    @classmethod
    def strip_task(cls, v: str) -> str:
        return _strip_description(v)


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        from_attributes=True, alias_generator=to_camel, populate_by_name=True,
    )


class TaskOut(_CamelModel):
    id: UUID
    description: str
    is_completed: bool
    created_at: datetime
    updated_at: datetime


class WeeklistOut(_CamelModel):
    id: UUID
    name: str
    created_by: UUID
    is_active: bool
    is_completed: bool
    created_at: datetime
    updated_at: datetime
    tasks: list[TaskOut]
