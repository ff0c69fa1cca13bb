"""Response Envelope — the uniform {message, data} shape returned by every route.

Invariants:
    - message is always present and distinct per outcome
    - data is null for message-only outcomes (delete, empty feed)
"""

from typing import Generic, TypeVar

from pydantic import BaseModel

DataT = TypeVar("DataT")


class Envelope(BaseModel, Generic[DataT]):
    message: str
    data: DataT | None = None


class MessageResponse(BaseModel):
    message: str
