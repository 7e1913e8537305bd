"""DTOs and request/response schemas for the tasks app."""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from ninja import Field, Schema


def format_timestamp(value: datetime) -> str:
    """UTC ISO-8601 with microseconds, e.g. 2026-10-19T09:28:55.839724Z."""
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


@dataclass(frozen=True)
class TaskDTO:
    """Protocol-neutral view of a task. `id` is always the external string form."""
    id: str
    title: str
    done: bool
    created_at: datetime
    updated_at: datetime

    # Rendered form shared by the REST and GraphQL outputs
    @property
    def created_at_text(self) -> str:
        return format_timestamp(self.created_at)

    @property
    def updated_at_text(self) -> str:
        return format_timestamp(self.updated_at)


class TaskIn(Schema):
    # Optional so a missing title reaches the service and gets its 400
    title: Optional[str] = None


class TaskOut(Schema):
    id: str
    title: str
    done: bool
    createdAt: str = Field(..., alias="created_at_text")
    updatedAt: str = Field(..., alias="updated_at_text")


class OkOut(Schema):
    ok: bool


class ErrorOut(Schema):
    error: str
