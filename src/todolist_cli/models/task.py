"""Task data models."""

from __future__ import annotations

import re
from datetime import date
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator

TITLE_MAX_LENGTH = 200

_DUE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")


def _clean_text(value):
    if isinstance(value, str):
        return value.strip()
    return value


def _clean_due(value):
    if isinstance(value, date):
        return value.strftime("%Y-%m-%d")
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        if not _DUE_PATTERN.fullmatch(value):
            raise ValueError("due must be a YYYY-MM-DD date")
        date.fromisoformat(value)
    return value


class StatusFilter(StrEnum):
    """Completion status a projection keeps."""

    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"


class SortMode(StrEnum):
    """Ordering applied by a projection."""

    CREATED_DESC = "created_desc"
    CREATED_ASC = "created_asc"
    DUE_ASC = "due_asc"
    DUE_DESC = "due_desc"


class Task(BaseModel):
    """A single to-do record.

    Instances are frozen: the store hands out snapshots and replaces a task
    with a modified copy on update, so no caller can mutate store-owned state.

    Attributes:
        id: Opaque identifier, unique within the store
        title: Short title (at most 200 characters)
        description: Free-form details, may be empty
        category: Category name, empty means uncategorized
        due: Deadline as ``YYYY-MM-DD`` or None
        completed: Completion status
        created: Creation time in epoch milliseconds
    """

    model_config = ConfigDict(frozen=True)

    id: str
    title: str = Field(max_length=TITLE_MAX_LENGTH)
    description: str = ""
    category: str = ""
    due: str | None = None
    completed: bool = False
    created: int


class TaskCreate(BaseModel):
    """Input for creating a task.

    Text fields are trimmed and the title is cut to 200 characters. An empty
    title is accepted here; the store refuses it.
    """

    title: str
    description: str = ""
    category: str = ""
    due: str | None = None

    @field_validator("title", "description", "category", mode="before")
    @classmethod
    def strip_text(cls, v):
        if v is None:
            return ""
        return _clean_text(v)

    @field_validator("title")
    @classmethod
    def truncate_title(cls, v: str) -> str:
        return v[:TITLE_MAX_LENGTH]

    @field_validator("due", mode="before")
    @classmethod
    def blank_due_is_none(cls, v):
        return _clean_due(v)


class TaskUpdate(BaseModel):
    """Patch for an existing task.

    Only fields that were explicitly set are applied; pass ``due=None`` to
    clear a deadline.
    """

    title: str | None = None
    description: str | None = None
    category: str | None = None
    due: str | None = None
    completed: bool | None = None

    @field_validator("title", "description", "category", mode="before")
    @classmethod
    def strip_text(cls, v):
        return _clean_text(v)

    @field_validator("title")
    @classmethod
    def truncate_title(cls, v: str | None) -> str | None:
        return v[:TITLE_MAX_LENGTH] if v is not None else v

    @field_validator("due", mode="before")
    @classmethod
    def blank_due_is_none(cls, v):
        return _clean_due(v)

    def changes(self) -> dict:
        """Return only the fields the caller set."""
        return self.model_dump(exclude_unset=True)


class TaskQuery(BaseModel):
    """Parameters of a projection.

    Attributes:
        status: Completion filter
        search: Case-insensitive substring matched against title or description
        category: Case-insensitive category match, empty means any
        sort: Ordering of the result
    """

    status: StatusFilter = StatusFilter.ALL
    search: str = ""
    category: str = ""
    sort: SortMode = SortMode.CREATED_DESC


class TaskCounts(BaseModel):
    """Totals shown beneath a task list."""

    total: int = 0
    pending: int = 0
    completed: int = 0

    def label(self) -> str:
        noun = "task" if self.total == 1 else "tasks"
        return f"{self.total} {noun} • {self.pending} pending"
