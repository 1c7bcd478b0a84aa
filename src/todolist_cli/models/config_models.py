"""Configuration models for todolist-cli."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from .task import SortMode, StatusFilter

DEFAULT_STORAGE_KEY = "todo.tasks.v1"


class StorageConfig(BaseModel):
    """Where the task collection is persisted."""

    backend: Literal["file", "memory"] = Field(default="file")
    data_dir: str | None = Field(
        default=None, description="Directory for the file backend"
    )
    key: str = Field(default=DEFAULT_STORAGE_KEY)

    @field_validator("key")
    @classmethod
    def validate_key(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("key cannot be empty")
        return v.strip()


class OutputConfig(BaseModel):
    """Output configuration."""

    format: Literal["pretty", "table", "json", "yaml"] = Field(default="pretty")


class ViewConfig(BaseModel):
    """Defaults for the list command."""

    default_sort: SortMode = Field(default=SortMode.CREATED_DESC)
    default_status: StatusFilter = Field(default=StatusFilter.ALL)


class AppConfig(BaseModel):
    """Main todolist-cli configuration"""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    view: ViewConfig = Field(default_factory=ViewConfig)
