"""Configuration models for Taskboard.

The configuration file holds the client's API settings, the settings used by
``taskboard serve``, output options and the board preferences that the client
remembers between runs.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class APIConfig(BaseModel):
    """API client configuration."""

    endpoint: str = Field(default="http://localhost:3001/api")
    timeout: int = Field(default=30)

    @field_validator("endpoint")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("endpoint cannot be empty")
        return v.strip().rstrip("/")


class ServerConfig(BaseModel):
    """Settings for the bundled REST server."""

    host: str = Field(default="127.0.0.1")
    port: int = Field(default=3001, ge=1, le=65535)
    seed_demo_data: bool = Field(default=True)
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])


class OutputConfig(BaseModel):
    """Output configuration."""

    format: str = Field(default="pretty")
    color: bool = Field(default=True)


SortField = Literal["createdAt", "title", "priority", "dueDate", "status"]


class BoardPreferences(BaseModel):
    """View, filter and sort choices remembered between runs."""

    view_mode: Literal["kanban", "list"] = Field(default="kanban")
    search: str = Field(default="")
    status_filter: str = Field(default="all")
    priority_filter: str = Field(default="all")
    sort_by: SortField = Field(default="createdAt")
    sort_order: Literal["asc", "desc"] = Field(default="desc")
    last_refresh: datetime | None = None


class AppConfig(BaseModel):
    """Main Taskboard configuration."""

    api: APIConfig = Field(default_factory=APIConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    preferences: BoardPreferences = Field(default_factory=BoardPreferences)
