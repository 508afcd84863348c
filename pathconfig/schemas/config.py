"""Config API schemas."""

from typing import Any

from pydantic import BaseModel, Field


class ConfigValueResponse(BaseModel):
    """Response for GET /config/{path}."""

    path: str = Field(..., description="Requested config path, query string included")
    value: Any = Field(default=None, description="Resolved value, null when absent")


class PathListResponse(BaseModel):
    """Response for GET /paths."""

    paths: list[str] = Field(default_factory=list, description="Templates in registration order")
