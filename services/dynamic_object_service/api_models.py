"""API models for the Dynamic Object Service.

Response envelopes returned to callers plus the list query parameters.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class ListQuery(BaseModel):
    """Parameters of a get-many call after request parsing."""

    fields: str | None = None
    page_size: int | None = None
    cursor: str | None = None
    associations: list[str] = Field(default_factory=list)


class GetDynamicObjectResponse(BaseModel):
    status: Literal["ok"] = "ok"
    result: dict[str, Any]


class GetDynamicObjectsResponse(BaseModel):
    status: Literal["ok"] = "ok"
    next: str | None = None
    previous: str | None = None
    results: list[dict[str, Any]] = Field(default_factory=list)


class CreateOrUpdateDynamicObjectResponse(BaseModel):
    status: Literal["ok"] = "ok"
    message: str
    result: dict[str, Any]
