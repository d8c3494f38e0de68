"""Pydantic models for Metafold API resources."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from email.utils import parsedate_to_datetime
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

JobState = Literal["pending", "started", "success", "failure"]


def parse_timestamp(value: Any) -> Any:
    """Convert an RFC 1123 or ISO 8601 string into a ``datetime``.

    Values that are not strings (including ``datetime`` instances) are
    returned untouched so already normalized records pass through.
    """

    if not isinstance(value, str):
        return value
    text = value.strip()
    try:
        return parsedate_to_datetime(text)
    except (TypeError, ValueError):
        return datetime.fromisoformat(text.replace("Z", "+00:00"))


class Asset(BaseModel):
    """A stored file, uploaded by a user or generated by a job."""

    id: str
    filename: str
    size: int
    checksum: str
    created: datetime
    modified: datetime

    @field_validator("created", "modified", mode="before")
    @classmethod
    def normalize_timestamp(cls, value: Any) -> Any:
        return parse_timestamp(value)

    model_config = {"frozen": True}


class Job(BaseModel):
    """Snapshot of a server-side job."""

    id: str
    name: str | None = None
    type: str
    parameters: Any = Field(default_factory=dict)
    created: datetime
    state: JobState
    assets: list[Asset] = Field(default_factory=list)
    meta: Any = None

    @field_validator("created", mode="before")
    @classmethod
    def normalize_timestamp(cls, value: Any) -> Any:
        return parse_timestamp(value)

    model_config = {"frozen": True}


class JobSubmission(BaseModel):
    """Job description sent to the dispatch endpoint."""

    type: str
    parameters: Any = Field(default_factory=dict)
    name: str | None = None

    @field_validator("type")
    @classmethod
    def validate_type(cls, value: str) -> str:
        trimmed = value.strip()
        if not trimmed:
            raise ValueError("job type must not be empty")
        return trimmed

    model_config = {"frozen": True, "extra": "forbid"}


class License(BaseModel):
    """License information for the authenticated user."""

    issued: datetime
    expires: datetime
    expired: bool
    product: str

    @field_validator("issued", "expires", mode="before")
    @classmethod
    def normalize_timestamp(cls, value: Any) -> Any:
        return parse_timestamp(value)

    model_config = {"frozen": True}


class Quota(BaseModel):
    """Usage counts per resource category."""

    project: int = 0
    import_: int = Field(default=0, alias="import")
    export: int = 0
    simulation: int = 0

    model_config = {"frozen": True, "populate_by_name": True}


# Lifetime usage shares the quota layout.
Usage = Quota


def normalize_asset(payload: Mapping[str, Any] | Asset) -> Asset:
    return Asset.model_validate(payload)


def normalize_job(payload: Mapping[str, Any] | Job) -> Job:
    """Map a raw job payload onto a ``Job`` with parsed timestamps.

    Nested asset records are normalized the same way. Passing a ``Job`` or a
    payload whose timestamps are already ``datetime`` values is a no-op.
    """

    return Job.model_validate(payload)


__all__ = [
    "Asset",
    "Job",
    "JobState",
    "JobSubmission",
    "License",
    "Quota",
    "Usage",
    "normalize_asset",
    "normalize_job",
    "parse_timestamp",
]
