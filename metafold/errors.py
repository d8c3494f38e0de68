"""Error types raised by the Metafold client."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:  # pragma: no cover - type-checking only imports
    from .models import Job


class MetafoldError(Exception):
    """Base error for the Metafold client."""


class TransportError(MetafoldError):
    """Raised when the API could not be reached."""


class ApiError(MetafoldError):
    """Raised when the API answers with an error response."""

    def __init__(
        self,
        reason: str,
        *,
        status_code: int,
        response: httpx.Response | None = None,
    ) -> None:
        super().__init__(reason)
        self.reason = reason
        self.status_code = status_code
        self.response = response


class ValidationError(ApiError):
    """Raised when the API rejects request parameters field by field."""

    def __init__(
        self,
        errors: Sequence[tuple[str | None, str]],
        *,
        status_code: int,
        response: httpx.Response | None = None,
    ) -> None:
        self.errors = list(errors)
        lines = []
        for field, msg in self.errors:
            lines.append(f"  [{field}] {msg}" if field else f"  {msg}")
        super().__init__(
            "Bad request:\n" + "\n".join(lines),
            status_code=status_code,
            response=response,
        )


class PollTimeout(MetafoldError):
    """Raised when a status URL did not reach a terminal state in time."""

    def __init__(self, timeout_ms: int) -> None:
        super().__init__("Job timed out")
        self.timeout_ms = timeout_ms


class PollCancelled(MetafoldError):
    """Raised when polling is cancelled through its cancel event."""

    def __init__(self) -> None:
        super().__init__("Job polling cancelled")


class JobTimeoutError(MetafoldError, TimeoutError):
    """Raised by ``Jobs.run`` when a job does not finish within its bound."""

    def __init__(self, job_name: str, timeout_ms: int) -> None:
        super().__init__(f"Job '{job_name}' failed to complete within {timeout_ms} ms")
        self.job_name = job_name
        self.timeout_ms = timeout_ms


class JobFailure(MetafoldError):
    """Raised when the server reports that a job ended in the failure state."""

    def __init__(self, job: "Job") -> None:
        label = job.name or job.type
        super().__init__(f"Job '{label}' ({job.id}) failed")
        self.job = job

    @property
    def meta(self) -> Any:
        return self.job.meta


def classify_error_response(response: httpx.Response, data: Any) -> ApiError:
    """Map an error response body onto a single error representation.

    Error bodies are not consistent across the API. Field level validation
    failures come as ``{"errors": [{"field": ..., "msg": ...}]}`` while other
    failures carry a ``msg`` or ``description`` string.
    """

    status_code = response.status_code
    if isinstance(data, dict) and data.get("errors"):
        errors: list[tuple[str | None, str]] = []
        for item in data["errors"]:
            if isinstance(item, dict):
                errors.append((item.get("field"), str(item.get("msg", ""))))
            else:
                errors.append((None, str(item)))
        return ValidationError(errors, status_code=status_code, response=response)

    reason = None
    if isinstance(data, dict):
        reason = data.get("msg") or data.get("description")
    if not reason:
        reason = response.reason_phrase or f"HTTP {status_code}"
    return ApiError(str(reason), status_code=status_code, response=response)


__all__ = [
    "ApiError",
    "JobFailure",
    "JobTimeoutError",
    "MetafoldError",
    "PollCancelled",
    "PollTimeout",
    "TransportError",
    "ValidationError",
    "classify_error_response",
]
