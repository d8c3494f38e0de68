"""Metafold jobs endpoint."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

import httpx

from ..errors import JobFailure, JobTimeoutError, PollTimeout
from ..logging import log_event
from ..models import Job, JobSubmission, normalize_job
from ..poller import DEFAULT_INTERVAL_MS, DEFAULT_TIMEOUT_MS, JobPoller
from ..util import construct_params

if TYPE_CHECKING:  # pragma: no cover - type-checking only imports
    from ..client import MetafoldClient

LOGGER = logging.getLogger("metafold.jobs")


class Jobs:
    """Dispatch jobs and query their state."""

    def __init__(
        self,
        client: "MetafoldClient",
        *,
        poll_interval_ms: int = DEFAULT_INTERVAL_MS,
        default_timeout_ms: int = DEFAULT_TIMEOUT_MS,
    ) -> None:
        self._client = client
        self._poller = JobPoller(client.get, interval_ms=poll_interval_ms)
        self._default_timeout_ms = default_timeout_ms

    @property
    def _path(self) -> str:
        return f"/projects/{self._client.project_id}/jobs"

    async def list(self, sort: str | None = None, q: str | None = None) -> list[Job]:
        """List jobs.

        Args:
            sort: Sort string, e.g. ``"id:1"``. Supported fields are ``id``,
                ``name`` and ``created``.
            q: Query string, e.g. ``"name:foo"``. Supported fields are ``id``,
                ``name``, ``type`` and ``state``.
        """
        params = construct_params(sort=sort, q=q)
        response = await self._client.get(self._path, params=params)
        return [normalize_job(item) for item in response.json()]

    async def get(self, job_id: str) -> Job:
        response = await self._client.get(f"{self._path}/{job_id}")
        return normalize_job(response.json())

    async def update(self, job_id: str, name: str | None = None) -> Job:
        """Update a job. Fields left as ``None`` keep their current value."""
        data = construct_params(name=name)
        response = await self._client.patch(f"{self._path}/{job_id}", json=data)
        return normalize_job(response.json())

    async def run_status(
        self,
        job_type: str,
        parameters: Any,
        name: str | None = None,
    ) -> str:
        """Dispatch a job and return its status URL without waiting.

        The submission is sent once. It is never retried since the server does
        not guarantee idempotent dispatch.
        """
        submission = JobSubmission(type=job_type, parameters=parameters, name=name)
        data = construct_params(submission.model_dump())
        response = await self._client.post(
            self._path,
            json=data,
            headers={"Content-Type": "application/json"},
        )
        link = response.json()["link"]
        log_event(LOGGER, "job_dispatched", type=submission.type, name=submission.name, link=link)
        return link

    async def poll(
        self,
        url: str,
        timeout_ms: int | None = None,
        *,
        cancel: asyncio.Event | None = None,
    ) -> httpx.Response:
        """Poll a status URL until the job reaches a terminal state.

        Raises:
            PollTimeout: No terminal response arrived within ``timeout_ms``.
            PollCancelled: ``cancel`` was set before a terminal response.
        """
        if timeout_ms is None:
            timeout_ms = self._default_timeout_ms
        return await self._poller.poll(url, timeout_ms, cancel=cancel)

    async def run(
        self,
        job_type: str,
        parameters: Any,
        name: str | None = None,
        timeout_ms: int | None = None,
        *,
        cancel: asyncio.Event | None = None,
    ) -> Job:
        """Dispatch a job and wait for its result.

        Args:
            job_type: Job type, see the Metafold API docs for the full list.
            parameters: Job parameters, any JSON-serializable value. Most job
                types expect a mapping.
            name: Optional job name.
            timeout_ms: Time to wait for a result, two minutes by default.
            cancel: Optional event that aborts polling when set.

        Returns:
            The completed job.

        Raises:
            JobTimeoutError: The job did not complete within ``timeout_ms``.
            JobFailure: The job ended in the ``failure`` state.
        """
        if timeout_ms is None:
            timeout_ms = self._default_timeout_ms
        url = await self.run_status(job_type, parameters, name)
        try:
            response = await self.poll(url, timeout_ms, cancel=cancel)
        except PollTimeout as exc:
            raise JobTimeoutError(name or job_type, timeout_ms) from exc

        job = normalize_job(response.json())
        log_event(LOGGER, "job_finished", id=job.id, type=job.type, state=job.state)
        if job.state == "failure":
            raise JobFailure(job)
        return job


__all__ = ["Jobs"]
