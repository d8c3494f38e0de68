"""Metafold REST API client."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .config import DEFAULT_BASE_URL, Settings, get_settings
from .poller import DEFAULT_INTERVAL_MS, DEFAULT_TIMEOUT_MS
from .resources import Assets, Jobs, User
from .transport import HttpTransport

LOGGER = logging.getLogger("metafold.client")


class MetafoldClient:
    """Entry point to the Metafold API.

    Resource endpoints are exposed as ``assets``, ``jobs`` and ``user``. The
    generic ``get``/``post``/``put``/``patch``/``delete`` helpers issue
    authenticated requests relative to ``base_url``.
    """

    def __init__(
        self,
        access_token: str,
        project_id: str,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout: float = 30.0,
        poll_interval_ms: int = DEFAULT_INTERVAL_MS,
        job_timeout_ms: int = DEFAULT_TIMEOUT_MS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not project_id:
            raise ValueError("project id is required")
        self.project_id = str(project_id)
        self.transport = HttpTransport(
            access_token, base_url, timeout=timeout, transport=transport
        )

        self.get = self.transport.get
        self.post = self.transport.post
        self.put = self.transport.put
        self.patch = self.transport.patch
        self.delete = self.transport.delete

        self.assets = Assets(self)
        self.jobs = Jobs(
            self,
            poll_interval_ms=poll_interval_ms,
            default_timeout_ms=job_timeout_ms,
        )
        self.user = User(self)

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "MetafoldClient":
        settings = settings or get_settings()
        if not settings.access_token:
            raise ValueError("METAFOLD_ACCESS_TOKEN is not configured")
        if not settings.project_id:
            raise ValueError("METAFOLD_PROJECT_ID is not configured")
        LOGGER.info(
            "creating client",
            extra={"base_url": settings.base_url, "project_id": settings.project_id},
        )
        return cls(
            settings.access_token,
            settings.project_id,
            settings.base_url,
            timeout=settings.request_timeout,
            poll_interval_ms=settings.poll_interval_ms,
            job_timeout_ms=settings.job_timeout_ms,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self.transport.aclose()

    async def __aenter__(self) -> "MetafoldClient":
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.aclose()


__all__ = ["MetafoldClient"]
