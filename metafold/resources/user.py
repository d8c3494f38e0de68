"""Metafold user endpoint."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..models import License, Quota, Usage

if TYPE_CHECKING:  # pragma: no cover - type-checking only imports
    from ..client import MetafoldClient


class User:
    """Account information for the authenticated user."""

    def __init__(self, client: "MetafoldClient") -> None:
        self._client = client

    async def license(self) -> License:
        response = await self._client.get("/user/license")
        return License.model_validate(response.json())

    async def quota(self) -> Quota:
        """Remaining usage counts."""
        response = await self._client.get("/user/quota")
        return Quota.model_validate(response.json())

    async def usage(self) -> Usage:
        """Lifetime usage counts."""
        response = await self._client.get("/user/usage")
        return Usage.model_validate(response.json())


__all__ = ["User"]
