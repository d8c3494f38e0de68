"""Authenticated HTTP transport shared by the Metafold resources."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import httpx

from .errors import TransportError, classify_error_response

LOGGER = logging.getLogger("metafold.transport")


async def raise_for_api_error(response: httpx.Response) -> None:
    """Response hook that turns error responses into ``ApiError`` instances.

    Every response leaving the transport passes through this hook, so callers
    only ever see successful responses or a normalized error.
    """

    if response.status_code < 400:
        return
    await response.aread()
    try:
        data: Any = response.json()
    except ValueError:
        data = None
    error = classify_error_response(response, data)
    LOGGER.warning(
        "api error response",
        extra={
            "method": response.request.method,
            "url": str(response.request.url),
            "status_code": response.status_code,
            "reason": error.reason,
        },
    )
    raise error


class HttpTransport:
    """Bearer-authenticated wrapper around ``httpx.AsyncClient``."""

    def __init__(
        self,
        access_token: str,
        base_url: str,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not access_token:
            raise ValueError("access token is required")
        if not base_url:
            raise ValueError("base URL is required")
        headers = {
            "Accept": "application/json",
            "Authorization": f"Bearer {access_token}",
        }
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout,
            transport=transport,
            event_hooks={"response": [raise_for_api_error]},
        )

    @property
    def base_url(self) -> httpx.URL:
        return self._client.base_url

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        files: Any = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        try:
            return await self._client.request(
                method, url, params=params, json=json, files=files, headers=headers
            )
        except httpx.TransportError as exc:
            LOGGER.error(
                "request failed",
                exc_info=exc,
                extra={"method": method, "url": url},
            )
            raise TransportError(f"{method} {url} failed: {exc}") from exc

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("POST", url, **kwargs)

    async def put(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("PUT", url, **kwargs)

    async def patch(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("PATCH", url, **kwargs)

    async def delete(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("DELETE", url, **kwargs)

    async def download(self, url: str, target: Path) -> Path:
        """Stream an unauthenticated URL (e.g. a pre-signed link) into ``target``."""

        request = self._client.build_request("GET", url)
        # Pre-signed storage URLs reject requests carrying a second credential.
        request.headers.pop("Authorization", None)
        try:
            response = await self._client.send(request, stream=True)
        except httpx.TransportError as exc:
            raise TransportError(f"GET {url} failed: {exc}") from exc
        # Content lands in a sibling ".part" file and only replaces ``target``
        # once the whole body has been received.
        partial = target.with_name(target.name + ".part")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with partial.open("wb") as handle:
                async for chunk in response.aiter_bytes():
                    handle.write(chunk)
            partial.replace(target)
        except httpx.TransportError as exc:
            partial.unlink(missing_ok=True)
            raise TransportError(f"GET {url} failed: {exc}") from exc
        except BaseException:
            partial.unlink(missing_ok=True)
            raise
        finally:
            await response.aclose()
        return target

    async def aclose(self) -> None:
        await self._client.aclose()


__all__ = ["HttpTransport", "raise_for_api_error"]
