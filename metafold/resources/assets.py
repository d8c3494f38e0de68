"""Metafold assets endpoint."""

from __future__ import annotations

import logging
from os import PathLike
from pathlib import Path
from typing import IO, TYPE_CHECKING, Union

from ..models import Asset, normalize_asset
from ..util import construct_params

if TYPE_CHECKING:  # pragma: no cover - type-checking only imports
    from ..client import MetafoldClient

LOGGER = logging.getLogger("metafold.assets")

AssetData = Union[bytes, IO[bytes], str, PathLike[str]]


def _file_field(data: AssetData, filename: str | None) -> tuple[str, bytes | IO[bytes]]:
    if isinstance(data, (str, PathLike)):
        path = Path(data)
        return filename or path.name, path.read_bytes()
    if filename is None:
        filename = Path(getattr(data, "name", "") or "upload.bin").name
    return filename, data


class Assets:
    """Upload, download and manage stored files."""

    def __init__(self, client: "MetafoldClient") -> None:
        self._client = client

    @property
    def _path(self) -> str:
        return f"/projects/{self._client.project_id}/assets"

    async def list(self, sort: str | None = None, q: str | None = None) -> list[Asset]:
        """List assets.

        Args:
            sort: Sort string. Supported fields are ``id``, ``filename``,
                ``size``, ``created`` and ``modified``.
            q: Query string. Supported fields are ``id`` and ``filename``.
        """
        params = construct_params(sort=sort, q=q)
        response = await self._client.get(self._path, params=params)
        return [normalize_asset(item) for item in response.json()]

    async def get(self, asset_id: str) -> Asset:
        response = await self._client.get(f"{self._path}/{asset_id}")
        return normalize_asset(response.json())

    async def download_url(self, asset_id: str, filename: str | None = None) -> str:
        """Return a public download URL, valid for one hour after generation."""
        params = construct_params(download="true", filename=filename)
        response = await self._client.get(f"{self._path}/{asset_id}", params=params)
        return response.json()["link"]

    async def download(self, asset_id: str, destination: str | PathLike[str]) -> Path:
        """Download an asset into ``destination``.

        When ``destination`` is an existing directory the file keeps the asset
        filename.
        """
        target = Path(destination)
        if target.is_dir():
            asset = await self.get(asset_id)
            target = target / asset.filename
        url = await self.download_url(asset_id)
        LOGGER.info("downloading asset", extra={"asset_id": asset_id, "path": str(target)})
        return await self._client.transport.download(url, target)

    async def create(self, data: AssetData, filename: str | None = None) -> Asset:
        """Upload a new asset from bytes, a binary file object or a path."""
        files = {"file": _file_field(data, filename)}
        response = await self._client.post(self._path, files=files)
        return normalize_asset(response.json())

    async def update(
        self, asset_id: str, data: AssetData, filename: str | None = None
    ) -> Asset:
        """Replace the content of an existing asset."""
        files = {"file": _file_field(data, filename)}
        response = await self._client.patch(f"{self._path}/{asset_id}", files=files)
        return normalize_asset(response.json())

    async def delete(self, asset_id: str) -> None:
        await self._client.delete(f"{self._path}/{asset_id}")


__all__ = ["AssetData", "Assets"]
