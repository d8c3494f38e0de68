"""Helpers shared by the resource endpoints."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def construct_params(args: Mapping[str, Any] | None = None, **kwargs: Any) -> dict[str, Any]:
    """Build a query or body mapping, dropping keys whose value is ``None``.

    Falsy values such as ``0``, ``False`` or ``""`` are kept since the server
    treats them as meaningful.
    """

    merged: dict[str, Any] = dict(args or {})
    merged.update(kwargs)
    return {key: value for key, value in merged.items() if value is not None}


__all__ = ["construct_params"]
