import copy
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from metafold import MetafoldClient  # noqa: E402

DATE_STRING = "Mon, 01 Jan 2024 00:00:00 GMT"

ASSET_JSON: dict[str, Any] = {
    "id": "1",
    "filename": "f763df409e79eb1c.bin",
    "size": 16777216,
    "checksum": "sha256:6310a5951d58eb3e0fdd8c8767c606615552899e65019cb1582508a7c7bfec39",
    "created": DATE_STRING,
    "modified": DATE_STRING,
}

NEW_JOB: dict[str, Any] = {
    "id": "1",
    "name": "My Job",
    "type": "test_job",
    "parameters": {"foo": 1, "bar": "a", "baz": [2, "b"]},
    "created": DATE_STRING,
    "state": "pending",
    "assets": [],
    "meta": None,
}


@pytest.fixture
def asset_json() -> dict[str, Any]:
    return copy.deepcopy(ASSET_JSON)


@pytest.fixture
def new_job() -> dict[str, Any]:
    return copy.deepcopy(NEW_JOB)


@pytest.fixture
def make_client() -> Callable[..., MetafoldClient]:
    """Build a client whose requests are answered by ``handler``."""

    def factory(handler: Callable[[httpx.Request], Any], **kwargs: Any) -> MetafoldClient:
        return MetafoldClient(
            "testtoken", "1", transport=httpx.MockTransport(handler), **kwargs
        )

    return factory
