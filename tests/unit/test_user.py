from __future__ import annotations

import asyncio
from datetime import datetime, timezone

import httpx


def test_license_quota_and_usage(make_client) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/user/license":
            return httpx.Response(
                200,
                json={
                    "issued": "Mon, 01 Jan 2024 00:00:00 GMT",
                    "expires": "Wed, 01 Jan 2025 00:00:00 GMT",
                    "expired": False,
                    "product": "Professional",
                },
            )
        if request.url.path == "/user/quota":
            return httpx.Response(200, json={"project": 9, "import": 90, "export": 45, "simulation": 10})
        if request.url.path == "/user/usage":
            return httpx.Response(200, json={"project": 1, "import": 10, "export": 5, "simulation": 0})
        return httpx.Response(404)

    async def scenario():
        async with make_client(handler) as metafold:
            return (
                await metafold.user.license(),
                await metafold.user.quota(),
                await metafold.user.usage(),
            )

    license_, quota, usage = asyncio.run(scenario())

    assert license_.issued == datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert license_.expires == datetime(2025, 1, 1, tzinfo=timezone.utc)
    assert license_.product == "Professional"
    assert not license_.expired
    assert quota.import_ == 90
    assert quota.project == 9
    assert usage.export == 5
    assert usage.simulation == 0
