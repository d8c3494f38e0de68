"""Completion polling for job status URLs."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

import httpx

from .errors import PollCancelled, PollTimeout

LOGGER = logging.getLogger("metafold.poller")

DEFAULT_INTERVAL_MS = 1000
DEFAULT_TIMEOUT_MS = 1000 * 60 * 2

# Status code returned by the status endpoint while a job is still running.
IN_PROGRESS_STATUS = 202

Fetch = Callable[[str], Awaitable[httpx.Response]]


class JobPoller:
    """Poll a status URL on a fixed cadence until a terminal response arrives.

    A poll settles exactly once: with the first response that is not
    ``202 Accepted``, with the first exception raised by a status request,
    with ``PollTimeout`` when the deadline passes, or with ``PollCancelled``
    when the optional cancel event is set. Whichever comes first wins, and the
    interval task, the deadline timer and any outstanding status requests are
    torn down together before ``poll`` returns.
    """

    def __init__(
        self,
        fetch: Fetch,
        *,
        interval_ms: int = DEFAULT_INTERVAL_MS,
        max_in_flight: int = 1,
    ) -> None:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        if max_in_flight < 1:
            raise ValueError("max_in_flight must be at least 1")
        self._fetch = fetch
        self._interval = interval_ms / 1000
        self._max_in_flight = max_in_flight

    async def poll(
        self,
        url: str,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        *,
        cancel: asyncio.Event | None = None,
    ) -> httpx.Response:
        if timeout_ms <= 0:
            raise ValueError("timeout_ms must be positive")

        loop = asyncio.get_running_loop()
        outcome: asyncio.Future[httpx.Response] = loop.create_future()
        in_flight: set[asyncio.Task[None]] = set()

        def resolve(response: httpx.Response) -> None:
            if not outcome.done():
                outcome.set_result(response)

        def reject(exc: BaseException) -> None:
            if not outcome.done():
                outcome.set_exception(exc)

        async def check() -> None:
            try:
                response = await self._fetch(url)
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                reject(exc)
                return
            if response.status_code == IN_PROGRESS_STATUS:
                LOGGER.debug("job in progress", extra={"url": url})
                return
            resolve(response)

        async def tick() -> None:
            while not outcome.done():
                await asyncio.sleep(self._interval)
                if outcome.done():
                    return
                if len(in_flight) >= self._max_in_flight:
                    LOGGER.debug("skipping tick, status request outstanding", extra={"url": url})
                    continue
                task = loop.create_task(check())
                in_flight.add(task)
                task.add_done_callback(in_flight.discard)

        def expire() -> None:
            LOGGER.warning("job polling timed out", extra={"url": url, "timeout_ms": timeout_ms})
            reject(PollTimeout(timeout_ms))

        interval_task = loop.create_task(tick())
        deadline = loop.call_later(timeout_ms / 1000, expire)
        cancel_task: asyncio.Task[bool] | None = None
        if cancel is not None:
            cancel_task = loop.create_task(cancel.wait())
            cancel_task.add_done_callback(
                lambda task: None if task.cancelled() else reject(PollCancelled())
            )

        try:
            return await outcome
        finally:
            deadline.cancel()
            pending = [interval_task, *in_flight]
            if cancel_task is not None:
                pending.append(cancel_task)
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)


__all__ = ["DEFAULT_INTERVAL_MS", "DEFAULT_TIMEOUT_MS", "IN_PROGRESS_STATUS", "JobPoller"]
