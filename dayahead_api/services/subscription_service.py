"""
Parameter-driven refetching for a region detail view.

A ``DetailSubscription`` owns at most one in-flight request. Every parameter
change is numbered; when a result arrives it is only delivered if its number
is still the latest issued, so a slow answer for an old range can never
overwrite the data of a newer one.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, Tuple

logger = logging.getLogger(__name__)

Parameters = Tuple[str, Optional[str], Optional[str]]


class DetailSubscription:
    """Single-consumer subscription to ``(region_code, start_date, end_date)`` changes."""

    def __init__(self, fetch: Callable[..., Awaitable[Any]],
                 on_result: Callable[[Any], None] = None,
                 on_error: Callable[[Exception], None] = None):
        """
        Args:
            fetch: Coroutine function called as ``fetch(region_code, start_date, end_date)``,
                e.g. ``RegionPriceService.get_daily_stats``
            on_result: Called with each result that is still current
            on_error: Called with each failure that is still current
        """
        self._fetch = fetch
        self._on_result = on_result
        self._on_error = on_error
        self._sequence = 0
        self._task: Optional[asyncio.Task] = None

        self.parameters: Optional[Parameters] = None
        self.result: Any = None
        self.error: Optional[Exception] = None
        self.delivered_sequence = 0

    @property
    def sequence(self) -> int:
        """Number of the latest issued request."""
        return self._sequence

    @property
    def in_flight(self) -> bool:
        return self._task is not None and not self._task.done()

    def update(self, region_code: str, start_date: Optional[str] = None,
               end_date: Optional[str] = None) -> asyncio.Task:
        """
        Publish new parameters and start fetching them.

        The previous request, if still running, is cancelled. Must be called
        from a running event loop.
        """
        self._sequence += 1
        self.parameters = (region_code, start_date, end_date)

        if self.in_flight:
            logger.debug("Cancelling stale request #%d", self._sequence - 1)
            self._task.cancel()

        self._task = asyncio.create_task(self._run(self._sequence, self.parameters))
        return self._task

    async def _run(self, sequence: int, parameters: Parameters) -> None:
        try:
            result = await self._fetch(*parameters)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            if sequence != self._sequence:
                logger.debug("Ignoring failure of stale request #%d", sequence)
                return
            self.error = e
            self.delivered_sequence = sequence
            if self._on_error:
                self._on_error(e)
            return

        if sequence != self._sequence:
            logger.debug("Discarding result of stale request #%d (latest #%d)",
                         sequence, self._sequence)
            return

        self.result = result
        self.error = None
        self.delivered_sequence = sequence
        if self._on_result:
            self._on_result(result)

    async def wait(self) -> None:
        """Wait until the latest request has settled."""
        while self._task is not None:
            task = self._task
            try:
                await task
            except asyncio.CancelledError:
                # a newer request replaced this one; wait for that instead
                if task is self._task:
                    return
                continue
            if task is self._task:
                return

    def close(self) -> None:
        """Cancel any in-flight request."""
        if self.in_flight:
            self._task.cancel()
