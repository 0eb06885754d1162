"""In-flight request accounting so shutdown can drain before the engine closes."""

import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from src.projecthub.core.logging import get_logger

logger = get_logger(__name__)


class RequestTracker:
    """Counts API requests in flight.

    ``_idle`` is set whenever nothing is in flight, so draining is a wait on
    that event. All mutation happens on the event loop thread, so no lock
    is needed around the counter.
    """

    def __init__(self) -> None:
        self.reset()

    @property
    def is_shutting_down(self) -> bool:
        return self._draining

    @property
    def in_flight_count(self) -> int:
        return self._in_flight

    @asynccontextmanager
    async def track_request(self) -> AsyncGenerator[None]:
        self._in_flight += 1
        self._idle.clear()
        try:
            yield
        finally:
            self._in_flight -= 1
            if self._in_flight == 0:
                self._idle.set()

    async def start_shutdown(self) -> None:
        """Stop reporting healthy. Requests already in flight keep running."""
        self._draining = True
        logger.info("shutdown_started", in_flight=self._in_flight)

    async def wait_for_drain(self, timeout: float) -> bool:
        """Wait up to ``timeout`` seconds for in-flight requests to finish.

        Returns:
            True if nothing was left in flight.
        """
        try:
            await asyncio.wait_for(self._idle.wait(), timeout=timeout)
        except TimeoutError:
            logger.warning("shutdown_drain_timeout", timeout=timeout, in_flight=self._in_flight)
            return False
        logger.info("shutdown_drained")
        return True

    async def drain(self, timeout: float) -> bool:
        """Enter shutdown mode and wait for in-flight requests."""
        await self.start_shutdown()
        return await self.wait_for_drain(timeout)

    def reset(self) -> None:
        """Back to the startup state. Used by tests."""
        self._in_flight = 0
        self._draining = False
        self._idle = asyncio.Event()
        self._idle.set()


request_tracker = RequestTracker()
