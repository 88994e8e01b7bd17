"""External IP change watching via periodic lookups."""

import asyncio
import logging
import math
from typing import Callable, Optional, Protocol

from ipwatch.errors import FetchError

from .state import AddressState

logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    """Protocol for the IP lookup dependency."""

    async def fetch(self, endpoint: str, max_attempts: int) -> str:
        """Returns the external IP, or raises FetchError."""
        ...


class IpWatcher:
    """Watches the external IP on a fixed interval.

    Logs the first address observed and every later change. Lookup
    failures are logged and otherwise ignored; the next tick runs as
    scheduled.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        endpoint: str,
        max_attempts: int = 5,
        check_interval: float = 60.0,
        state: Optional[AddressState] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        """Initialize IP watcher.

        Args:
            fetcher: Lookup client.
            endpoint: Lookup URL passed to the fetcher.
            max_attempts: Attempt budget for each check.
            check_interval: Seconds between check starts.
            state: Shared address cell, created if not given.
            clock: Monotonic time source for scheduling (for testing).
                Defaults to the running event loop's clock.
        """
        self._fetcher = fetcher
        self._endpoint = endpoint
        self._max_attempts = max_attempts
        self._interval = check_interval
        self._state = state or AddressState()
        self._clock = clock
        self._running = False
        self._task: Optional[asyncio.Task] = None

    @property
    def current_ip(self) -> str:
        """Last known external IP, empty if none observed yet."""
        return self._state.address

    @property
    def is_running(self) -> bool:
        """Whether the watch loop is active."""
        return self._running

    async def check_now(self) -> bool:
        """Perform one check.

        Returns:
            True if the cached IP changed, False otherwise.
        """
        try:
            ip = await self._fetcher.fetch(self._endpoint, self._max_attempts)
        except FetchError as e:
            logger.error(f"Error checking IP: {e}")
            return False
        except Exception as e:
            logger.error(f"Error checking IP: {e}", exc_info=True)
            return False

        change = self._state.record(ip)
        if change is None:
            if not ip:
                logger.debug("Lookup returned an empty address, ignoring")
            return False

        if change.is_first:
            logger.info(f"Current external IP: {change.current}")
        else:
            logger.info(f"IP changed: {change.previous} -> {change.current}")
        return True

    async def run_forever(self) -> None:
        """Check immediately, then once per interval until cancelled.

        Ticks are fixed-rate. Ticks that pass while a check is still
        running are dropped.
        """
        self._running = True
        clock = self._clock or asyncio.get_running_loop().time
        next_tick = clock()
        try:
            while self._running:
                await self.check_now()

                next_tick += self._interval
                now = clock()
                if now > next_tick:
                    missed = math.ceil((now - next_tick) / self._interval)
                    next_tick += missed * self._interval

                await asyncio.sleep(next_tick - now)
        finally:
            self._running = False

    async def start(self) -> None:
        """Start the watch loop as a background task."""
        if self._task is not None and not self._task.done():
            return

        self._running = True
        self._task = asyncio.create_task(self.run_forever())
        logger.debug("IP watcher started")

    async def stop(self) -> None:
        """Stop the watch loop."""
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.debug("IP watcher stopped")
