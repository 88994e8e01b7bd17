"""External IP lookup over HTTP with bounded retries."""

import asyncio
import logging
from typing import Optional

import aiohttp

from ipwatch.errors import (
    ExhaustedRetriesError,
    FetchError,
    StatusError,
    TransportError,
)
from ipwatch.parsing import parse_response

logger = logging.getLogger(__name__)

__all__ = ["IpFetcher"]


class IpFetcher:
    """Fetches the external IP address from a lookup endpoint.

    Features:
    - Immediate retry (no backoff) on transport errors and non-2xx statuses
    - Exactly max_attempts requests before giving up
    - Context manager for session lifecycle

    There is no deadline across a retry sequence, so one fetch can block
    for up to max_attempts * timeout seconds.
    """

    # Per-attempt timeout
    REQUEST_TIMEOUT = 5.0  # seconds

    def __init__(
        self,
        http_session: Optional[aiohttp.ClientSession] = None,
        timeout: float = REQUEST_TIMEOUT,
    ):
        """Initialize fetcher.

        Args:
            http_session: Optional aiohttp session (for testing).
            timeout: Seconds allowed for each attempt.
        """
        self._session = http_session
        self._owns_session = http_session is None
        self._timeout = timeout

    async def __aenter__(self):
        """Enter async context, creating session if needed."""
        if self._session is None:
            self._session = aiohttp.ClientSession()
        return self

    async def __aexit__(self, *args):
        """Exit async context, closing owned session."""
        await self.close()

    @property
    def timeout(self) -> float:
        """Per-attempt timeout in seconds."""
        return self._timeout

    async def fetch(self, endpoint: str, max_attempts: int) -> str:
        """Fetch the external IP, retrying failed attempts.

        Args:
            endpoint: Lookup URL (already validated by config).
            max_attempts: Total attempts allowed, at least 1.

        Returns:
            Address string as reported by the endpoint.

        Raises:
            ExhaustedRetriesError: If every attempt failed.
        """
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

        last_error: FetchError | None = None
        for attempt in range(1, max_attempts + 1):
            try:
                return await self._try_fetch(endpoint)
            except FetchError as e:
                logger.debug(f"Lookup attempt {attempt}/{max_attempts} failed: {e}")
                last_error = e

        raise ExhaustedRetriesError(max_attempts, last_error)

    async def _try_fetch(self, endpoint: str) -> str:
        """Single lookup attempt.

        Args:
            endpoint: Lookup URL.

        Returns:
            Parsed address.

        Raises:
            TransportError: On connection, timeout or read failure.
            StatusError: On a non-2xx response.
        """
        if self._session is None:
            raise RuntimeError("Fetcher not initialized - use async context manager")

        try:
            async with self._session.get(
                endpoint,
                timeout=aiohttp.ClientTimeout(total=self._timeout),
            ) as resp:
                if not 200 <= resp.status < 300:
                    raise StatusError(resp.status)
                body = await resp.read()
        except asyncio.TimeoutError as e:
            raise TransportError(f"request timed out after {self._timeout}s") from e
        except aiohttp.ClientError as e:
            raise TransportError(str(e) or type(e).__name__) from e

        return parse_response(body)

    async def close(self) -> None:
        """Close the HTTP session if owned."""
        if self._owns_session and self._session:
            await self._session.close()
            self._session = None
