"""
Request spacing for upstream catalogs.

Giant Bomb applies velocity detection and temporarily blocks keys that
send requests in quick succession, so consecutive calls made by one
client are spaced by a minimum interval.
"""

import asyncio
import time
from dataclasses import dataclass, field
from typing import Any

from game_sorter.logger import get_logger


@dataclass
class RequestThrottle:
    """
    Enforces a minimum interval between consecutive requests.

    The first request never waits. A zero interval disables throttling.

    Example:
        >>> throttle = RequestThrottle(min_interval_seconds=1.0)
        >>> async with throttle:
        ...     await make_request()
    """

    min_interval_seconds: float = 0.0
    _last_request_at: float | None = field(init=False, default=None)
    _lock: asyncio.Lock = field(init=False, default_factory=asyncio.Lock)
    _logger: Any = field(init=False)

    def __post_init__(self) -> None:
        if self.min_interval_seconds < 0:
            raise ValueError("min_interval_seconds must be >= 0")
        self._logger = get_logger(__name__, component="throttle")

    @property
    def seconds_until_ready(self) -> float:
        """Time left before the next request may go out."""
        if self._last_request_at is None:
            return 0.0
        elapsed = time.monotonic() - self._last_request_at
        return max(0.0, self.min_interval_seconds - elapsed)

    async def acquire(self) -> None:
        """Wait until the interval since the previous request has passed."""
        async with self._lock:
            wait_time = self.seconds_until_ready
            if wait_time > 0:
                self._logger.debug("Spacing request", wait_seconds=round(wait_time, 3))
                await asyncio.sleep(wait_time)
            self._last_request_at = time.monotonic()

    async def __aenter__(self) -> "RequestThrottle":
        await self.acquire()
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass
