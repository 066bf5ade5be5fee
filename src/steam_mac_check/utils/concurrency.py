"""
Concurrency limiter for probe fan-out.

Caps how many store lookups may be in flight at once. Without a
limit every probe starts immediately.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any

from steam_mac_check.logger import get_logger


@dataclass
class ConcurrencyLimiter:
    """
    Bounded-slot gate for concurrent work.

    A limit of None admits everything at once; otherwise at most
    ``max_in_flight`` holders may be inside the gate.

    Example:
        >>> limiter = ConcurrencyLimiter(max_in_flight=8)
        >>> async with limiter:
        ...     await prober.probe(app_id)
    """

    max_in_flight: int | None = None
    _semaphore: asyncio.Semaphore | None = field(init=False, default=None)
    _in_flight: int = field(init=False, default=0)
    _peak: int = field(init=False, default=0)
    _logger: Any = field(init=False)

    def __post_init__(self) -> None:
        """Initialize limiter state."""
        if self.max_in_flight is not None:
            if self.max_in_flight < 1:
                raise ValueError("max_in_flight must be at least 1")
            self._semaphore = asyncio.Semaphore(self.max_in_flight)
        self._logger = get_logger(__name__, component="concurrency_limiter")

    @property
    def is_bounded(self) -> bool:
        return self._semaphore is not None

    async def acquire(self) -> None:
        """
        Take a slot, waiting if all slots are in use.
        """
        if self._semaphore is not None:
            if self._semaphore.locked():
                self._logger.debug(
                    "All slots busy, waiting",
                    max_in_flight=self.max_in_flight,
                )
            await self._semaphore.acquire()

        self._in_flight += 1
        self._peak = max(self._peak, self._in_flight)

    def release(self) -> None:
        """Give a slot back."""
        self._in_flight -= 1
        if self._semaphore is not None:
            self._semaphore.release()

    async def __aenter__(self) -> "ConcurrencyLimiter":
        """Acquire a slot on context entry."""
        await self.acquire()
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Release the slot on context exit."""
        self.release()

    @property
    def in_flight(self) -> int:
        """Current number of holders (for monitoring)."""
        return self._in_flight

    @property
    def peak_in_flight(self) -> int:
        """Highest number of simultaneous holders seen so far."""
        return self._peak
