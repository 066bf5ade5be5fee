"""
Concurrent probe fan-out and result collection.

Starts one task per game, funnels every result through a single
queue, and partitions them once all tasks have reported.
"""

import asyncio
from collections.abc import Awaitable, Callable, Iterable
from typing import Protocol

from steam_mac_check.logger import get_logger
from steam_mac_check.probing.results import Partition, ProbeResult
from steam_mac_check.utils.concurrency import ConcurrencyLimiter

logger = get_logger(__name__, component="collector")


class Prober(Protocol):
    """Anything that can classify a single game."""

    def probe(self, app_id: int) -> Awaitable[ProbeResult]: ...


async def _probe_one(
    prober: Prober,
    app_id: int,
    limiter: ConcurrencyLimiter,
    queue: "asyncio.Queue[ProbeResult | None]",
) -> None:
    """Run one probe and enqueue exactly one result for it."""
    try:
        async with limiter:
            result = await prober.probe(app_id)
    except Exception as e:
        logger.warning(
            "Probe raised, recording as failed",
            app_id=app_id,
            error=f"{e.__class__.__name__}: {e}",
        )
        result = ProbeResult.failed(app_id, str(e))
    await queue.put(result)


async def _close_when_done(
    tasks: list["asyncio.Task[None]"],
    queue: "asyncio.Queue[ProbeResult | None]",
) -> None:
    """Wait for every probe task, then end the result stream with None."""
    await asyncio.gather(*tasks)
    await queue.put(None)


async def collect(
    app_ids: Iterable[int],
    prober: Prober,
    *,
    max_in_flight: int | None = None,
    on_result: Callable[[ProbeResult], None] | None = None,
) -> Partition:
    """
    Probe every game concurrently and partition the results.

    Args:
        app_ids: Games to probe
        prober: Classifier for a single game
        max_in_flight: Cap on simultaneous probes (None starts all at once)
        on_result: Called with each result as it arrives; exceptions it
            raises are logged and do not affect the partition

    Returns:
        Partition: Labels split by support, in completion order.
            Each game contributes exactly one result.
    """
    app_ids = list(app_ids)
    partition = Partition()

    if not app_ids:
        logger.info("No games to probe")
        return partition

    limiter = ConcurrencyLimiter(max_in_flight)
    queue: asyncio.Queue[ProbeResult | None] = asyncio.Queue()

    logger.info(
        "Starting probes",
        total=len(app_ids),
        max_in_flight=max_in_flight,
    )

    tasks = [
        asyncio.create_task(_probe_one(prober, app_id, limiter, queue)) for app_id in app_ids
    ]
    closer = asyncio.create_task(_close_when_done(tasks, queue))

    try:
        while True:
            result = await queue.get()
            if result is None:
                break
            partition.add(result)
            if on_result:
                try:
                    on_result(result)
                except Exception as e:
                    logger.warning(
                        "Result callback raised, ignoring",
                        app_id=result.app_id,
                        error=f"{e.__class__.__name__}: {e}",
                    )
    except BaseException:
        # Cancelled collection must not leave lookups running
        closer.cancel()
        for task in tasks:
            task.cancel()
        raise

    await closer

    logger.info(
        "Probes complete",
        total=partition.received,
        supported=len(partition.supported),
        unsupported=len(partition.unsupported),
        failed=partition.failed,
        dropped=partition.dropped,
        peak_in_flight=limiter.peak_in_flight,
    )

    return partition
