"""
Library scan pipeline.

Coordinates a complete run: fetch the owned-games list, probe every
game for platform support, and write the two resulting lists.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from uuid import UUID, uuid4

from steam_mac_check.clients import OwnedGamesFetcher, PlatformProber
from steam_mac_check.config import Settings
from steam_mac_check.logger import get_logger
from steam_mac_check.output import PartitionWriter
from steam_mac_check.probing import ProbeResult, collect


@dataclass
class ScanResult:
    """Result of a complete scan run."""

    run_id: UUID
    started_at: datetime
    completed_at: datetime
    platform: str
    total_games: int
    supported: int
    unsupported: int
    failed: int
    dropped: int
    files_written: list[Path]

    @property
    def duration_seconds(self) -> float:
        """Get total duration in seconds."""
        return (self.completed_at - self.started_at).total_seconds()


class LibraryScanner:
    """
    Runs the fetch, probe, and write steps for one account.

    A failure while fetching the owned-games list propagates as
    RetrievalError and nothing is written. Individual probe failures
    never abort the run.
    """

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._logger = get_logger(__name__, component="scanner")

    async def run(
        self,
        *,
        on_result: Callable[[ProbeResult], None] | None = None,
    ) -> ScanResult:
        """
        Scan the configured account's library.

        Args:
            on_result: Called with every probe result as it arrives

        Returns:
            ScanResult: Counts and written file paths

        Raises:
            RetrievalError: If the owned-games list cannot be fetched
        """
        run_id = uuid4()
        started_at = datetime.now(timezone.utc)
        steam = self._settings.steam
        probe_config = self._settings.probe

        self._logger.info(
            "Starting scan",
            run_id=str(run_id),
            steam_id=steam.steam_id,
            platform=probe_config.platform,
        )

        async with OwnedGamesFetcher(steam) as fetcher:
            app_ids = await fetcher.fetch_app_ids()

        async with PlatformProber(
            steam,
            platform=probe_config.platform,
            max_connections=probe_config.max_in_flight,
        ) as prober:
            partition = await collect(
                app_ids,
                prober,
                max_in_flight=probe_config.max_in_flight,
                on_result=on_result,
            )

        writer = PartitionWriter(
            output_dir=self._settings.output.dir,
            platform=probe_config.platform,
        )
        files = writer.write(partition)

        result = ScanResult(
            run_id=run_id,
            started_at=started_at,
            completed_at=datetime.now(timezone.utc),
            platform=probe_config.platform,
            total_games=len(app_ids),
            supported=len(partition.supported),
            unsupported=len(partition.unsupported),
            failed=partition.failed,
            dropped=partition.dropped,
            files_written=[files.supported, files.unsupported],
        )

        self._logger.info(
            "Scan complete",
            run_id=str(run_id),
            duration_seconds=result.duration_seconds,
            total_games=result.total_games,
            supported=result.supported,
            unsupported=result.unsupported,
            failed=result.failed,
        )

        return result
