"""
Writer for the supported / unsupported game lists.

Persists a Partition as two newline-delimited text files.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from steam_mac_check.contracts import PlatformName
from steam_mac_check.logger import get_logger
from steam_mac_check.probing.results import Partition


@dataclass(frozen=True)
class WrittenFiles:
    """Paths of the two lists produced by a run."""

    supported: Path
    unsupported: Path


class PartitionWriter:
    """
    Writes a Partition to ``<platform>_games.txt`` and
    ``non_<platform>_games.txt``.

    Example:
        >>> writer = PartitionWriter(output_dir=Path("."), platform="mac")
        >>> files = writer.write(partition)
        >>> files.supported
        PosixPath('mac_games.txt')
    """

    def __init__(
        self,
        *,
        output_dir: Path | None = None,
        platform: PlatformName = "mac",
    ) -> None:
        """
        Initialize the writer.

        Args:
            output_dir: Directory for the lists (defaults to the working directory)
            platform: Platform name used in the file names
        """
        self._output_dir = output_dir or Path(".")
        self._platform = platform
        self._logger = get_logger(__name__, component="partition_writer")

    @property
    def supported_path(self) -> Path:
        return self._output_dir / f"{self._platform}_games.txt"

    @property
    def unsupported_path(self) -> Path:
        return self._output_dir / f"non_{self._platform}_games.txt"

    def write(self, partition: Partition) -> WrittenFiles:
        """
        Write both lists, replacing any previous files.

        Args:
            partition: Labels to write

        Returns:
            WrittenFiles: Where the lists were written
        """
        self._output_dir.mkdir(parents=True, exist_ok=True)

        supported = self._write_lines(self.supported_path, partition.supported)
        unsupported = self._write_lines(self.unsupported_path, partition.unsupported)

        self._logger.info(
            "Wrote game lists",
            supported_path=str(self.supported_path),
            supported=supported,
            unsupported_path=str(self.unsupported_path),
            unsupported=unsupported,
        )

        return WrittenFiles(supported=self.supported_path, unsupported=self.unsupported_path)

    def _write_lines(self, path: Path, labels: Iterable[str]) -> int:
        """Write one label per line, skipping empty ones. Returns lines written."""
        written = 0
        with path.open("w", encoding="utf-8", newline="\n") as f:
            for label in labels:
                line = flatten_label(label)
                if not line:
                    continue
                if line != label:
                    self._logger.warning("Flattened multi-line game name", name=label)
                f.write(f"{line}\n")
                written += 1
        return written


def flatten_label(label: str) -> str:
    """Collapse a label onto one line, joining its lines with single spaces."""
    lines = label.splitlines()
    if lines == [label]:
        return label
    return " ".join(part.strip() for part in lines if part.strip())
