"""Output of the partitioned game lists."""

from steam_mac_check.output.writer import PartitionWriter, WrittenFiles

__all__ = [
    "PartitionWriter",
    "WrittenFiles",
]
