"""
Concurrent platform probing.

Fans out one probe per game and partitions the results by
platform support once every probe has reported.
"""

from steam_mac_check.probing.collector import Prober, collect
from steam_mac_check.probing.results import Partition, ProbeResult, ProbeStatus

__all__ = [
    "Partition",
    "ProbeResult",
    "ProbeStatus",
    "Prober",
    "collect",
]
