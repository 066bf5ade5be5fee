"""
Probe results and the partition they are sorted into.
"""

from dataclasses import dataclass, field
from enum import Enum


class ProbeStatus(str, Enum):
    """Outcome of a single platform probe."""

    OK = "ok"
    FAILED = "failed"


@dataclass(frozen=True)
class ProbeResult:
    """
    Classification of one game.

    Failed probes carry an empty label and ``supported=False`` so that
    they partition exactly like an empty-named game.
    """

    app_id: int
    label: str
    supported: bool
    status: ProbeStatus = ProbeStatus.OK
    reason: str | None = None

    @classmethod
    def ok(cls, app_id: int, label: str, supported: bool) -> "ProbeResult":
        return cls(app_id=app_id, label=label, supported=supported)

    @classmethod
    def failed(cls, app_id: int, reason: str) -> "ProbeResult":
        return cls(
            app_id=app_id,
            label="",
            supported=False,
            status=ProbeStatus.FAILED,
            reason=reason,
        )

    @property
    def is_failed(self) -> bool:
        return self.status is ProbeStatus.FAILED


@dataclass
class Partition:
    """
    Labels sorted by platform support, in arrival order.

    Results without a label are counted in ``dropped`` and land in
    neither list, whether the probe failed or the store name was blank.
    """

    supported: list[str] = field(default_factory=list)
    unsupported: list[str] = field(default_factory=list)
    received: int = 0
    failed: int = 0
    dropped: int = 0

    def add(self, result: ProbeResult) -> None:
        """Account for one probe result."""
        self.received += 1
        if result.is_failed:
            self.failed += 1

        if result.label == "":
            self.dropped += 1
        elif result.supported:
            self.supported.append(result.label)
        else:
            self.unsupported.append(result.label)
