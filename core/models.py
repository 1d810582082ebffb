from __future__ import annotations
from dataclasses import dataclass, field
from typing import Tuple, Union

WIRELESS_TYPE = "802-11-wireless"


@dataclass(frozen=True)
class ActiveConnection:
    """
    Snapshot of one live NetworkManager connection, read in a single round.

    Only the first entry of ``devices`` is ever used.
    """

    path: str
    type: str
    state: int
    is_default: bool
    is_vpn: bool
    ip4_config: str
    devices: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_wireless(self) -> bool:
        return self.type == WIRELESS_TYPE


@dataclass(frozen=True)
class Identity:
    """Human-readable identity of the selected connection."""

    address: str
    iface: str
    tooltip_suffix: str = ""


@dataclass(frozen=True)
class ThroughputSample:
    """Receive/transmit byte counters read at one moment."""

    rx_bytes: int
    tx_bytes: int
    ts: float


@dataclass(frozen=True)
class Rate:
    """A scaled transfer rate, e.g. 500.0 KB/s."""

    value: float
    unit: str
    counter_reset: bool = False

    def __str__(self) -> str:
        return f"{self.value:.1f}{self.unit}"


@dataclass(frozen=True)
class Throughput:
    rx: Rate
    tx: Rate

    @property
    def counter_reset(self) -> bool:
        return self.rx.counter_reset or self.tx.counter_reset


@dataclass(frozen=True)
class Report:
    text: str
    tooltip: str

    def as_dict(self) -> dict:
        return {"text": self.text, "tooltip": self.tooltip}


@dataclass(frozen=True)
class Success:
    report: Report


@dataclass(frozen=True)
class Failure:
    """
    A failed run. ``kind`` is the error class name, ``message`` the text
    shown in the tooltip.
    """

    kind: str
    message: str

    @classmethod
    def from_exception(cls, exc: BaseException) -> "Failure":
        kind = type(exc).__name__
        return cls(kind=kind, message=str(exc) or kind)

    def as_report(self) -> Report:
        return Report(text="Error", tooltip=self.message)


Result = Union[Success, Failure]
