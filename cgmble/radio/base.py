"""Radio subsystem interfaces.

A radio session is opened once per transmitter. The session delivers events
to its sink on a single delivery context, in the order they occurred.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol, Union


class RadioState(Enum):
    UNKNOWN = "unknown"
    POWERED_ON = "powered_on"
    POWERED_OFF = "powered_off"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class StateChanged:
    state: RadioState


@dataclass(frozen=True)
class PeripheralDiscovered:
    address: str
    name: str | None
    rssi: int | None = None
    service_uuids: tuple[str, ...] = field(default_factory=tuple)


RadioEvent = Union[StateChanged, PeripheralDiscovered]


class RadioEventSink(Protocol):
    def handle_radio_event(self, event: RadioEvent) -> None:
        """Receive one event from the radio session."""


class RadioSession(Protocol):
    @property
    def state(self) -> RadioState:
        """Current adapter state as last observed."""

    @property
    def is_scanning(self) -> bool:
        """True while a scan request is active."""

    def start_scan(self, service_uuids: list[str] | None) -> None:
        """Request a scan. Returns immediately; None scans for all devices."""

    def stop_scan(self) -> None:
        """Stop the active scan, if any."""

    def close(self) -> None:
        """Release the session."""


class Radio(Protocol):
    def open(self, sink: RadioEventSink) -> RadioSession:
        """Open a radio session delivering events to ``sink``."""
