"""Transmitter capability contract and the connection state every transmitter composes.

A transmitter family is a class that:

- declares its ``transmitter_type`` and the four identifiers (advertisement,
  service, receive characteristic, write characteristic),
- implements ``is_type_limited()``,
- holds a ``ConnectionState`` in ``self.connection``.

``ConnectionAccess`` adds the caller surface that only depends on the
connection state (read-only identity, scanning, event sink). It carries no
identifiers and no defaults for them.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol, runtime_checkable

from cgmble.core.errors import IdentityError
from cgmble.core.registry import ScanResult, TransmitterType
from cgmble.core.scanning import start_scanning
from cgmble.radio.base import (
    PeripheralDiscovered,
    Radio,
    RadioEvent,
    RadioEventSink,
    RadioSession,
    StateChanged,
)

LOGGER = logging.getLogger(__name__)

RadioListener = Callable[[RadioEvent], None]


class ConnectionState:
    """Radio session and identity of one transmitter instance.

    ``address`` and ``name`` are None until the transmitter has connected to a
    real device (or was built with known values). Only the owning transmitter
    writes them, through ``_record_connection``.
    """

    def __init__(
        self,
        *,
        address: str | None = None,
        name: str | None = None,
        expected_device_name: str | None = None,
    ) -> None:
        if (address is None) != (name is None):
            raise IdentityError("address and name must be given together")
        if address is not None:
            _check_identity(address, name)
        self.radio: RadioSession | None = None
        self._address = address
        self._name = name
        self.expected_device_name = expected_device_name

    @classmethod
    def open(
        cls,
        sink: RadioEventSink,
        radio: Radio,
        *,
        address: str | None = None,
        name: str | None = None,
        expected_device_name: str | None = None,
    ) -> ConnectionState:
        """Store identity, then open the one radio session bound to ``sink``.

        Failure to open the session propagates; there is no usable state
        without a session.
        """
        state = cls(address=address, name=name, expected_device_name=expected_device_name)
        state.radio = radio.open(sink)
        return state

    @property
    def address(self) -> str | None:
        return self._address

    @property
    def name(self) -> str | None:
        return self._name

    def _record_connection(self, address: str, name: str) -> None:
        _check_identity(address, name)
        self._address = address
        self._name = name

    def release(self) -> None:
        radio, self.radio = self.radio, None
        if radio is None:
            return
        radio.stop_scan()
        radio.close()


def _check_identity(address: str | None, name: str | None) -> None:
    if not address or not address.strip():
        raise IdentityError("transmitter address must not be empty")
    if not name or not name.strip():
        raise IdentityError("transmitter name must not be empty")


@runtime_checkable
class Transmitter(Protocol):
    """What every transmitter family must provide."""

    @property
    def transmitter_type(self) -> TransmitterType:
        """Family tag, constant per class."""

    @property
    def advertisement_uuid(self) -> str:
        """UUID to scan for. Empty string scans for all devices (foreground only)."""

    @property
    def service_uuid(self) -> str:
        """Service to discover after connecting."""

    @property
    def receive_characteristic_uuid(self) -> str:
        """Characteristic the transmitter notifies on."""

    @property
    def write_characteristic_uuid(self) -> str:
        """Characteristic commands are written to."""

    @property
    def connection(self) -> ConnectionState:
        """Radio session and identity."""

    def is_type_limited(self) -> bool:
        """True for Libre-based bridges whose data format is vendor restricted."""


class ConnectionAccess:
    """Caller surface shared by transmitter classes holding ``self.connection``."""

    connection: ConnectionState

    def _attach(
        self,
        radio: Radio,
        *,
        address: str | None,
        name: str | None,
        expected_device_name: str | None = None,
    ) -> None:
        self._radio_listeners: list[RadioListener] = []
        self.connection = ConnectionState.open(
            self,
            radio,
            address=address,
            name=name,
            expected_device_name=expected_device_name,
        )

    @property
    def address(self) -> str | None:
        return self.connection.address

    @property
    def name(self) -> str | None:
        return self.connection.name

    @property
    def expected_device_name(self) -> str | None:
        return self.connection.expected_device_name

    def start_scanning(self) -> ScanResult:
        return start_scanning(self)  # type: ignore[arg-type]

    def close(self) -> None:
        self.connection.release()

    def _on_connected(self, address: str, name: str) -> None:
        """Record the identity of the device a connection was made to."""
        self.connection._record_connection(address, name)
        LOGGER.info("%s: connected to %s (%s)", type(self).__name__, address, name)

    def add_listener(self, listener: RadioListener) -> None:
        self._radio_listeners.append(listener)

    def handle_radio_event(self, event: RadioEvent) -> None:
        if isinstance(event, StateChanged):
            LOGGER.info("%s: bluetooth state %s", type(self).__name__, event.state.value)
        elif isinstance(event, PeripheralDiscovered):
            LOGGER.debug(
                "%s: discovered %s (%s) rssi=%s",
                type(self).__name__,
                event.address,
                event.name,
                event.rssi,
            )
        for listener in list(self._radio_listeners):
            listener(event)
