"""Blucon reader for Libre sensors."""

from __future__ import annotations

from cgmble.core.errors import IdentityError
from cgmble.core.registry import TransmitterType
from cgmble.core.transmitter import ConnectionAccess
from cgmble.radio.base import Radio
from cgmble.radio.bleak_radio import BleakRadio


class BluconTransmitter(ConnectionAccess):
    transmitter_type = TransmitterType.BLUCON

    # Blucon does not advertise a service, scan for everything and match on name.
    advertisement_uuid = ""
    service_uuid = "436A62C0-082E-4CE8-A08B-01D81F195B24"
    receive_characteristic_uuid = "436A0C82-082E-4CE8-A08B-01D81F195B24"
    write_characteristic_uuid = "436AA6E9-082E-4CE8-A08B-01D81F195B24"

    def __init__(
        self,
        address: str | None = None,
        name: str | None = None,
        *,
        transmitter_id: str,
        radio: Radio | None = None,
    ) -> None:
        normalized = transmitter_id.strip()
        if not normalized:
            raise IdentityError("Blucon transmitter id must not be empty")
        self.transmitter_id = normalized
        self._attach(
            radio or BleakRadio(),
            address=address,
            name=name,
            expected_device_name="BLU" + normalized,
        )

    @staticmethod
    def is_type_limited() -> bool:
        return True
