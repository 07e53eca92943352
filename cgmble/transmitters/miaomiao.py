"""MiaoMiao reader for Libre sensors (Nordic UART service)."""

from __future__ import annotations

from cgmble.core.registry import TransmitterType
from cgmble.core.transmitter import ConnectionAccess
from cgmble.radio.base import Radio
from cgmble.radio.bleak_radio import BleakRadio


class MiaoMiaoTransmitter(ConnectionAccess):
    transmitter_type = TransmitterType.MIAOMIAO

    advertisement_uuid = ""
    service_uuid = "6E400001-B5A3-F393-E0A9-E50E24DCCA9E"
    receive_characteristic_uuid = "6E400003-B5A3-F393-E0A9-E50E24DCCA9E"
    write_characteristic_uuid = "6E400002-B5A3-F393-E0A9-E50E24DCCA9E"

    def __init__(
        self,
        address: str | None = None,
        name: str | None = None,
        *,
        radio: Radio | None = None,
    ) -> None:
        self._attach(radio or BleakRadio(), address=address, name=name, expected_device_name="miaomiao")

    @staticmethod
    def is_type_limited() -> bool:
        return True
