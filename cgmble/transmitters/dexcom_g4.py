"""xDrip bridge for the Dexcom G4."""

from __future__ import annotations

from cgmble.core.registry import TransmitterType
from cgmble.core.transmitter import ConnectionAccess
from cgmble.radio.base import Radio
from cgmble.radio.bleak_radio import BleakRadio


class DexcomG4Transmitter(ConnectionAccess):
    transmitter_type = TransmitterType.DEXCOM_G4

    advertisement_uuid = "0000FFE0-0000-1000-8000-00805F9B34FB"
    service_uuid = "0000FFE0-0000-1000-8000-00805F9B34FB"
    receive_characteristic_uuid = "0000FFE1-0000-1000-8000-00805F9B34FB"
    write_characteristic_uuid = "0000FFE1-0000-1000-8000-00805F9B34FB"

    def __init__(
        self,
        address: str | None = None,
        name: str | None = None,
        *,
        radio: Radio | None = None,
    ) -> None:
        # the bridge name is user defined, there is nothing to expect
        self._attach(radio or BleakRadio(), address=address, name=name)

    @staticmethod
    def is_type_limited() -> bool:
        return False
