"""Dexcom G6 transmitter. Shares the G5 GATT layout and naming scheme."""

from __future__ import annotations

from cgmble.core.registry import TransmitterType
from cgmble.core.transmitter import ConnectionAccess
from cgmble.radio.base import Radio
from cgmble.radio.bleak_radio import BleakRadio
from cgmble.transmitters.dexcom_g5 import (
    DEXCOM_ADVERTISEMENT_UUID,
    DEXCOM_AUTHENTICATION_UUID,
    DEXCOM_CONTROL_UUID,
    DEXCOM_SERVICE_UUID,
    dexcom_expected_name,
)


class DexcomG6Transmitter(ConnectionAccess):
    transmitter_type = TransmitterType.DEXCOM_G6

    advertisement_uuid = DEXCOM_ADVERTISEMENT_UUID
    service_uuid = DEXCOM_SERVICE_UUID
    receive_characteristic_uuid = DEXCOM_AUTHENTICATION_UUID
    write_characteristic_uuid = DEXCOM_CONTROL_UUID

    def __init__(
        self,
        address: str | None = None,
        name: str | None = None,
        *,
        transmitter_id: str,
        radio: Radio | None = None,
    ) -> None:
        self.transmitter_id = transmitter_id.strip().upper()
        self._attach(
            radio or BleakRadio(),
            address=address,
            name=name,
            expected_device_name=dexcom_expected_name(transmitter_id),
        )

    @staticmethod
    def is_type_limited() -> bool:
        return False
