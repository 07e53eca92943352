"""Dexcom G5 transmitter.

The G5 advertises as ``Dexcom`` followed by the last two characters of the
six-character transmitter id printed on the device.
"""

from __future__ import annotations

import re

from cgmble.core.errors import IdentityError
from cgmble.core.registry import TransmitterType
from cgmble.core.transmitter import ConnectionAccess
from cgmble.radio.base import Radio
from cgmble.radio.bleak_radio import BleakRadio

DEXCOM_ADVERTISEMENT_UUID = "0000FEBC-0000-1000-8000-00805F9B34FB"
DEXCOM_SERVICE_UUID = "F8083532-849E-531C-C594-30F1F86A4EA5"
DEXCOM_AUTHENTICATION_UUID = "F8083535-849E-531C-C594-30F1F86A4EA5"
DEXCOM_CONTROL_UUID = "F8083534-849E-531C-C594-30F1F86A4EA5"

_TRANSMITTER_ID_RE = re.compile(r"^[0-9A-Z]{6}$")


def dexcom_expected_name(transmitter_id: str) -> str:
    normalized = transmitter_id.strip().upper()
    if not _TRANSMITTER_ID_RE.match(normalized):
        raise IdentityError(
            f"Dexcom transmitter id must be 6 alphanumeric characters, got '{transmitter_id}'"
        )
    return "Dexcom" + normalized[-2:]


class DexcomG5Transmitter(ConnectionAccess):
    transmitter_type = TransmitterType.DEXCOM_G5

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
