"""Transmitter-to-peripheral matching logic."""

from __future__ import annotations

from cgmble.core.transmitter import Transmitter
from cgmble.radio.base import PeripheralDiscovered


def _address_match(transmitter: Transmitter, peripheral: PeripheralDiscovered) -> bool:
    address = transmitter.connection.address
    return address is not None and address.upper() == peripheral.address.upper()


def _name_prefix_match(transmitter: Transmitter, peripheral: PeripheralDiscovered) -> bool:
    expected = transmitter.connection.expected_device_name
    if not expected or not peripheral.name:
        return False
    return peripheral.name.lower().startswith(expected.lower())


def _advertisement_match(transmitter: Transmitter, peripheral: PeripheralDiscovered) -> bool:
    wanted = transmitter.advertisement_uuid.lower()
    return bool(wanted) and any(uuid.lower() == wanted for uuid in peripheral.service_uuids)


def match_score(transmitter: Transmitter, peripheral: PeripheralDiscovered) -> int:
    if transmitter.connection.address is not None:
        return 3 if _address_match(transmitter, peripheral) else 0
    if _name_prefix_match(transmitter, peripheral):
        return 2
    if _advertisement_match(transmitter, peripheral):
        return 1
    return 0


def is_candidate(transmitter: Transmitter, peripheral: PeripheralDiscovered) -> bool:
    return match_score(transmitter, peripheral) > 0
