"""Scanning decision procedure shared by all transmitter families."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cgmble.core.registry import ScanResult
from cgmble.radio.base import RadioState

if TYPE_CHECKING:
    from cgmble.core.transmitter import Transmitter

LOGGER = logging.getLogger(__name__)


def scan_filter(advertisement_uuid: str) -> list[str] | None:
    """Return the service filter for a scan; None means all devices."""
    if advertisement_uuid:
        return [advertisement_uuid]
    return None


def start_scanning(transmitter: Transmitter) -> ScanResult:
    """Start scanning for ``transmitter`` if the radio allows it.

    Checks run in a fixed order: session present, radio powered on, no scan
    already running. Only the last branch touches the radio.
    """
    radio = transmitter.connection.radio
    if radio is None:
        LOGGER.error("no radio session, can not start scanning")
        return ScanResult.OTHER

    if radio.state is not RadioState.POWERED_ON:
        LOGGER.warning("bluetooth not powered on (%s), not scanning", radio.state.value)
        return ScanResult.RADIO_NOT_READY

    if radio.is_scanning:
        LOGGER.info("bluetooth scanning ongoing")
        return ScanResult.ALREADY_SCANNING

    # an empty filter scans for everything, which some platforms only allow in the foreground
    services = scan_filter(transmitter.advertisement_uuid)
    LOGGER.info("start bluetooth scanning for %s", transmitter.transmitter_type.value)
    radio.start_scan(services)
    return ScanResult.SUCCESS
