"""Transmitter families and scan outcomes."""

from __future__ import annotations

from enum import Enum


class TransmitterType(Enum):
    """Supported transmitter families."""

    DEXCOM_G4 = "dexcom_g4"
    DEXCOM_G5 = "dexcom_g5"
    DEXCOM_G6 = "dexcom_g6"
    BLUCON = "blucon"
    MIAOMIAO = "miaomiao"


class ScanResult(Enum):
    """Outcome of a single start_scanning call."""

    SUCCESS = "success"
    ALREADY_SCANNING = "already_scanning"
    RADIO_NOT_READY = "radio_not_ready"
    OTHER = "other"
