"""Stable public API for building tooling on top of cgmble.

This module is the supported integration surface for third-party callers.
Avoid importing from private/internal modules unless intentionally depending on
non-stable internals.
"""

from __future__ import annotations

from cgmble.core.config import load_config
from cgmble.core.device_match import is_candidate, match_score
from cgmble.core.errors import (
    CgmbleError,
    ConfigError,
    ConfigLoadError,
    ConfigValidationError,
    IdentityError,
    RadioError,
    RadioUnavailableError,
    TransmitterError,
    UnknownFamilyError,
)
from cgmble.core.model import TransmitterConfig
from cgmble.core.registry import ScanResult, TransmitterType
from cgmble.core.scanning import start_scanning
from cgmble.core.transmitter import ConnectionAccess, ConnectionState, Transmitter
from cgmble.radio.base import (
    PeripheralDiscovered,
    Radio,
    RadioEvent,
    RadioEventSink,
    RadioSession,
    RadioState,
    StateChanged,
)
from cgmble.radio.bleak_radio import BleakRadio
from cgmble.transmitters.blucon import BluconTransmitter
from cgmble.transmitters.dexcom_g4 import DexcomG4Transmitter
from cgmble.transmitters.dexcom_g5 import DexcomG5Transmitter
from cgmble.transmitters.dexcom_g6 import DexcomG6Transmitter
from cgmble.transmitters.factory import TRANSMITTER_CLASSES, create_transmitter
from cgmble.transmitters.miaomiao import MiaoMiaoTransmitter

__all__ = [
    "CgmbleError",
    "ConfigError",
    "ConfigLoadError",
    "ConfigValidationError",
    "IdentityError",
    "RadioError",
    "RadioUnavailableError",
    "TransmitterError",
    "UnknownFamilyError",
    "TransmitterConfig",
    "ScanResult",
    "TransmitterType",
    "Transmitter",
    "ConnectionAccess",
    "ConnectionState",
    "Radio",
    "RadioEvent",
    "RadioEventSink",
    "RadioSession",
    "RadioState",
    "StateChanged",
    "PeripheralDiscovered",
    "BleakRadio",
    "BluconTransmitter",
    "DexcomG4Transmitter",
    "DexcomG5Transmitter",
    "DexcomG6Transmitter",
    "MiaoMiaoTransmitter",
    "TRANSMITTER_CLASSES",
    "create_transmitter",
    "load_config",
    "is_candidate",
    "match_score",
    "start_scanning",
]
