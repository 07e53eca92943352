"""Family registry and transmitter construction."""

from __future__ import annotations

from cgmble.core.errors import ConfigValidationError, UnknownFamilyError
from cgmble.core.model import TransmitterConfig
from cgmble.core.registry import TransmitterType
from cgmble.core.transmitter import ConnectionAccess
from cgmble.radio.base import Radio
from cgmble.transmitters.blucon import BluconTransmitter
from cgmble.transmitters.dexcom_g4 import DexcomG4Transmitter
from cgmble.transmitters.dexcom_g5 import DexcomG5Transmitter
from cgmble.transmitters.dexcom_g6 import DexcomG6Transmitter
from cgmble.transmitters.miaomiao import MiaoMiaoTransmitter

TRANSMITTER_CLASSES: dict[TransmitterType, type[ConnectionAccess]] = {
    TransmitterType.DEXCOM_G4: DexcomG4Transmitter,
    TransmitterType.DEXCOM_G5: DexcomG5Transmitter,
    TransmitterType.DEXCOM_G6: DexcomG6Transmitter,
    TransmitterType.BLUCON: BluconTransmitter,
    TransmitterType.MIAOMIAO: MiaoMiaoTransmitter,
}

_WITH_TRANSMITTER_ID = {
    TransmitterType.DEXCOM_G5,
    TransmitterType.DEXCOM_G6,
    TransmitterType.BLUCON,
}


def create_transmitter(config: TransmitterConfig, *, radio: Radio | None = None) -> ConnectionAccess:
    cls = TRANSMITTER_CLASSES.get(config.family)
    if cls is None:
        raise UnknownFamilyError(f"No transmitter class registered for '{config.family.value}'")

    if config.family in _WITH_TRANSMITTER_ID:
        if not config.transmitter_id:
            raise ConfigValidationError(f"Family '{config.family.value}' requires a transmitter id")
        return cls(  # type: ignore[call-arg]
            config.address,
            config.name,
            transmitter_id=config.transmitter_id,
            radio=radio,
        )
    return cls(config.address, config.name, radio=radio)  # type: ignore[call-arg]
