"""Core data models used across config, factory, and CLI."""

from __future__ import annotations

from dataclasses import dataclass

from cgmble.core.registry import TransmitterType


@dataclass(frozen=True)
class TransmitterConfig:
    family: TransmitterType
    address: str | None = None
    name: str | None = None
    transmitter_id: str | None = None
