"""Typer CLI entrypoint."""

from __future__ import annotations

import logging
import threading
import time
from pathlib import Path

import typer

from cgmble.core.config import build_config, load_config
from cgmble.core.device_match import is_candidate
from cgmble.core.errors import CgmbleError, ConfigLoadError
from cgmble.core.model import TransmitterConfig
from cgmble.core.registry import ScanResult
from cgmble.core.transmitter import ConnectionAccess
from cgmble.radio.base import PeripheralDiscovered, RadioEvent, RadioState, StateChanged
from cgmble.radio.bleak_radio import BleakRadio
from cgmble.transmitters.factory import TRANSMITTER_CLASSES, create_transmitter

app = typer.Typer(help="Discover CGM transmitters over Bluetooth Low Energy")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


@app.command("families")
def list_families() -> None:
    """List supported transmitter families and their identifiers."""
    for family, cls in TRANSMITTER_CLASSES.items():
        limited = " (type limited)" if cls.is_type_limited() else ""
        typer.echo(f"{family.value}: {cls.__name__}{limited}")
        typer.echo(f"  advertisement: {cls.advertisement_uuid or '<any device>'}")
        typer.echo(f"  service: {cls.service_uuid}")
        typer.echo(f"  receive: {cls.receive_characteristic_uuid}")
        typer.echo(f"  write: {cls.write_characteristic_uuid}")


def _resolve_config(
    family: str | None,
    address: str | None,
    name: str | None,
    transmitter_id: str | None,
    config: Path | None,
) -> TransmitterConfig:
    if family is not None:
        doc = {
            key: value
            for key, value in (
                ("family", family),
                ("address", address),
                ("name", name),
                ("transmitter_id", transmitter_id),
            )
            if value is not None
        }
        return build_config(doc, "command line")

    loaded = load_config(config)
    if loaded is None:
        raise ConfigLoadError(
            "No transmitter configured. Use --family or create a transmitter.yaml config file."
        )
    return loaded


def _wait_for_radio(transmitter: ConnectionAccess, settled: threading.Event, timeout_s: float) -> None:
    radio = transmitter.connection.radio
    if radio is not None and radio.state is RadioState.UNKNOWN:
        settled.wait(timeout_s)


@app.command("scan")
def scan(
    family: str | None = typer.Option(None, "--family", help="Transmitter family, see 'cgmble families'"),
    address: str | None = typer.Option(None, "--address", help="Known transmitter address"),
    name: str | None = typer.Option(None, "--name", help="Known transmitter name"),
    transmitter_id: str | None = typer.Option(None, "--transmitter-id", help="Transmitter id (Dexcom G5/G6, Blucon)"),
    duration: float = typer.Option(10.0, "--duration", help="Seconds to listen for matching peripherals"),
    ready_timeout: float = typer.Option(5.0, "--ready-timeout", help="Seconds to wait for the adapter state"),
    config: Path | None = typer.Option(None, "--config", help="Path to transmitter.yaml"),
) -> None:
    """Start scanning for the configured transmitter and report matches."""
    try:
        transmitter_config = _resolve_config(family, address, name, transmitter_id, config)
        transmitter = create_transmitter(transmitter_config, radio=BleakRadio())
    except CgmbleError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None

    settled = threading.Event()
    seen: dict[str, PeripheralDiscovered] = {}
    lock = threading.Lock()

    def _on_event(event: RadioEvent) -> None:
        if isinstance(event, StateChanged):
            settled.set()
            return
        if not isinstance(event, PeripheralDiscovered) or not is_candidate(transmitter, event):  # type: ignore[arg-type]
            return
        with lock:
            if event.address in seen:
                return
            seen[event.address] = event
        typer.echo(f"Found {event.address} {event.name or '<unnamed>'} rssi={event.rssi}")

    transmitter.add_listener(_on_event)
    try:
        _wait_for_radio(transmitter, settled, ready_timeout)
        result = transmitter.start_scanning()
        family_name = transmitter_config.family.value
        if result is ScanResult.RADIO_NOT_READY:
            radio = transmitter.connection.radio
            state = radio.state.value if radio is not None else "absent"
            typer.echo(f"Error: Bluetooth radio is not ready ({state})", err=True)
            raise typer.Exit(code=1)
        if result is ScanResult.OTHER:
            typer.echo("Error: Could not start scanning", err=True)
            raise typer.Exit(code=1)
        if result is ScanResult.ALREADY_SCANNING:
            typer.echo(f"Scan for {family_name} already in progress")
        else:
            typer.echo(f"Scanning for {family_name} for {duration:g}s")

        time.sleep(duration)
        with lock:
            count = len(seen)
        typer.echo(f"{count} matching peripheral(s) found")
    finally:
        transmitter.close()


def run() -> None:
    app()


if __name__ == "__main__":
    run()
