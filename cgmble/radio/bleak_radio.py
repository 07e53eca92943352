"""BLE radio backend implemented on top of bleak."""

from __future__ import annotations

import asyncio
import concurrent.futures
import contextlib
import logging
import threading
from collections.abc import Callable, Coroutine
from typing import Any

from bleak import BleakScanner
from bleak.exc import BleakBluetoothNotAvailableError, BleakError

from cgmble.core.errors import RadioError, RadioUnavailableError
from cgmble.radio.base import (
    PeripheralDiscovered,
    RadioEvent,
    RadioEventSink,
    RadioState,
    StateChanged,
)

LOGGER = logging.getLogger(__name__)


def _state_for_error(exc: Exception) -> RadioState:
    if isinstance(exc, BleakBluetoothNotAvailableError):
        return RadioState.POWERED_OFF
    return RadioState.UNAVAILABLE


class BleakRadioSession:
    """One adapter session backed by a private asyncio loop.

    Every bleak call and every event delivery runs on the session's loop
    thread, so the sink sees events in the order bleak produced them.

    While the adapter is not powered on, the session keeps probing it with
    an exponential backoff and emits ``StateChanged`` once it comes back.
    """

    def __init__(
        self,
        sink: RadioEventSink,
        *,
        scanner_factory: Callable[..., Any] = BleakScanner,
        close_timeout_s: float = 5.0,
        probe_interval_s: float = 1.0,
        max_probe_interval_s: float = 30.0,
    ) -> None:
        self._sink = sink
        self._scanner_factory = scanner_factory
        self._close_timeout_s = close_timeout_s
        self._probe_interval_s = probe_interval_s
        self._max_probe_interval_s = max_probe_interval_s
        self._state = RadioState.UNKNOWN
        self._scanner: Any = None
        self._scanning = False
        # bumped by every start/stop/close; a starting scanner whose token is stale is stopped
        self._generation = 0
        self._closed = False
        self._watcher: asyncio.Task[None] | None = None
        self._starting: set[asyncio.Task[Any]] = set()
        self._teardown_task: asyncio.Task[None] | None = None
        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(
            target=self._run_loop,
            name="cgmble-radio",
            daemon=True,
        )
        try:
            self._thread.start()
        except RuntimeError as exc:
            self._loop.close()
            raise RadioUnavailableError(f"Could not start radio event loop: {exc}") from exc
        self._loop.call_soon_threadsafe(self._ensure_watcher)

    @property
    def state(self) -> RadioState:
        return self._state

    @property
    def is_scanning(self) -> bool:
        return self._scanning

    def start_scan(self, service_uuids: list[str] | None) -> None:
        if self._closed:
            raise RadioError("Radio session is closed")
        uuids = [uuid.lower() for uuid in service_uuids] if service_uuids else None
        self._scanning = True
        self._generation += 1
        self._submit(self._start_scan(uuids, self._generation))

    def stop_scan(self) -> None:
        if not self._scanning:
            return
        self._scanning = False
        self._generation += 1
        self._submit(self._stop_scan())

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._scanning = False
        self._generation += 1

        if threading.current_thread() is self._thread:
            # called from a listener; the loop can't wait on itself
            self._teardown_task = self._loop.create_task(self._teardown(stop_loop=True))
            return

        future = self._submit(self._teardown(stop_loop=False))
        try:
            future.result(timeout=self._close_timeout_s)
        except concurrent.futures.TimeoutError:
            LOGGER.warning("timed out stopping scanner while closing radio session")
        self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join(timeout=self._close_timeout_s)

    def _run_loop(self) -> None:
        asyncio.set_event_loop(self._loop)
        try:
            self._loop.run_forever()
        finally:
            self._loop.close()

    def _submit(self, coro: Coroutine[Any, Any, None]) -> concurrent.futures.Future[None]:
        return asyncio.run_coroutine_threadsafe(coro, self._loop)

    def _ensure_watcher(self) -> None:
        if self._closed or (self._watcher is not None and not self._watcher.done()):
            return
        self._watcher = self._loop.create_task(self._watch_adapter())

    async def _watch_adapter(self) -> None:
        delay = self._probe_interval_s
        while not self._closed:
            await self._probe()
            if self._state is RadioState.POWERED_ON:
                return
            await asyncio.sleep(delay)
            delay = min(delay * 2, self._max_probe_interval_s)

    async def _probe(self) -> None:
        scanner = self._scanner_factory()
        try:
            await scanner.start()
            await scanner.stop()
        except (BleakError, OSError) as exc:
            LOGGER.warning("bluetooth adapter probe failed: %s", exc)
            self._set_state(_state_for_error(exc))
            return
        self._set_state(RadioState.POWERED_ON)

    async def _start_scan(self, service_uuids: list[str] | None, generation: int) -> None:
        task = asyncio.current_task()
        self._starting.add(task)
        try:
            await self._start_scanner(service_uuids, generation)
        finally:
            self._starting.discard(task)

    async def _start_scanner(self, service_uuids: list[str] | None, generation: int) -> None:
        scanner = self._scanner_factory(
            detection_callback=self._on_detection,
            service_uuids=service_uuids,
        )
        try:
            await scanner.start()
        except (BleakError, OSError) as exc:
            LOGGER.warning("could not start bluetooth scan: %s", exc)
            if generation == self._generation:
                self._scanning = False
            self._set_state(_state_for_error(exc))
            self._ensure_watcher()
            return
        if generation != self._generation or not self._scanning:
            # superseded by stop_scan, close or a newer start_scan while starting
            await self._stop_scanner(scanner)
            return
        await self._stop_scan()
        self._scanner = scanner
        self._set_state(RadioState.POWERED_ON)

    async def _stop_scan(self) -> None:
        scanner, self._scanner = self._scanner, None
        if scanner is not None:
            await self._stop_scanner(scanner)

    async def _stop_scanner(self, scanner: Any) -> None:
        try:
            await scanner.stop()
        except (BleakError, OSError) as exc:
            LOGGER.warning("could not stop bluetooth scan: %s", exc)

    async def _teardown(self, *, stop_loop: bool) -> None:
        watcher, self._watcher = self._watcher, None
        if watcher is not None and not watcher.done() and watcher is not asyncio.current_task():
            watcher.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await watcher
        pending = [task for task in self._starting if task is not asyncio.current_task()]
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        await self._stop_scan()
        if stop_loop:
            self._loop.stop()

    def _on_detection(self, device: Any, advertisement_data: Any) -> None:
        self._deliver(
            PeripheralDiscovered(
                address=device.address,
                name=advertisement_data.local_name or device.name,
                rssi=advertisement_data.rssi,
                service_uuids=tuple(advertisement_data.service_uuids or ()),
            )
        )

    def _set_state(self, state: RadioState) -> None:
        if state is self._state:
            return
        self._state = state
        LOGGER.info("bluetooth radio state changed to %s", state.value)
        self._deliver(StateChanged(state))

    def _deliver(self, event: RadioEvent) -> None:
        try:
            self._sink.handle_radio_event(event)
        except Exception:
            LOGGER.exception("radio event sink failed on %r", event)


class BleakRadio:
    """Factory for bleak-backed radio sessions."""

    def __init__(
        self,
        *,
        scanner_factory: Callable[..., Any] = BleakScanner,
        probe_interval_s: float = 1.0,
        max_probe_interval_s: float = 30.0,
    ) -> None:
        self._scanner_factory = scanner_factory
        self._probe_interval_s = probe_interval_s
        self._max_probe_interval_s = max_probe_interval_s

    def open(self, sink: RadioEventSink) -> BleakRadioSession:
        return BleakRadioSession(
            sink,
            scanner_factory=self._scanner_factory,
            probe_interval_s=self._probe_interval_s,
            max_probe_interval_s=self._max_probe_interval_s,
        )
