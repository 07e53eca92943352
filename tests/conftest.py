from __future__ import annotations

from collections.abc import Callable

import pytest

from cgmble.radio.base import PeripheralDiscovered, RadioEvent, RadioEventSink, RadioState


class FakeSession:
    def __init__(
        self,
        sink: RadioEventSink,
        *,
        state: RadioState,
        scanning: bool,
        discoveries: tuple[PeripheralDiscovered, ...],
    ) -> None:
        self.sink = sink
        self.state = state
        self.is_scanning = scanning
        self.discoveries = discoveries
        self.scan_requests: list[list[str] | None] = []
        self.stop_calls = 0
        self.closed = False

    def start_scan(self, service_uuids: list[str] | None) -> None:
        self.scan_requests.append(service_uuids)
        self.is_scanning = True
        for peripheral in self.discoveries:
            self.sink.handle_radio_event(peripheral)

    def stop_scan(self) -> None:
        self.stop_calls += 1
        self.is_scanning = False

    def close(self) -> None:
        self.closed = True

    def emit(self, event: RadioEvent) -> None:
        self.sink.handle_radio_event(event)


class FakeRadio:
    def __init__(
        self,
        *,
        state: RadioState = RadioState.POWERED_ON,
        scanning: bool = False,
        discoveries: tuple[PeripheralDiscovered, ...] = (),
        error: Exception | None = None,
    ) -> None:
        self.state = state
        self.scanning = scanning
        self.discoveries = discoveries
        self.error = error
        self.sessions: list[FakeSession] = []

    def open(self, sink: RadioEventSink) -> FakeSession:
        if self.error is not None:
            raise self.error
        session = FakeSession(
            sink,
            state=self.state,
            scanning=self.scanning,
            discoveries=self.discoveries,
        )
        self.sessions.append(session)
        return session

    @property
    def session(self) -> FakeSession:
        assert len(self.sessions) == 1
        return self.sessions[0]


@pytest.fixture
def radio() -> FakeRadio:
    return FakeRadio()


@pytest.fixture
def make_radio() -> Callable[..., FakeRadio]:
    return FakeRadio
