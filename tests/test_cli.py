from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from cgmble import cli
from cgmble.radio.base import PeripheralDiscovered, RadioState

runner = CliRunner()


@pytest.fixture(autouse=True)
def _no_user_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("CGMBLE_CONFIG", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))


def _use_radio(monkeypatch: pytest.MonkeyPatch, radio) -> None:
    monkeypatch.setattr(cli, "BleakRadio", lambda: radio)


def test_families_command() -> None:
    result = runner.invoke(cli.app, ["families"])
    assert result.exit_code == 0
    assert "dexcom_g4: DexcomG4Transmitter" in result.stdout
    assert "miaomiao: MiaoMiaoTransmitter (type limited)" in result.stdout
    assert "advertisement: <any device>" in result.stdout
    assert "F8083532-849E-531C-C594-30F1F86A4EA5" in result.stdout


def test_scan_reports_matching_peripherals(monkeypatch: pytest.MonkeyPatch, make_radio) -> None:
    radio = make_radio(
        discoveries=(
            PeripheralDiscovered(address="11:22", name="Dexcom34", rssi=-70),
            PeripheralDiscovered(address="11:22", name="Dexcom34", rssi=-68),
            PeripheralDiscovered(address="33:44", name="Headphones", rssi=-50),
        )
    )
    _use_radio(monkeypatch, radio)

    result = runner.invoke(
        cli.app,
        ["scan", "--family", "dexcom_g6", "--transmitter-id", "8G1234", "--duration", "0"],
    )

    assert result.exit_code == 0
    assert "Scanning for dexcom_g6" in result.stdout
    assert "Found 11:22 Dexcom34 rssi=-70" in result.stdout
    assert "33:44" not in result.stdout
    assert "1 matching peripheral(s) found" in result.stdout
    assert radio.session.scan_requests == [["0000FEBC-0000-1000-8000-00805F9B34FB"]]
    assert radio.session.closed


def test_scan_uses_config_file(monkeypatch: pytest.MonkeyPatch, make_radio, tmp_path: Path) -> None:
    config = tmp_path / "transmitter.yaml"
    config.write_text("family: miaomiao\n", encoding="utf-8")
    radio = make_radio()
    _use_radio(monkeypatch, radio)

    result = runner.invoke(cli.app, ["scan", "--config", str(config), "--duration", "0"])

    assert result.exit_code == 0
    assert "Scanning for miaomiao" in result.stdout
    assert radio.session.scan_requests == [None]


def test_scan_already_scanning(monkeypatch: pytest.MonkeyPatch, make_radio) -> None:
    _use_radio(monkeypatch, make_radio(scanning=True))

    result = runner.invoke(cli.app, ["scan", "--family", "dexcom_g4", "--duration", "0"])

    assert result.exit_code == 0
    assert "already in progress" in result.stdout


def test_scan_radio_not_ready_fails(monkeypatch: pytest.MonkeyPatch, make_radio) -> None:
    radio = make_radio(state=RadioState.POWERED_OFF)
    _use_radio(monkeypatch, radio)

    result = runner.invoke(cli.app, ["scan", "--family", "dexcom_g4", "--duration", "0"])

    assert result.exit_code == 1
    assert "Error: Bluetooth radio is not ready (powered_off)" in result.stderr
    assert radio.session.scan_requests == []
    assert radio.session.closed


def test_scan_without_configuration_is_clean_error(monkeypatch: pytest.MonkeyPatch, make_radio) -> None:
    _use_radio(monkeypatch, make_radio())

    result = runner.invoke(cli.app, ["scan", "--duration", "0"])

    assert result.exit_code == 1
    assert "Error: No transmitter configured" in result.stderr
    assert "Traceback" not in result.stdout
    assert "Traceback" not in result.stderr


def test_scan_invalid_family_is_clean_error(monkeypatch: pytest.MonkeyPatch, make_radio) -> None:
    radio = make_radio()
    _use_radio(monkeypatch, radio)

    result = runner.invoke(cli.app, ["scan", "--family", "libre3"])

    assert result.exit_code == 1
    assert "Error: Schema validation failed for command line" in result.stderr
    assert radio.sessions == []
