from __future__ import annotations

from pathlib import Path

import pytest

from cgmble.core.config import build_config, config_path, load_config
from cgmble.core.errors import ConfigLoadError, ConfigValidationError
from cgmble.core.registry import TransmitterType


def _write_config(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


@pytest.fixture
def xdg(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    monkeypatch.delenv("CGMBLE_CONFIG", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))
    return tmp_path / "cfg" / "cgmble" / "transmitter.yaml"


def test_missing_default_config_returns_none(xdg: Path) -> None:
    assert config_path() == xdg
    assert load_config() is None


def test_dexcom_config_loads(xdg: Path) -> None:
    _write_config(
        xdg,
        """
family: dexcom_g6
address: "AA:BB:CC:DD:EE:FF"
name: Dexcom34
transmitter_id: 8g1234
""",
    )

    config = load_config()
    assert config is not None
    assert config.family is TransmitterType.DEXCOM_G6
    assert config.address == "AA:BB:CC:DD:EE:FF"
    assert config.name == "Dexcom34"
    assert config.transmitter_id == "8G1234"


def test_numeric_looking_values_stay_strings(xdg: Path) -> None:
    _write_config(
        xdg,
        """
family: blucon
transmitter_id: 123456
""",
    )

    config = load_config()
    assert config is not None
    assert config.transmitter_id == "123456"


def test_boolean_and_float_looking_values_stay_strings(xdg: Path) -> None:
    _write_config(
        xdg,
        """
family: blucon
address: "AA:BB"
name: on
transmitter_id: 1.5e3
""",
    )

    config = load_config()
    assert config is not None
    assert config.name == "on"
    assert config.transmitter_id == "1.5e3"


def test_env_var_overrides_location(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    target = tmp_path / "elsewhere.yaml"
    _write_config(target, "family: miaomiao\n")
    monkeypatch.setenv("CGMBLE_CONFIG", str(target))

    config = load_config()
    assert config is not None
    assert config.family is TransmitterType.MIAOMIAO


def test_explicit_missing_path_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigLoadError):
        load_config(tmp_path / "missing.yaml")


def test_unknown_family_rejected(xdg: Path) -> None:
    _write_config(xdg, "family: libre3\n")

    with pytest.raises(ConfigValidationError):
        load_config()


def test_address_requires_name(xdg: Path) -> None:
    _write_config(
        xdg,
        """
family: dexcom_g4
address: "AA:BB"
""",
    )

    with pytest.raises(ConfigValidationError):
        load_config()


def test_dexcom_requires_transmitter_id() -> None:
    with pytest.raises(ConfigValidationError):
        build_config({"family": "dexcom_g5"})


def test_bad_dexcom_transmitter_id_rejected() -> None:
    with pytest.raises(ConfigValidationError):
        build_config({"family": "dexcom_g5", "transmitter_id": "8G1"})


def test_transmitter_id_dropped_for_families_without_one() -> None:
    config = build_config({"family": "miaomiao", "transmitter_id": "abc"})
    assert config.transmitter_id is None


def test_duplicate_yaml_keys_rejected(xdg: Path) -> None:
    _write_config(
        xdg,
        """
family: dexcom_g4
family: miaomiao
""",
    )

    with pytest.raises(ConfigValidationError):
        load_config()


def test_non_mapping_root_rejected(xdg: Path) -> None:
    _write_config(xdg, "- dexcom_g4\n")

    with pytest.raises(ConfigValidationError):
        load_config()
