"""Loading and validation of the YAML transmitter configuration."""

from __future__ import annotations

import json
import logging
import os
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from jsonschema import ValidationError, validators

from cgmble.core.errors import ConfigLoadError, ConfigValidationError, IdentityError
from cgmble.core.model import TransmitterConfig
from cgmble.core.registry import TransmitterType
from cgmble.transmitters.dexcom_g5 import dexcom_expected_name

CONFIG_ENV_VAR = "CGMBLE_CONFIG"
_NEEDS_TRANSMITTER_ID = {
    TransmitterType.DEXCOM_G5,
    TransmitterType.DEXCOM_G6,
    TransmitterType.BLUCON,
}
_DEXCOM_FAMILIES = {TransmitterType.DEXCOM_G5, TransmitterType.DEXCOM_G6}
_STRING_ONLY_TAGS = {
    "tag:yaml.org,2002:bool",
    "tag:yaml.org,2002:int",
    "tag:yaml.org,2002:float",
}
LOGGER = logging.getLogger(__name__)


class UniqueKeyLoader(yaml.SafeLoader):
    """YAML loader that rejects duplicate keys and keeps ids and names as strings."""


# Transmitter ids such as 123456 or 1.5e3 and names like "on" must reach
# validation as written, so bool, int and float are never resolved implicitly.
UniqueKeyLoader.yaml_implicit_resolvers = {
    first_char: [(tag, regexp) for tag, regexp in resolvers if tag not in _STRING_ONLY_TAGS]
    for first_char, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def _construct_mapping(loader: UniqueKeyLoader, node: yaml.Node, deep: bool = False) -> dict[str, Any]:
    mapping: dict[str, Any] = {}
    for key_node, value_node in node.value:
        key = loader.construct_object(key_node, deep=deep)
        if key in mapping:
            raise ConfigValidationError(f"Duplicate key '{key}' in YAML document")
        mapping[key] = loader.construct_object(value_node, deep=deep)
    return mapping


UniqueKeyLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG,
    _construct_mapping,
)


def _load_schema_validator() -> Any:
    schema_text = resources.files("cgmble.schemas").joinpath("transmitter.schema.json").read_text(
        encoding="utf-8"
    )
    schema = json.loads(schema_text)
    validator_cls = validators.validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema)


def config_path() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    xdg_config = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return xdg_config / "cgmble/transmitter.yaml"


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigLoadError(f"Could not read config file {path}: {exc}") from exc

    try:
        loaded = yaml.load(content, Loader=UniqueKeyLoader)
    except yaml.YAMLError as exc:
        raise ConfigValidationError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise ConfigValidationError(f"Config file {path} must contain a mapping at root")
    return loaded


def build_config(doc: dict[str, Any], source: Path | str = "<config>") -> TransmitterConfig:
    validator = _load_schema_validator()
    try:
        validator.validate(doc)
    except ValidationError as exc:
        path = ".".join(str(p) for p in exc.path)
        where = f" ({path})" if path else ""
        raise ConfigValidationError(f"Schema validation failed for {source}{where}: {exc.message}") from exc

    family = TransmitterType(doc["family"])
    transmitter_id = doc.get("transmitter_id")
    if family in _NEEDS_TRANSMITTER_ID and transmitter_id is None:
        raise ConfigValidationError(f"{source}: family '{family.value}' requires transmitter_id")
    if transmitter_id is not None:
        transmitter_id = transmitter_id.strip()
        if family in _DEXCOM_FAMILIES:
            try:
                dexcom_expected_name(transmitter_id)
            except IdentityError as exc:
                raise ConfigValidationError(f"{source}: {exc}") from exc
            transmitter_id = transmitter_id.upper()
        elif family not in _NEEDS_TRANSMITTER_ID:
            LOGGER.warning("%s: transmitter_id is ignored for family '%s'", source, family.value)
            transmitter_id = None

    return TransmitterConfig(
        family=family,
        address=doc.get("address"),
        name=doc.get("name"),
        transmitter_id=transmitter_id,
    )


def load_config(path: Path | None = None) -> TransmitterConfig | None:
    """Load the transmitter config.

    An explicit ``path`` must exist. Without one, the default location is
    tried and None is returned when nothing is configured.
    """
    if path is not None:
        return build_config(_read_yaml(path), path)
    target = config_path()
    if not target.exists():
        LOGGER.debug("no config file at %s", target)
        return None
    return build_config(_read_yaml(target), target)
