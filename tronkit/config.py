"""Persistent command-line settings stored as YAML."""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path

import yaml

DEFAULT_NODE_ADDR = "grpc.trongrid.io:50051"
DEFAULT_NODE_PORT = "50051"
DEFAULT_TIMEOUT = 20
DEFAULT_CONFIG_NAME = "config.default"

_TRUE = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE = {"0", "f", "F", "FALSE", "false", "False"}


def _keys(yaml_key: str, json_key: str, param: str | None = None) -> dict:
    """Field metadata: its YAML key, its JSON key and its set/get parameter name."""
    return {"yaml": yaml_key, "json": json_key, "param": param}


_ACCESS_META = _keys("apiKey", "APIKey", "apiKey")


@dataclass
class Config:
    """The settings schema."""

    node: str = field(default="", metadata=_keys("node", "Node", "node"))
    ledger: bool = field(default=False, metadata=_keys("ledger", "Ledger", "ledger"))
    verbose: bool = field(default=False, metadata=_keys("verbose", "Verbose", "verbose"))
    timeout: int = field(default=0, metadata=_keys("timeout", "Timeout"))
    no_pretty: bool = field(default=False, metadata=_keys("noPretty", "NoPretty", "nopretty"))
    api_key: str = field(default_factory=str, metadata=_ACCESS_META)
    with_tls: bool = field(default=False, metadata=_keys("withTLS", "WithTLS", "withTLS"))


# Python attribute -> key used in the YAML file.
_YAML_KEYS = {f.name: f.metadata["yaml"] for f in fields(Config)}
# Python attribute -> key used when the whole config is shown as JSON.
_JSON_KEYS = {f.name: f.metadata["json"] for f in fields(Config)}
# Parameter names accepted by set/get -> Python attribute.
_PARAMS = {f.metadata["param"]: f.name for f in fields(Config) if f.metadata["param"]}


def _parse_bool(text: str) -> bool:
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"invalid boolean value {text!r}")


def load_config(path: str | os.PathLike) -> Config:
    """Read a config file; raise FileNotFoundError if it does not exist."""
    text = Path(path).read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError("config file does not hold a mapping")
    values = {
        attr: data[key] for attr, key in _YAML_KEYS.items() if key in data and data[key] is not None
    }
    return Config(**values)


def save_config(config: Config, path: str | os.PathLike) -> None:
    """Write a config file readable only by its owner."""
    current = asdict(config)
    data = {key: current[attr] for attr, key in _YAML_KEYS.items()}
    text = yaml.safe_dump(data, sort_keys=False)
    fd = os.open(os.fspath(path), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8") as handle:
        handle.write(text)


def _defaults() -> Config:
    return Config(node=DEFAULT_NODE_ADDR, timeout=DEFAULT_TIMEOUT)


def init_config(config_dir: str | os.PathLike | None = None) -> Config:
    """Load the default config, writing defaults when it is missing or unusable."""
    directory = Path(config_dir) if config_dir is not None else Path.home() / ".config" / "tronctl"
    directory.mkdir(mode=0o700, parents=True, exist_ok=True)
    path = directory / DEFAULT_CONFIG_NAME
    try:
        config = load_config(path)
    except (OSError, ValueError, TypeError, yaml.YAMLError):
        config = None
    if config is None or not config.node:
        config = _defaults()
        save_config(config, path)
    return config


def set_config_value(config: Config, param: str, value: str) -> Config:
    """Return a copy of ``config`` with one parameter changed."""
    attr = _PARAMS.get(param)
    if attr is None:
        raise KeyError("parameter not found")
    if attr == "node":
        if len(value.split(":")) == 1:
            value = f"{value}:{DEFAULT_NODE_PORT}"
        return replace(config, node=value)
    if isinstance(getattr(config, attr), str):
        return replace(config, **{attr: value})
    return replace(config, **{attr: _parse_bool(value)})


def get_config_value(config: Config, param: str) -> str:
    """Return one parameter as text, or the whole config as JSON for ``all``."""
    if param == "all":
        current = asdict(config)
        return json.dumps({key: current[attr] for attr, key in _JSON_KEYS.items()}, indent=2)
    attr = _PARAMS.get(param)
    if attr is None:
        raise KeyError("parameter not found")
    current = getattr(config, attr)
    if isinstance(current, bool):
        return "true" if current else "false"
    return str(current)