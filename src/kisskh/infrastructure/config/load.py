"""Layered configuration loading: defaults < YAML < KISSKH_* env < CLI."""

from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from dotenv import load_dotenv

from .defaults import DEFAULT_CONFIG
from .schema import AppConfig, EnvOverrides, KissKHConfig

_SECTIONS = ("http", "logging", "kisskh")
_TOP_LEVEL = ("app_name", "environment")

# Flat keys whose section is implied by their prefix (log_level -> logging.level).
_PREFIXED_SECTIONS = {"http_": "http", "log_": "logging"}

# Flat keys spelled differently from the field they set.
_RENAMED = {"site_url": ("kisskh", "base_url")}


def _slot_for(flat_key: str) -> Optional[tuple[str, str]]:
    """Return the (section, key) a flat env/CLI key writes to, if any."""
    if flat_key in _RENAMED:
        return _RENAMED[flat_key]
    if flat_key in KissKHConfig.model_fields:
        return "kisskh", flat_key
    for prefix, section in _PREFIXED_SECTIONS.items():
        if flat_key.startswith(prefix):
            return section, flat_key[len(prefix) :]
    return None


def _merge(base: dict[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    for key, value in override.items():
        current = base.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            _merge(current, value)
        else:
            base[key] = value
    return base


def _sectioned(layer: Mapping[str, Any]) -> dict[str, Any]:
    """Bring a layer into the sectioned shape; unknown keys are dropped."""
    out: dict[str, Any] = {}
    for key, value in layer.items():
        if key in _SECTIONS and isinstance(value, Mapping):
            _merge(out.setdefault(key, {}), value)
        elif key in _TOP_LEVEL:
            out[key] = value
        else:
            slot = _slot_for(key)
            if slot is not None:
                section, field = slot
                out.setdefault(section, {})[field] = value
    return out


def _yaml_layer(config_path: Optional[Path]) -> Mapping[str, Any]:
    if config_path is None:
        return {}
    if not config_path.exists():
        raise FileNotFoundError(config_path)
    parsed = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ValueError(f"Config YAML must be a mapping, got: {type(parsed)!r}")
    return parsed


def _env_layer(dotenv_path: Optional[Path]) -> Mapping[str, Any]:
    # A .env file only fills variables the process does not already set.
    if dotenv_path is not None:
        if not dotenv_path.exists():
            raise FileNotFoundError(dotenv_path)
        load_dotenv(dotenv_path, override=False)
    return EnvOverrides().to_update_dict()


def load_config(
    *,
    config_path: Path | None = None,
    dotenv_path: Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> AppConfig:
    """
    Merge every configuration layer and validate the result.

    CLI overrides may be flat (``site_url``, ``log_level``) or sectioned
    (``{"kisskh": {"server": "05"}}``). Nothing is written to disk.
    """
    layers = (
        deepcopy(DEFAULT_CONFIG),
        _yaml_layer(config_path),
        _env_layer(dotenv_path),
        cli_overrides or {},
    )

    merged: dict[str, Any] = {}
    for layer in layers:
        _merge(merged, _sectioned(layer))

    return AppConfig.model_validate(merged)
