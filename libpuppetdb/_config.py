"""Configuration loader for connector settings."""

import json
import os
from pathlib import Path
from typing import Any

from ._logging import get_logger
from .errors import ConnectorError

LOGGER = get_logger("config")


def _read_prefixed_env(prefix: str) -> dict[str, Any]:
    """Read environment keys matching <PREFIX>_* and normalize key names."""
    prefix_token = f"{prefix.upper()}_"
    values: dict[str, Any] = {}

    for key, value in os.environ.items():
        if key.startswith(prefix_token):
            normalized_key = key.removeprefix(prefix_token).lower()
            values[normalized_key] = value

    LOGGER.debug("Loaded %s config keys from environment prefix %s", len(values), prefix_token)
    return values


def _validate_mapping_root(data: Any, file_path: str) -> dict[str, Any]:
    """Ensure configuration files deserialize to a mapping root."""
    if isinstance(data, dict):
        return data
    raise ConnectorError(f"config file must contain a key-value object at the root: {file_path}")


def _parse_config_text(content: str, suffix: str, file_path: str) -> Any:
    if suffix == ".json":
        try:
            return json.loads(content)
        except json.JSONDecodeError as exc:
            raise ConnectorError(f"invalid JSON config file {file_path}: {exc}") from exc

    if suffix in {".yaml", ".yml"}:
        try:
            import yaml  # type: ignore
        except ImportError as exc:
            raise RuntimeError("PyYAML is not installed. Add it to requirements to use YAML config files.") from exc

        try:
            return yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise ConnectorError(f"invalid YAML config file {file_path}: {exc}") from exc

    raise ConnectorError("unsupported config format, use JSON (.json) or YAML (.yaml/.yml)")


def _read_config_file(file_path: str | None) -> dict[str, Any]:
    """Read a JSON or YAML config file when provided, otherwise return an empty mapping."""
    if not file_path:
        return {}

    path = Path(file_path)
    if not path.is_file():
        LOGGER.error("Config file not found: %s", file_path)
        raise ConnectorError(f"config file not found: {file_path}")

    data = _parse_config_text(path.read_text(encoding="utf-8"), path.suffix.lower(), file_path)
    LOGGER.info("Loaded config from %s", file_path)
    return _validate_mapping_root(data, file_path)


def _not_none_values(values: dict[str, Any] | None) -> dict[str, Any]:
    """Drop keys with None values to avoid overriding previous layers."""
    if not values:
        return {}
    return {key: value for key, value in values.items() if value is not None}


def _merge_config_layers(layers: list[dict[str, Any]]) -> dict[str, Any]:
    """Merge config dictionaries in order where last layer wins."""
    merged: dict[str, Any] = {}
    for layer in layers:
        merged.update(layer)
    return merged


def _ensure_required_keys(config: dict[str, Any], required: tuple[str, ...]) -> None:
    """Raise for the first required key that is missing or empty."""
    for key in required:
        if config.get(key) in (None, ""):
            LOGGER.error("Required config key missing: %s", key)
            raise ConnectorError(f"no {key} specified")


def load_connection_config(
    config: dict[str, Any] | None = None,
    *,
    file_path: str | None = None,
    env_prefix: str | None = None,
    required: tuple[str, ...] = (),
    defaults: dict[str, Any] | None = None,
    overrides: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Resolve final connector config from defaults, file, env, config, and overrides."""
    LOGGER.debug(
        "Loading connection config with env_prefix=%s, file_path=%s",
        env_prefix,
        file_path,
    )
    env_config = _read_prefixed_env(env_prefix) if env_prefix else {}
    merged = _merge_config_layers(
        [
            defaults or {},
            _read_config_file(file_path),
            env_config,
            config or {},
            _not_none_values(overrides),
        ]
    )

    _ensure_required_keys(merged, required)
    LOGGER.debug("Connection config resolved: %s", merged)
    return merged
