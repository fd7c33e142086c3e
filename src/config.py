"""Runtime settings: defaults from Constants, then YAML file, then environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional

import yaml

from constants import Constants

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when a configuration file or value cannot be used."""


@dataclass(frozen=True)
class Settings:
    """Endpoints and tunables for one run."""
    mojang_manifest_url: str = Constants.MOJANG_MANIFEST_URL
    papermc_api_base: str = Constants.PAPERMC_API_BASE
    hangar_api_base: str = Constants.HANGAR_API_BASE
    request_timeout: float = Constants.REQUEST_TIMEOUT
    max_workers: int = Constants.MAX_WORKERS


_NUMERIC_FIELDS = {"request_timeout": float, "max_workers": int}


def _coerce(name: str, value: Any) -> Any:
    """Convert a raw config/env value to the field's type."""
    caster = _NUMERIC_FIELDS.get(name)
    if caster is None:
        return str(value).rstrip("/")
    try:
        coerced = caster(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid value for {name}: {value!r}") from exc
    if coerced <= 0:
        raise ConfigError(f"{name} must be positive, got {value!r}")
    return coerced


def _load_yaml_config(config_path: str) -> Dict[str, Any]:
    """Read the YAML file; the hangar_upload section is optional."""
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse config {config_path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config {config_path} must contain a mapping")
    section = data.get(Constants.CONFIG_SECTION, data)
    if not isinstance(section, dict):
        raise ConfigError(f"'{Constants.CONFIG_SECTION}' section must be a mapping")
    return section


def load_settings(config_path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings for this run.

    Args:
        config_path: Optional YAML file; a missing file only logs a warning.
        environ: Environment mapping, defaults to os.environ.

    Returns:
        Settings: Defaults overlaid with file values, then HANGAR_UPLOAD_* variables.
    """
    env = os.environ if environ is None else environ
    known = {f.name for f in fields(Settings)}
    overrides: Dict[str, Any] = {}

    if config_path:
        if not os.path.isfile(config_path):
            logger.warning("Config file not found: %s", config_path)
        else:
            for key, value in _load_yaml_config(config_path).items():
                if key not in known:
                    logger.warning("Ignoring unknown config key: %s", key)
                    continue
                overrides[key] = _coerce(key, value)

    for name in known:
        env_value = env.get(f"{Constants.ENV_PREFIX}{name.upper()}")
        if env_value:
            overrides[name] = _coerce(name, env_value)

    return replace(Settings(), **overrides)
