"""Configuration loading for b3prop.

Sources, highest priority first:
- explicit overrides passed to load_config()
- environment variables (B3PROP_*)
- TOML config file (./b3prop.toml or ~/.b3prop.toml)
- defaults
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError

from b3prop.constants import (
    PARENT_SPAN_ID_HEADER,
    SAMPLED_HEADER,
    SINGLE_HEADER,
    SPAN_ID_HEADER,
    TRACE_ID_HEADER,
)
from b3prop.errors import ConfigError

CONFIG_FILE_NAME = "b3prop.toml"
ENV_PREFIX = "B3PROP_"

# env var suffix -> (section, key)
_ENV_VARS = {
    "FORMAT": ("propagation", "format"),
    "SINGLE_HEADER": ("propagation", "single_header"),
    "TRACE_ID_HEADER": ("propagation", "trace_id_header"),
    "SPAN_ID_HEADER": ("propagation", "span_id_header"),
    "SAMPLED_HEADER": ("propagation", "sampled_header"),
    "PARENT_SPAN_ID_HEADER": ("propagation", "parent_span_id_header"),
    "DEBUG": ("logging", "debug"),
}
_BOOL_KEYS = {"debug"}
_TRUE_VALUES = {"true", "1", "yes", "on"}
_FALSE_VALUES = {"false", "0", "no", "off"}


class PropagationConfig(BaseModel):
    """Which B3 layout to read and under which header names."""

    model_config = ConfigDict(extra="forbid")

    format: Literal["multi", "single"] = "multi"
    single_header: str = Field(default=SINGLE_HEADER, min_length=1)
    trace_id_header: str = Field(default=TRACE_ID_HEADER, min_length=1)
    span_id_header: str = Field(default=SPAN_ID_HEADER, min_length=1)
    sampled_header: str = Field(default=SAMPLED_HEADER, min_length=1)
    parent_span_id_header: str = Field(default=PARENT_SPAN_ID_HEADER, min_length=1)


class LoggingConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    debug: bool = False


class B3PropConfig(BaseModel):
    """Root configuration model."""

    model_config = ConfigDict(extra="forbid")

    propagation: PropagationConfig = Field(default_factory=PropagationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def find_config_file() -> Optional[str]:
    """
    Look for a config file in the current directory, then the home directory.

    Returns:
        Path to the first file found, or None
    """
    candidates = [
        Path.cwd() / CONFIG_FILE_NAME,
        Path.home() / f".{CONFIG_FILE_NAME}",
    ]
    for candidate in candidates:
        if candidate.is_file():
            return str(candidate)
    return None


def load_toml_config(path: str) -> Dict[str, Any]:
    """
    Load a TOML config file.

    Returns an empty dict if the file does not exist.

    Raises:
        ConfigError: If the file is not valid TOML
    """
    config_path = Path(path)
    if not config_path.is_file():
        return {}
    try:
        with config_path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError("Invalid TOML config file", {"path": path, "error": e}) from e


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError("Invalid boolean environment variable", {"name": name, "value": raw})


def load_config_from_env(flat: bool = False) -> Dict[str, Any]:
    """
    Read B3PROP_* environment variables.

    Args:
        flat: Return {key: value} instead of {section: {key: value}}

    Raises:
        ConfigError: If a boolean variable has an unrecognised value
    """
    result: Dict[str, Any] = {}
    for suffix, (section, key) in _ENV_VARS.items():
        name = ENV_PREFIX + suffix
        raw = os.environ.get(name)
        if raw is None:
            continue
        value: Any = _parse_bool(name, raw) if key in _BOOL_KEYS else raw
        if flat:
            result[key] = value
        else:
            result.setdefault(section, {})[key] = value
    return result


def _merge(base: Dict[str, Any], update: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in update.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(
    config_file: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> B3PropConfig:
    """
    Load configuration with priority: overrides > env > file > defaults.

    Args:
        config_file: Explicit TOML path; found with find_config_file() if None
        overrides: Nested dict, e.g. {"propagation": {"format": "single"}}

    Raises:
        ConfigError: If any source holds an invalid value
    """
    path = config_file or find_config_file()
    data: Dict[str, Any] = load_toml_config(path) if path else {}
    data = _merge(data, load_config_from_env())
    if overrides:
        data = _merge(data, overrides)
    try:
        return B3PropConfig.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigError("Invalid b3prop configuration", {"errors": e.error_count()}) from e


def configure_logging(config: B3PropConfig) -> None:
    """Raise the b3prop logger to DEBUG when debug logging is enabled."""
    if config.logging.debug:
        logging.getLogger("b3prop").setLevel(logging.DEBUG)
