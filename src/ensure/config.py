from __future__ import annotations

import functools
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal

import yaml
from expandvars import ExpandvarsException, expandvars
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from ensure.errors import ConfigError

CONFIG_ENV = "ENSURE_CONFIG"

# Environment variable -> settings field
_ENV_OVERRIDES = {
    "ENSURE_LOG": "log",
    "ENSURE_LOG_FILE": "log_file",
    "ENSURE_TEST_PREFIX": "test_prefix",
    "ENSURE_LOCATION": "location",
}

_TRUTHY = frozenset({"1", "true", "yes", "on"})


class Settings(BaseModel):
    """Process-wide ensure settings.

    Attributes:
        log: Echo every rendered failure message to the ``ensure`` logger.
        log_file: Also write echoed messages to this file.
        test_prefix: Function-name prefix marking a test entry point when
            resolving where a failed assertion was called from.
        location: How the failure location is attributed. ``auto`` lets
            sinks that can mark helper frames handle it and walks the stack
            otherwise; ``stack`` always walks; ``delegated`` never walks;
            ``none`` omits the location.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    log: bool = False
    log_file: Path | None = None
    test_prefix: str = "test"
    location: Literal["auto", "stack", "delegated", "none"] = "auto"

    @field_validator("log", mode="before")
    @classmethod
    def parse_flag(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower() in _TRUTHY
        return v

    @field_validator("test_prefix")
    @classmethod
    def test_prefix_must_not_be_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("test_prefix must not be empty")
        return v


def _expand(raw: dict[str, Any], source: Path) -> dict[str, Any]:
    """Expand ${VAR} references in string values of a config file."""
    expanded: dict[str, Any] = {}
    missing: list[str] = []
    for key, value in raw.items():
        if isinstance(value, str):
            try:
                value = expandvars(value, nounset=True)
            except ExpandvarsException:
                missing.append(f"  {key}={value}")
        expanded[key] = value
    if missing:
        details = "\n".join(missing)
        raise ConfigError(f"{source} references unset environment variables:\n{details}")
    return expanded


def _read_file(path: Path) -> dict[str, Any]:
    try:
        with open(path) as f:
            raw = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"{path} must contain a mapping, got {type(raw).__name__}")
    return _expand(raw, path)


def load_settings(
    path: Path | None = None, environ: Mapping[str, str] | None = None
) -> Settings:
    """Resolve settings from an optional YAML file and the environment.

    The file is *path* or, when omitted, the one named by ``ENSURE_CONFIG``.
    ``ENSURE_*`` environment variables override values from the file.
    """
    env = os.environ if environ is None else environ

    if path is None and env.get(CONFIG_ENV):
        path = Path(env[CONFIG_ENV])

    values = _read_file(path) if path is not None else {}
    for var, field in _ENV_OVERRIDES.items():
        if env.get(var):
            values[field] = env[var]

    try:
        return Settings(**values)
    except ValidationError as e:
        raise ConfigError(f"invalid ensure settings:\n{e}") from e


@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Settings for this process, resolved on first use."""
    return load_settings()


def reset_settings() -> None:
    """Forget the cached settings so the next lookup resolves them again."""
    get_settings.cache_clear()
