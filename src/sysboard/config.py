"""Settings for the sysboard client, read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Any, Mapping

ENV_PREFIX = "SYSBOARD_"

DEFAULTS: dict[str, Any] = {
    "api-url": "http://localhost:5000",
    "token": None,
    "user": None,
    "timeout": 10.0,
    "log-level": "WARNING",
}


def _env_key(key: str) -> str:
    """Convert a settings key (hyphenated) to its environment variable name."""
    return ENV_PREFIX + key.replace("-", "_").upper()


def _coerce(key: str, raw: str) -> Any:
    """Type-coerce a raw environment value using the defaults table."""
    default = DEFAULTS.get(key)
    if isinstance(default, bool):
        return raw.lower() in ("true", "yes", "1")
    if isinstance(default, float):
        return float(raw)
    if isinstance(default, int):
        return int(raw)
    return raw


@dataclass(frozen=True)
class Settings:
    api_url: str = DEFAULTS["api-url"]
    token: str | None = None
    user: str | None = None
    timeout: float = DEFAULTS["timeout"]
    log_level: str = DEFAULTS["log-level"]


def load_settings(environ: Mapping[str, str] | None = None, **overrides: Any) -> Settings:
    """Build Settings from defaults, then the environment, then non-None overrides.

    Empty environment values are treated as unset.
    """
    environ = os.environ if environ is None else environ
    values: dict[str, Any] = {}
    for key, default in DEFAULTS.items():
        raw = environ.get(_env_key(key))
        values[key.replace("-", "_")] = _coerce(key, raw) if raw else default
    for f in fields(Settings):
        if overrides.get(f.name) is not None:
            values[f.name] = overrides[f.name]
    return Settings(**values)
