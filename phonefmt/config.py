# file: phonefmt/config.py
"""
Configuration loader.

Settings are validated with pydantic and can come from a YAML file, a `.env`
file or the process environment.

Precedence (highest to lowest):
1. OS environment variables
2. `.env` values
3. YAML config file values
4. Code defaults
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import dotenv_values
from pydantic import BaseModel
from pydantic import ConfigDict as PydanticConfigDict


class PhonefmtSettings(BaseModel):
    model_config = PydanticConfigDict(extra="ignore")

    # Logging
    log_level: str = "INFO"
    json_logging: bool = False

    # Registry; None means the packaged dataset
    registry_path: Path | None = None

    # Formatting defaults used by the CLI
    default_format: str = "us"
    default_country: str | None = None
    auto_detect: bool = False
    strict: bool = False


_ENV_MAP: dict[str, str] = {
    "PHONEFMT_LOG_LEVEL": "log_level",
    "PHONEFMT_JSON_LOGGING": "json_logging",
    "PHONEFMT_REGISTRY_PATH": "registry_path",
    "PHONEFMT_DEFAULT_FORMAT": "default_format",
    "PHONEFMT_DEFAULT_COUNTRY": "default_country",
    "PHONEFMT_AUTO_DETECT": "auto_detect",
    "PHONEFMT_STRICT": "strict",
}


def _read_yaml(path: Path) -> dict[str, Any]:
    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    return raw if isinstance(raw, dict) else {}


def _read_dotenv(path: Path) -> dict[str, str]:
    # dotenv_values only parses; os.environ is left alone.
    return {k: v for k, v in dotenv_values(path).items() if isinstance(v, str)}


def _overlay_env(target: dict[str, Any], env: dict[str, str]) -> None:
    for env_key, field_name in _ENV_MAP.items():
        if env_key in env:
            target[field_name] = env[env_key]


def load_settings(
    *, yaml_path: Path | None = None, env_path: Path | None = None
) -> PhonefmtSettings:
    """
    Load settings from YAML and .env, with OS env overrides.

    Args:
        yaml_path: Optional YAML config path. Falls back to `PHONEFMT_CONFIG`.
        env_path: Optional .env path (default: `.env` if present).
    """

    data: dict[str, Any] = {}

    if env_path is None:
        maybe = Path(".env")
        env_path = maybe if maybe.exists() else None

    dotenv = _read_dotenv(env_path) if env_path is not None and env_path.exists() else {}

    if yaml_path is None:
        cfg = os.environ.get("PHONEFMT_CONFIG") or dotenv.get("PHONEFMT_CONFIG")
        if cfg:
            yaml_path = Path(cfg)

    if yaml_path is not None and yaml_path.exists():
        data.update(_read_yaml(yaml_path))

    if dotenv:
        _overlay_env(data, dotenv)

    os_env = {k: v for k, v in os.environ.items() if k in _ENV_MAP}
    _overlay_env(data, os_env)

    return PhonefmtSettings.model_validate(data)
