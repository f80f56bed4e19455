# src/mender/config/config.py
# Loads config.yaml over built-in defaults and exposes loop settings.

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from mender.agents.sre_team.sandbox import LanguageProfile
from mender.errors import ConfigError

DEFAULTS: Dict[str, Any] = {
    "model": {
        "id": "llama-3.3-70b-versatile",
        "temperature": 0.2,
    },
    "loop": {
        "max_attempts": 5,
        "max_patch_retries": 2,
    },
    "languages": {},
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def default_config_path() -> Path:
    env_path = os.getenv("MENDER_CONFIG")
    if env_path:
        return Path(env_path)
    local = Path.cwd() / "config.yaml"
    if local.exists():
        return local
    return Path(__file__).resolve().parents[3] / "config.yaml"


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration, falling back to DEFAULTS for anything not set.

    An explicitly given path must exist; the default lookup may find nothing.
    """
    explicit = config_path is not None
    if config_path is None:
        config_path = default_config_path()
    config_path = Path(config_path)

    if not config_path.exists():
        if explicit or os.getenv("MENDER_CONFIG"):
            raise ConfigError(f"Config file not found: {config_path}")
        return copy.deepcopy(DEFAULTS)

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{config_path} must contain a mapping at the top level")
    return _merge(DEFAULTS, data)


def load_groq_api_key() -> str:
    """
    Loads the GROQ_API_KEY from environment variables.

    Raises:
        ConfigError if the key is not found.
    """
    api_key = os.getenv("GROQ_API_KEY")
    if not api_key:
        raise ConfigError("Missing GROQ_API_KEY. Please set it in your .env file.")
    return api_key


@dataclass
class RepairSettings:
    max_attempts: Optional[int] = 5        # None loops until success
    max_patch_retries: int = 2             # extra requests after a malformed patch
    profiles: Dict[str, LanguageProfile] = field(default_factory=dict)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "RepairSettings":
        loop = config.get("loop") or {}
        max_attempts = loop.get("max_attempts", 5)
        max_patch_retries = loop.get("max_patch_retries", 2)

        if max_attempts is not None and (not isinstance(max_attempts, int) or max_attempts < 1):
            raise ConfigError(f"loop.max_attempts must be a positive integer or null, got {max_attempts!r}")
        if not isinstance(max_patch_retries, int) or max_patch_retries < 0:
            raise ConfigError(f"loop.max_patch_retries must be a non-negative integer, got {max_patch_retries!r}")

        profiles = {}
        for suffix, entry in (config.get("languages") or {}).items():
            if not isinstance(entry, dict) or not entry.get("interpreter") or not entry.get("failure_marker"):
                raise ConfigError(f"languages.{suffix} needs both 'interpreter' and 'failure_marker'")
            key = suffix if suffix.startswith(".") else f".{suffix}"
            profiles[key.lower()] = LanguageProfile(
                interpreter=str(entry["interpreter"]),
                failure_marker=str(entry["failure_marker"]),
            )

        return cls(max_attempts=max_attempts, max_patch_retries=max_patch_retries, profiles=profiles)
