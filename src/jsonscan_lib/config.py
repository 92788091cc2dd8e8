# src/jsonscan_lib/config.py
"""Configuration loader with caching and basic validation."""
from __future__ import annotations

import copy
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

ROOT = Path(__file__).resolve().parents[2]
CONFIG_PATH = ROOT / "config" / "config.yaml"
CONFIG_ENV = "JSONSCAN_CONFIG"

# Required config structure for minimal operation
REQUIRED_KEYS: Dict[str, List[str]] = {
    "reader": ["chunk_size"],
}

DEFAULT_CONFIG: Dict[str, Any] = {
    "decoder": {"prefix": None},
    "reader": {"chunk_size": 65536, "encoding": "utf-8"},
    "output": {"format": "jsonl"},
    "logging": {"level": "INFO"},
}


class ConfigError(ValueError):
    """Raised when required configuration values are missing or invalid."""


def resolve_config_path(path: Union[str, Path, None] = None) -> Path:
    """Explicit path, then ``$JSONSCAN_CONFIG``, then ``config/config.yaml``."""
    if path:
        return Path(path)
    env = os.getenv(CONFIG_ENV)
    if env:
        return Path(env)
    return CONFIG_PATH


def _validate(cfg: Dict, source: Path) -> None:
    for section, keys in REQUIRED_KEYS.items():
        if section not in cfg:
            raise ConfigError(f"Missing required section '{section}' in {source}")
        missing = [k for k in keys if k not in (cfg.get(section) or {})]
        if missing:
            raise ConfigError(
                f"Missing required key(s) {missing} in section '{section}' of {source}"
            )
    chunk_size = cfg["reader"]["chunk_size"]
    if not isinstance(chunk_size, int) or chunk_size <= 0:
        raise ConfigError(f"reader.chunk_size must be a positive integer in {source}")


@lru_cache(maxsize=8)
def _load(path: Path) -> Dict:
    if not path.exists():
        raise FileNotFoundError(f"Missing config file: {path}")
    cfg = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(cfg, dict):
        raise ConfigError(f"Top level of {path} must be a mapping")
    _validate(cfg, path)
    merged = copy.deepcopy(DEFAULT_CONFIG)
    for section, values in cfg.items():
        if isinstance(values, dict) and isinstance(merged.get(section), dict):
            merged[section].update(values)
        else:
            merged[section] = values
    return merged


def load_config(path: Union[str, Path, None] = None) -> Dict:
    """Load and cache a YAML config, filling unset keys from ``DEFAULT_CONFIG``."""
    return copy.deepcopy(_load(resolve_config_path(path)))


def load_config_or_default(path: Union[str, Path, None] = None) -> Dict:
    """Like :func:`load_config`, but fall back to defaults when no file was asked for
    and the default file is absent."""
    resolved = resolve_config_path(path)
    if path is None and not os.getenv(CONFIG_ENV) and not resolved.exists():
        return copy.deepcopy(DEFAULT_CONFIG)
    return load_config(resolved)


def get_setting(cfg: Dict, section: str, key: str, default: Optional[Any] = None) -> Any:
    return (cfg.get(section) or {}).get(key, default)
