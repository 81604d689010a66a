"""
TempPurge - Configuration and target resolution.

Provides:
  - Persistent app config loading/saving from JSON
  - The list of directories to purge (user temp, system temp, extras)
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import asdict, dataclass, field
from typing import List, Tuple

logger = logging.getLogger(__name__)

CONFIG_DIR = os.path.join(os.environ.get("APPDATA", "."), "TempPurge")
CONFIG_FILE = os.path.join(CONFIG_DIR, "config.json")


@dataclass
class AppConfig:
    """Application-wide configuration."""
    extra_targets: List[str] = field(default_factory=list)
    include_system_temp: bool = True
    empty_recycle_bin: bool = True
    log_dir: str = ""               # Empty = no CSV log
    confirm: bool = True            # Ask before deleting


def load_config(config_file: str = "") -> AppConfig:
    """Load app config from disk, or return defaults."""
    config_file = config_file or CONFIG_FILE
    config = AppConfig()
    if not os.path.isfile(config_file):
        return config

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", config_file, exc)
        return config

    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: expected a JSON object", config_file)
        return config

    for key in ("include_system_temp", "empty_recycle_bin", "confirm"):
        value = data.get(key, getattr(config, key))
        if isinstance(value, bool):
            setattr(config, key, value)
        else:
            _warn_bad_value(config_file, key, value, "true or false")

    log_dir = data.get("log_dir", config.log_dir)
    if isinstance(log_dir, str):
        config.log_dir = log_dir
    else:
        _warn_bad_value(config_file, "log_dir", log_dir, "a folder path")

    extra = data.get("extra_targets", [])
    # A bare string would otherwise be split into one target per character
    if isinstance(extra, list) and all(isinstance(p, str) and p.strip() for p in extra):
        config.extra_targets = list(extra)
    else:
        _warn_bad_value(config_file, "extra_targets", extra, "a list of folder paths")
    return config


def _warn_bad_value(config_file: str, key: str, value: object, expected: str) -> None:
    logger.warning(
        "Ignoring %r for '%s' in %s: expected %s", value, key, config_file, expected
    )


def save_config(config: AppConfig, config_file: str = "") -> bool:
    """Save app config to disk. Returns False if it could not be written."""
    config_file = config_file or CONFIG_FILE
    try:
        os.makedirs(os.path.dirname(config_file) or ".", exist_ok=True)
        with open(config_file, "w", encoding="utf-8") as f:
            json.dump(asdict(config), f, indent=2)
    except OSError as exc:
        logger.warning("Could not save config to %s: %s", config_file, exc)
        return False
    return True


def user_temp_dir() -> str:
    """The per-user temporary directory."""
    temp = os.environ.get("TEMP") or os.environ.get("TMP")
    if temp:
        return temp
    profile = os.environ.get("USERPROFILE")
    if profile:
        return os.path.join(profile, "AppData", "Local", "Temp")
    return tempfile.gettempdir()


def system_temp_dir() -> str:
    """The system-wide temporary directory."""
    return os.path.join(os.environ.get("SYSTEMROOT", r"C:\Windows"), "Temp")


def default_targets(config: AppConfig) -> List[Tuple[str, str]]:
    """Return (label, path) pairs to purge, without duplicates."""
    candidates = [("User temp", user_temp_dir())]
    if config.include_system_temp:
        candidates.append(("System temp", system_temp_dir()))
    for extra in config.extra_targets:
        candidates.append(("Extra", extra))

    seen = set()
    targets: List[Tuple[str, str]] = []
    for label, path in candidates:
        full = os.path.normpath(os.path.abspath(path))
        if os.path.dirname(full) == full:
            logger.warning("Refusing to purge volume root %s", path)
            continue
        key = os.path.normcase(full).lower()
        if key in seen:
            continue
        seen.add(key)
        targets.append((label, path))
    return targets
