"""Configuration file management for fitness-rank.

Reads and writes ~/.fitness-rank/config.json for settings: where the log
snapshot lives and the weight goal.
"""
from __future__ import annotations

import json
import os
from pathlib import Path

DEFAULT_CONFIG_PATH: Path = Path.home() / ".fitness-rank" / "config.json"
DEFAULT_DATA_DIR: Path = Path.home() / ".fitness-rank" / "logs"
DATA_DIR_ENV = "FITNESS_RANK_DATA_DIR"
DEFAULT_TARGET_WEIGHT = 85.0


def load_config(config_path: Path | None = None) -> dict:
    """Load config from JSON file. Returns {} if file missing or invalid."""
    path = config_path or DEFAULT_CONFIG_PATH
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict, config_path: Path | None = None) -> None:
    """Write config dict to JSON file. Creates parent dirs if needed."""
    path = config_path or DEFAULT_CONFIG_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")


def get_data_dir(config_path: Path | None = None) -> Path:
    """Snapshot directory: $FITNESS_RANK_DATA_DIR, then config, then the default."""
    env = os.environ.get(DATA_DIR_ENV)
    if env:
        return Path(env).expanduser()
    raw = load_config(config_path).get("data_dir")
    if raw:
        return Path(raw)
    return DEFAULT_DATA_DIR


def set_data_dir(directory: Path, config_path: Path | None = None) -> None:
    """Persist the snapshot directory path to config."""
    config = load_config(config_path)
    config["data_dir"] = str(directory)
    save_config(config, config_path)


def get_goals(config_path: Path | None = None) -> dict:
    """Return {"target_weight": float, "target_date": str | None}."""
    config = load_config(config_path)
    try:
        target_weight = float(config.get("target_weight", DEFAULT_TARGET_WEIGHT))
    except (TypeError, ValueError):
        target_weight = DEFAULT_TARGET_WEIGHT
    return {"target_weight": target_weight, "target_date": config.get("target_date") or None}


def set_goals(
    target_weight: float | None = None,
    target_date: str | None = None,
    config_path: Path | None = None,
) -> None:
    """Persist goal settings. None leaves a setting unchanged."""
    config = load_config(config_path)
    if target_weight is not None:
        config["target_weight"] = target_weight
    if target_date is not None:
        config["target_date"] = target_date
    save_config(config, config_path)
