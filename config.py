from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from core.date_resolver import DEFAULT_DEFER_HOUR, DEFAULT_DUE_HOUR

USER_CONFIG_PATH = Path.home() / ".wimm_config.yaml"
CONFIG_ENV = "WIMM_CONFIG"

THEME_NAMES = ("default", "dark", "light")
STORAGE_KINDS = ("file", "memory")

logger = logging.getLogger("wimm.config")


@dataclass
class Settings:
    theme: str = "default"
    due_hour: int = DEFAULT_DUE_HOUR
    defer_hour: int = DEFAULT_DEFER_HOUR
    data_dir: str = "~/.wimm"
    storage: str = "file"

    @property
    def data_path(self) -> Path:
        return Path(self.data_dir).expanduser()


DEFAULTS = Settings()


def config_path(override: Optional[Path] = None) -> Path:
    if override:
        return Path(override).expanduser()
    env = os.getenv(CONFIG_ENV, "").strip()
    return Path(env).expanduser() if env else USER_CONFIG_PATH


def _load_config(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _save_config(path: Path, data: Dict[str, Any]) -> None:
    if not data:
        if path.exists():
            path.unlink()
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data, allow_unicode=True, sort_keys=False), encoding="utf-8")


def _validate_hour(key: str, value: Any) -> int:
    try:
        hour = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{key} must be a number between 0 and 23") from None
    if not 0 <= hour <= 23:
        raise ValueError(f"{key} must be between 0 and 23")
    return hour


def validate_value(key: str, value: Any) -> Any:
    """Return ``value`` normalized for ``key`` or raise ``ValueError``."""
    if key in ("due_hour", "defer_hour"):
        return _validate_hour(key, value)
    if key == "theme":
        name = str(value).strip()
        if name not in THEME_NAMES:
            raise ValueError(f"Unknown theme '{name}'. Available: {', '.join(THEME_NAMES)}")
        return name
    if key == "storage":
        kind = str(value).strip()
        if kind not in STORAGE_KINDS:
            raise ValueError(f"Unknown storage '{kind}'. Available: {', '.join(STORAGE_KINDS)}")
        return kind
    if key == "data_dir":
        text = str(value).strip()
        if not text:
            raise ValueError("data_dir must not be empty")
        return text
    raise ValueError(f"Unknown configuration key: {key}. Available keys: {', '.join(asdict(DEFAULTS))}")


def load_settings(path: Optional[Path] = None) -> Settings:
    raw = _load_config(config_path(path))
    settings = Settings()
    for key in asdict(DEFAULTS):
        if key not in raw:
            continue
        try:
            setattr(settings, key, validate_value(key, raw[key]))
        except ValueError as exc:
            logger.warning("Ignoring config value %s=%r: %s", key, raw[key], exc)
    return settings


def set_value(key: str, value: Any, path: Optional[Path] = None) -> Settings:
    target = config_path(path)
    normalized = validate_value(key.replace("-", "_"), value)
    data = _load_config(target)
    data[key.replace("-", "_")] = normalized
    # Only non-default keys are persisted.
    defaults = asdict(DEFAULTS)
    data = {k: v for k, v in data.items() if k in defaults and v != defaults[k]}
    _save_config(target, data)
    return load_settings(target)


def reset_settings(path: Optional[Path] = None) -> Settings:
    _save_config(config_path(path), {})
    return Settings()
