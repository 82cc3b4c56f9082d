"""Non-interactive commands: configuration management and storage reset."""

import logging
from dataclasses import asdict

from application.ports import StorageError
from config import THEME_NAMES, config_path, load_settings, reset_settings, set_value
from infrastructure.file_repository import open_storage
from interface.cli_io import structured_error, structured_response

logger = logging.getLogger("wimm.config")


def _settings_for(args):
    settings = load_settings(getattr(args, "config", None))
    if getattr(args, "memory", False):
        settings.storage = "memory"
    if getattr(args, "data_dir", None):
        settings.data_dir = str(args.data_dir)
    return settings


def cmd_config_show(args) -> int:
    settings = _settings_for(args)
    return structured_response(
        "config.show",
        message="Effective configuration",
        payload={"path": str(config_path(getattr(args, "config", None))), "settings": asdict(settings)},
    )


def cmd_config_path(args) -> int:
    path = config_path(getattr(args, "config", None))
    return structured_response("config.path", message=str(path), payload={"path": str(path), "exists": path.exists()})


def cmd_config_themes(args) -> int:
    current = _settings_for(args).theme
    return structured_response(
        "config.list-themes",
        message=", ".join(f"{name}*" if name == current else name for name in THEME_NAMES),
        payload={"themes": list(THEME_NAMES), "current": current},
    )


def cmd_config_set(args) -> int:
    try:
        settings = set_value(args.key, args.value, getattr(args, "config", None))
    except ValueError as exc:
        return structured_error("config.set", str(exc), payload={"key": args.key, "value": args.value})
    except OSError as exc:
        return structured_error("config.set", f"Cannot write config: {exc}")
    logger.info("Config %s set to %r", args.key, args.value)
    return structured_response("config.set", message=f"{args.key} updated", payload={"settings": asdict(settings)})


def cmd_config_reset(args) -> int:
    try:
        settings = reset_settings(getattr(args, "config", None))
    except OSError as exc:
        return structured_error("config.reset", f"Cannot remove config: {exc}")
    return structured_response("config.reset", message="Configuration reset to defaults", payload={"settings": asdict(settings)})


def cmd_clear(args) -> int:
    if not getattr(args, "yes", False):
        return structured_error("clear", "Refusing to delete all tasks without --yes")
    settings = _settings_for(args)
    storage = open_storage(settings.data_path, settings.storage)
    try:
        removed = len(storage.load_tasks())
        storage.clear()
    except StorageError as exc:
        return structured_error("clear", str(exc))
    return structured_response("clear", message=f"Deleted {removed} tasks", payload={"removed": removed})


__all__ = [
    "cmd_clear",
    "cmd_config_path",
    "cmd_config_reset",
    "cmd_config_set",
    "cmd_config_show",
    "cmd_config_themes",
]
