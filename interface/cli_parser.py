"""CLI parser construction for the wimm command."""

import argparse
from pathlib import Path
from typing import Any, Mapping


def build_parser(commands: Any, themes: Mapping[str, Any], default_theme: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wimm",
        description="wimm: keyboard-driven terminal task list",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--config", type=Path, help="path to the YAML config file")
    parser.add_argument("--verbose", "-v", action="store_true", help="write debug messages to the log file")
    parser.add_argument("--memory", action="store_true", help="keep tasks in memory only for this session")
    parser.add_argument("--data-dir", dest="data_dir", type=Path, help="directory holding tasks/ and wimm.log")
    parser.set_defaults(func=commands.cmd_tui, theme=None)

    sub = parser.add_subparsers(dest="command", help="Commands")

    # tui
    tui_p = sub.add_parser("tui", help="Open the task editor (default)")
    tui_p.add_argument("--theme", choices=list(themes.keys()), default=None, help=f"colour scheme (default: {default_theme})")
    tui_p.set_defaults(func=commands.cmd_tui)

    # config
    cfg = sub.add_parser("config", help="Inspect or change the configuration")
    cfg_sub = cfg.add_subparsers(dest="config_command", required=True)
    cfg_sub.add_parser("show", help="Print the effective settings").set_defaults(func=commands.cmd_config_show)
    cfg_sub.add_parser("path", help="Print the config file location").set_defaults(func=commands.cmd_config_path)
    cfg_sub.add_parser("list-themes", help="List colour schemes").set_defaults(func=commands.cmd_config_themes)
    set_p = cfg_sub.add_parser("set", help="Persist one setting")
    set_p.add_argument("key", help="theme, due_hour, defer_hour, data_dir or storage")
    set_p.add_argument("value")
    set_p.set_defaults(func=commands.cmd_config_set)
    cfg_sub.add_parser("reset", help="Remove all stored settings").set_defaults(func=commands.cmd_config_reset)

    # clear
    clear_p = sub.add_parser("clear", help="Delete every stored task")
    clear_p.add_argument("--yes", action="store_true", help="confirm deletion")
    clear_p.set_defaults(func=commands.cmd_clear)

    return parser


__all__ = ["build_parser"]
