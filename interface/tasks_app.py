#!/usr/bin/env python3
"""
wimm (where is my mind).

Entry point wiring the argument parser, settings, logging and command
functions together. The editor itself lives in ``interface.tui_app``.
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

from config import load_settings
from interface.cli_config import (
    cmd_clear,
    cmd_config_path,
    cmd_config_reset,
    cmd_config_set,
    cmd_config_show,
    cmd_config_themes,
)
from interface.cli_parser import build_parser as build_cli_parser
from interface.tui_app import WimmTUI, cmd_tui
from interface.tui_themes import DEFAULT_THEME, THEMES

LOG_FILE_NAME = "wimm.log"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

__all__ = [
    "cmd_clear",
    "cmd_config_path",
    "cmd_config_reset",
    "cmd_config_set",
    "cmd_config_show",
    "cmd_config_themes",
    "cmd_tui",
    "WimmTUI",
    "THEMES",
    "DEFAULT_THEME",
    "build_parser",
    "configure_logging",
    "main",
]


def build_parser():
    return build_cli_parser(sys.modules[__name__], THEMES, DEFAULT_THEME)


def configure_logging(data_dir: Path, verbose: bool = False) -> Optional[Path]:
    """Send log records to ``<data_dir>/wimm.log``; the editor owns the terminal.

    Returns the log file path, or ``None`` when the directory is unusable and
    records go to stderr instead.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    log_file = data_dir / LOG_FILE_NAME
    try:
        data_dir.mkdir(parents=True, exist_ok=True)
    except OSError:
        logging.basicConfig(level=level, format=LOG_FORMAT, force=True)
        return None
    logging.basicConfig(filename=str(log_file), level=level, format=LOG_FORMAT, force=True)
    return log_file


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = load_settings(args.config)
    data_dir = Path(args.data_dir).expanduser() if args.data_dir else settings.data_path
    configure_logging(data_dir, args.verbose)
    logging.getLogger("wimm.tui").debug("Running command %s", args.command or "tui")
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
