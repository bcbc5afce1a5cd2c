# -*- coding: utf-8 -*-
"""Command-line entry point for tasktray.

Usage:
    tasktray [--seed | --no-seed] [--theme THEME] [--debug] [--log-file PATH]
"""

import argparse
from pathlib import Path
from typing import List, Optional

from tasktray import __version__
from tasktray.logger_config import (
    logger,
    restore_console_logging,
    setup_logging,
    suppress_console_logging,
)
from tasktray.user_settings import get_user_settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tasktray", description="Terminal todo manager with modal dialogs")
    parser.add_argument(
        "--seed",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Load the sample category and todos on startup (default: from settings)",
    )
    parser.add_argument("--theme", type=str, default=None, help="Textual theme name, saved for later runs")
    parser.add_argument("--debug", action="store_true", help="Log DEBUG messages to the console and log file")
    parser.add_argument("--log-file", type=Path, default=None, help="Write the log to this file")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    log_path = setup_logging(debug=args.debug, log_file=args.log_file)

    settings = get_user_settings()
    if args.theme:
        settings.theme = args.theme

    # Imported here so --help and --version stay fast.
    from tasktray.frontend.displays.textual_todo_app import TodoApp

    app = TodoApp(settings=settings, seed=args.seed)
    suppress_console_logging()
    try:
        app.run()
    finally:
        restore_console_logging()
    logger.info(f"tasktray exited; log at {log_path}")
    return app.return_code or 0


if __name__ == "__main__":
    raise SystemExit(main())
