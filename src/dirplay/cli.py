"""Command-line interface for dirplay."""

from __future__ import annotations

import argparse
import logging
import sys
import threading
from types import TracebackType
from typing import Iterable, Optional, Tuple

from dirplay import __version__
from dirplay.audio_device import OutputDevice, open_default_device
from dirplay.config import DEFAULT_ROOT, SessionConfig, config_from_args
from dirplay.errors import RenderError, StartupError
from dirplay.hangwatch import dump_threads, enable_faulthandler
from dirplay.library import EntryList, load_entries
from dirplay.logging_setup import init_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="dirplay",
        description="List audio files under a directory and play them.",
    )
    parser.add_argument(
        "-p",
        "--path",
        default=DEFAULT_ROOT,
        help=f"Root directory to scan (default: {DEFAULT_ROOT})",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser


def _install_exception_hooks() -> None:
    def excepthook(
        exc_type: type[BaseException],
        exc: BaseException,
        tb: Optional[TracebackType],
    ) -> None:
        logger.exception("Uncaught exception", exc_info=(exc_type, exc, tb))
        dump_threads("uncaught exception")

    sys.excepthook = excepthook

    def thread_hook(args: threading.ExceptHookArgs) -> None:
        exc_value = args.exc_value or RuntimeError("unknown")
        exc_info: Tuple[type[BaseException], BaseException, Optional[TracebackType]] = (
            args.exc_type,
            exc_value,
            args.exc_traceback,
        )
        thread_name = args.thread.name if args.thread else "thread"
        logger.exception("Thread exception in %s", thread_name, exc_info=exc_info)
        dump_threads(f"thread exception in {thread_name}")

    threading.excepthook = thread_hook


def _run_tui(entries: EntryList, device: OutputDevice, config: SessionConfig) -> int:
    try:
        from dirplay.tui import run_tui
    except (ImportError, RuntimeError) as exc:
        print(str(exc), file=sys.stderr)
        return 1
    return run_tui(entries, device, config)


def main(argv: Optional[Iterable[str]] = None) -> int:
    """Entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    log_path = init_logging()
    enable_faulthandler(log_path)
    _install_exception_hooks()
    logger.info("App start")

    config = config_from_args(args)
    try:
        entries = load_entries(config.root)
        device = open_default_device()
    except StartupError as exc:
        logger.error("Startup failed: %s", exc)
        print(str(exc), file=sys.stderr)
        return 1

    try:
        with device:
            exit_code = _run_tui(entries, device, config)
    except (StartupError, RenderError) as exc:
        logger.error("Session failed: %s", exc)
        print(str(exc), file=sys.stderr)
        return 1
    logger.info("App exit code=%s", exit_code)
    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
