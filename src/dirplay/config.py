"""Session settings derived from the command line."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_ROOT = "assets"


@dataclass(frozen=True)
class SessionConfig:
    """Immutable settings for one interactive session."""

    root: Path = field(default_factory=lambda: Path(DEFAULT_ROOT))
    # Render cadence of the list view, in seconds.
    tick_interval: float = 0.015
    volume: float = 1.0
    watchdog_threshold: float = 15.0


def config_from_args(args: argparse.Namespace) -> SessionConfig:
    """Build a SessionConfig from parsed CLI arguments."""
    raw_root = getattr(args, "path", None) or DEFAULT_ROOT
    return SessionConfig(root=Path(raw_root).expanduser())
