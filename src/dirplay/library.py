"""Directory scanning for the entry list."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from dirplay.errors import RootDirectoryError

logger = logging.getLogger(__name__)

EntryList = tuple[str, ...]


def list_files(root: Union[str, Path]) -> EntryList:
    """Recursively collect regular files under ``root``.

    Children are visited in name order and subdirectories are expanded in
    place. The first traversal error aborts the whole scan.
    """
    collected: list[str] = []
    _collect(Path(root), collected)
    return tuple(collected)


def _collect(directory: Path, out: list[str]) -> None:
    for child in sorted(directory.iterdir()):
        if child.is_symlink() and child.is_dir():
            logger.debug("Skipping symlinked directory %s", child)
            continue
        if child.is_dir():
            _collect(child, out)
        elif child.is_file():
            out.append(str(child))


def load_entries(root: Union[str, Path]) -> EntryList:
    """Return the entry list for ``root`` or raise a startup error."""
    path = Path(root)
    if not path.is_dir():
        raise RootDirectoryError(f"Not a directory: {path}")
    try:
        entries = list_files(path)
    except OSError as exc:
        logger.exception("Scan failed under %s", path)
        raise RootDirectoryError(f"Cannot scan {path}: {exc}") from exc
    if not entries:
        raise RootDirectoryError(f"No files found under {path}")
    logger.info("Scanned %s: %d entries", path, len(entries))
    return entries
