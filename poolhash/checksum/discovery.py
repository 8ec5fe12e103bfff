"""Locate pool files and the directories a batch should visit."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

from poolhash.config import POOL_EXTENSION

logger = logging.getLogger(__name__)


def discover(directory: str | Path, extension: str = POOL_EXTENSION) -> list[Path]:
    """Return the qualifying files directly inside *directory*.

    Only regular files whose name ends with *extension* are kept.
    Subdirectories are not descended into.  The result is sorted by file
    name using plain string ordering, which fixes the digest order.
    """
    root = Path(directory)
    files = [
        p for p in root.iterdir()
        if p.name.endswith(extension) and p.is_file()
    ]
    files.sort(key=lambda p: p.name)
    logger.debug("Discovered %d %s file(s) in %s", len(files), extension, root)
    return files


def iter_target_directories(base: str | Path, recursive: bool = False) -> Iterator[Path]:
    """Yield *base* and, when *recursive*, every directory below it.

    Traversal is depth-first pre-order with siblings sorted by name.
    Directories without pool files are still yielded.  A directory that
    cannot be listed is still yielded, but its subtree is skipped.
    """
    root = Path(base)
    yield root
    if not recursive:
        return

    yield from _iter_subdirectories(root)


def _iter_subdirectories(directory: Path) -> Iterator[Path]:
    # Symlinked directories are skipped to avoid cycles.
    try:
        children = sorted(
            (p for p in directory.iterdir() if p.is_dir() and not p.is_symlink()),
            key=lambda p: p.name,
        )
    except OSError as exc:
        logger.warning("Cannot list %s, skipping its subdirectories: %s", directory, exc)
        return
    for child in children:
        yield child
        yield from _iter_subdirectories(child)
