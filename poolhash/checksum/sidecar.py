"""Sidecar record naming, writing and reading."""

from __future__ import annotations

import logging
from pathlib import Path

from poolhash.config import ChecksumSettings

logger = logging.getLogger(__name__)


def sidecar_name(directory: str | Path, settings: ChecksumSettings | None = None) -> str:
    """Return ``Pool_<parent>_<self>.sha1`` for *directory*.

    The path is resolved first so that ``.`` and relative paths name the
    real directories.  When the parent has no name (the filesystem root),
    ``root`` is used instead.
    """
    settings = settings or ChecksumSettings()
    p = Path(directory).resolve()
    parent_name = p.parent.name or settings.root_parent_name
    return f"{settings.sidecar_prefix}_{parent_name}_{p.name}{settings.sidecar_extension}"


def sidecar_path(directory: str | Path, settings: ChecksumSettings | None = None) -> Path:
    """Return the sidecar location inside *directory*."""
    return Path(directory) / sidecar_name(directory, settings)


def write_sidecar(path: str | Path, digest: str) -> Path:
    """Write *digest* to *path*, replacing any existing record."""
    p = Path(path)
    p.write_text(digest, encoding="utf-8")
    logger.debug("Wrote sidecar %s", p)
    return p


def read_sidecar(path: str | Path) -> str:
    """Return the stored digest with surrounding whitespace removed.

    A leading BOM is dropped and undecodable bytes are replaced, so a
    corrupted record compares as a mismatch instead of failing.
    """
    return Path(path).read_text(encoding="utf-8-sig", errors="replace").strip()
