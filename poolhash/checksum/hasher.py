"""SHA-256 hashing for pool files and aggregate directory digests."""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Iterable
from pathlib import Path

from poolhash.config import READ_CHUNK_SIZE

logger = logging.getLogger(__name__)


class Hasher:
    """SHA-256 hashing rendered as uppercase hexadecimal."""

    @staticmethod
    def hash_bytes(data: bytes) -> str:
        """Return the uppercase SHA-256 hex digest of *data*."""
        return hashlib.sha256(data).hexdigest().upper()

    @staticmethod
    def hash_string(text: str) -> str:
        """Return the uppercase SHA-256 hex digest of *text* encoded as UTF-8."""
        return Hasher.hash_bytes(text.encode("utf-8"))

    @staticmethod
    def hash_file(path: str | Path, chunk_size: int = READ_CHUNK_SIZE) -> str:
        """Return the uppercase SHA-256 hex digest of the file at *path*."""
        h = hashlib.sha256()
        p = Path(path)
        with p.open("rb") as f:
            while True:
                chunk = f.read(chunk_size)
                if not chunk:
                    break
                h.update(chunk)
        return h.hexdigest().upper()


def compute_aggregate_digest(
    ordered_files: Iterable[str | Path],
    chunk_size: int = READ_CHUNK_SIZE,
) -> str:
    """Return the aggregate digest of *ordered_files*.

    Each file is hashed on its own, the hex digests are concatenated in the
    given order without separators, and the concatenation is hashed again.
    The caller owns the ordering.
    """
    parts: list[str] = []
    for path in ordered_files:
        file_hash = Hasher.hash_file(path, chunk_size)
        logger.debug("%s %s", file_hash, Path(path).name)
        parts.append(file_hash)
    return Hasher.hash_string("".join(parts))
