"""ChecksumProcessor — create and validate pool directory digests."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from poolhash.checksum.discovery import discover, iter_target_directories
from poolhash.checksum.hasher import compute_aggregate_digest
from poolhash.checksum.report import BatchReport, DirectoryResult, Outcome
from poolhash.checksum.sidecar import read_sidecar, sidecar_path, write_sidecar
from poolhash.config import ChecksumSettings
from poolhash.errors import DirectoryNotFoundError

logger = logging.getLogger(__name__)

OPERATIONS = ("create", "validate")


class ChecksumProcessor:
    """Compute, store and verify aggregate digests of pool directories.

    Every path is passed explicitly; the process working directory is
    never changed.

    Parameters
    ----------
    settings:
        Extension filter, sidecar naming and read chunk size.  Defaults to
        :class:`ChecksumSettings` defaults.
    """

    def __init__(self, settings: ChecksumSettings | None = None) -> None:
        self.settings = settings or ChecksumSettings()

    # ------------------------------------------------------------------
    # Single directory
    # ------------------------------------------------------------------

    def discover(self, directory: str | Path) -> list[Path]:
        """Return the sorted qualifying files directly inside *directory*."""
        return discover(directory, self.settings.extension)

    def compute_digest(self, files: list[Path]) -> str:
        """Return the aggregate digest for already ordered *files*."""
        return compute_aggregate_digest(files, self.settings.chunk_size)

    def create(self, directory: str | Path) -> DirectoryResult:
        """Write the aggregate digest of *directory* to its sidecar file.

        Nothing is written when the directory holds no qualifying files.
        An existing sidecar is overwritten.
        """
        d = Path(directory)
        files = self.discover(d)
        if not files:
            return self._no_files(d)

        digest = self.compute_digest(files)
        target = write_sidecar(sidecar_path(d, self.settings), digest)
        logger.info("Created %s for %d file(s)", target, len(files))
        return DirectoryResult(
            directory=str(d),
            outcome=Outcome.CREATED,
            digest=digest,
            sidecar_path=str(target),
            file_count=len(files),
            message=f"SHA file created: {target}",
        )

    def validate(self, directory: str | Path) -> DirectoryResult:
        """Compare the fresh digest of *directory* with its sidecar record.

        Read-only.  Any content change, added or removed file, or change in
        name order yields ``TAMPERED``.
        """
        d = Path(directory)
        record = sidecar_path(d, self.settings)
        if not record.is_file():
            return DirectoryResult(
                directory=str(d),
                outcome=Outcome.NO_SIDECAR,
                sidecar_path=str(record),
                message=f"No .sha file found in the directory: {record}",
            )

        files = self.discover(d)
        if not files:
            return self._no_files(d)

        stored = read_sidecar(record)
        digest = self.compute_digest(files)
        if digest == stored:
            outcome = Outcome.VALID
            message = "Directory is valid. No integrity issues found."
        else:
            outcome = Outcome.TAMPERED
            message = "Integrity check failed! Directory contents have been altered."
            logger.warning("Digest mismatch in %s: stored %s, computed %s", d, stored, digest)

        return DirectoryResult(
            directory=str(d),
            outcome=outcome,
            digest=digest,
            stored_digest=stored,
            sidecar_path=str(record),
            file_count=len(files),
            message=message,
        )

    def _no_files(self, directory: Path) -> DirectoryResult:
        return DirectoryResult(
            directory=str(directory),
            outcome=Outcome.NO_FILES,
            message=f"No {self.settings.extension} files found in the directory.",
        )

    # ------------------------------------------------------------------
    # Batch
    # ------------------------------------------------------------------

    def run(
        self,
        base: str | Path,
        operation: str,
        recursive: bool = False,
        on_result: Callable[[DirectoryResult], None] | None = None,
        should_stop: Callable[[], bool] | None = None,
    ) -> BatchReport:
        """Apply *operation* to *base* and, if *recursive*, every subdirectory.

        Directories are processed one at a time.  An ``OSError`` in one
        directory is recorded as ``ERROR`` and the batch moves on.
        *should_stop* is checked before each directory; once it returns
        true the remaining directories are skipped.

        Raises
        ------
        ValueError
            If *operation* is not ``create`` or ``validate``.
        DirectoryNotFoundError
            If *base* is not an existing directory.
        """
        if operation not in OPERATIONS:
            raise ValueError(f"Unknown operation {operation!r}; expected one of {OPERATIONS}")
        root = Path(base)
        if not root.is_dir():
            raise DirectoryNotFoundError(f"Directory does not exist: {root}")

        action = self.create if operation == "create" else self.validate
        report = BatchReport(
            operation=operation,
            base_directory=str(root),
            recursive=recursive,
        )

        for directory in iter_target_directories(root, recursive):
            if should_stop is not None and should_stop():
                logger.info("Stop requested; skipping remaining directories")
                report.cancelled = True
                break

            logger.debug("Processing directory: %s", directory)
            try:
                result = action(directory)
            except OSError as exc:
                logger.error("Failed to %s %s: %s", operation, directory, exc)
                result = DirectoryResult(
                    directory=str(directory),
                    outcome=Outcome.ERROR,
                    message=f"Error: {exc}",
                )

            report.results.append(result)
            if on_result is not None:
                on_result(result)

        return report
