"""Checksum Processor.

Discovers pool files, computes aggregate SHA-256 digests, and writes or
verifies the per-directory sidecar record.
"""

from poolhash.checksum.discovery import discover, iter_target_directories
from poolhash.checksum.hasher import Hasher, compute_aggregate_digest
from poolhash.checksum.processor import ChecksumProcessor
from poolhash.checksum.report import BatchReport, DirectoryResult, Outcome
from poolhash.checksum.sidecar import read_sidecar, sidecar_name, sidecar_path, write_sidecar

__all__ = [
    "BatchReport",
    "ChecksumProcessor",
    "DirectoryResult",
    "Hasher",
    "Outcome",
    "compute_aggregate_digest",
    "discover",
    "iter_target_directories",
    "read_sidecar",
    "sidecar_name",
    "sidecar_path",
    "write_sidecar",
]
