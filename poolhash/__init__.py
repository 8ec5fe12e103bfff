"""poolhash — aggregate integrity checksums for directories of pool files."""

__version__ = "1.0.0"

from poolhash.checksum import (
    BatchReport,
    ChecksumProcessor,
    DirectoryResult,
    Hasher,
    Outcome,
    compute_aggregate_digest,
    discover,
    sidecar_name,
)
from poolhash.config import ChecksumSettings, load_settings
from poolhash.errors import ConfigError, DirectoryNotFoundError, PoolHashError

__all__ = [
    "__version__",
    "BatchReport",
    "ChecksumProcessor",
    "ChecksumSettings",
    "ConfigError",
    "DirectoryNotFoundError",
    "DirectoryResult",
    "Hasher",
    "Outcome",
    "PoolHashError",
    "compute_aggregate_digest",
    "discover",
    "load_settings",
    "sidecar_name",
]
