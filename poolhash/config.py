"""Global configuration: constants and checksum settings."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping

from pydantic import BaseModel, ValidationError, field_validator

from poolhash.errors import ConfigError

# Extension of the pool data files covered by the aggregate digest
POOL_EXTENSION = ".pol"

# Sidecar naming: <prefix>_<parent>_<self><extension>
# The ".sha1" suffix is historical; the digest is SHA-256.
SIDECAR_PREFIX = "Pool"
SIDECAR_EXTENSION = ".sha1"

# Parent name used for a directory sitting at the filesystem root
ROOT_PARENT_NAME = "root"

# Bytes read per call while hashing a file
READ_CHUNK_SIZE = 65536

# Environment variable -> settings field
_ENV_KEYS: dict[str, str] = {
    "POOLHASH_EXTENSION": "extension",
    "POOLHASH_CHUNK_SIZE": "chunk_size",
    "POOLHASH_LOG_LEVEL": "log_level",
}


class ChecksumSettings(BaseModel):
    """Settings shared by discovery, hashing and sidecar naming."""

    extension: str = POOL_EXTENSION
    sidecar_prefix: str = SIDECAR_PREFIX
    sidecar_extension: str = SIDECAR_EXTENSION
    root_parent_name: str = ROOT_PARENT_NAME
    chunk_size: int = READ_CHUNK_SIZE
    log_level: str = "WARNING"

    @field_validator("extension", "sidecar_extension")
    @classmethod
    def _dotted(cls, value: str) -> str:
        if not value.startswith(".") or len(value) < 2:
            raise ValueError(f"extension must look like '.ext', got {value!r}")
        return value

    @field_validator("chunk_size")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("chunk_size must be positive")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {value!r}")
        return level


def load_settings(env: Mapping[str, str] | None = None) -> ChecksumSettings:
    """Build settings from defaults overridden by ``POOLHASH_*`` variables.

    Raises :class:`ConfigError` when a value fails validation.
    """
    source = os.environ if env is None else env
    overrides: dict[str, str] = {}
    for key, field_name in _ENV_KEYS.items():
        value = source.get(key)
        if value is not None and value != "":
            overrides[field_name] = value

    try:
        return ChecksumSettings(**overrides)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc
