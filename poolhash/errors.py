"""Typed errors raised by poolhash."""

from __future__ import annotations


class PoolHashError(Exception):
    """Base class for operator-facing poolhash errors."""


class ConfigError(PoolHashError):
    """Invalid configuration value."""


class DirectoryNotFoundError(PoolHashError):
    """Raised when the target directory does not exist or is not a directory."""


def format_error(exc: BaseException) -> str:
    """Return a short message like ``'ConfigError: detail'``."""
    name = exc.__class__.__name__
    msg = str(exc).strip()
    return f"{name}: {msg}" if msg else name
