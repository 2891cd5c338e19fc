"""Exception hierarchy shared by every pipeline stage."""

from __future__ import annotations

from typing import Optional


class MinifyError(Exception):
    """Base class for failures that abort a bundle run.

    ``stage`` is filled in by the orchestrator with the name of the state
    the run was in when the error surfaced.
    """

    stage: Optional[str] = None


class ConfigurationError(MinifyError):
    """Raised for unknown engines, empty source sets and bad settings."""


class IOFailure(MinifyError):
    """Raised when a source or artifact cannot be opened, read or written."""


class CompressionError(MinifyError):
    """Raised when an engine rejects its input; wraps the engine's error."""


__all__ = [
    "MinifyError",
    "ConfigurationError",
    "IOFailure",
    "CompressionError",
]
