"""Refs exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class RefsError(Exception):
    """Base exception for all refs failures."""


class RefsConfigError(RefsError):
    """Raised for invalid runtime configuration."""


class RefsStoreError(RefsError):
    """Raised for block store read and write failures."""


class RefsStoreUnavailableError(RefsStoreError):
    """Raised when the block store cannot be queried at all."""


class RefsDecodeError(RefsError):
    """Raised when a storage key cannot be converted to a CID."""
