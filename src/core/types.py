"""Shared typed models.

This module defines immutable data models used by the store,
stream, SDK, and CLI layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class StorageKey:
    """Opaque block store address.

    Attributes:
        raw: Key bytes as produced by store enumeration.
    """

    raw: bytes

    def __str__(self) -> str:
        return self.raw.decode("utf-8", errors="replace")


@dataclass(frozen=True)
class RefResult:
    """Outcome of converting one storage key into a reference.

    Exactly one of ``ref`` and ``err`` is populated.

    Attributes:
        ref: Reconstructed CID string on success.
        err: Human-readable diagnostic on failure.
    """

    ref: str | None = None
    err: str | None = None

    def __post_init__(self) -> None:
        if (self.ref is None) == (self.err is None):
            raise ValueError("RefResult requires exactly one of ref or err")

    @property
    def is_error(self) -> bool:
        """Whether this result carries a decode failure."""
        return self.err is not None


class StreamState(Enum):
    """Lifecycle of a single local refs stream."""

    IDLE = "idle"
    ENUMERATING = "enumerating"
    COMPLETED = "completed"
    FAILED = "failed"
