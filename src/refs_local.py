"""Public SDK surface for local refs.

This module provides a stable import path for SDK users.
It re-exports the primary client, stream, and typed models.
"""

from __future__ import annotations

from core.config import RefsConfig
from core.errors import (
    RefsConfigError,
    RefsDecodeError,
    RefsError,
    RefsStoreError,
    RefsStoreUnavailableError,
)
from core.types import RefResult, StorageKey, StreamState
from store.flatfs_blockstore import BlockKeySource, FlatfsBlockstore
from store.key_codec import cid_to_key, key_to_cid
from store.local_refs import LocalRefsStream, local_refs
from store.repo_sdk import RepoClient

__all__ = [
    "BlockKeySource",
    "FlatfsBlockstore",
    "LocalRefsStream",
    "RefResult",
    "RefsConfig",
    "RefsConfigError",
    "RefsDecodeError",
    "RefsError",
    "RefsStoreError",
    "RefsStoreUnavailableError",
    "RepoClient",
    "StorageKey",
    "StreamState",
    "cid_to_key",
    "key_to_cid",
    "local_refs",
]
