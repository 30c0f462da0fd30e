"""Python SDK for local repository operations.

This module exposes the high-level refs API backed by the flatfs
block store of a local repository.
"""

from __future__ import annotations

from core.config import RefsConfig
from store.flatfs_blockstore import FlatfsBlockstore
from store.local_refs import LocalRefsStream, local_refs


class RepoClient:
    """Primary SDK entry point for a local repository."""

    def __init__(self, config: RefsConfig | None = None) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
        """
        self._config = config or RefsConfig.from_env()
        self._blocks = FlatfsBlockstore(self._config.blocks_root)

    @property
    def blocks(self) -> FlatfsBlockstore:
        """Block store of the configured repository."""
        return self._blocks

    def refs_local(self) -> LocalRefsStream:
        """Stream references for every block stored in the repository.

        Returns:
            Pull-based stream of ``RefResult`` items.
        """
        return local_refs(self._blocks)
