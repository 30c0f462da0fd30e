"""Flatfs block store.

This module reads and writes the one-file-per-block layout of a local
IPFS repository. Blocks live in shard directories named by the two
characters preceding the last character of their key.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Iterator, Protocol

from multiformats import CID

from core.constants import (
    BLOCK_FILE_EXTENSION,
    KEY_SEPARATOR,
    SHARD_PREFIX_LENGTH,
    SHARDING_DESCRIPTOR,
    SHARDING_FILE_NAME,
)
from core.errors import RefsStoreError, RefsStoreUnavailableError
from core.logging_config import get_logger
from core.types import StorageKey
from store.key_codec import cid_to_key

_LOGGER = get_logger(__name__)


class BlockKeySource(Protocol):
    """Anything that can enumerate block keys without payloads."""

    def query_keys(self) -> Iterator[StorageKey]:
        ...


class FlatfsBlockstore:
    """Filesystem-backed block store rooted at a repository blocks directory."""

    def __init__(self, blocks_root: Path) -> None:
        self._blocks_root = blocks_root

    @property
    def blocks_root(self) -> Path:
        return self._blocks_root

    def query_keys(self) -> Iterator[StorageKey]:
        """Lazily enumerate every block key currently stored.

        Only directory entries are read; block payloads are never opened.
        Each call starts a fresh pass. Closing the iterator early releases
        the open directory handle.

        Yields:
            One storage key per block file.

        Raises:
            RefsStoreUnavailableError: If the blocks directory cannot be listed.
        """
        with self._open_root() as shards:
            for shard in _read_entries(shards, self._blocks_root):
                if not _is_directory(shard):
                    continue
                yield from _shard_keys(Path(shard.path))

    def put(self, cid: CID | str, data: bytes) -> StorageKey:
        """Write a block under the key derived from its CID.

        Existing blocks are left untouched.

        Args:
            cid: Block content identifier.
            data: Block payload.

        Returns:
            Storage key the block is addressed by.

        Raises:
            RefsStoreError: If the block cannot be written.
        """
        key = cid_to_key(cid)
        block_path = self._block_path(key)
        if block_path.exists():
            return key
        try:
            block_path.parent.mkdir(parents=True, exist_ok=True)
            self._write_sharding_file()
            temp_path = block_path.with_name(block_path.name + ".tmp")
            temp_path.write_bytes(data)
            os.replace(temp_path, block_path)
        except OSError as error:
            raise RefsStoreError(
                f"Failed to write block {key} to {block_path}: {error}. "
                "Check repository permissions and free space."
            ) from error
        _LOGGER.debug("block_written", key=str(key), size=len(data))
        return key

    def has(self, cid: CID | str) -> bool:
        """Return whether a block for ``cid`` is stored."""
        return self._block_path(cid_to_key(cid)).is_file()

    def _open_root(self) -> Any:
        """Open a directory cursor over the blocks root.

        Raises:
            RefsStoreUnavailableError: If the root is missing or unreadable.
        """
        try:
            return os.scandir(self._blocks_root)
        except OSError as error:
            raise RefsStoreUnavailableError(
                f"Failed to query block store at {self._blocks_root}: {error}. "
                "Initialize the repository or point IPFS_PATH at an existing one."
            ) from error

    def _block_path(self, key: StorageKey) -> Path:
        name = str(key).lstrip(KEY_SEPARATOR)
        return self._blocks_root / _shard_name(name) / f"{name}{BLOCK_FILE_EXTENSION}"

    def _write_sharding_file(self) -> None:
        sharding_path = self._blocks_root / SHARDING_FILE_NAME
        if not sharding_path.exists():
            sharding_path.write_text(SHARDING_DESCRIPTOR + "\n", encoding="utf-8")


def _shard_keys(shard_path: Path) -> Iterator[StorageKey]:
    """Yield keys for block files inside one shard directory.

    A shard removed while the pass is running is skipped.

    Raises:
        RefsStoreUnavailableError: If the shard exists but cannot be listed.
    """
    try:
        entries = os.scandir(shard_path)
    except FileNotFoundError:
        return
    except OSError as error:
        raise RefsStoreUnavailableError(
            f"Failed to list shard directory {shard_path}: {error}. "
            "Check repository permissions."
        ) from error
    with entries:
        for entry in _read_entries(entries, shard_path):
            if not entry.name.endswith(BLOCK_FILE_EXTENSION):
                continue
            name = entry.name[: -len(BLOCK_FILE_EXTENSION)]
            yield StorageKey(f"{KEY_SEPARATOR}{name}".encode("utf-8"))


def _read_entries(
    entries: Iterator[os.DirEntry[str]], directory: Path
) -> Iterator[os.DirEntry[str]]:
    """Yield directory entries, turning read failures into store faults.

    Raises:
        RefsStoreUnavailableError: If reading the next entry fails.
    """
    while True:
        try:
            entry = next(entries)
        except StopIteration:
            return
        except OSError as error:
            raise RefsStoreUnavailableError(
                f"Failed to read directory {directory}: {error}. "
                "Check the repository disk and permissions."
            ) from error
        yield entry


def _shard_name(name: str) -> str:
    """Return the next-to-last shard directory for a key name."""
    padded = name.rjust(SHARD_PREFIX_LENGTH + 1, "_")
    return padded[-SHARD_PREFIX_LENGTH - 1 : -1]


def _is_directory(entry: os.DirEntry[str]) -> bool:
    try:
        return entry.is_dir()
    except OSError:
        return False
