"""Unit tests for the flatfs block store."""

from __future__ import annotations

import errno
import os
from pathlib import Path

import pytest

from core.errors import RefsStoreUnavailableError
from store.flatfs_blockstore import FlatfsBlockstore


def test_put_writes_block_into_next_to_last_shard(tmp_path, block_cid) -> None:
    """Blocks should be stored under the two characters before the last one."""
    store = FlatfsBlockstore(tmp_path / "blocks")

    key = store.put(block_cid(b"payload"), b"payload")
    name = str(key).lstrip("/")

    assert (tmp_path / "blocks" / name[-3:-1] / f"{name}.data").read_bytes() == b"payload"


def test_put_writes_sharding_descriptor(tmp_path, block_cid) -> None:
    """First write should record the sharding function of the store."""
    store = FlatfsBlockstore(tmp_path / "blocks")

    store.put(block_cid(b"payload"), b"payload")
    descriptor = (tmp_path / "blocks" / "SHARDING").read_text(encoding="utf-8")

    assert descriptor.strip() == "/repo/flatfs/shard/v1/next-to-last/2"


def test_has_reports_stored_blocks(tmp_path, block_cid) -> None:
    """Store should report presence only for written blocks."""
    store = FlatfsBlockstore(tmp_path / "blocks")
    store.put(block_cid(b"present"), b"present")

    assert store.has(block_cid(b"present")) and not store.has(block_cid(b"absent"))


def test_query_keys_lists_every_block_once(tmp_path, block_cid) -> None:
    """Enumeration should visit each stored key exactly once."""
    store = FlatfsBlockstore(tmp_path / "blocks")
    written = {store.put(block_cid(data), data) for data in (b"a", b"b", b"c", b"d")}

    keys = list(store.query_keys())

    assert len(keys) == 4 and set(keys) == written


def test_query_keys_skips_non_block_files(tmp_path, block_cid) -> None:
    """Readme, sharding descriptor and temp files should not be reported."""
    blocks_root = tmp_path / "blocks"
    store = FlatfsBlockstore(blocks_root)
    key = store.put(block_cid(b"only"), b"only")
    (blocks_root / "_README").write_text("readme", encoding="utf-8")
    shard_dir = next(path for path in blocks_root.iterdir() if path.is_dir())
    (shard_dir / "partial.data.tmp").write_bytes(b"partial")

    assert list(store.query_keys()) == [key]


def test_query_keys_is_empty_for_empty_store(tmp_path) -> None:
    """An existing but empty blocks directory should yield nothing."""
    (tmp_path / "blocks").mkdir()
    store = FlatfsBlockstore(tmp_path / "blocks")

    assert list(store.query_keys()) == []


def test_query_keys_fails_for_missing_store(tmp_path) -> None:
    """A missing blocks directory should fail on the first pull."""
    store = FlatfsBlockstore(tmp_path / "missing")
    keys = store.query_keys()

    with pytest.raises(RefsStoreUnavailableError):
        next(keys)

    assert not (tmp_path / "missing").exists()


def test_query_keys_starts_fresh_pass_per_call(tmp_path, block_cid) -> None:
    """A new call should reflect blocks written after a previous pass."""
    store = FlatfsBlockstore(tmp_path / "blocks")
    store.put(block_cid(b"first"), b"first")
    first_pass = list(store.query_keys())
    store.put(block_cid(b"second"), b"second")

    second_pass = list(store.query_keys())

    assert len(first_pass) == 1 and len(second_pass) == 2


class _UnreadableDirectory:
    """Directory cursor whose reads fail with an I/O error."""

    def __enter__(self) -> "_UnreadableDirectory":
        return self

    def __exit__(self, *exc_info: object) -> None:
        return None

    def __iter__(self) -> "_UnreadableDirectory":
        return self

    def __next__(self) -> os.DirEntry[str]:
        raise OSError(errno.EIO, "Input/output error")

    def close(self) -> None:
        return None


def test_query_keys_fails_when_root_read_fails(tmp_path, monkeypatch) -> None:
    """An I/O error while listing the blocks root should be a store fault."""
    (tmp_path / "blocks").mkdir()
    monkeypatch.setattr(os, "scandir", lambda path: _UnreadableDirectory())
    store = FlatfsBlockstore(tmp_path / "blocks")

    with pytest.raises(RefsStoreUnavailableError, match="Input/output error"):
        list(store.query_keys())

    assert (tmp_path / "blocks").is_dir()


def test_query_keys_fails_when_shard_read_fails(tmp_path, monkeypatch, block_cid) -> None:
    """An I/O error while listing a shard should be a store fault."""
    blocks_root = tmp_path / "blocks"
    store = FlatfsBlockstore(blocks_root)
    store.put(block_cid(b"shard"), b"shard")
    real_scandir = os.scandir

    def _scandir(path):
        if Path(path) == blocks_root:
            return real_scandir(path)
        return _UnreadableDirectory()

    monkeypatch.setattr(os, "scandir", _scandir)

    with pytest.raises(RefsStoreUnavailableError, match="Failed to read directory"):
        list(store.query_keys())

    assert store.has(block_cid(b"shard"))
