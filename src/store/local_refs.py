"""Local reference enumeration stream.

This module turns the keys-only traversal of a block store into a
pull-based stream of tagged ``RefResult`` items. Keys that cannot be
decoded become ``err`` results; only a store-level fault ends the
stream abnormally.
"""

from __future__ import annotations

from types import TracebackType
from typing import Iterator

from core.errors import RefsDecodeError, RefsStoreUnavailableError
from core.logging_config import get_logger
from core.types import RefResult, StorageKey, StreamState
from store.flatfs_blockstore import BlockKeySource
from store.key_codec import key_to_cid

_LOGGER = get_logger(__name__)


class LocalRefsStream:
    """Iterator over the references of every locally stored block.

    Nothing is read from the store until the first item is requested,
    and each request reads at most one key. Results keep the store's
    enumeration order.
    """

    def __init__(self, source: BlockKeySource) -> None:
        self._source = source
        self._keys: Iterator[StorageKey] | None = None
        self._state = StreamState.IDLE
        self._failure: RefsStoreUnavailableError | None = None
        self.ref_count = 0
        self.error_count = 0

    @property
    def state(self) -> StreamState:
        return self._state

    def __iter__(self) -> "LocalRefsStream":
        return self

    def __next__(self) -> RefResult:
        """Pull the next result from the store.

        Raises:
            StopIteration: When every key has been processed.
            RefsStoreUnavailableError: If the store cannot be queried.
        """
        if self._failure is not None:
            raise self._failure
        if self._state is StreamState.COMPLETED:
            raise StopIteration
        try:
            key = next(self._open_keys())
        except StopIteration:
            self._finish()
            raise
        except RefsStoreUnavailableError as error:
            self._fail(error)
            raise
        return self._decode(key)

    def __enter__(self) -> "LocalRefsStream":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Abandon the stream and release the store cursor."""
        if self._keys is not None:
            close = getattr(self._keys, "close", None)
            if close is not None:
                close()
        if self._state in (StreamState.IDLE, StreamState.ENUMERATING):
            self._state = StreamState.COMPLETED

    def _open_keys(self) -> Iterator[StorageKey]:
        if self._keys is None:
            self._state = StreamState.ENUMERATING
            _LOGGER.info("refs_local_started")
            self._keys = iter(self._source.query_keys())
        return self._keys

    def _decode(self, key: StorageKey) -> RefResult:
        try:
            cid = key_to_cid(key)
        except RefsDecodeError as error:
            self.error_count += 1
            message = f"Could not convert block with key '{key}' to CID: {error}"
            _LOGGER.info("ref_decode_failed", key=str(key), reason=str(error))
            return RefResult(err=message)
        self.ref_count += 1
        return RefResult(ref=str(cid))

    def _finish(self) -> None:
        self._state = StreamState.COMPLETED
        _LOGGER.info(
            "refs_local_completed",
            ref_count=self.ref_count,
            error_count=self.error_count,
        )

    def _fail(self, error: RefsStoreUnavailableError) -> None:
        self._state = StreamState.FAILED
        self._failure = error
        _LOGGER.error("refs_local_failed", error=str(error))


def local_refs(source: BlockKeySource) -> LocalRefsStream:
    """Open a fresh local refs stream over ``source``.

    Reconstructed CIDs may differ from the CIDs blocks were stored under,
    since the key does not record the original multibase.

    Args:
        source: Block store exposing a keys-only query.

    Returns:
        Stream positioned before the first key.
    """
    return LocalRefsStream(source)
