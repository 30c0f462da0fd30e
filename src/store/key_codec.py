"""Storage key and CID conversion.

Blocks are addressed on disk by the unprefixed ``base32upper`` multibase
encoding of the binary CID, behind a leading ``/``. Converting a key
back yields the binary CID only; the multibase it was originally
written with is lost, so CIDv0 renders as base58btc and CIDv1 as base32.
"""

from __future__ import annotations

from multiformats import CID, multibase

from core.constants import KEY_SEPARATOR
from core.errors import RefsDecodeError
from core.types import StorageKey

_KEY_BASE = "base32upper"
_KEY_BASE_PREFIX = "B"


def cid_to_key(cid: CID | str) -> StorageKey:
    """Encode a CID as a block store key.

    Args:
        cid: CID instance or its string form.

    Returns:
        Storage key for the CID.
    """
    if isinstance(cid, str):
        cid = CID.decode(cid)
    encoded = multibase.encode(bytes(cid), _KEY_BASE)[len(_KEY_BASE_PREFIX) :]
    return StorageKey(f"{KEY_SEPARATOR}{encoded}".encode("ascii"))


def key_to_cid(key: StorageKey) -> CID:
    """Decode a block store key back into a CID.

    Args:
        key: Storage key produced by enumeration.

    Returns:
        Reconstructed CID, base32 for version 1.

    Raises:
        RefsDecodeError: If the key is not base32 or not a valid binary CID.
    """
    encoded = str(key)
    if encoded.startswith(KEY_SEPARATOR):
        encoded = encoded[len(KEY_SEPARATOR) :]
    if not encoded:
        raise RefsDecodeError("key is empty")
    try:
        cid_bytes = multibase.decode(f"{_KEY_BASE_PREFIX}{encoded}")
    except Exception as error:
        raise RefsDecodeError(f"invalid base32 key: {_reason(error)}") from error
    try:
        cid = CID.decode(cid_bytes)
    except Exception as error:
        raise RefsDecodeError(f"invalid CID bytes: {_reason(error)}") from error
    if cid.version == 1:
        return cid.set(base="base32")
    return cid


def _reason(error: Exception) -> str:
    return str(error) or type(error).__name__
