"""Pytest configuration for repository test runs."""

from __future__ import annotations

import hashlib
import sys
from pathlib import Path
from typing import Callable

import pytest
from multiformats import CID


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


def _block_cid(data: bytes, version: int = 0) -> CID:
    multihash = b"\x12\x20" + hashlib.sha256(data).digest()
    if version == 0:
        return CID.decode(multihash)
    return CID.decode(b"\x01\x55" + multihash).set(base="base32")


@pytest.fixture
def block_cid() -> Callable[..., CID]:
    """Factory for sha2-256 CIDs: v0 gives ``Qm...``, v1 gives ``bafkrei...``."""
    return _block_cid
