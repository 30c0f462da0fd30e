"""Core constants used across refs modules.

This module centralizes repository layout names and defaults.
Keeping values here avoids magic literals in store and CLI logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_REPO_PATH = Path("~/.jsipfs")
REPO_PATH_ENV_VAR = "IPFS_PATH"
LOG_LEVEL_ENV_VAR = "IPFS_REFS_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "warning"
SUPPORTED_LOG_LEVELS = ("debug", "info", "warning", "error")
BLOCKS_DIR_NAME = "blocks"
BLOCK_FILE_EXTENSION = ".data"
SHARDING_FILE_NAME = "SHARDING"
README_FILE_NAME = "_README"
SHARD_PREFIX_LENGTH = 2
SHARDING_DESCRIPTOR = f"/repo/flatfs/shard/v1/next-to-last/{SHARD_PREFIX_LENGTH}"
KEY_SEPARATOR = "/"
REFS_LOCAL_EPILOG = (
    "CIDs are reconstructed therefore they might differ from those "
    "under which the blocks were originally stored."
)
