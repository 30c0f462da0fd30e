"""Runtime configuration model for refs.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    BLOCKS_DIR_NAME,
    DEFAULT_LOG_LEVEL,
    DEFAULT_REPO_PATH,
    LOG_LEVEL_ENV_VAR,
    REPO_PATH_ENV_VAR,
    SUPPORTED_LOG_LEVELS,
)
from core.errors import RefsConfigError


@dataclass(frozen=True)
class RefsConfig:
    """Validated runtime configuration.

    Attributes:
        repo_path: Root directory of the local IPFS repository.
        log_level: Minimum structured log level written to stderr.
    """

    repo_path: Path
    log_level: str

    @property
    def blocks_root(self) -> Path:
        """Directory holding the flatfs block files."""
        return self.repo_path / BLOCKS_DIR_NAME

    @classmethod
    def from_env(cls) -> "RefsConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            RefsConfigError: If environment values are invalid.
        """
        repo_path_value = os.getenv(REPO_PATH_ENV_VAR) or str(DEFAULT_REPO_PATH)
        log_level_value = os.getenv(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL)
        return cls(
            repo_path=Path(repo_path_value).expanduser().resolve(),
            log_level=_parse_log_level(log_level_value),
        )


def _parse_log_level(raw_value: str) -> str:
    """Parse the log level environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Normalized lower-case level name.

    Raises:
        RefsConfigError: If value is not a supported level.
    """
    level = raw_value.strip().lower()
    if level not in SUPPORTED_LOG_LEVELS:
        raise RefsConfigError(
            f"Invalid {LOG_LEVEL_ENV_VAR} value: "
            f"expected one of {SUPPORTED_LOG_LEVELS}, got '{raw_value}'. "
            f"Set {LOG_LEVEL_ENV_VAR} to a supported level name."
        )
    return level
