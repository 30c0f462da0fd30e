"""Refs CLI entry points.

This module exposes local repository commands.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
from typing import Sequence

from cli.refs_local_command import add_refs_local_command, run_refs_local_command
from core.config import RefsConfig
from core.logging_config import configure_logging
from store.repo_sdk import RepoClient


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="ipfs", description="Local repository CLI")
    parser.add_argument("--repo-path", help="Override IPFS_PATH for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    add_refs_local_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the refs CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    client = _build_client(args.repo_path)
    if args.command == "refs-local":
        return run_refs_local_command(client, args)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_client(repo_path: str | None) -> RepoClient:
    """Build SDK client with optional repo-path override.

    Args:
        repo_path: Optional override path.

    Returns:
        Configured SDK client.
    """
    config = RefsConfig.from_env()
    if repo_path:
        config = replace(config, repo_path=Path(repo_path).expanduser().resolve())
    configure_logging(config.log_level)
    return RepoClient(config)
