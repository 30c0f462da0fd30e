"""CLI command for listing local references."""

from __future__ import annotations

import argparse
import sys
from typing import Any, TextIO

from core.constants import REFS_LOCAL_EPILOG
from core.errors import RefsStoreUnavailableError
from store.local_refs import LocalRefsStream
from store.repo_sdk import RepoClient


def add_refs_local_command(subparsers: Any) -> None:
    """Register refs-local subcommand."""
    subparsers.add_parser(
        "refs-local",
        help="List all local references.",
        description="List all local references.",
        epilog=REFS_LOCAL_EPILOG,
    )


def run_refs_local_command(client: RepoClient, args: argparse.Namespace) -> int:
    """Print every local reference, one per line.

    Decode failures go to stderr and do not change the exit code.
    A block store that cannot be queried exits with status 1.
    """
    try:
        with client.refs_local() as stream:
            print_refs(stream, sys.stdout, sys.stderr)
    except RefsStoreUnavailableError as error:
        print(str(error), file=sys.stderr)
        return 1
    return 0


def print_refs(stream: LocalRefsStream, out: TextIO, err: TextIO) -> None:
    """Drain ``stream`` one item at a time into the output channels."""
    for result in stream:
        if result.is_error:
            print(result.err, file=err, flush=True)
        else:
            print(result.ref, file=out, flush=True)
