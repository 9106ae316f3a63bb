"""Operator-facing output: progress on stdout, errors and warnings on stderr."""

from __future__ import annotations

import sys


def info(message: str) -> None:
    print(f"INFO: {message}")


def error(message: str) -> None:
    print(f"ERROR: {message}", file=sys.stderr)


def warn(message: str) -> None:
    print(f"Warning: {message}", file=sys.stderr)


def dry_run(command: str) -> None:
    """Announce a mutating command that is not executed."""
    print(f"DRY-RUN: {command}")


def echo(message: str = "", *, err: bool = False) -> None:
    print(message, file=sys.stderr if err else sys.stdout)
