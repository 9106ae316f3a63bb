"""Discover stack directories under the stacks parent directory."""

from __future__ import annotations

import logging
from pathlib import Path

from stackup.errors import NoStacksError, StacksDirNotFoundError
from stackup.models import Stack

logger = logging.getLogger(__name__)


def list_stacks(parent_dir: Path) -> list[Stack]:
    """Return the immediate sub-directories of parent_dir as stacks.

    No recursion; symlinked directories are not followed. Sorted by path so
    menu numbers are stable between runs.

    Raises:
        StacksDirNotFoundError: parent_dir does not exist or is not a directory.
        NoStacksError: parent_dir has no sub-directories.
    """
    if not parent_dir.is_dir():
        raise StacksDirNotFoundError(f"Services directory not found: {parent_dir}")

    stacks = [
        Stack(path=entry)
        for entry in sorted(parent_dir.iterdir(), key=str)
        if entry.is_dir() and not entry.is_symlink()
    ]
    if not stacks:
        raise NoStacksError(f"No service directories found in {parent_dir}")

    logger.debug("Found %d stacks in %s", len(stacks), parent_dir)
    return stacks
