"""Privilege helpers: sudo prefix, invoking user, and group-context commands."""

from __future__ import annotations

import getpass
import os
import shlex


def is_root() -> bool:
    return hasattr(os, "geteuid") and os.geteuid() == 0


def sudo() -> list[str]:
    """Return ['sudo'] prefix, or [] if already running as root."""
    return [] if is_root() else ["sudo"]


def target_user() -> str:
    """The user who should own engine access: the sudo caller if any."""
    return os.environ.get("SUDO_USER") or os.environ.get("USER") or getpass.getuser()


def in_group(group: str, cmd: list[str]) -> list[str]:
    """Wrap cmd so it runs with `group` as the active group of a fresh session.

    `sg` re-reads the group database, so a membership added after login
    applies without logging out.
    """
    return ["sg", group, "-c", shlex.join(cmd)]
