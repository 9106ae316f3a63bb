"""Describe the Docker daemon socket for permission diagnostics."""

from __future__ import annotations

import stat
from pathlib import Path

DOCKER_SOCKET = Path("/var/run/docker.sock")


def describe_socket(path: Path = DOCKER_SOCKET) -> str:
    """Return an `ls -l` style line: mode, owner, group, path."""
    try:
        st = path.stat()
    except OSError:
        return f"{path}: not found"
    return f"{stat.filemode(st.st_mode)} {_owner(path, st.st_uid)} {_group(path, st.st_gid)} {path}"


def _owner(path: Path, uid: int) -> str:
    try:
        return path.owner()
    except (KeyError, NotImplementedError):
        return str(uid)


def _group(path: Path, gid: int) -> str:
    try:
        return path.group()
    except (KeyError, NotImplementedError):
        return str(gid)
