"""Classify captured engine/compose output into failure kinds."""

from __future__ import annotations

import re

from stackup.models import FailureKind

# "Got permission denied while trying to connect to the Docker daemon socket at
# unix:///var/run/docker.sock ... connect: permission denied"
_PERMISSION_RE = re.compile(r"permission denied", re.IGNORECASE)


def classify_failure(output: str) -> FailureKind:
    """Return PERMISSION when the output carries a permission-denied marker."""
    if _PERMISSION_RE.search(output):
        return FailureKind.PERMISSION
    return FailureKind.OTHER
