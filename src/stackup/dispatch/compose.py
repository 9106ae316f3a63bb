"""Resolve which compose invocation is available on this machine."""

from __future__ import annotations

import shutil

from stackup.shell.subprocess import run_command

UP_ARGS = ("up", "-d")


async def resolve_compose() -> list[str] | None:
    """Prefer the `docker compose` plugin, fall back to standalone `docker-compose`."""
    returncode, _, _ = await run_command(["docker", "compose", "version"], timeout=30.0)
    if returncode == 0:
        return ["docker", "compose"]
    if shutil.which("docker-compose") is not None:
        return ["docker-compose"]
    return None


def up_command(compose: list[str]) -> list[str]:
    return [*compose, *UP_ARGS]
