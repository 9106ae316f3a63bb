"""systemd helpers for the docker.service unit."""

from __future__ import annotations

import shutil

from stackup import console
from stackup.models import RunConfig
from stackup.shell.actions import run_mutating
from stackup.shell.privilege import sudo
from stackup.shell.subprocess import run_command

UNIT = "docker"
_LOG_LINES = 200


def has_systemctl() -> bool:
    return shutil.which("systemctl") is not None


async def unit_registered() -> bool:
    """Return True if systemd knows a docker.service unit file."""
    returncode, stdout, _ = await run_command(
        ["systemctl", "list-unit-files", f"{UNIT}.service", "--no-legend"],
        timeout=15.0,
    )
    return returncode == 0 and f"{UNIT}.service" in stdout


async def unit_active() -> bool:
    returncode, _, _ = await run_command(["systemctl", "is-active", "--quiet", UNIT], timeout=15.0)
    return returncode == 0


async def unit_failed() -> bool:
    returncode, _, _ = await run_command(["systemctl", "is-failed", "--quiet", UNIT], timeout=15.0)
    return returncode == 0


async def start_unit(config: RunConfig) -> int:
    return await run_mutating([*sudo(), "systemctl", "start", UNIT], config)


async def recent_logs() -> str:
    """Return the last journal lines of the unit, or "" without journalctl."""
    if shutil.which("journalctl") is None:
        return ""
    _, stdout, _ = await run_command(
        [*sudo(), "journalctl", "-u", UNIT, "--no-pager", "-n", str(_LOG_LINES)],
        timeout=30.0,
        merge_stderr=True,
        limit=None,
    )
    return stdout


async def show_recent_logs() -> str:
    logs = await recent_logs()
    if logs:
        console.echo(f"--- {UNIT}.service logs (last {_LOG_LINES} lines) ---", err=True)
        console.echo(logs.rstrip(), err=True)
    return logs
