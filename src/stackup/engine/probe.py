"""Detect the OS family and whether the Docker CLI can reach its daemon."""

from __future__ import annotations

import logging
import platform
import shutil

from stackup.dispatch.classifier import classify_failure
from stackup.models import FailureKind, OSFamily, ProbeResult, ProbeStatus
from stackup.shell.privilege import sudo
from stackup.shell.subprocess import run_command

logger = logging.getLogger(__name__)

_INFO_TIMEOUT = 30.0


def detect_os_family() -> OSFamily:
    match platform.system():
        case "Darwin":
            return OSFamily.MACOS
        case "Linux":
            return OSFamily.LINUX
    return OSFamily.OTHER


async def docker_info(*, use_sudo: bool = False) -> tuple[int, str]:
    """Run `docker info`, return (returncode, combined output)."""
    cmd = [*sudo(), "docker", "info"] if use_sudo else ["docker", "info"]
    # Errors follow the client section on stderr; classify the untruncated text.
    returncode, stdout, _ = await run_command(
        cmd, timeout=_INFO_TIMEOUT, merge_stderr=True, limit=None
    )
    return returncode, stdout


async def daemon_ready(*, use_sudo: bool = False) -> bool:
    returncode, _ = await docker_info(use_sudo=use_sudo)
    return returncode == 0


async def probe() -> ProbeResult:
    """Check for the engine CLI, then ask the daemon for its status.

    Read-only. Distinguishes a permission problem on the daemon socket from a
    daemon that is simply not running, since they call for different fixes.
    """
    if shutil.which("docker") is None:
        return ProbeResult(
            available=False,
            status=ProbeStatus.CLI_MISSING,
            reason="Docker CLI not found on PATH.",
        )

    returncode, output = await docker_info()
    if returncode == 0:
        return ProbeResult(available=True, status=ProbeStatus.USABLE)

    logger.debug("docker info failed (%d): %s", returncode, output)
    if classify_failure(output) == FailureKind.PERMISSION:
        return ProbeResult(
            available=False,
            status=ProbeStatus.PERMISSION_DENIED,
            reason=output.strip(),
        )
    return ProbeResult(
        available=False,
        status=ProbeStatus.DAEMON_UNREACHABLE,
        reason=output.strip() or "Docker daemon is not responding.",
    )
