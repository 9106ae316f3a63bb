"""Make sure the Docker engine is usable before any stack is started."""

from __future__ import annotations

import logging
import shutil

from stackup import console
from stackup.engine.probe import detect_os_family, probe
from stackup.engine.socket import describe_socket
from stackup.errors import (
    DockerPermissionError,
    MissingDependencyError,
    UnsupportedPlatformError,
)
from stackup.installer.resolver import ensure_installed
from stackup.models import ProbeStatus, RunConfig
from stackup.shell.privilege import in_group
from stackup.shell.subprocess import run_command

logger = logging.getLogger(__name__)

_PERMISSION_HINTS = """\
You can try one of the following:
  - Run the command with sudo (e.g. 'sudo stackup')
  - Re-login or run 'newgrp {group}' to pick up {group} group membership
  - Ensure your user is in the '{group}' group (sudo usermod -aG {group} <user>) and then re-login
"""


async def ensure_engine(config: RunConfig) -> None:
    """Probe the engine and remediate: install, start, or explain permissions.

    Raises:
        DockerPermissionError: The daemon socket is not accessible.
        InstallError: Installing or starting the engine failed or was declined.
    """
    result = await probe()

    match result.status:
        case ProbeStatus.USABLE:
            console.info("Docker CLI found and the Docker daemon is running.")
            return
        case ProbeStatus.PERMISSION_DENIED:
            await _handle_permission_denied(config)
            return
        case ProbeStatus.DAEMON_UNREACHABLE:
            console.info("Docker CLI found but daemon isn't responding.")
        case ProbeStatus.CLI_MISSING:
            console.info("Docker CLI not found.")

    logger.debug("Probe reason: %s", result.reason)
    try:
        await ensure_installed(detect_os_family(), config)
    except (UnsupportedPlatformError, MissingDependencyError) as exc:
        if not config.dry_run:
            raise
        # Dry-run succeeds on hosts that cannot be provisioned.
        console.info(f"Would install Docker, but not executing in dry-run. {exc}")


async def _handle_permission_denied(config: RunConfig) -> None:
    group = config.docker_group
    console.error("Docker CLI cannot access the daemon socket: permission denied.")
    console.echo(describe_socket(), err=True)
    console.echo(err=True)
    console.echo(_PERMISSION_HINTS.format(group=group), err=True)

    if config.assume_yes and shutil.which("sg") is not None:
        console.info(f"Attempting to pick up '{group}' group membership for this run...")
        returncode, _, _ = await run_command(in_group(group, ["docker", "info"]), timeout=30.0)
        if returncode == 0:
            console.info(f"Docker is reachable through the '{group}' group.")
            return
        console.info(
            "Group re-activation did not allow access. "
            "You may need to re-login or run with sudo."
        )

    raise DockerPermissionError(
        "Docker CLI cannot access the daemon socket: permission denied."
    )
