"""Retry a compose command that was denied access to the Docker socket."""

from __future__ import annotations

import logging
import shlex
import shutil
from pathlib import Path

from stackup import console
from stackup.engine.socket import describe_socket
from stackup.models import RunConfig
from stackup.prompts import confirm
from stackup.shell.privilege import in_group, sudo
from stackup.shell.subprocess import run_command, run_interactive

logger = logging.getLogger(__name__)


async def recover_permission(cmd: list[str], cwd: Path, config: RunConfig) -> str:
    """Try the group-context retry, then sudo. Return the remedy that worked, or "".

    The sudo step asks for confirmation first (auto-confirmed under --yes).
    """
    console.error("Permission denied talking to the Docker daemon socket. Trying remedies.")
    console.echo("Socket ownership:", err=True)
    console.echo(describe_socket(), err=True)

    group = config.docker_group
    if shutil.which("sg") is not None:
        console.info(f"Retrying with '{group}' group membership for this session...")
        returncode, stdout, _ = await run_command(
            in_group(group, cmd), cwd=cwd, timeout=None, merge_stderr=True, limit=None
        )
        if returncode == 0:
            if stdout.strip():
                console.echo(stdout.rstrip())
            console.info(f"Succeeded with the '{group}' group.")
            return "group"
        logger.debug("Group retry failed (%d): %s", returncode, stdout)
        console.info("Group retry failed or still lacked permission.")

    if not confirm(f"Retry '{shlex.join(cmd)}' with sudo?", config):
        console.info("Skipped the sudo retry.")
        return ""

    console.info("Retrying with sudo...")
    if await run_interactive([*sudo(), *cmd], cwd=cwd) == 0:
        console.info("Succeeded with sudo.")
        return "sudo"
    return ""
