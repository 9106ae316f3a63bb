"""Run mutating commands, or only announce them under --dry-run."""

from __future__ import annotations

import logging
import shlex
from pathlib import Path

from stackup import console
from stackup.models import RunConfig
from stackup.shell.subprocess import run_interactive

logger = logging.getLogger(__name__)


async def run_mutating(
    cmd: list[str],
    config: RunConfig,
    *,
    cwd: Path | None = None,
    input_data: bytes | None = None,
    display: str = "",
) -> int:
    """Execute a command that changes the system, attached to the terminal.

    Under dry-run the command is printed (or `display` when given, for
    commands whose stdin carries the payload) and 0 is returned without
    running anything.
    """
    shown = display or shlex.join(cmd)
    if cwd is not None:
        shown = f"(cd {shlex.quote(str(cwd))} && {shown})"
    if config.dry_run:
        console.dry_run(shown)
        return 0
    returncode = await run_interactive(cmd, cwd=cwd, input_data=input_data)
    if returncode != 0:
        logger.warning("Command exited with %d: %s", returncode, shown)
    return returncode
