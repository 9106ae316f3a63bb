"""Async subprocess execution for engine, installer, and compose commands."""

from __future__ import annotations

import asyncio
import logging
import os
import signal
from pathlib import Path

logger = logging.getLogger(__name__)

_OUTPUT_LIMIT = 2000


async def run_command(
    cmd: list[str],
    *,
    cwd: Path | str | None = None,
    env: dict[str, str] | None = None,
    input_data: bytes | None = None,
    timeout: float | None = 60.0,
    merge_stderr: bool = False,
    limit: int | None = _OUTPUT_LIMIT,
) -> tuple[int, str, str]:
    """Run a subprocess with captured output, return (returncode, stdout, stderr).

    Uses asyncio.create_subprocess_exec -- never shell=True.
    Uses start_new_session=True so child processes can be killed as a group.
    With merge_stderr, stderr is folded into stdout and the third element is "".
    timeout=None waits for the process to finish, however long it takes.
    A missing executable is reported as exit code 127, like a shell would.
    """
    logger.debug("Running %s (cwd=%s)", cmd, cwd)
    try:
        proc = await asyncio.create_subprocess_exec(
            *cmd,
            stdin=asyncio.subprocess.PIPE if input_data is not None else None,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.STDOUT if merge_stderr else asyncio.subprocess.PIPE,
            cwd=cwd,
            env=env,
            start_new_session=True,
        )
    except FileNotFoundError:
        return (127, "", f"Command not found: {cmd[0]}")

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            proc.communicate(input=input_data), timeout=timeout
        )
    except TimeoutError:
        try:
            os.killpg(os.getpgid(proc.pid), signal.SIGKILL)
        except (ProcessLookupError, OSError):
            proc.kill()
        await proc.wait()
        return (-1, "", f"Command timed out after {timeout}s")

    return (
        proc.returncode or 0,
        _decode(stdout_bytes, limit),
        _decode(stderr_bytes, limit),
    )


async def run_interactive(
    cmd: list[str],
    *,
    cwd: Path | str | None = None,
    input_data: bytes | None = None,
) -> int:
    """Run a subprocess attached to the operator's terminal, return its exit code.

    Output is not captured and the child keeps the controlling terminal,
    so sudo and package managers can prompt.
    """
    logger.debug("Running interactively %s (cwd=%s)", cmd, cwd)
    try:
        proc = await asyncio.create_subprocess_exec(
            *cmd,
            stdin=asyncio.subprocess.PIPE if input_data is not None else None,
            cwd=cwd,
        )
    except FileNotFoundError:
        logger.warning("Command not found: %s", cmd[0])
        return 127
    await proc.communicate(input=input_data)
    return proc.returncode or 0


def _decode(data: bytes | None, limit: int | None) -> str:
    text = (data or b"").decode(errors="replace")
    return text if limit is None else text[:limit]
