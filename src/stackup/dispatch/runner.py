"""Bring up each selected stack with `compose up -d`, one at a time."""

from __future__ import annotations

import logging
import shlex

from stackup import console
from stackup.dispatch.classifier import classify_failure
from stackup.dispatch.compose import resolve_compose, up_command
from stackup.dispatch.recovery import recover_permission
from stackup.errors import (
    CommandFailedError,
    ComposeUnavailableError,
    DescriptorMissingError,
    DispatchError,
)
from stackup.models import (
    DispatchSummary,
    FailureKind,
    RunConfig,
    RunResult,
    RunStatus,
    Stack,
)
from stackup.shell.subprocess import run_command

logger = logging.getLogger(__name__)


async def run_stack(stack: Stack, config: RunConfig) -> RunResult:
    """Bring up a single stack. Never raises for per-stack problems.

    Returns:
        RunResult: SKIPPED when the descriptor is missing, FAILED when no compose
        command resolves or the command fails after remedies, else SUCCEEDED.
    """
    console.info(f"Processing: {stack.name}")
    try:
        cmd = await _prepare(stack)
    except DescriptorMissingError as exc:
        console.error(str(exc))
        return RunResult(stack=stack, status=RunStatus.SKIPPED, message=str(exc))
    except DispatchError as exc:
        console.error(str(exc))
        return RunResult(stack=stack, status=RunStatus.FAILED, message=str(exc))

    console.echo()
    console.echo(f"--- Running in {stack.path}: {shlex.join(cmd)} ---")

    if config.dry_run:
        console.dry_run(f"(cd {shlex.quote(str(stack.path))} && {shlex.join(cmd)})")
        console.echo(f"--- Done: {stack.name} ---")
        return RunResult(stack=stack, status=RunStatus.SUCCEEDED, message="dry-run")

    try:
        remedy = await _bring_up(stack, cmd, config)
    except CommandFailedError as exc:
        return RunResult(
            stack=stack,
            status=RunStatus.FAILED,
            message=f"{shlex.join(cmd)} exited with {exc.returncode}",
            output=exc.output,
        )

    console.echo(f"--- Done: {stack.name} ---")
    return RunResult(stack=stack, status=RunStatus.SUCCEEDED, remedy=remedy)


async def run_all(stacks: list[Stack], config: RunConfig) -> tuple[int, int]:
    """Process stacks sequentially in selection order.

    A failing stack never stops the batch.

    Returns:
        (success_count, failure_count)
    """
    summary = await dispatch(stacks, config)
    return summary.succeeded, summary.failed


async def dispatch(stacks: list[Stack], config: RunConfig) -> DispatchSummary:
    results: list[RunResult] = []
    for stack in stacks:
        result = await run_stack(stack, config)
        logger.info("Stack '%s' %s", stack.name, result.status)
        results.append(result)
    return DispatchSummary(results=results)


async def _prepare(stack: Stack) -> list[str]:
    if stack.descriptor is None:
        raise DescriptorMissingError(
            f"No docker-compose.yml or docker-compose.yaml found in {stack.path}, skipping."
        )
    compose = await resolve_compose()
    if compose is None:
        raise ComposeUnavailableError(
            "No docker compose command found (tried 'docker compose' and 'docker-compose')."
        )
    return up_command(compose)


async def _bring_up(stack: Stack, cmd: list[str], config: RunConfig) -> str:
    """Run the command; on a permission failure try the remedies.

    Returns:
        The remedy that succeeded ("" if the first attempt did).

    Raises:
        CommandFailedError: Every attempt failed. Carries the first attempt's output.
    """
    returncode, output, _ = await run_command(
        cmd, cwd=stack.path, timeout=None, merge_stderr=True, limit=None
    )
    if returncode == 0:
        if output.strip():
            console.echo(output.rstrip())
        return ""

    if classify_failure(output) == FailureKind.PERMISSION:
        remedy = await recover_permission(cmd, stack.path, config)
        if remedy:
            return remedy
        console.error(
            f"All retries failed. Output from the first attempt below:\n{output.rstrip()}"
        )
    else:
        console.echo(output.rstrip(), err=True)

    raise CommandFailedError(cmd, returncode, output)
