"""Command-line entry point: probe the engine, pick stacks, bring them up."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from stackup import __version__, console
from stackup.config import CONFIG_FILENAME, ENV_STACKS_DIR, build_config
from stackup.dispatch.runner import run_all
from stackup.engine.ensure import ensure_engine
from stackup.errors import SelectionAborted, StackupError
from stackup.models import RunConfig
from stackup.prompts import confirm
from stackup.stacks.lister import list_stacks
from stackup.stacks.selection import select_stacks

logger = logging.getLogger(__name__)

_DESCRIPTION = """\
Interactively choose which stacks under services/docker to bring up.

This will:
  - Ensure Docker is installed (Homebrew Cask on macOS, the Docker APT
    repository on Debian/Ubuntu) and that its daemon is reachable
  - List folders in the stacks directory and prompt which ones to start
  - Run "docker compose up -d" (or "docker-compose up -d") in each selected folder
"""

_EPILOG = f"""\
The stacks directory defaults to services/docker, relative to the current
working directory (not to where stackup is installed). It can be changed with
--stacks-dir, the {ENV_STACKS_DIR} environment variable, or `stacks_dir` in
{CONFIG_FILENAME}; relative values also resolve against the current directory.

Exit codes: 0 success or abort, 1 failure, 2 usage error.
"""


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="stackup",
        description=_DESCRIPTION,
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-a",
        "--all",
        action="store_true",
        help="Select and start all stacks automatically (non-interactive).",
    )
    parser.add_argument(
        "-y",
        "--yes",
        action="store_true",
        help="Auto-confirm prompts (useful with --all).",
    )
    parser.add_argument(
        "-n",
        "--dry-run",
        action="store_true",
        help="Show what would be done but don't execute commands.",
    )
    parser.add_argument(
        "--stacks-dir",
        type=Path,
        default=None,
        help="Directory whose sub-directories are the stacks.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"YAML config file. Defaults to ./{CONFIG_FILENAME} when present.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug details to stderr.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


async def run(config: RunConfig) -> int:
    """Run the whole flow for one invocation and return the exit code.

    Raises:
        StackupError: A fatal environment, installer, or discovery problem.
        SelectionAborted: The operator quit at the selection prompt.
    """
    await ensure_engine(config)

    stacks = list_stacks(config.stacks_dir)
    selected = select_stacks(stacks, config)
    if not selected:
        console.info("No stacks selected. Exiting.")
        return 0

    console.echo()
    console.echo("Selected stacks to start:")
    for stack in selected:
        console.echo(f"  - {stack.name}")

    if not confirm("Proceed to run docker compose up -d for the above?", config):
        console.info("Aborted by user.")
        return 0

    succeeded, failed = await run_all(selected, config)
    logger.debug("Dispatch finished: %d succeeded, %d failed", succeeded, failed)
    if failed:
        console.error(f"Completed with {failed} failures. Check output above.")
        return 1

    console.info("All selected stacks started successfully (or were already running).")
    return 0


def run_cli(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    _configure_logging(args.verbose)
    try:
        config = build_config(args)
        return asyncio.run(run(config))
    except SelectionAborted as exc:
        console.echo(str(exc), err=True)
        return 0
    except StackupError as exc:
        console.error(str(exc))
        return 1
    except KeyboardInterrupt:
        console.echo("\nInterrupted.", err=True)
        return 130


if __name__ == "__main__":
    raise SystemExit(run_cli())
