"""Interactive prompts: yes/no confirmation and the stack selection menu."""

from __future__ import annotations

from stackup import console
from stackup.models import RunConfig, Stack


def confirm(prompt: str, config: RunConfig) -> bool:
    """Ask a yes/no question. Defaults to "no".

    Auto-confirms under --yes, and under --dry-run since nothing is executed.
    End of input counts as "no".
    """
    if config.assume_yes or config.dry_run:
        return True
    try:
        answer = input(f"{prompt} [y/N]: ").strip().lower()
    except EOFError:
        return False
    return answer in ("y", "yes")


def show_menu(stacks: list[Stack], stacks_dir: str) -> None:
    """Print the numbered stack menu on stderr."""
    console.echo(f"Found the following stacks in {stacks_dir}:", err=True)
    for index, stack in enumerate(stacks, start=1):
        console.echo(f"  {index:2d}) {stack.name}", err=True)
    console.echo("   0) All", err=True)
    console.echo(err=True)
    console.echo(
        "Enter a selection: a single number (e.g. 2), comma-separated (1,3), "
        "ranges (1-3), '0' for all, or 'q' to quit.",
        err=True,
    )


def read_selection() -> str:
    """Read the operator's selection. End of input reads as an empty selection."""
    try:
        return input("Selection: ")
    except EOFError:
        return ""
