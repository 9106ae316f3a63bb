"""Parse the operator's stack selection: indices, ranges, "all", or quit."""

from __future__ import annotations

import re

from stackup import console, prompts
from stackup.errors import SelectionAborted
from stackup.models import RunConfig, Stack

_INDEX_RE = re.compile(r"\d+")
_RANGE_RE = re.compile(r"(\d+)-(\d+)")
_ALL_TOKENS = frozenset({"0", "all", "a"})
_QUIT_TOKENS = frozenset({"q", "Q"})


def parse_selection(text: str, stacks: list[Stack]) -> list[Stack]:
    """Turn a selection expression into an ordered, de-duplicated stack list.

    Grammar (comma-separated, whitespace ignored):
        N        1-based index; out of range is warned about and skipped
        A-B      inclusive range, expanded ascending even if A > B;
                 members outside [1, len(stacks)] contribute nothing
        0 / all / a   every stack, in order (wins over any other token)
        q / Q    quit (whole input only)

    Unknown tokens are warned about and skipped. Duplicates keep their
    first position.

    Raises:
        SelectionAborted: The operator asked to quit.
    """
    if text.strip() in _QUIT_TOKENS:
        raise SelectionAborted("Aborted by user.")

    tokens = [re.sub(r"\s+", "", part) for part in text.split(",")]
    if any(token.lower() in _ALL_TOKENS for token in tokens):
        return list(stacks)

    count = len(stacks)
    indices: list[int] = []
    for token in tokens:
        if not token:
            continue
        if match := _RANGE_RE.fullmatch(token):
            low, high = sorted((int(match.group(1)), int(match.group(2))))
            indices.extend(range(max(low, 1), min(high, count) + 1))
        elif _INDEX_RE.fullmatch(token):
            index = int(token)
            if 1 <= index <= count:
                indices.append(index)
            else:
                console.warn(f"ignoring invalid selection: {token}")
        else:
            console.warn(f"ignoring unknown token: {token}")

    chosen: list[Stack] = []
    seen: set[int] = set()
    for index in indices:
        if index not in seen:
            seen.add(index)
            chosen.append(stacks[index - 1])
    return chosen


def select_stacks(stacks: list[Stack], config: RunConfig) -> list[Stack]:
    """Choose every stack under --all, otherwise show the menu and ask."""
    if config.auto_all:
        return list(stacks)
    prompts.show_menu(stacks, str(config.stacks_dir))
    return parse_selection(prompts.read_selection(), stacks)
