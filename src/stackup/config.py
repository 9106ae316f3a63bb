"""Build the immutable RunConfig from flags, environment, and an optional YAML file.

Precedence: command-line flags > environment variables > config file > defaults.

Config file (``stackup.yaml`` in the base directory, or ``--config PATH``)::

    stacks_dir: services/docker   # relative to the base directory
    docker_timeout: 180           # seconds to wait for the daemon
    poll_interval: 2              # seconds between readiness checks
    docker_group: docker
"""

from __future__ import annotations

import argparse
import logging
import os
from collections.abc import Mapping
from pathlib import Path

import yaml

from stackup.errors import ConfigError
from stackup.models import (
    DEFAULT_DOCKER_GROUP,
    DEFAULT_DOCKER_TIMEOUT,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_STACKS_SUBDIR,
    RunConfig,
)

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "stackup.yaml"
ENV_STACKS_DIR = "STACKUP_STACKS_DIR"
ENV_DOCKER_TIMEOUT = "STACKUP_DOCKER_TIMEOUT"

_KNOWN_KEYS = {"stacks_dir", "docker_timeout", "poll_interval", "docker_group"}


def load_config_file(path: Path) -> dict[str, object]:
    """Load a YAML config mapping. A missing file yields an empty mapping.

    Raises:
        ConfigError: The file is unreadable, not YAML, or not a mapping.
    """
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to parse config file '{path}': {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config format in {path}: expected a YAML mapping.")

    unknown = sorted(set(data) - _KNOWN_KEYS)
    if unknown:
        logger.warning("Ignoring unknown keys in %s: %s", path, ", ".join(map(str, unknown)))
    return data


def build_config(
    args: argparse.Namespace,
    *,
    base_dir: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> RunConfig:
    """Construct the RunConfig for this invocation.

    Raises:
        ConfigError: An explicit --config file is missing, or a value is invalid.
    """
    base = base_dir if base_dir is not None else Path.cwd()
    env = os.environ if environ is None else environ

    config_path: Path | None = getattr(args, "config", None)
    if config_path is not None and not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")
    file_values = load_config_file(config_path or base / CONFIG_FILENAME)

    stacks_dir = (
        getattr(args, "stacks_dir", None)
        or env.get(ENV_STACKS_DIR)
        or file_values.get("stacks_dir")
        or DEFAULT_STACKS_SUBDIR
    )
    docker_timeout = env.get(ENV_DOCKER_TIMEOUT) or file_values.get(
        "docker_timeout", DEFAULT_DOCKER_TIMEOUT
    )

    return RunConfig(
        stacks_dir=_resolve_dir(stacks_dir, base),
        auto_all=bool(getattr(args, "all", False)),
        assume_yes=bool(getattr(args, "yes", False)),
        dry_run=bool(getattr(args, "dry_run", False)),
        docker_timeout=_positive_int(docker_timeout, "docker_timeout"),
        poll_interval=_positive_float(
            file_values.get("poll_interval", DEFAULT_POLL_INTERVAL), "poll_interval"
        ),
        docker_group=str(file_values.get("docker_group") or DEFAULT_DOCKER_GROUP),
        verbose=bool(getattr(args, "verbose", False)),
    )


def _resolve_dir(value: object, base: Path) -> Path:
    path = Path(str(value)).expanduser()
    return path if path.is_absolute() else base / path


def _positive_int(value: object, key: str) -> int:
    try:
        number = int(str(value))
    except ValueError:
        raise ConfigError(f"Invalid {key}: {value!r} is not an integer.") from None
    if number <= 0:
        raise ConfigError(f"Invalid {key}: must be positive, got {number}.")
    return number


def _positive_float(value: object, key: str) -> float:
    try:
        number = float(str(value))
    except ValueError:
        raise ConfigError(f"Invalid {key}: {value!r} is not a number.") from None
    if number <= 0:
        raise ConfigError(f"Invalid {key}: must be positive, got {number}.")
    return number
