"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from stackup.models import RunConfig, Stack


@pytest.fixture
def make_config(tmp_path: Path) -> Callable[..., RunConfig]:
    """Factory for RunConfig with a temporary stacks directory and fast polling."""

    def _make(**overrides: object) -> RunConfig:
        values: dict[str, object] = {
            "stacks_dir": tmp_path / "services" / "docker",
            "docker_timeout": 4,
            "poll_interval": 2.0,
        }
        values.update(overrides)
        return RunConfig(**values)  # type: ignore[arg-type]

    return _make


@pytest.fixture
def stacks_dir(tmp_path: Path) -> Path:
    """services/docker with alpha (no descriptor), beta (.yml) and gamma (.yaml)."""
    root = tmp_path / "services" / "docker"
    for name in ("gamma", "alpha", "beta"):
        (root / name).mkdir(parents=True)
    (root / "beta" / "docker-compose.yml").write_text("services: {}\n")
    (root / "gamma" / "docker-compose.yaml").write_text("services: {}\n")
    return root


@pytest.fixture
def stacks(stacks_dir: Path) -> list[Stack]:
    return [Stack(path=stacks_dir / name) for name in ("alpha", "beta", "gamma")]
