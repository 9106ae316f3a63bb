"""Domain models for stackup. All frozen dataclasses -- no mutation after creation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

# Accepted compose descriptor names, in lookup order.
COMPOSE_FILENAMES = ("docker-compose.yml", "docker-compose.yaml")

DEFAULT_STACKS_SUBDIR = Path("services") / "docker"
DEFAULT_DOCKER_TIMEOUT = 180
DEFAULT_POLL_INTERVAL = 2.0
DEFAULT_DOCKER_GROUP = "docker"

# ─── Enumerations ─────────────────────────────────────────────


class OSFamily(StrEnum):
    MACOS = "macos"
    LINUX = "linux"
    OTHER = "other"


class ProbeStatus(StrEnum):
    USABLE = "usable"
    CLI_MISSING = "cli_missing"
    PERMISSION_DENIED = "permission_denied"
    DAEMON_UNREACHABLE = "daemon_unreachable"


class FailureKind(StrEnum):
    PERMISSION = "permission"
    OTHER = "other"


class RunStatus(StrEnum):
    SUCCEEDED = "succeeded"
    SKIPPED = "skipped"
    FAILED = "failed"


# ─── Configuration ───────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class RunConfig:
    """Options for one invocation, built once from the command line."""

    stacks_dir: Path
    auto_all: bool = False
    assume_yes: bool = False
    dry_run: bool = False
    docker_timeout: int = DEFAULT_DOCKER_TIMEOUT
    poll_interval: float = DEFAULT_POLL_INTERVAL
    docker_group: str = DEFAULT_DOCKER_GROUP
    verbose: bool = False


# ─── Engine Models ───────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class ProbeResult:
    """Outcome of checking the engine CLI and daemon."""

    available: bool
    status: ProbeStatus
    reason: str = ""


# ─── Stack Models ────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class Stack:
    """A deployable directory holding a compose descriptor."""

    path: Path

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def descriptor(self) -> Path | None:
        """Return the first compose file present in the directory, if any."""
        for filename in COMPOSE_FILENAMES:
            candidate = self.path / filename
            if candidate.is_file():
                return candidate
        return None


@dataclass(frozen=True, slots=True)
class RunResult:
    """Outcome of bringing up a single stack."""

    stack: Stack
    status: RunStatus
    message: str = ""
    output: str = ""
    remedy: str = ""  # "", "group", or "sudo"

    @property
    def ok(self) -> bool:
        return self.status == RunStatus.SUCCEEDED


@dataclass(frozen=True, slots=True)
class DispatchSummary:
    """Aggregated results for a batch of stacks."""

    results: list[RunResult] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.ok)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if not r.ok)
