"""Exception hierarchy for stackup.

All exceptions inherit from StackupError (single catch point).
Messages are written for the operator -- clear, actionable, no stack traces.
"""

from __future__ import annotations


class StackupError(Exception):
    """Base exception for all stackup errors."""


class ConfigError(StackupError):
    """Invalid configuration file or environment override."""


class SelectionAborted(StackupError):
    """The operator chose to quit at the selection prompt."""


# ─── Environment / installer ─────────────────────────────────


class InstallError(StackupError):
    """The container engine could not be installed or started."""


class MissingDependencyError(InstallError):
    """A required package manager is not installed."""


class UserDeclinedError(InstallError):
    """The operator refused a confirmation prompt."""


class ReadinessTimeoutError(InstallError):
    """The engine daemon did not become reachable in time."""


class ServiceFailedError(InstallError):
    """The service manager reports the engine unit as failed."""


class UnsupportedPlatformError(InstallError):
    """Automatic installation is not supported on this platform."""


class DockerPermissionError(StackupError):
    """The engine CLI cannot access the daemon socket."""


class CommandFailedError(StackupError):
    """An external command exited with a non-zero status."""

    def __init__(self, cmd: list[str], returncode: int, output: str = "") -> None:
        self.cmd = cmd
        self.returncode = returncode
        self.output = output
        message = f"Command failed with exit code {returncode}: {' '.join(cmd)}"
        if output:
            message = f"{message}\n{output}"
        super().__init__(message)


# ─── Stack discovery / dispatch ──────────────────────────────


class StacksDirNotFoundError(StackupError):
    """The stacks parent directory does not exist."""


class NoStacksError(StackupError):
    """The stacks parent directory has no sub-directories."""


class DispatchError(StackupError):
    """A single stack could not be brought up."""


class DescriptorMissingError(DispatchError):
    """The stack directory has no compose descriptor."""


class ComposeUnavailableError(DispatchError):
    """Neither `docker compose` nor `docker-compose` is available."""
