"""Engine installer protocol -- one implementation per platform."""

from __future__ import annotations

from typing import Protocol

from stackup.models import RunConfig


class EngineInstaller(Protocol):
    """Protocol for platform-specific Docker install-or-start logic."""

    async def is_supported(self) -> bool:
        """Check that the platform's package manager is present."""
        ...

    async def ensure(self, config: RunConfig) -> None:
        """Install and/or start the engine, then wait for the daemon.

        Raises an InstallError subclass when remediation is impossible
        or declined. Under dry-run only prints what would run.
        """
        ...
