"""Docker Desktop installer for macOS via Homebrew Cask."""

from __future__ import annotations

import shutil
from dataclasses import dataclass

from stackup import console
from stackup.errors import CommandFailedError, MissingDependencyError, UserDeclinedError
from stackup.installer.readiness import wait_for_daemon
from stackup.models import RunConfig
from stackup.prompts import confirm
from stackup.shell.actions import run_mutating
from stackup.shell.subprocess import run_command

_BREW_INSTALL_HINT = (
    '/bin/bash -c "$(curl -fsSL '
    'https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh)"'
)


@dataclass(frozen=True, slots=True)
class HomebrewInstaller:
    """Installs Docker Desktop with `brew install --cask docker`."""

    async def is_supported(self) -> bool:
        return shutil.which("brew") is not None

    async def ensure(self, config: RunConfig) -> None:
        console.info("Installing Docker Desktop via Homebrew Cask...")
        if not await self.is_supported():
            # Installing Homebrew itself is left to the operator.
            raise MissingDependencyError(
                "Homebrew is required to install Docker Desktop on macOS but was not found.\n"
                "Install Homebrew manually then re-run. Example (paste in a terminal):\n"
                f"  {_BREW_INSTALL_HINT}"
            )

        if await self._cask_installed():
            console.info("brew cask reports Docker already installed.")
        else:
            if not confirm("Proceed to install Docker Desktop using Homebrew?", config):
                raise UserDeclinedError("User declined Docker installation.")
            cmd = ["brew", "install", "--cask", "docker"]
            returncode = await run_mutating(cmd, config)
            if returncode != 0:
                raise CommandFailedError(cmd, returncode)

        console.info(
            "Opening Docker.app to start the Docker engine. "
            "You may be prompted for permissions."
        )
        # Docker.app may already be running; a failed launch is left to the wait below.
        await run_mutating(["open", "-a", "Docker"], config)

        if config.dry_run:
            return
        await wait_for_daemon(config)

    async def _cask_installed(self) -> bool:
        returncode, _, _ = await run_command(["brew", "list", "--cask", "docker"], timeout=60.0)
        return returncode == 0
