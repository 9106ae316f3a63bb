"""Docker Engine installer for Debian/Ubuntu via APT and systemd."""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass

from stackup import console
from stackup.errors import CommandFailedError, UnsupportedPlatformError, UserDeclinedError
from stackup.installer import repository, service
from stackup.installer.readiness import wait_for_daemon
from stackup.models import RunConfig
from stackup.prompts import confirm
from stackup.shell.actions import run_mutating
from stackup.shell.privilege import sudo, target_user

logger = logging.getLogger(__name__)

PREREQUISITES = ("ca-certificates", "gnupg", "lsb-release")
ENGINE_PACKAGES = ("docker-ce", "docker-ce-cli", "containerd.io", "docker-compose-plugin")


@dataclass(frozen=True, slots=True)
class AptInstaller:
    """Starts an existing docker.service, or installs Docker Engine from the vendor repository."""

    async def is_supported(self) -> bool:
        return shutil.which("apt-get") is not None

    async def ensure(self, config: RunConfig) -> None:
        if service.has_systemctl() and await service.unit_registered():
            await self._start_existing(config)
            return
        await self.install(config)

    async def _start_existing(self, config: RunConfig) -> None:
        console.info("Docker systemd unit appears present. Attempting to start docker.service.")
        if not confirm("Start docker.service now?", config):
            raise UserDeclinedError("User declined to start docker.service.")
        await service.start_unit(config)
        if config.dry_run:
            return
        await wait_for_daemon(config, use_sudo=True, watch_service=True)

    async def install(self, config: RunConfig) -> None:
        """Register the Docker APT repository and install the engine packages.

        Raises:
            UnsupportedPlatformError: apt-get is missing or the distro is not Debian-family.
            UserDeclinedError: The operator declined the installation.
            CommandFailedError: An installation step exited non-zero.
        """
        console.info("Installing Docker Engine on Linux (APT/Debian/Ubuntu path)...")
        if not await self.is_supported():
            raise UnsupportedPlatformError(
                "Automatic Linux install currently only supports apt-based systems (Ubuntu/Debian)."
            )
        distro = repository.resolve_distro(repository.read_os_release())

        if not confirm("Proceed to install Docker Engine on this machine?", config):
            raise UserDeclinedError("User declined Docker installation.")

        await self._step([*sudo(), "apt-get", "update"], config)
        await self._step([*sudo(), "apt-get", "install", "-y", *PREREQUISITES], config)
        await self._register_repository(distro, config)
        await self._step([*sudo(), "apt-get", "update"], config)
        await self._step([*sudo(), "apt-get", "install", "-y", *ENGINE_PACKAGES], config)
        await self._step([*sudo(), "systemctl", "enable", "--now", service.UNIT], config)

        await self._grant_group_access(config)

        if config.dry_run:
            return
        await wait_for_daemon(config, use_sudo=True, watch_service=True, start_inactive=True)

    async def _register_repository(self, distro: repository.Distro, config: RunConfig) -> None:
        dearmor = [*sudo(), "gpg", "--dearmor", "--yes", "-o", repository.KEYRING_PATH]
        if config.dry_run:
            console.dry_run(f"curl -fsSL {distro.key_url} | {' '.join(dearmor)}")
        else:
            async with repository.make_http_client() as http_client:
                key = await repository.fetch_signing_key(distro, http_client)
            await self._step(dearmor, config, input_data=key)

        arch = await repository.dpkg_architecture()
        codename = await repository.release_codename(distro)
        line = repository.repository_line(distro, arch, codename)
        tee = [*sudo(), "tee", repository.SOURCES_LIST_PATH]
        await self._step(
            tee,
            config,
            input_data=line.encode(),
            display=f"echo '{line.strip()}' | {' '.join(tee)}",
        )

    async def _grant_group_access(self, config: RunConfig) -> None:
        # Membership only applies to new login sessions; this process keeps
        # its old groups and relies on sudo or `sg` until then.
        user = target_user()
        group = config.docker_group
        await run_mutating([*sudo(), "groupadd", "-f", group], config)
        returncode = await run_mutating([*sudo(), "usermod", "-aG", group, user], config)
        if config.dry_run:
            return
        if returncode == 0:
            console.info(
                f"Added {user} to '{group}' group. "
                "You may need to log out and back in for this to take effect."
            )
        else:
            console.warn(f"Could not add {user} to the '{group}' group.")

    async def _step(
        self,
        cmd: list[str],
        config: RunConfig,
        *,
        input_data: bytes | None = None,
        display: str = "",
    ) -> None:
        returncode = await run_mutating(cmd, config, input_data=input_data, display=display)
        if returncode != 0:
            raise CommandFailedError(cmd, returncode)
