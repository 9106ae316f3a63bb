"""Pick the right engine installer for the host platform."""

from __future__ import annotations

import logging

from stackup.errors import UnsupportedPlatformError
from stackup.installer.apt import AptInstaller
from stackup.installer.base import EngineInstaller
from stackup.installer.homebrew import HomebrewInstaller
from stackup.models import OSFamily, RunConfig

logger = logging.getLogger(__name__)

_INSTALLERS: dict[OSFamily, type[EngineInstaller]] = {
    OSFamily.MACOS: HomebrewInstaller,
    OSFamily.LINUX: AptInstaller,
}


def resolve_installer(os_family: OSFamily | str) -> EngineInstaller:
    family = OSFamily(os_family) if isinstance(os_family, str) else os_family
    installer_cls = _INSTALLERS.get(family)
    if installer_cls is None:
        raise UnsupportedPlatformError(
            "This installer supports automatic Docker installation only on "
            "macOS and Debian/Ubuntu Linux."
        )
    return installer_cls()


async def ensure_installed(os_family: OSFamily | str, config: RunConfig) -> None:
    """Install or start the engine for the given platform.

    Raises:
        InstallError: Remediation is impossible, failed, or was declined.
    """
    installer = resolve_installer(os_family)
    logger.debug("Using %s for %s", type(installer).__name__, os_family)
    await installer.ensure(config)
