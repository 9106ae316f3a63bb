"""Docker APT repository details: distro identity and the vendor signing key."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import httpx

from stackup.errors import InstallError, UnsupportedPlatformError
from stackup.shell.subprocess import run_command

logger = logging.getLogger(__name__)

DOWNLOAD_BASE = "https://download.docker.com/linux"
KEYRING_PATH = "/usr/share/keyrings/docker-archive-keyring.gpg"
SOURCES_LIST_PATH = "/etc/apt/sources.list.d/docker.list"

_OS_RELEASE = Path("/etc/os-release")
_SUPPORTED_IDS = ("ubuntu", "debian")


@dataclass(frozen=True, slots=True)
class Distro:
    """The Docker repository flavour and release codename to register."""

    id: str
    codename: str = ""

    @property
    def repo_url(self) -> str:
        return f"{DOWNLOAD_BASE}/{self.id}"

    @property
    def key_url(self) -> str:
        return f"{self.repo_url}/gpg"


def parse_os_release(text: str) -> dict[str, str]:
    """Parse /etc/os-release KEY=value lines, unquoting values."""
    info: dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        info[key] = value.strip().strip('"').strip("'")
    return info


def read_os_release(path: Path = _OS_RELEASE) -> dict[str, str]:
    try:
        return parse_os_release(path.read_text(encoding="utf-8"))
    except OSError:
        return {}


def resolve_distro(info: dict[str, str]) -> Distro:
    """Map os-release fields to a Docker repository flavour.

    Derivatives (Pop!_OS, Mint, ...) use their parent's repository and the
    parent's codename when os-release provides it.

    Raises:
        UnsupportedPlatformError: Not a Debian/Ubuntu family distribution.
    """
    distro_id = info.get("ID", "").lower()
    id_like = info.get("ID_LIKE", "").lower().split()

    if distro_id in _SUPPORTED_IDS:
        return Distro(id=distro_id, codename=info.get("VERSION_CODENAME", ""))
    if "ubuntu" in id_like:
        return Distro(
            id="ubuntu",
            codename=info.get("UBUNTU_CODENAME") or info.get("VERSION_CODENAME", ""),
        )
    if "debian" in id_like:
        return Distro(id="debian", codename=info.get("VERSION_CODENAME", ""))
    raise UnsupportedPlatformError(
        f"Unsupported Linux distribution '{distro_id or 'unknown'}'. "
        "Automatic install supports Debian and Ubuntu based systems only."
    )


async def release_codename(distro: Distro) -> str:
    """Return the codename from os-release, falling back to `lsb_release -cs`."""
    if distro.codename:
        return distro.codename
    returncode, stdout, _ = await run_command(["lsb_release", "-cs"], timeout=15.0)
    codename = stdout.strip()
    if returncode != 0 or not codename:
        raise InstallError("Could not determine the distribution codename (lsb_release -cs).")
    return codename


async def dpkg_architecture() -> str:
    returncode, stdout, stderr = await run_command(["dpkg", "--print-architecture"], timeout=15.0)
    if returncode != 0 or not stdout.strip():
        raise InstallError(f"Could not determine the package architecture: {stderr or stdout}")
    return stdout.strip()


def repository_line(distro: Distro, arch: str, codename: str) -> str:
    return (
        f"deb [arch={arch} signed-by={KEYRING_PATH}] "
        f"{distro.repo_url} {codename} stable\n"
    )


async def fetch_signing_key(distro: Distro, http_client: httpx.AsyncClient) -> bytes:
    """Download the ASCII-armored repository signing key.

    Raises:
        InstallError: The key could not be downloaded.
    """
    logger.info("Fetching Docker signing key from %s", distro.key_url)
    try:
        response = await http_client.get(distro.key_url)
        response.raise_for_status()
    except httpx.HTTPError as exc:
        raise InstallError(
            f"Failed to download Docker signing key from {distro.key_url}: {exc}"
        ) from exc
    return response.content


def make_http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=httpx.Timeout(30.0, connect=10.0),
        follow_redirects=True,
        transport=httpx.AsyncHTTPTransport(retries=3),
    )
