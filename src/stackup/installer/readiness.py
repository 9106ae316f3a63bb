"""Poll the Docker daemon until it answers, with a bounded wait."""

from __future__ import annotations

import asyncio
import logging

from stackup import console
from stackup.engine.probe import daemon_ready
from stackup.errors import ReadinessTimeoutError, ServiceFailedError
from stackup.installer import service
from stackup.models import RunConfig

logger = logging.getLogger(__name__)


async def wait_for_daemon(
    config: RunConfig,
    *,
    use_sudo: bool = False,
    watch_service: bool = False,
    start_inactive: bool = False,
) -> None:
    """Wait until `docker info` succeeds or config.docker_timeout elapses.

    With watch_service, systemd is consulted between attempts: a failed unit
    aborts at once with its recent logs, and with start_inactive an inactive
    unit gets one start attempt.

    Raises:
        ServiceFailedError: systemd reports docker.service as failed.
        ReadinessTimeoutError: the daemon did not answer in time.
    """
    console.info(f"Waiting up to {config.docker_timeout}s for Docker to become available...")
    watch = watch_service and service.has_systemctl()
    waited = 0.0
    tried_start = False

    while True:
        if await daemon_ready(use_sudo=use_sudo):
            console.info("Docker is available.")
            return

        if watch and not await service.unit_active():
            if await service.unit_failed():
                console.error(f"{service.UNIT}.service has failed. Showing recent logs:")
                await service.show_recent_logs()
                raise ServiceFailedError(
                    f"{service.UNIT}.service failed to start. Inspect the logs above and run "
                    f"'sudo systemctl status {service.UNIT}'."
                )
            if start_inactive and not tried_start:
                console.info(f"Attempting to start {service.UNIT}.service...")
                await service.start_unit(config)
                tried_start = True

        if waited >= config.docker_timeout:
            if watch:
                await service.show_recent_logs()
            raise ReadinessTimeoutError(
                f"Timed out after {config.docker_timeout}s waiting for Docker to start. "
                "Check the engine status and logs."
            )

        logger.debug("Docker not ready after %.0fs", waited)
        await asyncio.sleep(config.poll_interval)
        waited += config.poll_interval
