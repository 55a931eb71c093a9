"""Headless ground station entry point.

Opens a dashboard session, establishes the simulated uplink, logs a telemetry
line every tick, and, when a drop zone is configured, sends it to the drone
once the link is up. Runs until SIGINT or SIGTERM.
"""

from __future__ import annotations

import asyncio
import logging
import signal
from typing import TYPE_CHECKING

from rakshak.config import get_settings
from rakshak.link.lifecycle import ConnectionStatus
from rakshak.logging import LoggingConfig, setup_logging
from rakshak.session import DashboardSession

if TYPE_CHECKING:
    from rakshak.config import DashboardSettings
    from rakshak.telemetry.models import TelemetryState

logger = logging.getLogger(__name__)


class HeadlessDashboard:
    """Drives a dashboard session without a presentation layer."""

    def __init__(self, settings: DashboardSettings) -> None:
        """Initialize the runner and its session.

        Args:
            settings: Ground station configuration.
        """
        self._settings = settings
        self._session = DashboardSession(settings)
        self._stopped = asyncio.Event()
        self._mission_sent = False
        self._session.engine.subscribe(self._log_telemetry)

    @property
    def session(self) -> DashboardSession:
        """Return the underlying session."""
        return self._session

    async def run(self) -> None:
        """Connect, optionally dispatch the configured target, and wait for stop."""
        logger.info(
            "Starting headless ground station (drone=%s:%d)",
            self._settings.drone_host,
            self._settings.command_port,
        )
        self._session.toggle_connection()

        try:
            if self._settings.has_mission_target:
                await self._dispatch_configured_target()
            await self._stopped.wait()
        except asyncio.CancelledError:
            logger.info("Headless ground station cancelled")
        finally:
            self._session.teardown()

    def stop(self) -> None:
        """Signal the runner to stop."""
        logger.info("Stop signal received")
        self._stopped.set()

    async def _dispatch_configured_target(self) -> None:
        while self._session.lifecycle.status != ConnectionStatus.CONNECTED:
            if self._stopped.is_set():
                return
            await asyncio.sleep(self._settings.tick_interval_seconds / 4)

        latitude = self._settings.target_latitude
        longitude = self._settings.target_longitude
        if latitude is None or longitude is None:
            return

        self._session.tap_map(latitude, longitude)
        result = await self._session.confirm_target()
        logger.info("Configured drop zone dispatch finished: %s", result.display_message)

    def _log_telemetry(self, telemetry: TelemetryState) -> None:
        tracker = self._session.tracker
        logger.info(
            "BAT %5.1f%% | ALT %6.1fm | SPD %5.1fm/s | SIG %5.1f | TMP %4.1fC | POS %.6f,%.6f%s",
            telemetry.battery,
            telemetry.altitude,
            telemetry.speed,
            telemetry.signal_strength,
            telemetry.temperature,
            telemetry.latitude,
            telemetry.longitude,
            f" | TGT {tracker.distance_label}" if tracker.distance_label else "",
        )


async def run_dashboard(settings: DashboardSettings) -> None:
    """Run the headless dashboard with signal handling for graceful shutdown.

    Args:
        settings: Ground station configuration.
    """
    dashboard = HeadlessDashboard(settings)

    loop = asyncio.get_running_loop()
    for signal_name in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(signal_name, dashboard.stop)

    await dashboard.run()


def main() -> None:
    """CLI entry point: load settings, configure logging, and run the loop."""
    settings = get_settings()
    setup_logging(LoggingConfig(log_level=settings.log_level))

    asyncio.run(run_dashboard(settings))


if __name__ == "__main__":
    main()
