"""Mission target tracking and confirmation.

Holds at most one drop zone, keeps the live distance from the drone to it,
and turns an operator confirmation into a single command dispatch.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from rakshak.command.models import CommandResult
from rakshak.exceptions import CommandInFlightError, NoTargetError
from rakshak.mission.geodesy import format_distance, haversine_distance
from rakshak.mission.models import MissionStatus, MissionTarget

if TYPE_CHECKING:
    from rakshak.command.dispatcher import CommandDispatcher
    from rakshak.telemetry.models import TelemetryState
    from rakshak.telemetry.simulator import SimulationEngine

logger = logging.getLogger(__name__)


class MissionTargetTracker:
    """Tracks the drop zone, its distance, and its confirmation state.

    Distance is recomputed whenever the engine publishes new telemetry and
    whenever the target changes.
    """

    def __init__(self, engine: SimulationEngine, dispatcher: CommandDispatcher) -> None:
        """Initialize the tracker and subscribe to telemetry updates.

        Args:
            engine: Simulation engine publishing the drone position.
            dispatcher: Dispatcher used on confirmation.
        """
        self._dispatcher = dispatcher
        self._position = engine.telemetry
        self._target: MissionTarget | None = None
        self._status: MissionStatus | None = None
        self._confirmed = False
        self._command_result: CommandResult | None = None
        self._distance_meters: float | None = None
        engine.subscribe(self._on_telemetry)

    @property
    def target(self) -> MissionTarget | None:
        """Return the active target, if any."""
        return self._target

    @property
    def status(self) -> MissionStatus | None:
        """Return the mission status, or None before any target was set."""
        return self._status

    @property
    def confirmed(self) -> bool:
        """Return whether the current target has been sent to the drone."""
        return self._confirmed

    @property
    def command_result(self) -> CommandResult | None:
        """Return the outcome of the latest dispatch for this target."""
        return self._command_result

    @property
    def distance_meters(self) -> float | None:
        """Return the drone-to-target distance, or None without a target."""
        return self._distance_meters

    @property
    def distance_label(self) -> str | None:
        """Return the formatted distance, or None without a target."""
        if self._distance_meters is None:
            return None
        return format_distance(self._distance_meters)

    def set_target(self, latitude: float, longitude: float) -> MissionTarget:
        """Replace the target with a tapped map position.

        Args:
            latitude: Tapped latitude in degrees.
            longitude: Tapped longitude in degrees.

        Returns:
            The new target.
        """
        self._target = MissionTarget(latitude=latitude, longitude=longitude)
        self._status = MissionStatus.PENDING
        self._confirmed = False
        self._command_result = None
        self._recompute_distance()
        logger.info(
            "Drop zone set at (%.6f, %.6f), %s from drone",
            latitude,
            longitude,
            self.distance_label,
        )
        return self._target

    def clear_target(self) -> None:
        """Discard the target, or abort it after confirmation."""
        if self._target is None:
            return
        logger.info("Drop zone cleared (was %s)", self._status)
        self._target = None
        self._status = MissionStatus.ABORTED
        self._confirmed = False
        self._command_result = None
        self._distance_meters = None

    async def confirm(self, host: str) -> CommandResult:
        """Send the current target to the drone.

        A failed dispatch leaves the target unconfirmed so the operator can
        retry. If the target is replaced or cleared while the dispatch is in
        flight, its result is discarded.

        Args:
            host: Drone host or IP.

        Returns:
            The dispatch result.

        Raises:
            NoTargetError: If no target is set.
            CommandInFlightError: If a dispatch is already pending.
        """
        target = self._target
        if target is None:
            raise NoTargetError("No drop zone selected")
        if self._dispatcher.is_sending:
            raise CommandInFlightError("A command is already being transmitted")

        self._command_result = CommandResult.PENDING
        try:
            result = await self._dispatcher.send(host, target.latitude, target.longitude)
        except asyncio.CancelledError:
            if self._target is target:
                self._command_result = None
            raise

        if self._target is not target:
            logger.info("Target changed during dispatch, discarding %s", result)
            return result

        self._command_result = result
        if result == CommandResult.SENT:
            self._confirmed = True
            self._status = MissionStatus.CONFIRMED
            logger.info("Drop zone confirmed and locked")
        else:
            logger.warning("Drop zone not confirmed: %s", result.display_message)
        return result

    def _on_telemetry(self, telemetry: TelemetryState) -> None:
        self._position = telemetry
        self._recompute_distance()

    def _recompute_distance(self) -> None:
        if self._target is None:
            self._distance_meters = None
            return
        self._distance_meters = haversine_distance(
            latitude_1=self._position.latitude,
            longitude_1=self._position.longitude,
            latitude_2=self._target.latitude,
            longitude_2=self._target.longitude,
        )
