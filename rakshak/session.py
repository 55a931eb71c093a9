"""Dashboard session wiring the telemetry core together.

A session owns the scheduler, simulation engine, connection lifecycle,
mission tracker, command dispatcher, and payload manager. The presentation
layer reads ``snapshot()`` and forwards operator actions to the session;
nothing is reachable through module globals.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel

from rakshak.analysis.analyzer import LandingZoneAnalyzer
from rakshak.command.dispatcher import CommandDispatcher
from rakshak.command.models import CommandResult
from rakshak.core.scheduler import TaskScheduler
from rakshak.exceptions import CommandInFlightError, NoTargetError
from rakshak.link.lifecycle import ConnectionLifecycle, ConnectionStatus
from rakshak.logging.context import generate_session_id
from rakshak.mission.models import MissionStatus, MissionTarget
from rakshak.mission.tracker import MissionTargetTracker
from rakshak.payload.manager import PayloadManager, PayloadType
from rakshak.telemetry.models import FlightMode, JoystickDirection, ManualInput, TelemetryState
from rakshak.telemetry.simulator import SimulationEngine

if TYPE_CHECKING:
    import random

    from rakshak.analysis.models import LandingAnalysis
    from rakshak.command.dispatcher import CommandTransport
    from rakshak.config import DashboardSettings

logger = logging.getLogger(__name__)


class DashboardSnapshot(BaseModel):
    """Read-only view of the session for the presentation layer."""

    session_id: str
    telemetry: TelemetryState
    connection_status: ConnectionStatus
    flight_mode: FlightMode
    manual_input: ManualInput
    target: MissionTarget | None
    distance_meters: float | None
    distance_label: str | None
    confirmed: bool
    mission_status: MissionStatus | None
    command_result: CommandResult | None
    command_message: str | None
    is_sending: bool
    selected_payload: PayloadType


class DashboardSession:
    """Owns all live ground station state for one operator view."""

    def __init__(
        self,
        settings: DashboardSettings,
        *,
        transport: CommandTransport | None = None,
        analyzer: LandingZoneAnalyzer | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Build the session's components from settings.

        Args:
            settings: Ground station configuration.
            transport: Command transport. Defaults to requests.
            analyzer: AI collaborator. Created on first use when omitted.
            rng: Random source for the simulation.
        """
        self._settings = settings
        self._session_id = generate_session_id()
        self.drone_host = settings.drone_host
        self._scheduler = TaskScheduler()
        self._engine = SimulationEngine(settings, self._scheduler, rng=rng)
        self._lifecycle = ConnectionLifecycle(settings, self._scheduler, self._engine)
        self._dispatcher = CommandDispatcher(
            transport,
            port=settings.command_port,
            timeout_seconds=settings.command_timeout_seconds,
            default_altitude=settings.default_command_altitude,
        )
        self._tracker = MissionTargetTracker(self._engine, self._dispatcher)
        self._payloads = PayloadManager(self._lifecycle)
        self._analyzer = analyzer
        self._confirm_task: asyncio.Task[CommandResult] | None = None
        self._closed = False
        logger.info("Dashboard session %s created", self._session_id)

    @property
    def session_id(self) -> str:
        """Return the session identifier."""
        return self._session_id

    @property
    def scheduler(self) -> TaskScheduler:
        """Return the session's task scheduler."""
        return self._scheduler

    @property
    def engine(self) -> SimulationEngine:
        """Return the simulation engine."""
        return self._engine

    @property
    def lifecycle(self) -> ConnectionLifecycle:
        """Return the connection lifecycle."""
        return self._lifecycle

    @property
    def tracker(self) -> MissionTargetTracker:
        """Return the mission target tracker."""
        return self._tracker

    @property
    def dispatcher(self) -> CommandDispatcher:
        """Return the command dispatcher."""
        return self._dispatcher

    @property
    def payloads(self) -> PayloadManager:
        """Return the payload manager."""
        return self._payloads

    @property
    def is_closed(self) -> bool:
        """Return whether ``teardown`` has run."""
        return self._closed

    def toggle_connection(self) -> ConnectionStatus:
        """Connect or disconnect the drone link."""
        return self._lifecycle.toggle()

    def set_flight_mode(self, mode: FlightMode) -> None:
        """Select the flight mode."""
        self._engine.set_flight_mode(mode)

    def joystick(self, direction: JoystickDirection) -> bool:
        """Forward a manual override command."""
        return self._engine.apply_manual_input(direction)

    def tap_map(self, latitude: float, longitude: float) -> MissionTarget:
        """Set the drop zone from a map tap."""
        return self._tracker.set_target(latitude, longitude)

    def clear_target(self) -> None:
        """Discard or abort the drop zone."""
        self._tracker.clear_target()

    def confirm_target(self) -> asyncio.Task[CommandResult]:
        """Dispatch the current drop zone to the drone in the background.

        Returns:
            The task resolving to the dispatch result.

        Raises:
            NoTargetError: If no target is set.
            CommandInFlightError: If a dispatch is already pending.
        """
        if self._tracker.target is None:
            raise NoTargetError("No drop zone selected")
        pending = self._confirm_task is not None and not self._confirm_task.done()
        if pending or self._dispatcher.is_sending:
            raise CommandInFlightError("A command is already being transmitted")

        self._confirm_task = self._scheduler.spawn(self._tracker.confirm(self.drone_host))
        return self._confirm_task

    def analyze_landing_zone(self, image_bytes: bytes) -> LandingAnalysis:
        """Run the AI landing-zone check on a camera frame."""
        return self._get_analyzer().analyze_landing_zone(image_bytes)

    def generate_mission_report(self, logs: str) -> str:
        """Ask the AI collaborator for a post-mission summary."""
        return self._get_analyzer().generate_mission_report(logs)

    def snapshot(self) -> DashboardSnapshot:
        """Return a read-only view of the current state."""
        tracker = self._tracker
        result = tracker.command_result
        return DashboardSnapshot(
            session_id=self._session_id,
            telemetry=self._engine.telemetry,
            connection_status=self._lifecycle.status,
            flight_mode=self._engine.flight_mode,
            manual_input=self._engine.manual_input,
            target=tracker.target,
            distance_meters=tracker.distance_meters,
            distance_label=tracker.distance_label,
            confirmed=tracker.confirmed,
            mission_status=tracker.status,
            command_result=result,
            command_message=result.display_message if result is not None else None,
            is_sending=self._dispatcher.is_sending,
            selected_payload=self._payloads.selected,
        )

    def teardown(self) -> None:
        """Stop every tick, handshake, and dispatch owned by this session."""
        if self._closed:
            return
        self._closed = True
        self._lifecycle.teardown()
        cancelled = self._scheduler.cancel_all()
        self._dispatcher.close()
        logger.info(
            "Dashboard session %s torn down (%d tasks cancelled)",
            self._session_id,
            cancelled,
        )

    def _get_analyzer(self) -> LandingZoneAnalyzer:
        if self._analyzer is None:
            self._analyzer = LandingZoneAnalyzer(self._settings)
        return self._analyzer
