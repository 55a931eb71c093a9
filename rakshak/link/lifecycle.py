"""Connection lifecycle state machine for the simulated drone link.

DISCONNECTED -> CONNECTING -> CONNECTED -> DISCONNECTED. The handshake always
succeeds after a fixed delay; the simulation engine only ticks while CONNECTED.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import asyncio

    from rakshak.config import DashboardSettings
    from rakshak.core.scheduler import TaskScheduler
    from rakshak.telemetry.simulator import SimulationEngine

logger = logging.getLogger(__name__)


class ConnectionStatus(StrEnum):
    """Drone link state."""

    DISCONNECTED = "DISCONNECTED"
    CONNECTING = "CONNECTING"
    CONNECTED = "CONNECTED"


class ConnectionLifecycle:
    """Gates the simulation engine on a simulated link handshake.

    The pending handshake is a scheduler handle. Each handshake carries a
    generation number, and a completion whose generation is no longer current
    does nothing, so a late timer can never reconnect a torn-down link.
    """

    def __init__(
        self,
        settings: DashboardSettings,
        scheduler: TaskScheduler,
        engine: SimulationEngine,
    ) -> None:
        """Initialize the lifecycle in DISCONNECTED state.

        Args:
            settings: Ground station configuration with the handshake delay.
            scheduler: Scheduler owning the handshake timer.
            engine: Simulation engine gated by this lifecycle.
        """
        self._handshake_delay_seconds = settings.handshake_delay_seconds
        self._scheduler = scheduler
        self._engine = engine
        self._status = ConnectionStatus.DISCONNECTED
        self._handshake: asyncio.TimerHandle | None = None
        self._generation = 0

    @property
    def status(self) -> ConnectionStatus:
        """Return the current connection status."""
        return self._status

    @property
    def is_connected(self) -> bool:
        """Return whether the link is CONNECTED."""
        return self._status == ConnectionStatus.CONNECTED

    def toggle(self) -> ConnectionStatus:
        """Connect when disconnected, disconnect when connected.

        A toggle while CONNECTING is ignored.

        Returns:
            The status after the toggle.
        """
        if self._status == ConnectionStatus.CONNECTED:
            self._disconnect()
        elif self._status == ConnectionStatus.DISCONNECTED:
            self._begin_handshake()
        else:
            logger.info("Handshake in progress, ignoring toggle")
        return self._status

    def teardown(self) -> None:
        """Cancel a pending handshake and drop the link."""
        self._cancel_handshake()
        if self._status != ConnectionStatus.DISCONNECTED:
            self._disconnect()

    def _begin_handshake(self) -> None:
        self._generation += 1
        generation = self._generation
        self._status = ConnectionStatus.CONNECTING
        logger.info("Initiating uplink (handshake delay %.1fs)", self._handshake_delay_seconds)
        self._handshake = self._scheduler.call_later(
            self._handshake_delay_seconds,
            lambda: self._complete_handshake(generation),
        )

    def _complete_handshake(self, generation: int) -> None:
        self._handshake = None
        if generation != self._generation or self._status != ConnectionStatus.CONNECTING:
            logger.debug("Discarding stale handshake completion (generation %d)", generation)
            return

        self._status = ConnectionStatus.CONNECTED
        self._engine.on_link_established()
        self._engine.start()
        logger.info("Uplink established")

    def _disconnect(self) -> None:
        self._cancel_handshake()
        self._generation += 1
        self._status = ConnectionStatus.DISCONNECTED
        self._engine.on_link_lost()
        logger.info("Uplink terminated")

    def _cancel_handshake(self) -> None:
        if self._handshake is not None:
            self._scheduler.cancel(self._handshake)
            self._handshake = None
