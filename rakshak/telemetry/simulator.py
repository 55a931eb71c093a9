"""Telemetry simulation engine.

Advances a synthetic TelemetryState on a fixed tick while the link is up,
branching on the selected flight mode and on the joystick input currently
held. Every write replaces the whole state record in one synchronous step,
so a tick and a joystick delta can never interleave.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rakshak.exceptions import LinkStateError
from rakshak.telemetry.models import FlightMode, JoystickDirection, ManualInput, TelemetryState

if TYPE_CHECKING:
    import asyncio

    from rakshak.config import DashboardSettings
    from rakshak.core.scheduler import TaskScheduler

logger = logging.getLogger(__name__)

TelemetryListener = Callable[[TelemetryState], None]

# Manual override constants
_MANUAL_TILT: float = 0.5
_MANUAL_SPEED_STEP: float = 2.0
_MANUAL_ALTITUDE_STEP: float = 1.0
_MAX_MANUAL_SPEED: float = 20.0

# Signal strength band while linked
_MIN_LINKED_SIGNAL: float = 80.0
_MAX_SIGNAL: float = 100.0

_AUTONOMOUS_SPEED_VARIATION: float = 1.0


def _clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


class SimulationEngine:
    """Synthesizes drone telemetry on a fixed tick.

    The engine is the only writer of TelemetryState. The connection lifecycle
    drives it through ``on_link_established``, ``on_link_lost``, ``start`` and
    ``stop``; the operator drives it through ``set_flight_mode`` and
    ``apply_manual_input``.
    """

    def __init__(
        self,
        settings: DashboardSettings,
        scheduler: TaskScheduler,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the simulation engine.

        Args:
            settings: Ground station configuration.
            scheduler: Scheduler owning the periodic tick.
            rng: Random source. Seeded from settings when not provided.
        """
        self._settings = settings
        self._scheduler = scheduler
        self._rng = rng if rng is not None else random.Random(settings.random_seed)  # noqa: S311
        self._telemetry = TelemetryState(
            battery=settings.initial_battery,
            temperature=settings.baseline_temperature,
            latitude=settings.initial_latitude,
            longitude=settings.initial_longitude,
        )
        self._flight_mode = FlightMode.MANUAL
        self._manual_input = ManualInput()
        self._link_active = False
        self._tick_task: asyncio.Task[None] | None = None
        self._listeners: list[TelemetryListener] = []
        self._tick_count = 0

    @property
    def telemetry(self) -> TelemetryState:
        """Return the current telemetry snapshot."""
        return self._telemetry

    @property
    def flight_mode(self) -> FlightMode:
        """Return the selected flight mode."""
        return self._flight_mode

    @property
    def manual_input(self) -> ManualInput:
        """Return the joystick input currently held."""
        return self._manual_input

    @property
    def is_running(self) -> bool:
        """Return whether the periodic tick is scheduled."""
        return self._tick_task is not None

    @property
    def tick_count(self) -> int:
        """Return the number of ticks applied since creation."""
        return self._tick_count

    def subscribe(self, listener: TelemetryListener) -> None:
        """Register a listener called with every new TelemetryState.

        Args:
            listener: Function receiving the replaced state.
        """
        self._listeners.append(listener)

    def start(self) -> None:
        """Begin ticking at the configured interval. No-op if already running."""
        if self._tick_task is not None:
            return
        self._link_active = True
        self._tick_task = self._scheduler.every(self._settings.tick_interval_seconds, self.tick)
        logger.info(
            "Telemetry simulation started (interval=%.2fs, mode=%s)",
            self._settings.tick_interval_seconds,
            self._flight_mode,
        )

    def stop(self) -> None:
        """Cancel the periodic tick immediately."""
        self._link_active = False
        if self._tick_task is None:
            return
        self._scheduler.cancel(self._tick_task)
        self._tick_task = None
        logger.info("Telemetry simulation stopped after %d ticks", self._tick_count)

    def on_link_established(self) -> None:
        """Jump signal strength to full when the handshake completes."""
        self._link_active = True
        self._write(signal_strength=_MAX_SIGNAL)

    def on_link_lost(self) -> None:
        """Stop ticking and zero the link-dependent vitals."""
        self.stop()
        self._manual_input = ManualInput()
        self._write(signal_strength=0.0, speed=0.0, altitude=0.0)

    def set_flight_mode(self, mode: FlightMode) -> None:
        """Select the flight regime used by subsequent ticks.

        Args:
            mode: The new flight mode.

        Raises:
            LinkStateError: If the link is not connected.
        """
        if not self._link_active:
            raise LinkStateError(
                f"Cannot select flight mode {mode} while the drone is not connected",
                context={"requested_mode": str(mode)},
            )

        if mode != self._flight_mode:
            logger.info("Flight mode changed: %s -> %s", self._flight_mode, mode)
        self._flight_mode = mode
        if mode != FlightMode.MANUAL:
            self._manual_input = ManualInput()

    def apply_manual_input(self, direction: JoystickDirection) -> bool:
        """Apply a joystick command.

        UP and DOWN also apply an immediate one-shot speed and altitude delta.

        Args:
            direction: The directional command.

        Returns:
            True if the input was applied, False if ignored because the drone
            is not connected or not in MANUAL mode.
        """
        if not self._link_active or self._flight_mode != FlightMode.MANUAL:
            logger.debug(
                "Ignoring joystick %s (mode=%s, linked=%s)",
                direction,
                self._flight_mode,
                self._link_active,
            )
            return False

        tilt_x = self._manual_input.tilt_x
        tilt_z = self._manual_input.tilt_z
        if direction == JoystickDirection.UP:
            tilt_x = -_MANUAL_TILT
        elif direction == JoystickDirection.DOWN:
            tilt_x = _MANUAL_TILT
        elif direction == JoystickDirection.LEFT:
            tilt_z = _MANUAL_TILT
        elif direction == JoystickDirection.RIGHT:
            tilt_z = -_MANUAL_TILT
        else:
            tilt_x = 0.0
            tilt_z = 0.0
        self._manual_input = ManualInput(tilt_x=tilt_x, tilt_z=tilt_z)

        current = self._telemetry
        if direction == JoystickDirection.UP:
            self._write(
                speed=min(_MAX_MANUAL_SPEED, current.speed + _MANUAL_SPEED_STEP),
                altitude=current.altitude + _MANUAL_ALTITUDE_STEP,
            )
        elif direction == JoystickDirection.DOWN:
            self._write(
                speed=max(0.0, current.speed - _MANUAL_SPEED_STEP),
                altitude=max(0.0, current.altitude - _MANUAL_ALTITUDE_STEP),
            )
        return True

    def tick(self) -> None:
        """Advance the simulation by one step. No-op unless linked."""
        if not self._link_active:
            return

        settings = self._settings
        current = self._telemetry
        uniform = self._rng.uniform

        update: dict[str, Any] = {
            "battery": max(0.0, current.battery - settings.battery_decay_per_tick),
            "temperature": settings.baseline_temperature + uniform(0.0, settings.temperature_spread),
            "signal_strength": _clamp(
                current.signal_strength + uniform(-settings.signal_jitter, settings.signal_jitter),
                _MIN_LINKED_SIGNAL,
                _MAX_SIGNAL,
            ),
        }

        if self._flight_mode != FlightMode.MANUAL:
            jitter = settings.altitude_jitter
            update["altitude"] = max(0.0, current.altitude + uniform(-jitter, jitter))

        if self._flight_mode == FlightMode.AUTONOMOUS:
            update["speed"] = settings.cruise_speed + uniform(0.0, _AUTONOMOUS_SPEED_VARIATION)

        if self._flight_mode != FlightMode.MANUAL or self._manual_input.is_active:
            step = settings.position_jitter_degrees
            update["latitude"] = _clamp(current.latitude + uniform(-step, step), -90.0, 90.0)
            update["longitude"] = _clamp(current.longitude + uniform(-step, step), -180.0, 180.0)

        self._tick_count += 1
        self._write(**update)

    def _write(self, **update: float) -> None:
        """Replace the telemetry record and notify listeners."""
        self._telemetry = self._telemetry.model_copy(update=update)
        for listener in self._listeners:
            listener(self._telemetry)
