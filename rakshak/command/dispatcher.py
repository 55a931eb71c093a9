"""One-shot fly command dispatch to the drone's HTTP endpoint.

Drone-side HTTP servers typically send no cross-origin headers, so a dashboard
client cannot observe the response status or body. The dispatcher therefore
treats any request that completes without raising as SENT and never reads the
response. Failures are classified, never raised.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol
from uuid import uuid4

import requests

from rakshak.command.models import CommandResult, FlyCommand
from rakshak.exceptions import CommandInFlightError
from rakshak.logging.context import extra_context

logger = logging.getLogger(__name__)

_DEFAULT_PORT: int = 5000
_DEFAULT_TIMEOUT_SECONDS: float = 5.0
_DEFAULT_ALTITUDE_METERS: float = 15.0


class CommandTransport(Protocol):
    """Fire-and-forget transport for a command URL."""

    async def fire(self, url: str) -> None:
        """Issue the request. Returning means the request was dispatched."""
        ...

    def close(self) -> None:
        """Release transport resources."""
        ...


class RequestsTransport:
    """Transport issuing a GET with requests on a worker thread.

    The response is closed without reading its status or body.
    """

    def __init__(
        self,
        timeout_seconds: float = _DEFAULT_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            timeout_seconds: Socket timeout handed to requests so an abandoned
                worker thread also finishes.
            session: Optional session to reuse.
        """
        self._timeout_seconds = timeout_seconds
        self._session = session or requests.Session()

    async def fire(self, url: str) -> None:
        """Issue the GET on a worker thread."""
        await asyncio.to_thread(self._get, url)

    def close(self) -> None:
        """Close the underlying session."""
        self._session.close()

    def _get(self, url: str) -> None:
        response = self._session.get(url, timeout=self._timeout_seconds, stream=True)
        response.close()


def classify_failure(error: BaseException) -> CommandResult:
    """Map a dispatch error to a command result.

    Timeouts are checked first because requests' connect timeout is both a
    timeout and a connection error.

    Args:
        error: The exception raised while dispatching.

    Returns:
        TIMEOUT, CONNECTION_REFUSED, or FAILED.
    """
    if isinstance(error, (TimeoutError, requests.Timeout)):
        return CommandResult.TIMEOUT
    if isinstance(error, (ConnectionError, requests.ConnectionError)):
        return CommandResult.CONNECTION_REFUSED
    return CommandResult.FAILED


class CommandDispatcher:
    """Sends one fly command at a time with a bounded timeout.

    Exactly one terminal CommandResult is produced per ``send`` call, and
    ``is_sending`` is cleared on every path out of it.
    """

    def __init__(
        self,
        transport: CommandTransport | None = None,
        *,
        port: int = _DEFAULT_PORT,
        timeout_seconds: float = _DEFAULT_TIMEOUT_SECONDS,
        default_altitude: float = _DEFAULT_ALTITUDE_METERS,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            transport: Transport used to issue requests. Defaults to requests.
            port: Drone command endpoint port.
            timeout_seconds: Time allowed for one dispatch.
            default_altitude: Altitude used when ``send`` is given none.
        """
        self._transport = transport or RequestsTransport(timeout_seconds=timeout_seconds)
        self._port = port
        self._timeout_seconds = timeout_seconds
        self._default_altitude = default_altitude
        self._is_sending = False
        self._last_result: CommandResult | None = None

    @property
    def is_sending(self) -> bool:
        """Return whether a dispatch is in flight."""
        return self._is_sending

    @property
    def last_result(self) -> CommandResult | None:
        """Return the result of the most recent settled dispatch."""
        return self._last_result

    @property
    def timeout_seconds(self) -> float:
        """Return the dispatch timeout."""
        return self._timeout_seconds

    def build_command(
        self,
        host: str,
        latitude: float,
        longitude: float,
        altitude: float | None = None,
    ) -> FlyCommand:
        """Build the fly command for the given coordinates.

        Raises:
            pydantic.ValidationError: If the host or coordinates are invalid.
        """
        return FlyCommand(
            host=host,
            port=self._port,
            latitude=latitude,
            longitude=longitude,
            altitude=self._default_altitude if altitude is None else altitude,
        )

    async def send(
        self,
        host: str,
        latitude: float,
        longitude: float,
        altitude: float | None = None,
    ) -> CommandResult:
        """Dispatch a fly command and classify the outcome.

        Args:
            host: Drone host or IP as typed by the operator.
            latitude: Target latitude in degrees.
            longitude: Target longitude in degrees.
            altitude: Target altitude in meters. Defaults to 15.

        Returns:
            SENT, TIMEOUT, CONNECTION_REFUSED, or FAILED.

        Raises:
            CommandInFlightError: If another dispatch is still pending.
        """
        if self._is_sending:
            raise CommandInFlightError(
                "A command is already being transmitted",
                context={"host": host},
            )

        self._is_sending = True
        with extra_context(command_id=uuid4().hex[:8]):
            try:
                command = self.build_command(host, latitude, longitude, altitude)
                logger.info("Dispatching fly command: %s", command.url)
                await asyncio.wait_for(
                    self._transport.fire(command.url),
                    timeout=self._timeout_seconds,
                )
            except Exception as error:
                result = classify_failure(error)
                logger.warning(
                    "Fly command to %s settled as %s (%s: %s)",
                    host,
                    result,
                    type(error).__name__,
                    error,
                )
            else:
                result = CommandResult.SENT
                logger.info("Fly command dispatched to %s", host)
            finally:
                self._is_sending = False

        self._last_result = result
        return result

    def close(self) -> None:
        """Release the transport."""
        self._transport.close()
