"""Relief payload selection and release."""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import TYPE_CHECKING

from rakshak.exceptions import LinkStateError, PayloadNotSelectedError

if TYPE_CHECKING:
    from rakshak.link.lifecycle import ConnectionLifecycle

logger = logging.getLogger(__name__)


class PayloadType(StrEnum):
    """Relief supplies the drone can carry."""

    SALINE = "SALINE"
    BLOOD_UNIT = "BLOOD_UNIT"
    MEDICINE_KIT = "MEDICINE_KIT"
    NONE = "NONE"

    @property
    def label(self) -> str:
        """Return the operator-facing name."""
        return self.value.replace("_", " ")


class PayloadManager:
    """Holds the selected payload and releases it while linked."""

    def __init__(self, lifecycle: ConnectionLifecycle) -> None:
        """Initialize the manager with nothing selected.

        Args:
            lifecycle: Connection lifecycle gating select and release.
        """
        self._lifecycle = lifecycle
        self._selected = PayloadType.NONE

    @property
    def selected(self) -> PayloadType:
        """Return the selected payload."""
        return self._selected

    def select(self, payload: PayloadType) -> None:
        """Select the payload to drop next.

        Raises:
            LinkStateError: If the drone is not connected.
        """
        self._require_link("select a payload")
        self._selected = payload
        logger.info("Payload selected: %s", payload.label)

    def release(self) -> PayloadType:
        """Drop the selected payload and clear the selection.

        Returns:
            The payload that was released.

        Raises:
            LinkStateError: If the drone is not connected.
            PayloadNotSelectedError: If no payload is selected.
        """
        self._require_link("release a payload")
        if self._selected == PayloadType.NONE:
            raise PayloadNotSelectedError("Select a payload before releasing")

        released = self._selected
        self._selected = PayloadType.NONE
        logger.warning("DROPPING PAYLOAD: %s", released.label)
        return released

    def _require_link(self, action: str) -> None:
        if not self._lifecycle.is_connected:
            raise LinkStateError(
                f"Cannot {action} while the drone is not connected",
                current_status=self._lifecycle.status.value,
            )
