"""Errors raised when an operator action violates a precondition."""

from typing import Any, ClassVar

from rakshak.exceptions.base import RakshakError


class OperatorError(RakshakError):
    """Base class for rejected operator actions."""

    error_code: ClassVar[str] = "OPERATOR_ERROR"


class LinkStateError(OperatorError):
    """Action requires a different connection state."""

    error_code: ClassVar[str] = "LINK_STATE"

    def __init__(
        self,
        message: str,
        *,
        current_status: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize link state error.

        Args:
            message: Description of the rejected action.
            current_status: Connection status at the time of the action.
            context: Additional context information.
        """
        context_dict = context or {}
        if current_status is not None:
            context_dict["current_status"] = current_status
        super().__init__(message, context=context_dict)


class NoTargetError(OperatorError):
    """No mission target is set."""

    error_code: ClassVar[str] = "NO_TARGET"


class CommandInFlightError(OperatorError):
    """A command dispatch is already pending."""

    error_code: ClassVar[str] = "COMMAND_IN_FLIGHT"


class PayloadNotSelectedError(OperatorError):
    """Release requested without a selected payload."""

    error_code: ClassVar[str] = "PAYLOAD_NOT_SELECTED"
