"""Errors raised by calls to external services."""

from typing import Any, ClassVar

from rakshak.exceptions.base import RakshakError


class ServiceError(RakshakError):
    """Base class for external service failures."""

    error_code: ClassVar[str] = "SERVICE_ERROR"


class ExternalServiceError(ServiceError):
    """External service call failed."""

    error_code: ClassVar[str] = "EXTERNAL_SERVICE_ERROR"

    def __init__(
        self,
        message: str,
        *,
        service_name: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize external service error.

        Args:
            message: Description of the failure.
            service_name: Name of the external service that failed.
            context: Additional context information.
        """
        context_dict = context or {}
        if service_name is not None:
            context_dict["service_name"] = service_name
        super().__init__(message, context=context_dict)


class ProcessingError(ServiceError):
    """Service response could not be processed."""

    error_code: ClassVar[str] = "PROCESSING_ERROR"
