"""Ground station exception hierarchy.

Architecture:
    RakshakError (base)
    ├── OperatorError
    │   ├── LinkStateError
    │   ├── NoTargetError
    │   ├── CommandInFlightError
    │   └── PayloadNotSelectedError
    └── ServiceError
        ├── ExternalServiceError
        └── ProcessingError

Command dispatch failures are never raised; they are classified into a
``CommandResult``. Service errors stay inside the AI collaborator, which turns
them into safe defaults.

Usage:
    from rakshak.exceptions import NoTargetError

    if tracker.target is None:
        raise NoTargetError("No drop zone selected")
"""

from rakshak.exceptions.base import RakshakError
from rakshak.exceptions.operator_errors import (
    CommandInFlightError,
    LinkStateError,
    NoTargetError,
    OperatorError,
    PayloadNotSelectedError,
)
from rakshak.exceptions.service_errors import (
    ExternalServiceError,
    ProcessingError,
    ServiceError,
)

__all__ = [
    "CommandInFlightError",
    "ExternalServiceError",
    "LinkStateError",
    "NoTargetError",
    "OperatorError",
    "PayloadNotSelectedError",
    "ProcessingError",
    "RakshakError",
    "ServiceError",
]
