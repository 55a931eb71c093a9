"""Context variables for session-scoped logging data.

Uses contextvars so tasks spawned on the event loop inherit the values that
were current when they were created.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any
from uuid import uuid4

session_id: ContextVar[str] = ContextVar("session_id", default="")

_extra_context: ContextVar[dict[str, Any] | None] = ContextVar("extra_context", default=None)


def get_session_id() -> str:
    """Get the current dashboard session ID.

    Returns:
        The session ID for the current context.
    """
    return session_id.get()


def set_session_id(value: str) -> None:
    """Set the dashboard session ID for the current context.

    Args:
        value: The session ID.
    """
    session_id.set(value)


def generate_session_id() -> str:
    """Generate and set a new session ID.

    Returns:
        The generated session ID.
    """
    new_id = uuid4().hex[:12]
    session_id.set(new_id)
    return new_id


def get_extra_context() -> dict[str, Any]:
    """Get the current extra context.

    Returns:
        Dictionary of extra context fields.
    """
    context = _extra_context.get()
    if context is None:
        return {}
    return context.copy()


def set_extra_context(**kwargs: Any) -> None:
    """Set additional context fields to include in all log messages.

    Args:
        **kwargs: Key-value pairs to include in log messages.
    """
    current = _extra_context.get()
    current = {} if current is None else current.copy()
    current.update(kwargs)
    _extra_context.set(current)


@contextmanager
def extra_context(**kwargs: Any) -> Iterator[None]:
    """Add context fields for the duration of a block.

    Args:
        **kwargs: Key-value pairs to include in log messages inside the block.
    """
    current = _extra_context.get()
    merged = {} if current is None else current.copy()
    merged.update(kwargs)
    token = _extra_context.set(merged)
    try:
        yield
    finally:
        _extra_context.reset(token)


def clear_context() -> None:
    """Clear all context (session ID and extra context)."""
    session_id.set("")
    _extra_context.set(None)
