"""
Exceptions raised by the event emitter.
"""

from __future__ import annotations


class EventEmitterError(Exception):
    """Base class for event emitter errors."""


class EventTypeMismatchError(EventEmitterError, TypeError):
    """Raised when an emitted event is not an instance of the emitter's event type."""

    def __init__(self, expected: type, actual: type, message: str | None = None):
        self.expected = expected
        self.actual = actual
        self.message = message or (
            f"Event type {actual.__name__} does not match "
            f"emitter event type {expected.__name__}"
        )
        super().__init__(self.message)


class EventTimeoutError(EventEmitterError, TimeoutError):
    """Raised when await_event gives up before an event arrives."""

    def __init__(self, channel: str, timeout: float, message: str | None = None):
        self.channel = channel
        self.timeout = timeout
        self.message = message or (
            f"No event on channel '{channel}' within {timeout}s"
        )
        super().__init__(self.message)
