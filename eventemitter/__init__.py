"""
In-process event emitter.

Handlers register on named channels and are called synchronously, in
priority order, when an event is emitted on that channel. Any handler can
cancel the event to stop lower-priority handlers from seeing it.
"""

from eventemitter.callback import Callback, Priority
from eventemitter.config import GLOBAL_CHANNEL, EmitterConfig
from eventemitter.emitter import (
    EventEmitter,
    Registration,
    emit,
    get_event_emitter,
    off,
    on,
    reset_event_emitter,
)
from eventemitter.errors import EventEmitterError, EventTimeoutError, EventTypeMismatchError
from eventemitter.event import Event

__version__ = "0.1.0"

__all__ = [
    "GLOBAL_CHANNEL",
    "Callback",
    "EmitterConfig",
    "Event",
    "EventEmitter",
    "EventEmitterError",
    "EventTimeoutError",
    "EventTypeMismatchError",
    "Priority",
    "Registration",
    "emit",
    "get_event_emitter",
    "off",
    "on",
    "reset_event_emitter",
]
