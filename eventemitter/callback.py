"""
Callback protocol and handler priorities.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Protocol, TypeVar, runtime_checkable

from eventemitter.event import Event

EventT = TypeVar("EventT", bound=Event)
EventT_contra = TypeVar("EventT_contra", bound=Event, contravariant=True)


class Priority(IntEnum):
    """Handler priority (higher runs first)."""

    # Only for rare cases that must run before everything else; use HIGH otherwise
    TOP = 4
    HIGH = 3
    MEDIUM = 2
    # Default, runs last
    LOW = 1


@runtime_checkable
class Callback(Protocol[EventT_contra]):
    """
    Handler invoked by the emitter with the channel name and the event.

    Any callable with this shape works:

        emitter.on("user", lambda channel, event: print(channel, event))

        class AuditHandler:
            def __call__(self, channel: str, event: UserCreated) -> None:
                ...

        emitter.on("user", AuditHandler())
    """

    def __call__(self, channel: str, event: EventT_contra) -> None: ...
