"""
Synchronous, priority-ordered event emitter.

Provides:
- Per-channel handler registration with opaque ids
- Priority-ordered dispatch (stable within a priority)
- Cooperative cancellation through Event.cancel()
- One-shot handlers and a blocking await_event()
- A process-wide default emitter with module-level helpers

Handlers run on the calling thread. An exception raised by a handler
propagates out of emit() and the remaining handlers are skipped.

Example:
    from eventemitter import Event, EventEmitter, Priority

    emitter = EventEmitter(Event)

    def audit(channel, event):
        ...

    handler_id = emitter.on("user", audit, Priority.HIGH)
    emitter.emit("user", Event())
    emitter.off(handler_id)
"""

from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass
from typing import Any, Generic

from eventemitter.callback import Callback, EventT, Priority
from eventemitter.config import EmitterConfig
from eventemitter.errors import EventTimeoutError, EventTypeMismatchError
from eventemitter.event import Event
from eventemitter.logging_config import get_logger

logger = get_logger(__name__)


# =============================================================================
# Registration
# =============================================================================


@dataclass(frozen=True)
class Registration(Generic[EventT]):
    """A handler registered on a channel."""

    id: str
    channel: str
    callback: Callback[EventT]
    priority: Priority
    once: bool = False


def _handler_name(callback: Any) -> str:
    return getattr(callback, "__name__", type(callback).__name__)


# =============================================================================
# Event Emitter
# =============================================================================


class EventEmitter(Generic[EventT]):
    """
    Channel-based event emitter.

    All registry reads and writes go through a single re-entrant lock.
    emit() only holds the lock while taking a snapshot of the channel, so
    handlers are free to register, remove or emit on the same emitter.
    """

    def __init__(
        self,
        event_type: type[EventT] = Event,  # type: ignore[assignment]
        config: EmitterConfig | None = None,
    ):
        """
        Initialize the emitter.

        Args:
            event_type: Type every emitted event must be an instance of
            config: Emitter configuration
        """
        if not isinstance(event_type, type):
            raise TypeError("event_type must be a class")

        self.event_type = event_type
        self.config = config or EmitterConfig()

        self._registry: dict[str, list[Registration[EventT]]] = {}
        self._lock = threading.RLock()

    @property
    def default_channel(self) -> str:
        return self.config.default_channel

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def on(
        self,
        channel: str | Callback[EventT],
        callback: Callback[EventT] | Priority | None = None,
        priority: Priority | None = None,
        *,
        once: bool = False,
    ) -> Any:
        """
        Register a handler on a channel.

        Args:
            channel: Channel name, or the handler itself to use the default channel
            callback: Handler called as callback(channel, event)
            priority: Handler priority (defaults to config.default_priority)
            once: Remove the handler before its first invocation

        Returns:
            Registration id for off(), or a decorator when no callback is given

        Examples:
            emitter.on("user", handler)
            emitter.on("user", handler, Priority.HIGH)
            emitter.on(handler)                  # default channel
            emitter.on(handler, Priority.TOP)    # default channel

            @emitter.on("user")
            def handler(channel, event):
                ...
        """
        if callable(channel) and not isinstance(channel, str):
            # on(callback) / on(callback, priority)
            if isinstance(callback, Priority):
                priority, callback = callback, None
            if callback is not None:
                raise TypeError("callback given twice")
            return self._add(self.default_channel, channel, priority, once)

        if not isinstance(channel, str):
            raise TypeError(f"channel must be a string, got {type(channel).__name__}")

        if callback is None:
            def decorator(fn: Callback[EventT]) -> Callback[EventT]:
                self._add(channel, fn, priority, once)
                return fn

            return decorator

        if isinstance(callback, Priority):
            raise TypeError("callback must be callable, got a Priority")
        return self._add(channel, callback, priority, once)

    register = on

    def once(
        self,
        channel: str | Callback[EventT],
        callback: Callback[EventT] | Priority | None = None,
        priority: Priority | None = None,
    ) -> Any:
        """Register a handler that fires at most once, then removes itself."""
        return self.on(channel, callback, priority, once=True)

    def _add(
        self,
        channel: str,
        callback: Any,
        priority: Priority | None,
        once: bool,
    ) -> str:
        if not isinstance(channel, str):
            raise TypeError(f"channel must be a string, got {type(channel).__name__}")
        if not callable(callback):
            raise TypeError(f"callback must be callable, got {type(callback).__name__}")

        entry = Registration(
            id=str(uuid.uuid4()),
            channel=channel,
            callback=callback,
            priority=Priority(priority if priority is not None else self.config.default_priority),
            once=once,
        )

        with self._lock:
            self._registry.setdefault(channel, []).append(entry)

        logger.debug(
            "listener_registered",
            channel=channel,
            id=entry.id,
            handler=_handler_name(callback),
            priority=entry.priority.name,
            once=once,
        )
        return entry.id

    def off(self, identifier: str) -> None:
        """
        Remove a handler by the id returned from on().

        Unknown or already removed ids are ignored.

        Args:
            identifier: Registration id
        """
        removed = self._remove(identifier)
        if removed:
            logger.debug("listener_removed", id=identifier)

    deregister = off

    def _remove(self, identifier: str) -> int:
        """Remove registrations by id and return how many were removed."""
        removed = 0
        with self._lock:
            for channel in list(self._registry):
                entries = self._registry[channel]
                kept = [e for e in entries if e.id != identifier]
                if len(kept) == len(entries):
                    continue
                removed += len(entries) - len(kept)
                if kept:
                    self._registry[channel] = kept
                else:
                    del self._registry[channel]
        return removed

    def _claim(self, entry: Registration[EventT]) -> bool:
        """Remove a one-shot entry; False if another dispatch got to it first."""
        with self._lock:
            entries = self._registry.get(entry.channel)
            if not entries or entry not in entries:
                return False
            entries.remove(entry)
            if not entries:
                del self._registry[entry.channel]
            return True

    def clear(self, channel: str | None = None) -> None:
        """
        Remove all handlers.

        Args:
            channel: Only clear this channel, or None for every channel
        """
        with self._lock:
            if channel is None:
                self._registry.clear()
            else:
                self._registry.pop(channel, None)

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    def _sorted_entries(self, channel: str) -> list[Registration[EventT]]:
        """Snapshot a channel's handlers, highest priority first."""
        with self._lock:
            entries = list(self._registry.get(channel, ()))
        # sorted() is stable with reverse=True, so ties keep registration order
        return sorted(entries, key=lambda e: e.priority, reverse=True)

    def _check_type(self, event: Any) -> None:
        if self.config.strict_types and not isinstance(event, self.event_type):
            raise EventTypeMismatchError(self.event_type, type(event))

    def emit(self, channel: str | EventT, event: EventT | None = None) -> EventT:
        """
        Dispatch an event to every handler on a channel.

        Handlers run in descending priority order on the calling thread.
        Dispatch stops as soon as the event is cancelled.

        Args:
            channel: Channel name, or the event itself to use the default channel
            event: Event to dispatch

        Returns:
            The dispatched event

        Raises:
            EventTypeMismatchError: If the event is not an instance of event_type
        """
        if event is None:
            if isinstance(channel, str):
                raise TypeError("emit() missing event")
            channel, event = self.default_channel, channel
        elif not isinstance(channel, str):
            raise TypeError(f"channel must be a string, got {type(channel).__name__}")

        self._check_type(event)

        entries = self._sorted_entries(channel)
        delivered = 0

        for index, entry in enumerate(entries):
            if getattr(event, "cancelled", False):
                logger.debug(
                    "event_cancelled",
                    channel=channel,
                    delivered=delivered,
                    skipped=len(entries) - index,
                )
                break

            if entry.once and not self._claim(entry):
                continue

            try:
                entry.callback(channel, event)
            except Exception:
                logger.debug(
                    "event_handler_error",
                    channel=channel,
                    id=entry.id,
                    handler=_handler_name(entry.callback),
                )
                raise
            delivered += 1

        logger.debug(
            "event_emitted",
            channel=channel,
            event_type=type(event).__name__,
            handlers=delivered,
        )
        return event

    def await_event(self, channel: str | None = None, timeout: float | None = None) -> EventT:
        """
        Block until an event is emitted on a channel and return it.

        Registers a TOP priority one-shot handler, so the handler is gone
        once the event has been captured. Another thread (or a handler
        further up this thread's stack) must emit on the channel.

        Args:
            channel: Channel to wait on (defaults to the default channel)
            timeout: Seconds to wait, or None to wait forever

        Returns:
            The first event emitted on the channel

        Raises:
            EventTimeoutError: If timeout elapses first
        """
        if channel is None:
            channel = self.default_channel

        received = threading.Event()
        captured: list[EventT] = []

        def capture(_channel: str, event: EventT) -> None:
            captured.append(event)
            received.set()

        handler_id = self.on(channel, capture, Priority.TOP, once=True)

        if not received.wait(timeout):
            if self._remove(handler_id):
                logger.debug("await_timeout", channel=channel, timeout=timeout)
                raise EventTimeoutError(channel, timeout)  # type: ignore[arg-type]
            # An emit already claimed the handler and is about to deliver
            received.wait()

        return captured[0]

    # -------------------------------------------------------------------------
    # Inspection
    # -------------------------------------------------------------------------

    def listener_count(self, channel: str | None = None) -> int:
        """Number of handlers on a channel, or on all channels when None."""
        with self._lock:
            if channel is not None:
                return len(self._registry.get(channel, ()))
            return sum(len(entries) for entries in self._registry.values())

    def channels(self) -> list[str]:
        """Channels that currently have at least one handler."""
        with self._lock:
            return [name for name, entries in self._registry.items() if entries]

    def has_listener(self, identifier: str) -> bool:
        with self._lock:
            return any(
                entry.id == identifier
                for entries in self._registry.values()
                for entry in entries
            )

    def get_stats(self) -> dict[str, Any]:
        """Get emitter statistics."""
        with self._lock:
            return {
                "channels": len(self._registry),
                "total_registrations": sum(len(e) for e in self._registry.values()),
                "event_type": self.event_type.__name__,
                "default_channel": self.default_channel,
            }


# =============================================================================
# Global Instance
# =============================================================================

_event_emitter: EventEmitter[Event] | None = None
_global_lock = threading.Lock()


def get_event_emitter() -> EventEmitter[Event]:
    """Get or create the global event emitter instance."""
    global _event_emitter
    with _global_lock:
        if _event_emitter is None:
            _event_emitter = EventEmitter(Event, EmitterConfig.from_env())
        return _event_emitter


def reset_event_emitter() -> None:
    """Drop the global instance; the next get_event_emitter() builds a new one."""
    global _event_emitter
    with _global_lock:
        _event_emitter = None


# =============================================================================
# Convenience Functions
# =============================================================================


def on(
    channel: str | Callback[Event],
    callback: Callback[Event] | Priority | None = None,
    priority: Priority | None = None,
    *,
    once: bool = False,
) -> Any:
    """
    Register a handler on the global emitter (can be used as decorator).

    Usage:
        @on("user")
        def on_user(channel, event):
            ...

        # Or:
        handler_id = on("user", handler, Priority.HIGH)
    """
    return get_event_emitter().on(channel, callback, priority, once=once)


def off(identifier: str) -> None:
    """Remove a handler from the global emitter."""
    get_event_emitter().off(identifier)


def emit(channel: str | Event, event: Event | None = None) -> Event:
    """Emit an event on the global emitter."""
    return get_event_emitter().emit(channel, event)

