"""
Base event type.

Every payload passed through an EventEmitter derives from Event. The only
state the base carries is a one-way cancellation flag that handlers set to
stop dispatch to lower-priority handlers.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Event:
    """
    Base class for emitted events.

    Subclass it (as a dataclass or a plain class) to carry domain data:

        @dataclass
        class UserCreated(Event):
            user_id: int

    Subclasses do not need to call ``super().__init__()``; the flag falls back
    to the class-level default until ``cancel()`` is called.
    """

    _cancelled: bool = field(default=False, init=False, repr=False, compare=False)

    @property
    def cancelled(self) -> bool:
        """Whether a handler has cancelled this event."""
        return self._cancelled

    def cancel(self) -> None:
        """Stop dispatch to the remaining handlers. Cannot be undone."""
        self._cancelled = True
