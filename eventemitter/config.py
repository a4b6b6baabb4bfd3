"""
Emitter configuration.

Defaults can be overridden from the environment:

    EVENT_EMITTER_DEFAULT_CHANNEL   channel used when none is given ("global")
    EVENT_EMITTER_DEFAULT_PRIORITY  TOP, HIGH, MEDIUM or LOW (LOW)
    EVENT_EMITTER_STRICT_TYPES      reject events of the wrong type (1)
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from eventemitter.callback import Priority

GLOBAL_CHANNEL = "global"

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean, got {value!r}")


def _parse_priority(value: str | int | Priority) -> Priority:
    if isinstance(value, Priority):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return Priority(value)
        except ValueError:
            raise ValueError(f"priority must be 1-4, got {value!r}") from None
    if not isinstance(value, str):
        raise ValueError(f"priority must be a Priority, int or name, got {value!r}")
    try:
        return Priority[value.strip().upper()]
    except KeyError:
        names = ", ".join(p.name for p in Priority)
        raise ValueError(f"priority must be one of {names}, got {value!r}") from None


@dataclass
class EmitterConfig:
    """
    Configuration for EventEmitter behavior.

    Args:
        default_channel: Channel used by on(callback) and emit(event)
        default_priority: Priority used when on() is called without one
        strict_types: Reject events that are not instances of the emitter's event type
    """

    default_channel: str = GLOBAL_CHANNEL
    default_priority: Priority = Priority.LOW
    strict_types: bool = True

    def __post_init__(self):
        if not isinstance(self.default_channel, str):
            raise ValueError("default_channel must be a string")
        self.default_priority = _parse_priority(self.default_priority)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> EmitterConfig:
        """Build a config from EVENT_EMITTER_* environment variables."""
        env = os.environ if environ is None else environ
        kwargs: dict = {}

        if "EVENT_EMITTER_DEFAULT_CHANNEL" in env:
            kwargs["default_channel"] = env["EVENT_EMITTER_DEFAULT_CHANNEL"]
        if "EVENT_EMITTER_DEFAULT_PRIORITY" in env:
            kwargs["default_priority"] = env["EVENT_EMITTER_DEFAULT_PRIORITY"]
        if "EVENT_EMITTER_STRICT_TYPES" in env:
            kwargs["strict_types"] = _parse_bool(
                "EVENT_EMITTER_STRICT_TYPES", env["EVENT_EMITTER_STRICT_TYPES"]
            )

        return cls(**kwargs)
