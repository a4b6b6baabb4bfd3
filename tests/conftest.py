"""Pytest configuration and shared fixtures."""
import pytest

from eventemitter import Event, EventEmitter, reset_event_emitter


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: mark test as slow running")
    config.addinivalue_line("markers", "threaded: test starts background threads")


class Recorder:
    """Collects (name, channel) pairs from handlers built by ``handler``."""

    def __init__(self):
        self.calls: list[tuple[str, str]] = []

    def handler(self, name: str, cancel: bool = False):
        def _handler(channel, event):
            self.calls.append((name, channel))
            if cancel:
                event.cancel()

        _handler.__name__ = name
        return _handler

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self.calls]


@pytest.fixture
def emitter():
    return EventEmitter(Event)


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture(autouse=True)
def _fresh_global_emitter(monkeypatch):
    for name in (
        "EVENT_EMITTER_DEFAULT_CHANNEL",
        "EVENT_EMITTER_DEFAULT_PRIORITY",
        "EVENT_EMITTER_STRICT_TYPES",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_event_emitter()
    yield
    reset_event_emitter()
