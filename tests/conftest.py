"""Shared pytest fixtures for the Hockey Tapper test suite."""

import copy
import random
from typing import Any, Dict, List

import pytest

from models.hockey import SessionConfig
from tapper import logging as tapper_logging
from tapper.logging import LogSink, close_all_sinks, disable_logging, register_sink, set_default_sink
from tapper.profile_loader import load_default_profile


class RecordingSink(LogSink):
    """Sink that keeps every structured record in memory."""

    def __init__(self):
        self.records: List[Dict[str, Any]] = []
        self.closed = False

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        self.records.append({'module': module, **record})

    def flush(self) -> None:
        pass

    def close(self) -> None:
        self.closed = True

    def of_type(self, event_type: str) -> List[Dict[str, Any]]:
        return [r for r in self.records if r.get('type') == event_type]


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


@pytest.fixture(autouse=True)
def quiet_logging():
    """Silence console output and restore logging config after each test."""
    saved = copy.deepcopy(tapper_logging._config)
    disable_logging()
    yield
    close_all_sinks()
    tapper_logging._config.clear()
    tapper_logging._config.update(saved)


@pytest.fixture
def recording_sink():
    """Capture structured records from every module."""
    sink = RecordingSink()
    set_default_sink(sink)
    for module in ('session', 'leaderboard'):
        register_sink(module, sink)
    yield sink
    set_default_sink(None)


@pytest.fixture
def rng():
    """Seeded random source for deterministic particle bursts."""
    return random.Random(42)


@pytest.fixture
def fake_clock():
    return FakeClock(now=1_000_000.0)


@pytest.fixture
def profile():
    """The packaged default profile."""
    return load_default_profile()


@pytest.fixture
def short_game_profile(profile):
    """Default profile limited to three shots."""
    return profile.model_copy(update={'session': SessionConfig(shots_per_game=3)})
