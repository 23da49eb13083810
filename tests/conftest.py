# tests/conftest.py - shared fixtures

import random

import pytest

from text_entry_study.export import MemorySink
from text_entry_study.utils.config_manager import Config
from text_entry_study.utils.logger_utils import Log


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start: int = 1_700_000_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class DeferredScheduler:
    """Collects pacing callbacks so tests can fire them explicitly."""

    def __init__(self):
        self.pending = []

    def __call__(self, delay, callback):
        self.pending.append((delay, callback))

    def fire(self):
        delay, callback = self.pending.pop(0)
        callback()
        return delay


# 40 distinct phrases, each with a unique marker word
CORPUS = [f"phrase number {i} says word{chr(97 + i % 26)}{'x' * (i // 26)} here" for i in range(40)]


@pytest.fixture
def quiet_log(tmp_path):
    return Log(path=str(tmp_path / "logs" / "study.log"), echo=False)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler():
    return DeferredScheduler()


@pytest.fixture
def sink():
    return MemorySink()


@pytest.fixture
def corpus():
    return list(CORPUS)


@pytest.fixture
def config():
    return Config()
