import itertools
from datetime import datetime

import pytest

from readlog.application.clock import Clock
from readlog.application.mutations import MutationEngine
from readlog.application.tracker import ReadingTracker
from readlog.infrastructure.adapters.memory_gateway import InMemoryRecordGateway

# 2026-10-16 is a Friday.
FRIDAY = datetime(2026, 10, 16, 9, 30)


class MutableClock(Clock):
    """Clock whose current time can be moved by tests."""

    def __init__(self, now: datetime):
        self.current = now
        super().__init__(lambda: self.current)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep the user's real config file and READLOG_* variables out of tests."""
    monkeypatch.setattr(
        "readlog.application.config.CONFIG_FILE", tmp_path / "no-such-config.toml"
    )
    for var in ("READLOG_BACKEND", "READLOG_DB_PATH", "READLOG_VERBOSE"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def clock():
    return MutableClock(FRIDAY)


@pytest.fixture
def gateway():
    return InMemoryRecordGateway()


@pytest.fixture
def tracker(gateway, clock):
    ids = (f"id-{n}" for n in itertools.count(1))
    t = ReadingTracker(gateway, clock=clock)
    t.engine = MutationEngine(gateway, t.store, clock, id_factory=lambda: next(ids))
    t.start()
    yield t
    t.close()
