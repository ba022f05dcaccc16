"""Shared test fixtures for catlog test suite."""

import io
from datetime import datetime

import pytest

from catlog.logger import CategoryLogger


FIXED_NOW = datetime(2026, 10, 18, 9, 5, 3, 250000)
FIXED_STAMP = "2026-10-18T09:05:03.25"


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: multi-threaded or subprocess tests")


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------
class FakeClock:
    """Monotonic nanosecond clock advanced by hand."""

    def __init__(self, start=1_000_000):
        self.ns = start

    def __call__(self):
        return self.ns

    def advance(self, ns):
        self.ns += ns


class RecordingListener:
    """Listener that remembers every (category, line) it receives."""

    def __init__(self):
        self.calls = []

    def on_log(self, category, line):
        self.calls.append((category, line))


class ExplodingListener:
    """Listener that always raises."""

    def __init__(self):
        self.attempts = 0

    def on_log(self, category, line):
        self.attempts += 1
        raise RuntimeError("listener boom")


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def buf():
    """A StringIO buffer for the primary stream."""
    return io.StringIO()


@pytest.fixture
def diag():
    """A StringIO buffer for diagnostic reports."""
    return io.StringIO()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def logger(buf, diag, clock):
    """A CategoryLogger with fixed time sources writing to buffers."""
    return CategoryLogger(buf, diagnostics=diag, clock=clock,
                          now=lambda: FIXED_NOW)


@pytest.fixture
def recorder():
    return RecordingListener()


@pytest.fixture
def sink_dir(tmp_path):
    """Directory for file sinks."""
    d = tmp_path / "logs"
    d.mkdir()
    return d
