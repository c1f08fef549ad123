"""Shared fixtures: a fake clock, a manual tick scheduler and an API client."""

from dataclasses import dataclass, field

import pytest
from fastapi.testclient import TestClient

from pacer.main import create_app
from pacer.schemas.settings import PacingSettings
from pacer.services.playback import PacingEngine


class FakeClock:
    """Monotonic clock advanced by hand (seconds)."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@dataclass
class ManualTick:
    due: float
    delay_ms: float
    callback: object
    cancelled: bool = field(default=False)

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Tick scheduler that only runs callbacks when the test says so."""

    def __init__(self, clock: FakeClock):
        self.clock = clock
        self.ticks: list[ManualTick] = []

    def call_later(self, delay_ms, callback):
        tick = ManualTick(due=self.clock.now + delay_ms / 1000.0, delay_ms=delay_ms, callback=callback)
        self.ticks.append(tick)
        return tick

    @property
    def pending(self) -> list[ManualTick]:
        return [tick for tick in self.ticks if not tick.cancelled]

    def run_next(self) -> bool:
        """Advance the clock to the earliest pending tick and run it."""
        pending = self.pending
        if not pending:
            return False

        tick = min(pending, key=lambda t: t.due)
        self.ticks.remove(tick)
        self.clock.now = max(self.clock.now, tick.due)
        tick.callback()
        return True

    def run_all(self, limit: int = 10_000) -> int:
        runs = 0
        while runs < limit and self.run_next():
            runs += 1
        return runs


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler(clock):
    return ManualScheduler(clock)


@pytest.fixture
def plain_settings():
    """Settings with every micropause and ramp switched off (200 ms per token)."""
    return PacingSettings(wpm=300, enable_micropause=False, enable_slow_start=False)


@pytest.fixture
def make_engine(clock, scheduler):
    """Factory building an engine wired to the fake clock and manual scheduler."""

    def _make(settings: PacingSettings | None = None, **callbacks) -> PacingEngine:
        return PacingEngine(settings, scheduler=scheduler, clock=clock, **callbacks)

    return _make


@pytest.fixture
def client():
    """FastAPI test client."""
    with TestClient(create_app()) as test_client:
        yield test_client
