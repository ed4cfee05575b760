"""Pytest configuration and fixtures."""

import asyncio
import os

import pytest

from seq2seq_viz import SimulationConfig, SimulationEngine, VectorGenerator

# Never let a developer's real key leak into tests
os.environ.pop("GEMINI_API_KEY", None)

TEST_KEY = "test-key"


class ManualTimer:
    """Handle returned by ManualScheduler."""

    def __init__(self, due: float, callback):
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler driven by a virtual clock (milliseconds).

    Timers only fire from ``advance()``, so tests control time exactly.
    """

    def __init__(self):
        self.now = 0.0
        self.timers: list[ManualTimer] = []

    def call_later(self, delay_ms, callback) -> ManualTimer:
        timer = ManualTimer(self.now + delay_ms, callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> list[ManualTimer]:
        return [t for t in self.timers if not t.cancelled]

    def advance(self, ms: float) -> None:
        """Move the clock forward, firing due timers in order."""
        target = self.now + ms
        while True:
            due = [t for t in self.pending if t.due <= target]
            if not due:
                break
            timer = min(due, key=lambda t: t.due)
            self.timers.remove(timer)
            self.now = timer.due
            timer.callback()
        self.now = target


class StubGateway:
    """Gateway returning a fixed translation or raising a fixed failure."""

    def __init__(self, result: str = "आप कैसे हैं", error: Exception | None = None):
        self.result = result
        self.error = error
        self.calls: list[tuple] = []

    async def translate(self, text, source_name, target_name, credential):
        self.calls.append((text, source_name, target_name, credential))
        if self.error is not None:
            raise self.error
        return self.result


class PendingGateway:
    """Gateway whose calls stay in flight until the test resolves them."""

    def __init__(self):
        self.futures: list[asyncio.Future] = []

    @property
    def future(self) -> asyncio.Future:
        return self.futures[-1]

    async def translate(self, text, source_name, target_name, credential):
        future = asyncio.get_running_loop().create_future()
        self.futures.append(future)
        return await future


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def config():
    return SimulationConfig(api_key=TEST_KEY, seed=0)


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def gateway():
    return StubGateway()


@pytest.fixture
def snapshots():
    """List collecting every snapshot an engine publishes."""
    return []


@pytest.fixture
def engine(config, scheduler, gateway, snapshots):
    return SimulationEngine(
        gateway=gateway,
        config=config,
        scheduler=scheduler,
        vectors=VectorGenerator(config.vector_size, seed=0),
        on_snapshot=snapshots.append,
    )


@pytest.fixture
def started(engine):
    """Engine seeded with "how are you" -> "आप कैसे हैं", paused at Encoding step 0."""
    run(engine.start_translation("how are you", "en", "hi"))
    return engine
