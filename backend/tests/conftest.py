from collections.abc import Callable, Generator

import pytest
from fastapi.testclient import TestClient

from brewguide.main import create_app


class ManualTick:
    def __init__(self, callback: Callable[[], None]) -> None:
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualTickScheduler:
    """Fires tick callbacks only when a test calls ``advance``."""

    def __init__(self) -> None:
        self.ticks: list[ManualTick] = []

    def every(self, interval_seconds: float, callback: Callable[[], None]) -> ManualTick:
        tick = ManualTick(callback)
        self.ticks.append(tick)
        return tick

    @property
    def active(self) -> list[ManualTick]:
        return [tick for tick in self.ticks if not tick.cancelled]

    def advance(self, seconds: int) -> None:
        for _ in range(seconds):
            for tick in self.active:
                if not tick.cancelled:
                    tick.callback()


@pytest.fixture
def scheduler() -> ManualTickScheduler:
    return ManualTickScheduler()


@pytest.fixture
def client(scheduler: ManualTickScheduler) -> Generator[TestClient, None, None]:
    app = create_app(tick_scheduler=scheduler)
    with TestClient(app) as test_client:
        yield test_client
