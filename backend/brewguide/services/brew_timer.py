from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Protocol

from brewguide.schemas.recipe import BrewMethod, CalculatedRecipe, RecipeStep
from brewguide.schemas.timer import TimerStatus

logger = logging.getLogger("brewguide.timer")

NOT_STARTED = -1


class TickHandle(Protocol):
    def cancel(self) -> None: ...


class TickScheduler(Protocol):
    def every(self, interval_seconds: float, callback: Callable[[], None]) -> TickHandle: ...


class RecurringTick:
    """A repeating ``call_later`` chain on one event loop.

    The next tick is booked before the callback runs, so a callback that
    cancels its own handle stops the chain immediately.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop, interval_seconds: float, callback: Callable[[], None]) -> None:
        self._loop = loop
        self._interval_seconds = interval_seconds
        self._callback = callback
        self._cancelled = False
        self._pending = loop.call_later(interval_seconds, self._fire)

    def cancel(self) -> None:
        self._cancelled = True
        self._pending.cancel()

    def _fire(self) -> None:
        if self._cancelled:
            return
        self._pending = self._loop.call_later(self._interval_seconds, self._fire)
        self._callback()


class AsyncioTickScheduler:
    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def every(self, interval_seconds: float, callback: Callable[[], None]) -> RecurringTick:
        loop = self._loop or asyncio.get_running_loop()
        return RecurringTick(loop, interval_seconds, callback)


@dataclass
class TimerInstance:
    seconds_elapsed: int = 0
    is_running: bool = False
    current_step_index: int = NOT_STARTED
    handle: TickHandle | None = field(default=None, repr=False, compare=False)

    def status(self, total_brew_time_seconds: int) -> TimerStatus:
        if self.is_running:
            return TimerStatus.RUNNING
        if self.seconds_elapsed == 0 and self.current_step_index == NOT_STARTED:
            return TimerStatus.IDLE
        if total_brew_time_seconds > 0 and self.seconds_elapsed >= total_brew_time_seconds:
            return TimerStatus.COMPLETED
        return TimerStatus.PAUSED


def find_active_step_index(steps: Sequence[RecipeStep], seconds_elapsed: int, total_brew_time_seconds: int) -> int:
    """Index of the step covering ``seconds_elapsed``, or ``len(steps)`` when past all of them.

    A timed final step stays active through its end second. Untimed steps
    last until the next step starts.
    """
    last_index = len(steps) - 1
    for index, step in enumerate(steps):
        if index == last_index and step.is_timed:
            if seconds_elapsed <= min(step.end_time_seconds, total_brew_time_seconds):
                return index
            continue
        if not step.is_timed:
            next_start = steps[index + 1].start_time_seconds if index < last_index else None
            if seconds_elapsed >= step.start_time_seconds and (next_start is None or seconds_elapsed < next_start):
                return index
            continue
        if step.start_time_seconds <= seconds_elapsed < step.end_time_seconds:
            return index
    return len(steps)


def first_step_index(steps: Sequence[RecipeStep]) -> int:
    for index, step in enumerate(steps):
        if step.start_time_seconds == 0 and step.is_timed:
            return index
    return 0


class BrewTimerController:
    """Start/pause/reset/tick transitions over a per-method timer map.

    The map belongs to the caller; this class only mutates its entries. A
    running timer owns exactly one tick handle, taken in ``_acquire`` and
    given back in ``_release`` on every way out of the running state.
    """

    def __init__(
        self,
        timers: dict[BrewMethod, TimerInstance],
        scheduler: TickScheduler,
        recipe_for: Callable[[BrewMethod], CalculatedRecipe | None],
        tick_interval_seconds: float = 1.0,
    ) -> None:
        self._timers = timers
        self._scheduler = scheduler
        self._recipe_for = recipe_for
        self._tick_interval_seconds = tick_interval_seconds

    def start(self, method: BrewMethod) -> TimerInstance:
        timer = self._timers[method]
        recipe = self._recipe_for(method)
        if recipe is None or timer.seconds_elapsed >= recipe.total_brew_time_seconds:
            return timer
        if timer.is_running:
            return timer

        resuming = timer.seconds_elapsed > 0
        if not resuming:
            timer.current_step_index = first_step_index(recipe.steps)
        timer.is_running = True
        self._acquire(method, timer)
        _log_event("timer_resumed" if resuming else "timer_started", method, timer)
        return timer

    def pause(self, method: BrewMethod) -> TimerInstance:
        timer = self._timers[method]
        was_running = timer.is_running
        self._release(timer)
        timer.is_running = False
        if was_running:
            _log_event("timer_paused", method, timer)
        return timer

    def reset(self, method: BrewMethod) -> TimerInstance:
        timer = self._timers[method]
        self._release(timer)
        timer.seconds_elapsed = 0
        timer.is_running = False
        timer.current_step_index = NOT_STARTED
        _log_event("timer_reset", method, timer)
        return timer

    def tick(self, method: BrewMethod) -> TimerInstance:
        timer = self._timers[method]
        recipe = self._recipe_for(method)
        if not timer.is_running or recipe is None:
            return timer

        total = recipe.total_brew_time_seconds
        elapsed = timer.seconds_elapsed + 1
        index = find_active_step_index(recipe.steps, elapsed, total)

        if elapsed > total and total > 0:
            self._release(timer)
            timer.seconds_elapsed = total
            timer.is_running = False
            timer.current_step_index = min(index, len(recipe.steps) - 1)
            _log_event("timer_completed", method, timer)
            return timer

        timer.seconds_elapsed = elapsed
        timer.current_step_index = index
        return timer

    def _acquire(self, method: BrewMethod, timer: TimerInstance) -> None:
        self._release(timer)
        timer.handle = self._scheduler.every(self._tick_interval_seconds, lambda: self.tick(method))

    @staticmethod
    def _release(timer: TimerInstance) -> None:
        if timer.handle is not None:
            timer.handle.cancel()
            timer.handle = None


def _log_event(event: str, method: BrewMethod, timer: TimerInstance) -> None:
    payload = {
        "event": event,
        "brew_method": method.value,
        "seconds_elapsed": timer.seconds_elapsed,
        "current_step_index": timer.current_step_index,
    }
    logger.info(json.dumps(payload))
