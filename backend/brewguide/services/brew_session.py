from __future__ import annotations

import json
import logging
from dataclasses import dataclass

from brewguide.schemas.recipe import BrewMethod, CalculatedRecipe, GrindSize, RecipeInputs, RecipeStep, RoastType
from brewguide.schemas.timer import TimerStatus
from brewguide.services.brew_tables import DEFAULT_WATER_IN_KETTLE_ML
from brewguide.services.brew_timer import (
    BrewTimerController,
    TickScheduler,
    TimerInstance,
)
from brewguide.services.recipe_engine import generate_full_recipe

logger = logging.getLogger("brewguide.session")


@dataclass(frozen=True)
class TimerView:
    brew_method: BrewMethod
    status: TimerStatus
    seconds_elapsed: int
    is_running: bool
    current_step_index: int
    total_brew_time_seconds: int
    current_step: RecipeStep | None
    next_step: RecipeStep | None
    elapsed_seconds_in_step: int
    remaining_seconds_in_step: int
    overall_progress: float
    step_progress: float
    is_complete: bool


def build_timer_view(method: BrewMethod, recipe: CalculatedRecipe, timer: TimerInstance) -> TimerView:
    steps = recipe.steps
    total = recipe.total_brew_time_seconds
    index = timer.current_step_index

    current_step = steps[index] if 0 <= index < len(steps) else None
    next_step = steps[index + 1] if index >= -1 and index + 1 < len(steps) else None

    elapsed_in_step = 0
    remaining_in_step = 0
    step_progress = 0.0
    if current_step is not None and current_step.is_timed:
        elapsed_in_step = max(0, timer.seconds_elapsed - current_step.start_time_seconds)
        if current_step.duration_seconds > 0:
            remaining_in_step = max(0, current_step.duration_seconds - elapsed_in_step)
            step_progress = min(1.0, elapsed_in_step / current_step.duration_seconds)

    return TimerView(
        brew_method=method,
        status=timer.status(total),
        seconds_elapsed=timer.seconds_elapsed,
        is_running=timer.is_running,
        current_step_index=index,
        total_brew_time_seconds=total,
        current_step=current_step,
        next_step=next_step,
        elapsed_seconds_in_step=elapsed_in_step,
        remaining_seconds_in_step=remaining_in_step,
        overall_progress=timer.seconds_elapsed / total if total > 0 else 0.0,
        step_progress=step_progress,
        is_complete=timer.seconds_elapsed > 0 and timer.seconds_elapsed >= total,
    )


class BrewSession:
    """One user's brewing context: current inputs, current recipe and every method's timer.

    Input changes rebuild the recipe for the selected method and reset that
    method's timer if it had started. Timers of other methods are left as
    they are; a method that stops being selected is paused first, since only
    the selected method's timer may tick.
    """

    def __init__(
        self,
        *,
        scheduler: TickScheduler,
        roast_type: RoastType = RoastType.MEDIUM,
        grind_size: GrindSize = GrindSize.MEDIUM,
        water_amount_in_kettle_ml: int = DEFAULT_WATER_IN_KETTLE_ML,
        brew_method: BrewMethod | str = BrewMethod.POUR_OVER,
        cups: int = 1,
        tick_interval_seconds: float = 1.0,
    ) -> None:
        self._recipe = _supported(
            generate_full_recipe(roast_type, grind_size, water_amount_in_kettle_ml, brew_method, cups)
        )
        self.timers: dict[BrewMethod, TimerInstance] = {method: TimerInstance() for method in BrewMethod}
        self._controller = BrewTimerController(
            self.timers,
            scheduler,
            self.recipe_for,
            tick_interval_seconds=tick_interval_seconds,
        )

    @property
    def recipe(self) -> CalculatedRecipe:
        return self._recipe

    @property
    def inputs(self) -> RecipeInputs:
        return self._recipe.inputs

    @property
    def active_method(self) -> BrewMethod:
        return BrewMethod(self._recipe.inputs.brew_method)

    @property
    def active_timer(self) -> TimerInstance:
        return self.timers[self.active_method]

    def recipe_for(self, method: BrewMethod) -> CalculatedRecipe | None:
        if method != self.active_method:
            return None
        return self._recipe

    def update_inputs(
        self,
        *,
        roast_type: RoastType | None = None,
        grind_size: GrindSize | None = None,
        water_amount_in_kettle_ml: int | None = None,
        brew_method: BrewMethod | str | None = None,
        cups: int | None = None,
    ) -> bool:
        """Apply changed inputs. Returns False when nothing actually changed.

        An unsupported brew method raises ``ValueError`` and leaves the session untouched.
        """
        current = self.inputs
        requested = {
            "roast_type": roast_type if roast_type is not None else current.roast_type,
            "grind_size": grind_size if grind_size is not None else current.grind_size,
            "water_amount_in_kettle_ml": (
                water_amount_in_kettle_ml
                if water_amount_in_kettle_ml is not None
                else current.water_amount_in_kettle_ml
            ),
            "brew_method": brew_method if brew_method is not None else current.brew_method,
            "cups": cups if cups is not None else current.cups,
        }
        recipe = _supported(generate_full_recipe(**requested))
        if recipe.inputs == current:
            return False

        previous_method = self.active_method
        if recipe.inputs.brew_method != previous_method:
            self._controller.pause(previous_method)

        self._recipe = recipe
        _log_event(
            "recipe_recalculated",
            brew_method=self.active_method.value,
            total_brew_time_seconds=recipe.total_brew_time_seconds,
            steps=len(recipe.steps),
            warnings=[warning.id for warning in recipe.warnings],
        )

        timer = self.active_timer
        if timer.is_running or timer.seconds_elapsed > 0:
            self._controller.reset(self.active_method)
            _log_event("timer_reset_on_recipe_change", brew_method=self.active_method.value)
        return True

    def start_timer(self) -> TimerView:
        self._controller.start(self.active_method)
        return self.timer_view()

    def pause_timer(self) -> TimerView:
        self._controller.pause(self.active_method)
        return self.timer_view()

    def reset_timer(self) -> TimerView:
        self._controller.reset(self.active_method)
        return self.timer_view()

    def timer_view(self) -> TimerView:
        return build_timer_view(self.active_method, self._recipe, self.active_timer)

    def shutdown(self) -> None:
        for method, timer in self.timers.items():
            if timer.is_running:
                self._controller.pause(method)


def _supported(recipe: CalculatedRecipe) -> CalculatedRecipe:
    if not isinstance(recipe.inputs.brew_method, BrewMethod):
        raise ValueError(f"Unsupported brew method: {recipe.inputs.brew_method}")
    return recipe


def _log_event(event: str, **fields: object) -> None:
    logger.info(json.dumps({"event": event, **fields}))
