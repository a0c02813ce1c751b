from enum import Enum

from pydantic import BaseModel, ConfigDict

from brewguide.schemas.recipe import BrewMethod, CalculatedRecipe, RecipeInputs, RecipeStep


class TimerStatus(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"


class TimerInstanceRead(BaseModel):
    seconds_elapsed: int
    is_running: bool
    current_step_index: int

    model_config = ConfigDict(from_attributes=True)


class TimerViewRead(BaseModel):
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

    model_config = ConfigDict(from_attributes=True)


class SessionRead(BaseModel):
    inputs: RecipeInputs
    recipe: CalculatedRecipe
    timer: TimerViewRead
