from fastapi import APIRouter, Depends, Request

from brewguide.schemas.recipe import BrewMethod, RecipeInputsUpdate
from brewguide.schemas.timer import SessionRead, TimerInstanceRead, TimerViewRead
from brewguide.services.brew_session import BrewSession

# Timer commands are async so tick callbacks are booked on the serving event loop.
router = APIRouter(prefix="/session", tags=["session"])


def get_brew_session(request: Request) -> BrewSession:
    return request.app.state.brew_session


def _session_read(session: BrewSession) -> SessionRead:
    return SessionRead(
        inputs=session.inputs,
        recipe=session.recipe,
        timer=TimerViewRead.model_validate(session.timer_view()),
    )


@router.get("", response_model=SessionRead)
async def read_session(session: BrewSession = Depends(get_brew_session)) -> SessionRead:
    return _session_read(session)


@router.patch("/inputs", response_model=SessionRead)
async def update_session_inputs(
    payload: RecipeInputsUpdate,
    session: BrewSession = Depends(get_brew_session),
) -> SessionRead:
    session.update_inputs(**payload.model_dump(exclude_none=True))
    return _session_read(session)


@router.get("/timer", response_model=TimerViewRead)
async def read_timer(session: BrewSession = Depends(get_brew_session)) -> TimerViewRead:
    return TimerViewRead.model_validate(session.timer_view())


@router.post("/timer/start", response_model=TimerViewRead)
async def start_timer(session: BrewSession = Depends(get_brew_session)) -> TimerViewRead:
    return TimerViewRead.model_validate(session.start_timer())


@router.post("/timer/pause", response_model=TimerViewRead)
async def pause_timer(session: BrewSession = Depends(get_brew_session)) -> TimerViewRead:
    return TimerViewRead.model_validate(session.pause_timer())


@router.post("/timer/reset", response_model=TimerViewRead)
async def reset_timer(session: BrewSession = Depends(get_brew_session)) -> TimerViewRead:
    return TimerViewRead.model_validate(session.reset_timer())


@router.get("/timers", response_model=dict[BrewMethod, TimerInstanceRead])
async def list_timers(session: BrewSession = Depends(get_brew_session)) -> dict[BrewMethod, TimerInstanceRead]:
    return {method: TimerInstanceRead.model_validate(timer) for method, timer in session.timers.items()}
