import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from brewguide.api.health import router as health_router
from brewguide.api.recipes import router as recipe_router
from brewguide.api.reference import router as reference_router
from brewguide.api.session import router as session_router
from brewguide.core.config import settings
from brewguide.core.request_logging import RequestLoggingMiddleware
from brewguide.services.brew_session import BrewSession
from brewguide.services.brew_timer import AsyncioTickScheduler, TickScheduler


def _configure_logging() -> None:
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    logging.getLogger("brewguide").setLevel(settings.log_level)


def create_app(tick_scheduler: TickScheduler | None = None) -> FastAPI:
    _configure_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        app.state.brew_session.shutdown()

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.brew_session = BrewSession(
        scheduler=tick_scheduler or AsyncioTickScheduler(),
        roast_type=settings.default_roast_type,
        grind_size=settings.default_grind_size,
        water_amount_in_kettle_ml=settings.default_water_in_kettle_ml,
        brew_method=settings.default_brew_method,
        cups=settings.default_cups,
        tick_interval_seconds=settings.tick_interval_seconds,
    )

    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(health_router, prefix=settings.api_prefix)
    app.include_router(recipe_router, prefix=settings.api_prefix)
    app.include_router(session_router, prefix=settings.api_prefix)
    app.include_router(reference_router, prefix=settings.api_prefix)
    return app


app = create_app()
