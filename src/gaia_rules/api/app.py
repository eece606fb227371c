"""FastAPI application wiring for the Gaia rules engine."""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gaia_rules import __version__
from gaia_rules.api import routes
from gaia_rules.api.runtime import ApiState, build_state
from gaia_rules.config import Settings, get_settings

logger = logging.getLogger(__name__)

DESCRIPTION = (
    "Store Gaia Project game snapshots and list the commands the player to "
    "move may issue, each priced in resources."
)


def configure_logging(settings: Settings) -> None:
    """Apply the configured level to the ``gaia_rules`` logger tree."""

    logging.getLogger("gaia_rules").setLevel(settings.log_level.upper())


def create_app(
    *,
    state_factory: Callable[[], ApiState] = build_state,
    settings: Settings | None = None,
) -> FastAPI:
    """Instantiate the FastAPI application with routing and lifecycle hooks."""

    settings = settings or get_settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        state = state_factory()
        app.state.api_state = state
        logger.info(
            "serving games from %s with rules %s", state.settings.data_dir, settings.rules_version
        )
        try:
            yield
        finally:
            await state.shutdown()

    app = FastAPI(
        title="Gaia Rules Engine",
        description=DESCRIPTION,
        version=__version__,
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(routes.router)
    return app


app = create_app()
