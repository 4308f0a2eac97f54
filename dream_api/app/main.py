"""
Main entrypoint for the Dream API.

This module assembles the FastAPI application: it sets up logging,
wires the storage accessor, retry policy and service together, enables
CORS and includes the versioned routers.  The ``create_app`` function
builds and configures the app, which is then instantiated at module
import time as ``app``, e.g.::

    uvicorn dream_api.app.main:app --reload

The application title and version are provided via ``Settings`` from
``core.config``.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import Settings, settings
from .core.db import init_db
from .core.logging_config import setup_logging
from .core.retry import ConflictRetryPolicy
from .api.v1.router import router as v1_router
from .repositories.dream_repository import DreamRepository
from .services.dream_service import DreamService


logger = logging.getLogger(__name__)


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Settings to use instead of the module‑level ``settings``
        (tests pass their own database path here).

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    config = app_settings or settings
    # Initialise logging before anything else so that the wiring below
    # can log.
    setup_logging(config.log_level, config.log_file or None)

    repository = DreamRepository(config.database_url)
    retry_policy = ConflictRetryPolicy(
        max_attempts=config.retry_max_attempts,
        delay_ms=config.retry_delay_ms,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Creates the database file if it does not exist and brings the
        # schema up to date.
        init_db(config.database_url)
        logger.info("%s %s started", config.project_name, config.api_version)
        yield

    app = FastAPI(
        title=config.project_name,
        version=config.api_version,
        debug=config.debug,
        lifespan=lifespan,
    )
    app.state.settings = config
    app.state.dream_service = DreamService(repository, retry_policy)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origin_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Location"],
    )

    # The dream routes form a fixed external contract and are mounted at
    # the root rather than under a version prefix.
    app.include_router(v1_router)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
