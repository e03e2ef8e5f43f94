"""
Main entrypoint for the User Directory API.

This module assembles the FastAPI application: logging, CORS, error
handlers, the health probe and versioned routers.  ``create_app``
builds a fresh application with its own empty storage; ``app`` is
instantiated at module import time so it can be served directly::

    uvicorn user_directory_api.app.main:app --reload
"""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.error_handlers import register_error_handlers
from .api.health import router as health_router
from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.logging_config import setup_logging
from .core.storage import SharedStorage

logger = logging.getLogger(__name__)


def create_app(
    storage: Optional[SharedStorage] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    storage : Optional[SharedStorage]
        Storage shared by all requests served by this application.  A
        new empty storage is created when omitted; it lives as long as
        the application object.
    settings : Optional[Settings]
        Overrides the module level settings (useful in tests).

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    # Logging first so everything below can log.
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    app.state.storage = storage if storage is not None else SharedStorage()

    allow_all = "*" in settings.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    app.include_router(health_router)
    # Additional versions can be mounted later under their own prefix.
    app.include_router(v1_router, prefix="/api/v1")

    logger.debug("Application %s %s created", settings.project_name, settings.api_version)
    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
