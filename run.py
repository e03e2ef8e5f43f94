"""Entry point for serving the User Directory API.

Starts the FastAPI application under Uvicorn.  Host, port and log level
come from the environment (see ``user_directory_api.app.core.config``):
``HOST`` defaults to ``0.0.0.0`` and ``PORT`` to ``3000``.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from user_directory_api.app.core.config import settings
from user_directory_api.app.main import app


async def run_api() -> None:
    """Serve the API until the process is interrupted."""
    # log_config=None keeps the handlers installed by setup_logging.
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
        log_config=None,
    )
    server = Server(config)
    logging.getLogger(__name__).info("Server listening on %s:%s", settings.host, settings.port)
    await server.serve()


def main() -> None:
    try:
        asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        pass


if __name__ == "__main__":
    main()
