"""Entry point for the Agree/Disagree API server.

Launches the FastAPI application with Uvicorn.  Host, port and log
level come from the environment via ``Settings`` (``HOST``, ``PORT``,
``LOG_LEVEL``); stores listed in ``DEFAULT_CLIENTS`` are opened at
startup.

Usage:
    DEFAULT_CLIENTS=demo python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from agree_disagree_api.app.core.config import settings
from agree_disagree_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    logging.getLogger(__name__).info("Starting server on %s:%s", settings.host, settings.port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
