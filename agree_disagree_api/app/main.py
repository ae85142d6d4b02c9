"""
Main entrypoint for the Agree/Disagree API.

This module assembles the FastAPI application, sets up logging and
includes the versioned management router.  The ``create_app`` function
builds and configures the app, which is then instantiated at module
import time as ``app``, e.g.::

    uvicorn agree_disagree_api.app.main:app --port 3000

Store routes are not declared here.  The application carries a
``RouteRegistry`` and a ``ClientService`` on ``app.state``; stores
opened through the service register their routes on the registry.
"""

from typing import Optional

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from .core.config import Settings, settings as default_settings
from .core.encoding import ResponseEncoder
from .core.logging_config import setup_logging
from .core.router import RouteRegistry
from .api.v1.router import router as v1_router
from .services.client_service import ClientService


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use instead of the environment‑derived
        module default.  Tests pass their own instance.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version)

    app.include_router(v1_router, prefix="/api/v1")

    # Keeps the server observably up even while no store is open.
    @app.get("/", response_class=PlainTextResponse, tags=["root"])
    async def root() -> str:
        return "I'm listening.\n"

    router = RouteRegistry(app)
    app.state.route_registry = router
    app.state.client_service = ClientService(router, ResponseEncoder())

    @app.on_event("startup")
    async def startup_event() -> None:
        for name in settings.default_clients:
            app.state.client_service.open_client(name)

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        app.state.client_service.close_all()

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
