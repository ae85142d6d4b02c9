"""
Runtime route registration on top of a FastAPI application.

FastAPI normally fixes its routes when the application is assembled.
Stores in this service add and remove their endpoints while the server
is running, so ``RouteRegistry`` wraps the application router and
exposes ``register``/``unregister`` for individual paths.  Requests for
a path that is not registered fall through to FastAPI's default 404
handling.

The registry is created once per application and passed explicitly to
every store; there is no global lookup.
"""

import logging
import threading
from typing import Any, Callable, Iterable, List

from fastapi import FastAPI
from fastapi.routing import APIRoute


logger = logging.getLogger(__name__)


class RouteConflictError(ValueError):
    """Raised when a path is registered while it is already live."""


class RouteNotFoundError(KeyError):
    """Raised when unregistering a path that is not registered."""


class RouteRegistry:
    """Add and remove routes of a live FastAPI application.

    Changes to the dispatch table are serialized with a lock.  Removal
    builds a new route list and swaps it in with a single assignment, so
    a request arriving at the same moment sees either the old table and
    is served, or the new one and gets a 404.
    """

    def __init__(self, app: FastAPI) -> None:
        self._app = app
        self._lock = threading.Lock()

    def _routes_for(self, path: str) -> List[APIRoute]:
        return [
            route
            for route in self._app.router.routes
            if isinstance(route, APIRoute) and route.path == path
        ]

    def _path_taken(self, path: str) -> bool:
        # Includes the framework's own routes such as /docs and /openapi.json.
        return any(getattr(route, "path", None) == path for route in self._app.router.routes)

    def register(
        self,
        path: str,
        endpoint: Callable[..., Any],
        methods: Iterable[str] = ("GET",),
    ) -> None:
        """Bind ``endpoint`` to ``path`` for the given HTTP methods."""
        methods = sorted(methods)
        with self._lock:
            if self._path_taken(path):
                raise RouteConflictError(f"Route {path} is already registered")
            self._app.router.add_api_route(
                path,
                endpoint,
                methods=methods,
                name=path,
            )
            # Rebuilt lazily on the next request to /openapi.json.
            self._app.openapi_schema = None
        logger.debug("Registered route %s %s", methods, path)

    def unregister(self, path: str) -> None:
        """Remove every route bound to ``path``."""
        with self._lock:
            if not self._routes_for(path):
                raise RouteNotFoundError(path)
            self._app.router.routes = [
                route
                for route in self._app.router.routes
                if not (isinstance(route, APIRoute) and route.path == path)
            ]
            self._app.openapi_schema = None
        logger.debug("Unregistered route %s", path)

    def is_registered(self, path: str) -> bool:
        return bool(self._routes_for(path))

    def paths(self) -> List[str]:
        """Return the paths of all API routes currently live."""
        return [route.path for route in self._app.router.routes if isinstance(route, APIRoute)]
