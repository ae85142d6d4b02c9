"""
Service layer for open client stores.

A store registers routes under its client name, and two stores with the
same name would collide on the router.  ``ClientService`` is the single
place where stores are opened and closed for an application, and it
refuses to open a second store under a name that is already in use.
"""

import logging
from typing import Dict, List, Optional

from agree_disagree_api.app.core.encoding import ResponseEncoder
from agree_disagree_api.app.core.router import RouteRegistry
from agree_disagree_api.app.schemas.client import ClientRead
from agree_disagree_api.app.services.storage import AgreeDisagreeStorage


logger = logging.getLogger(__name__)


class ClientExistsError(ValueError):
    """Raised when opening a store under a name that is already open."""


class ClientNotFoundError(KeyError):
    """Raised when no store is open under the given name."""


class ClientService:
    """Open, look up and close the stores of one application."""

    def __init__(self, router: RouteRegistry, encoder: Optional[ResponseEncoder] = None) -> None:
        self._router = router
        self._encoder = encoder or ResponseEncoder()
        self._stores: Dict[str, AgreeDisagreeStorage] = {}

    def open_client(self, name: str) -> AgreeDisagreeStorage:
        if name in self._stores:
            raise ClientExistsError(f"Client {name} is already open")
        store = AgreeDisagreeStorage(name, self._router, self._encoder)
        self._stores[name] = store
        return store

    def close_client(self, name: str) -> None:
        store = self._stores.pop(name, None)
        if store is None:
            raise ClientNotFoundError(name)
        store.close()

    def get(self, name: str) -> Optional[AgreeDisagreeStorage]:
        return self._stores.get(name)

    def names(self) -> List[str]:
        return sorted(self._stores)

    def describe(self, name: str) -> ClientRead:
        store = self._stores.get(name)
        if store is None:
            raise ClientNotFoundError(name)
        return ClientRead(
            name=name,
            paths=store.paths,
            questions=store.question_count,
            users=store.user_count,
        )

    def close_all(self) -> None:
        """Close every open store, e.g. on application shutdown."""
        for name in list(self._stores):
            self.close_client(name)
        logger.info("Closed all client stores")
