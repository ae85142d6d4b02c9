"""
Client endpoints for API v1.

These routes open and close per‑client stores at runtime.  Opening a
client named ``demo`` makes ``/demo``, ``/demo/q`` and ``/demo/u``
live; deleting it removes them again.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, status

from agree_disagree_api.app.core.router import RouteConflictError
from agree_disagree_api.app.schemas.client import ClientCreate, ClientRead
from agree_disagree_api.app.services.client_service import (
    ClientExistsError,
    ClientNotFoundError,
    ClientService,
)

router = APIRouter()


def get_client_service(request: Request) -> ClientService:
    """Return the ``ClientService`` attached to the running application."""
    return request.app.state.client_service


@router.get("/", response_model=List[ClientRead])
async def list_clients(service: ClientService = Depends(get_client_service)) -> List[ClientRead]:
    """Return every open client ordered by name."""
    return [service.describe(name) for name in service.names()]


@router.post("/", response_model=ClientRead, status_code=status.HTTP_201_CREATED)
async def open_client(
    client_in: ClientCreate,
    service: ClientService = Depends(get_client_service),
) -> ClientRead:
    """Open a store for a new client and register its routes.

    Returns HTTP 409 if a store with the same name is already open or
    if its paths collide with an existing route.
    """
    try:
        service.open_client(client_in.name)
    except (ClientExistsError, RouteConflictError) as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    return service.describe(client_in.name)


@router.get("/{name}", response_model=ClientRead)
async def get_client(name: str, service: ClientService = Depends(get_client_service)) -> ClientRead:
    try:
        return service.describe(name)
    except ClientNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Client not found")


@router.delete("/{name}", status_code=status.HTTP_204_NO_CONTENT)
async def close_client(name: str, service: ClientService = Depends(get_client_service)) -> None:
    """Close a client's store.  Its routes answer 404 afterwards."""
    try:
        service.close_client(name)
    except ClientNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Client not found")
    return None
