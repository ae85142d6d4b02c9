"""
Top‑level router for version 1 of the management API.
"""

from fastapi import APIRouter

from .endpoints import clients

router = APIRouter()

router.include_router(clients.router, prefix="/clients", tags=["clients"])
