"""
Controlador de salud - Endpoint de comprobación del servicio
"""

from fastapi import APIRouter
from pydantic import BaseModel

from app.database import Database


router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Respuesta del chequeo de estado."""
    status: str
    store: str
    backend: str | None = None


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Endpoint de verificación de estado.

    Comprueba que la API esté en funcionamiento y que el store responda.
    """
    store = Database.store
    if store is None:
        return HealthResponse(status="ok", store="disconnected")

    store_status = "connected" if await store.ping() else "unreachable"

    return HealthResponse(
        status="ok",
        store=store_status,
        backend=store.backend
    )
