"""
Health check endpoints.
"""

from fastapi import APIRouter, Depends

from nexus_ledger import __version__
from nexus_ledger.api.dependencies import get_app_settings, get_store
from nexus_ledger.application.dto.responses import HealthResponse
from nexus_ledger.application.ledger_store import LedgerStore
from nexus_ledger.config import Settings

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check(
    store: LedgerStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> HealthResponse:
    """
    Basic health check.

    Reports the configured persistence backend and whether the ledger was loaded.
    """
    return HealthResponse(
        status="healthy" if store.loaded else "degraded",
        version=__version__,
        storage_backend=settings.storage.backend,
        loaded=store.loaded,
    )
