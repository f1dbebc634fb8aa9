"""API route modules."""

from nexus_ledger.api.routes.catalog import router as catalog_router
from nexus_ledger.api.routes.clients import router as clients_router
from nexus_ledger.api.routes.financial import router as financial_router
from nexus_ledger.api.routes.health import router as health_router
from nexus_ledger.api.routes.inventory import router as inventory_router
from nexus_ledger.api.routes.vendors import router as vendors_router

__all__ = [
    "health_router",
    "inventory_router",
    "catalog_router",
    "vendors_router",
    "clients_router",
    "financial_router",
]
