"""Core ledger services."""

from nexus_ledger.core.services.account_tracker import AccountBalanceTracker, InvoicePosting
from nexus_ledger.core.services.catalog import Catalog
from nexus_ledger.core.services.collection_analyzer import CollectionAnalyzer, OrderValidation
from nexus_ledger.core.services.movement_recorder import (
    MovementOutcome,
    MovementRecorder,
    MovementRequest,
)
from nexus_ledger.core.services.stock_ledger import StockLedger
from nexus_ledger.core.services.valuation import compute_wac, quantize_money

__all__ = [
    "StockLedger",
    "compute_wac",
    "quantize_money",
    "Catalog",
    "MovementRecorder",
    "MovementRequest",
    "MovementOutcome",
    "AccountBalanceTracker",
    "InvoicePosting",
    "CollectionAnalyzer",
    "OrderValidation",
]
