"""Core domain entities."""

from nexus_ledger.core.entities.financial import (
    Account,
    AgingReport,
    Client,
    CollectionAlert,
    EntityType,
    FinancialSummary,
    FinancialTransaction,
    PaymentTerms,
    TransactionType,
    Vendor,
)
from nexus_ledger.core.entities.inventory import (
    Department,
    MovementRecord,
    MovementType,
    Product,
    ProductType,
    StockPosition,
)

__all__ = [
    # Inventory entities
    "StockPosition",
    "MovementRecord",
    "MovementType",
    "Product",
    "ProductType",
    "Department",
    # Financial entities
    "Account",
    "Vendor",
    "Client",
    "FinancialTransaction",
    "CollectionAlert",
    "AgingReport",
    "FinancialSummary",
    "EntityType",
    "PaymentTerms",
    "TransactionType",
]
