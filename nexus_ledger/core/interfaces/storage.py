"""Abstract interface for the persistence collaborator."""

from abc import ABC, abstractmethod
from typing import Any

# Collection keys written by the ledger store
VENDORS = "vendors"
CLIENTS = "clients"
TRANSACTIONS = "transactions"
STOCK_POSITIONS = "stock_positions"
MOVEMENTS = "movements"
PRODUCTS = "products"
DEPARTMENTS = "departments"

ALL_COLLECTIONS = (
    VENDORS,
    CLIENTS,
    TRANSACTIONS,
    STOCK_POSITIONS,
    MOVEMENTS,
    PRODUCTS,
    DEPARTMENTS,
)


class IKeyValueStore(ABC):
    """
    Whole-collection key-value persistence.

    Collections are lists of JSON-compatible dicts. No partial or indexed
    queries are offered; callers load and save entire collections.
    """

    @abstractmethod
    async def load(self, key: str) -> list[dict[str, Any]] | None:
        """Load the collection stored under key, or None if never saved."""
        pass

    @abstractmethod
    async def save(self, key: str, collection: list[dict[str, Any]]) -> None:
        """Replace the collection stored under key."""
        pass

    async def close(self) -> None:
        """Release any held resources."""
        return None
