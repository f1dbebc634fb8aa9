"""
Service factory functions for dependency injection.

This module wires the infrastructure persistence collaborator to the ledger
engine. Use cases should import from here.

Clean Architecture: Application layer orchestrates DI, not core layer.
"""

from nexus_ledger.application.ledger_store import LedgerStore
from nexus_ledger.config import get_logger
from nexus_ledger.core.interfaces import IKeyValueStore

logger = get_logger(__name__)

# Singleton ledger store
_ledger_store: LedgerStore | None = None


async def get_ledger_store(kv_store: IKeyValueStore | None = None) -> LedgerStore:
    """
    Get or create the process-wide LedgerStore.

    The first call builds the configured persistence collaborator (unless one
    is given) and loads the ledger from it.

    Args:
        kv_store: Optional persistence override

    Returns:
        Loaded LedgerStore
    """
    global _ledger_store

    if _ledger_store is not None and kv_store is None:
        return _ledger_store

    # Lazy import infrastructure to avoid circular imports
    from nexus_ledger.infrastructure.storage import create_key_value_store

    store = LedgerStore(kv_store or create_key_value_store())
    await store.load()
    _ledger_store = store
    return store


async def close_ledger_store() -> None:
    """Flush and close the singleton store, if one was created."""
    global _ledger_store

    if _ledger_store is None:
        return
    await _ledger_store.flush()
    await _ledger_store.close()
    logger.info("ledger_store_closed")
    _ledger_store = None


def reset_ledger_store() -> None:
    """Drop the singleton without closing it (for testing)."""
    global _ledger_store
    _ledger_store = None
