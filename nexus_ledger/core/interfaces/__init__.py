"""Core interfaces (ports) for dependency injection."""

from nexus_ledger.core.interfaces.storage import ALL_COLLECTIONS, IKeyValueStore

__all__ = [
    "IKeyValueStore",
    "ALL_COLLECTIONS",
]
