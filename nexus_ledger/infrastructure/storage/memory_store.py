"""In-memory implementation of the key-value persistence collaborator."""

import copy
from typing import Any

from nexus_ledger.config import get_logger
from nexus_ledger.core.interfaces.storage import IKeyValueStore

logger = get_logger(__name__)


class InMemoryKeyValueStore(IKeyValueStore):
    """Keeps collections in a dict; contents are lost when the process exits."""

    def __init__(self, initial: dict[str, list[dict[str, Any]]] | None = None) -> None:
        self._data: dict[str, list[dict[str, Any]]] = copy.deepcopy(initial or {})

    async def load(self, key: str) -> list[dict[str, Any]] | None:
        collection = self._data.get(key)
        return copy.deepcopy(collection) if collection is not None else None

    async def save(self, key: str, collection: list[dict[str, Any]]) -> None:
        self._data[key] = copy.deepcopy(collection)
        logger.debug("collection_saved", key=key, size=len(collection))
