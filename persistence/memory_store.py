from __future__ import annotations

import copy
from typing import Any

from .interfaces import CollectionProvider, KeyValueDocumentStore


class InMemoryDocumentStore(KeyValueDocumentStore):
    """
    Process-lifetime document. Loads and saves hand out deep copies so callers
    never share mutable state with the store.
    """

    def __init__(self) -> None:
        self._doc: dict[str, Any] = {}

    def load(self) -> dict[str, Any]:
        return copy.deepcopy(self._doc)

    def save(self, doc: dict[str, Any]) -> None:
        self._doc = copy.deepcopy(doc)


class InMemoryCollections(CollectionProvider):
    def __init__(self) -> None:
        self._collections: dict[str, InMemoryDocumentStore] = {}

    def open_collection(self, name: str) -> InMemoryDocumentStore:
        store = self._collections.get(name)
        if store is None:
            store = InMemoryDocumentStore()
            self._collections[name] = store
        return store
