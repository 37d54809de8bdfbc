from __future__ import annotations

from typing import Any, Protocol


class KeyValueDocumentStore(Protocol):
    """
    Minimal DB-friendly interface: a single JSON-like document persisted under a key.
    """

    def load(self) -> dict[str, Any]:
        """Load and return the full document (never None)."""
        ...

    def save(self, doc: dict[str, Any]) -> None:
        """Persist the full document atomically."""
        ...


class CollectionProvider(Protocol):
    """
    Storage engine: hands out one document store per named collection.
    The collection document maps identifier -> entity document.
    """

    def open_collection(self, name: str) -> KeyValueDocumentStore:
        ...
