from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .errors import CorruptCollection
from .interfaces import CollectionProvider, KeyValueDocumentStore
from .json_store import atomic_write_json, read_json
from .locks import COLLECTION_FILE_LOCKS
from .paths import collection_file, collections_dir

logger = logging.getLogger(__name__)


class DiskJsonDocumentStore(KeyValueDocumentStore):
    """
    Stores a single JSON document on disk at a fixed path.

    - Missing or empty file loads as an empty dict.
    - Anything other than a JSON object raises CorruptCollection; the file is
      left untouched so no record is lost by a later save.
    - Writes atomically.
    """

    def __init__(self, path: Path):
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> dict[str, Any]:
        with COLLECTION_FILE_LOCKS.locked(self._path):
            try:
                raw = read_json(self._path)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                logger.error("Unreadable collection file %s: %s", self._path, e)
                raise CorruptCollection(str(self._path)) from e
        if raw is None:
            return {}
        if not isinstance(raw, dict):
            raise CorruptCollection(str(self._path))
        return raw

    def save(self, doc: dict[str, Any]) -> None:
        with COLLECTION_FILE_LOCKS.locked(self._path):
            atomic_write_json(self._path, doc)


class DiskJsonCollections(CollectionProvider):
    """
    Disk engine: one JSON file per collection.

    - <data_dir>/collections/<name>.json
    """

    def __init__(self, data_dir: Path):
        self._base = collections_dir(data_dir)

    @property
    def base_dir(self) -> Path:
        return self._base

    def open_collection(self, name: str) -> DiskJsonDocumentStore:
        return DiskJsonDocumentStore(collection_file(self._base, name))
