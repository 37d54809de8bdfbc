from __future__ import annotations

import contextlib
import threading
from pathlib import Path
from typing import Iterator


class CollectionFileLocks:
    """
    One lock per collection file, keyed by resolved path, so two stores opened
    on the same file in one process never interleave a load with a save.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._by_path: dict[Path, threading.Lock] = {}

    def lock_for(self, path: Path) -> threading.Lock:
        key = path.resolve()
        with self._guard:
            return self._by_path.setdefault(key, threading.Lock())

    @contextlib.contextmanager
    def locked(self, path: Path) -> Iterator[None]:
        with self.lock_for(path):
            yield


COLLECTION_FILE_LOCKS = CollectionFileLocks()
