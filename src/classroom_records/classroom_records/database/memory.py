from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Any, Dict, Hashable, Iterator


class MemoryDatabase:
    """In-process keyed store used by the in-memory repositories.

    One dict per table, keyed by the record's natural/composite key. A single
    lock serializes every operation, which mirrors the per-row atomicity of the
    MySQL backend (last write wins, no cross-key transactions).
    """

    def __init__(self) -> None:
        self._tables: Dict[str, Dict[Hashable, Any]] = {}
        self._lock = threading.RLock()

    @contextmanager
    def table(self, name: str) -> Iterator[Dict[Hashable, Any]]:
        with self._lock:
            yield self._tables.setdefault(name, {})

    def clear(self) -> None:
        with self._lock:
            self._tables.clear()
