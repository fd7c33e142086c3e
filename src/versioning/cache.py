"""Run-scoped catalog cache."""

from __future__ import annotations

import threading
from typing import Callable, Dict, Optional, Sequence, Tuple


class CatalogCache:
    """Catalogs keyed by family/project, populated at most once per key.

    Entries never expire; the cache lives as long as the Resolver that owns
    it, i.e. one resolution run. Concurrent requesters of the same key share
    a single in-flight fetch, and a failed fetch is reported to every waiter
    instead of being attempted again.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, Tuple[str, ...]] = {}
        self._failures: Dict[str, BaseException] = {}
        self._inflight: Dict[str, threading.Event] = {}
        self._lock = threading.Lock()
        self.fetch_count = 0

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._entries

    def get(self, key: str) -> Optional[Tuple[str, ...]]:
        """Return the cached catalog, or None if not populated."""
        with self._lock:
            return self._entries.get(key)

    def set(self, key: str, versions: Sequence[str]) -> None:
        """Populate key unless it already holds a catalog."""
        with self._lock:
            self._entries.setdefault(key, tuple(versions))

    def get_or_fetch(self, key: str, loader: Callable[[], Sequence[str]]) -> Tuple[str, ...]:
        """Return the catalog for key, calling loader only if nobody has yet.

        Args:
            key: Cache key, see versioning.models.catalog_key.
            loader: Zero-argument callable performing the fetch.

        Returns:
            The cached catalog.

        Raises:
            Whatever loader raised, for the caller that ran it and for every
            caller that waited on it.
        """
        with self._lock:
            if key in self._entries:
                return self._entries[key]
            if key in self._failures:
                raise self._failures[key]
            event = self._inflight.get(key)
            owner = event is None
            if owner:
                event = threading.Event()
                self._inflight[key] = event
                self.fetch_count += 1

        if not owner:
            event.wait()
            with self._lock:
                if key in self._entries:
                    return self._entries[key]
                raise self._failures[key]

        try:
            versions = tuple(loader())
        except BaseException as exc:
            with self._lock:
                self._failures[key] = exc
                del self._inflight[key]
            event.set()
            raise

        with self._lock:
            self._entries[key] = versions
            del self._inflight[key]
        event.set()
        return versions
