"""Tests for the run-scoped catalog cache."""

import threading

import pytest

from versioning.cache import CatalogCache
from versioning.errors import CatalogFetchError


class TestCatalogCache:
    def test_get_missing(self):
        assert CatalogCache().get("minecraft") is None

    def test_set_never_overwrites(self):
        cache = CatalogCache()
        cache.set("minecraft", ["1.20.4"])
        cache.set("minecraft", ["1.19.4"])
        assert cache.get("minecraft") == ("1.20.4",)
        assert "minecraft" in cache

    def test_loader_called_once_per_key(self):
        cache = CatalogCache()
        calls = []

        def loader():
            calls.append(1)
            return ["3.3.0"]

        assert cache.get_or_fetch("papermc:velocity", loader) == ("3.3.0",)
        assert cache.get_or_fetch("papermc:velocity", loader) == ("3.3.0",)
        assert len(calls) == 1
        assert cache.fetch_count == 1

    def test_failure_shared_and_not_refetched(self):
        cache = CatalogCache()
        calls = []

        def loader():
            calls.append(1)
            raise CatalogFetchError("down", status_code=502)

        with pytest.raises(CatalogFetchError):
            cache.get_or_fetch("minecraft", loader)
        with pytest.raises(CatalogFetchError):
            cache.get_or_fetch("minecraft", loader)
        assert len(calls) == 1

    def test_concurrent_requesters_coalesce(self):
        cache = CatalogCache()
        started = threading.Event()
        release = threading.Event()
        calls = []

        def loader():
            calls.append(1)
            started.set()
            release.wait(5)
            return ["1.20.4", "1.20.1"]

        results = []

        def worker():
            results.append(cache.get_or_fetch("minecraft", loader))

        owner = threading.Thread(target=worker)
        owner.start()
        assert started.wait(5)
        waiters = [threading.Thread(target=worker) for _ in range(4)]
        for t in waiters:
            t.start()
        release.set()
        for t in [owner] + waiters:
            t.join(5)

        assert len(calls) == 1
        assert results == [("1.20.4", "1.20.1")] * 5
