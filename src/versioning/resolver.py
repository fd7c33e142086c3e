"""Resolve platform dependency patterns into concrete version lists."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from common.logging_utils import extra_context, is_debug_enabled
from config import Settings
from constants import Constants, Platforms
from .catalogs import CatalogFetcher
from .cache import CatalogCache
from .matcher import match, pass_through
from .models import CatalogFamily, MatchResult, ResolutionResult, catalog_key
from .normalize import sort_descending

logger = logging.getLogger(__name__)

CatalogRef = Tuple[CatalogFamily, Optional[str]]


def catalog_for(platform: str) -> Optional[CatalogRef]:
    """Return the catalog backing platform, or None for unknown platforms."""
    if platform == Platforms.PAPER.value:
        return CatalogFamily.MINECRAFT, None
    if platform in Constants.PAPERMC_PLATFORMS:
        return CatalogFamily.PAPERMC, platform.lower()
    return None


class Resolver:
    """Resolves one run's platform dependencies.

    A Resolver owns its fetcher and therefore its catalog cache: build a new
    one per run. Catalogs are fetched lazily, once per family/project, and
    reused for every later platform that needs them.

    Args:
        fetcher: Catalog source; defaults to a CatalogFetcher with a fresh cache.
        settings: Endpoints, timeout and prefetch parallelism.
    """

    def __init__(self, fetcher: Optional[CatalogFetcher] = None, settings: Optional[Settings] = None):
        self.settings = settings if settings is not None else Settings()
        self.fetcher = fetcher if fetcher is not None else CatalogFetcher(CatalogCache(), self.settings)

    def resolve(self, platform_dependencies: Mapping[str, Sequence[str]]) -> ResolutionResult:
        """Resolve every platform's patterns.

        Args:
            platform_dependencies: Platform name -> patterns, e.g. {"PAPER": ["1.20.x"]}.

        Returns:
            Platform name -> versions, deduplicated and sorted newest first,
            keyed in input order.

        Raises:
            CatalogFetchError, CatalogParseError: A needed catalog is unavailable.
        """
        if self.settings.max_workers > 1:
            self.prefetch(platform_dependencies.keys())

        resolved: ResolutionResult = {}
        for platform, patterns in platform_dependencies.items():
            logger.debug("Resolving platform dependencies for %s: %s", platform, list(patterns))
            resolved[platform] = self.resolve_platform(platform, patterns)
        return resolved

    def resolve_platform(self, platform: str, patterns: Sequence[str]) -> List[str]:
        """Resolve one platform's patterns into a sorted, deduplicated list."""
        ref = catalog_for(platform)
        if ref is None:
            results = [pass_through(pattern) for pattern in patterns]
        else:
            catalog = self.fetcher.get_catalog(*ref)
            results = [match(pattern, catalog) for pattern in patterns]

        merged: Dict[str, None] = {}
        for result in results:
            self._log_warnings(platform, result)
            merged.update(dict.fromkeys(result.versions))

        versions = sort_descending(merged)
        if is_debug_enabled(logger):
            logger.debug(
                "Resolved patterns [%s] to %d versions: %s",
                ", ".join(patterns),
                len(versions),
                versions,
                extra=extra_context(event="resolve", component="resolver", context=platform),
            )
        return versions

    def prefetch(self, platforms: Iterable[str]) -> None:
        """Fetch the distinct catalogs needed by platforms in parallel.

        Raises the first failure in platform order once all fetches settle.
        """
        refs: Dict[str, CatalogRef] = {}
        for platform in platforms:
            ref = catalog_for(platform)
            if ref is not None:
                refs.setdefault(catalog_key(*ref), ref)
        if not refs:
            return

        workers = min(self.settings.max_workers, len(refs))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [pool.submit(self.fetcher.get_catalog, *ref) for ref in refs.values()]
        for future in futures:
            future.result()

    @staticmethod
    def _log_warnings(platform: str, result: MatchResult) -> None:
        for warning in result.warnings:
            logger.warning(
                "%s",
                warning.message,
                extra=extra_context(
                    event="resolve_warning",
                    component="resolver",
                    outcome=warning.kind.value,
                    context=platform,
                ),
            )
