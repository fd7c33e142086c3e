"""Platform dependency version resolution.

- normalize.py: semver normalization, pattern rewriting and ordering
- matcher.py: pattern-to-catalog matching and catalog-less pass-through
- catalogs.py: Mojang and PaperMC catalog retrieval
- cache.py: run-scoped catalog cache
- resolver.py: per-platform dispatch, merging and final ordering
"""

from .errors import CatalogError, CatalogFetchError, CatalogParseError
from .resolver import Resolver

__all__ = [
    "CatalogError",
    "CatalogFetchError",
    "CatalogParseError",
    "Resolver",
]
