"""Data models for catalog lookup and version resolution."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class CatalogFamily(Enum):
    """Upstream sources that publish release version lists."""
    MINECRAFT = "minecraft"
    PAPERMC = "papermc"


class WarningKind(Enum):
    """Non-fatal irregularities reported while resolving patterns."""
    UNSUPPORTED_TOKEN = "unsupported_token"
    UNRESOLVED = "unresolved"
    UNEXPANDED_RANGE = "unexpanded_range"
    INVALID_PATTERN = "invalid_pattern"


@dataclass(frozen=True)
class MatchWarning:
    """A warning tied to the pattern that caused it."""
    kind: WarningKind
    pattern: str
    message: str


@dataclass(frozen=True)
class PatternNormalization:
    """Pattern rewritten for range parsing, plus an optional warning."""
    pattern: str
    warning: Optional[MatchWarning] = None


@dataclass
class MatchResult:
    """Catalog entries selected by one pattern, in catalog order."""
    versions: List[str] = field(default_factory=list)
    warnings: List[MatchWarning] = field(default_factory=list)

    @property
    def matched(self) -> bool:
        """True when at least one catalog entry was selected."""
        return bool(self.versions)


# Platform name -> resolved versions, newest first.
ResolutionResult = Dict[str, List[str]]


def catalog_key(family: CatalogFamily, project: Optional[str] = None) -> str:
    """Return the cache key for a catalog; project names are case-folded."""
    if family == CatalogFamily.PAPERMC:
        if not project:
            raise ValueError("PaperMC catalogs require a project name")
        return f"{family.value}:{project.lower()}"
    return family.value
