"""Version normalization helpers.

Catalog identifiers are not all semantic versions ("1.20", "1.16.5-fixed",
"23w13a"). Everything here maps them onto semantic_version objects for
comparison and range matching while callers keep the raw strings.
All functions are pure.
"""

import functools
import re
from typing import Iterable, List, Optional

import semantic_version

from constants import Constants
from .models import MatchWarning, PatternNormalization, WarningKind

# Up to three leading dot-separated numeric components; anything after is a qualifier.
_NUMERIC_PREFIX = re.compile(r"^[v=]?(\d+)(?:\.(\d+))?(?:\.(\d+))?")
# npm tolerates whitespace between a comparator and its version (">= 1.20").
_OPERATOR_SPACE = re.compile(r"([<>]=?|=|\^|~)\s+")

_WILDCARD_SUFFIX = ".x"


def is_exact_version(value: str) -> bool:
    """Return True if value is a strict semantic version."""
    try:
        semantic_version.Version(value)
    except ValueError:
        return False
    return True


def normalize(raw: str) -> Optional[semantic_version.Version]:
    """Map a raw identifier to a comparable semantic version.

    Strict semantic versions are used as is. Otherwise the leading numeric
    components are padded to major.minor.patch ("1.20" -> 1.20.0) and any
    trailing qualifier is dropped.

    Args:
        raw: Identifier as published upstream or typed by the user.

    Returns:
        The normalized version, or None if raw has no numeric prefix.
    """
    if not raw:
        return None
    try:
        return semantic_version.Version(raw)
    except ValueError:
        pass

    m = _NUMERIC_PREFIX.match(raw.strip())
    if not m:
        return None
    major, minor, patch = (int(part) if part is not None else 0 for part in m.groups())
    return semantic_version.Version(major=major, minor=minor, patch=patch)


def normalize_pattern(pattern: str) -> PatternNormalization:
    """Rewrite user patterns into npm range syntax where needed.

    "1.20.x" becomes "1.20.*". Patterns mentioning "latest" are returned
    unchanged with an UNSUPPORTED_TOKEN warning; that token is never
    expanded to a concrete release.
    """
    if pattern.endswith(_WILDCARD_SUFFIX):
        return PatternNormalization(pattern=f"{pattern[:-len(_WILDCARD_SUFFIX)]}.*")

    if Constants.LATEST_TOKEN in pattern:
        return PatternNormalization(
            pattern=pattern,
            warning=MatchWarning(
                kind=WarningKind.UNSUPPORTED_TOKEN,
                pattern=pattern,
                message=f"'{Constants.LATEST_TOKEN}' pattern not supported in semver, treating as exact match",
            ),
        )

    return PatternNormalization(pattern=pattern)


def parse_exact(pattern: str) -> Optional[semantic_version.Version]:
    """Parse a pattern naming one strict semantic version, or None.

    A leading "v" or "=" is accepted, as npm accepts it.
    """
    candidate = pattern.strip()
    if candidate[:1] in ("v", "="):
        candidate = candidate[1:].strip()
    try:
        return semantic_version.Version(candidate)
    except ValueError:
        return None


def parse_range(pattern: str) -> Optional[semantic_version.NpmSpec]:
    """Parse an npm-style range ("^1.2", "1.20.*", ">= 1.8 <1.9"), or None if invalid."""
    try:
        return semantic_version.NpmSpec(_OPERATOR_SPACE.sub(r"\1", pattern.strip()))
    except ValueError:
        return None


def compare_descending(a: str, b: str) -> int:
    """Order two raw identifiers newest first.

    Both normalizable: compare the normalized versions. Otherwise fall back to
    reverse lexicographic comparison of the raw strings for this pair only.
    """
    norm_a = normalize(a)
    norm_b = normalize(b)
    if norm_a is not None and norm_b is not None:
        if norm_a < norm_b:
            return 1
        if norm_a > norm_b:
            return -1
        return 0
    return (b > a) - (b < a)


def sort_descending(values: Iterable[str]) -> List[str]:
    """Return values sorted with compare_descending (stable for ties)."""
    return sorted(values, key=functools.cmp_to_key(compare_descending))
