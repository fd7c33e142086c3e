"""Pattern matching against a catalog, and pass-through for catalog-less platforms."""

from typing import Sequence

from .models import MatchResult, MatchWarning, WarningKind
from .normalize import is_exact_version, normalize, normalize_pattern, parse_exact, parse_range


def match(pattern: str, catalog: Sequence[str]) -> MatchResult:
    """Select the catalog entries a pattern refers to.

    A pattern naming one version selects entries whose normalized version
    equals it, prerelease included; any other pattern is tried as an npm
    range. Entries that do not normalize are skipped. If that selects
    nothing, entries equal to the raw pattern are selected instead.
    Selected entries are returned as raw strings in catalog order.

    Args:
        pattern: User pattern, e.g. "1.20.x", "^1.19", "1.16.5-fixed".
        catalog: Raw identifiers, newest first.

    Returns:
        MatchResult: Subset of catalog; carries an UNRESOLVED warning when empty.
    """
    normalization = normalize_pattern(pattern)
    warnings = [normalization.warning] if normalization.warning else []

    exact = parse_exact(normalization.pattern)
    if exact is not None:
        # A single version must match including its prerelease part.
        selects = exact.__eq__
    else:
        spec = parse_range(normalization.pattern)
        selects = spec.match if spec is not None else None

    if selects is not None:
        matches = []
        for version in catalog:
            normalized = normalize(version)
            if normalized is not None and selects(normalized):
                matches.append(version)
        if matches:
            return MatchResult(versions=matches, warnings=warnings)

    exact_matches = [version for version in catalog if version == pattern]
    if exact_matches:
        return MatchResult(versions=exact_matches, warnings=warnings)

    warnings.append(MatchWarning(
        kind=WarningKind.UNRESOLVED,
        pattern=pattern,
        message=f"No matches found for version pattern: {pattern}",
    ))
    return MatchResult(warnings=warnings)


def pass_through(pattern: str) -> MatchResult:
    """Validate a pattern for a platform that has no catalog.

    The pattern is always kept as is; only ranges and non-semver values
    carry a warning since nothing can confirm them.
    """
    if is_exact_version(pattern):
        return MatchResult(versions=[pattern])
    if parse_range(pattern) is not None:
        warning = MatchWarning(
            kind=WarningKind.UNEXPANDED_RANGE,
            pattern=pattern,
            message=f"Cannot resolve semver range '{pattern}' without available versions list. Using as-is.",
        )
    else:
        warning = MatchWarning(
            kind=WarningKind.INVALID_PATTERN,
            pattern=pattern,
            message=f"Invalid semver pattern '{pattern}', using as-is",
        )
    return MatchResult(versions=[pattern], warnings=[warning])
