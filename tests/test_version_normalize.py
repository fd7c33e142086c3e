"""Tests for version normalization, pattern rewriting and ordering."""

import semantic_version

from versioning.models import WarningKind
from versioning.normalize import (
    compare_descending,
    is_exact_version,
    normalize,
    normalize_pattern,
    parse_exact,
    parse_range,
    sort_descending,
)


class TestNormalize:
    """normalize() maps raw identifiers onto semantic versions."""

    def test_strict_semver_unchanged(self):
        assert normalize("1.20.4") == semantic_version.Version("1.20.4")

    def test_strict_semver_with_prerelease_kept(self):
        assert normalize("1.16.5-fixed") == semantic_version.Version("1.16.5-fixed")

    def test_two_components_gain_zero_patch(self):
        assert normalize("1.20") == semantic_version.Version("1.20.0")

    def test_single_component(self):
        assert normalize("3") == semantic_version.Version("3.0.0")

    def test_extra_components_truncated(self):
        assert normalize("1.2.3.4") == semantic_version.Version("1.2.3")

    def test_trailing_qualifier_dropped(self):
        assert normalize("1.20 Pre-Release 1") == semantic_version.Version("1.20.0")

    def test_v_prefix_tolerated(self):
        assert normalize("v1.8") == semantic_version.Version("1.8.0")

    def test_no_numeric_prefix(self):
        assert normalize("nonsense") is None
        assert normalize("b1.7.3") is None
        assert normalize("") is None


class TestNormalizePattern:
    """normalize_pattern() rewrites wildcard suffixes and flags 'latest'."""

    def test_x_suffix_becomes_star(self):
        result = normalize_pattern("1.20.x")
        assert result.pattern == "1.20.*"
        assert result.warning is None

    def test_major_x(self):
        assert normalize_pattern("3.x").pattern == "3.*"

    def test_latest_passes_with_warning(self):
        result = normalize_pattern("latest")
        assert result.pattern == "latest"
        assert result.warning is not None
        assert result.warning.kind == WarningKind.UNSUPPORTED_TOKEN
        assert result.warning.pattern == "latest"

    def test_other_patterns_unchanged(self):
        for pattern in ["1.20.4", "^1.19", ">=1.8 <1.9", "1.16.5-fixed"]:
            result = normalize_pattern(pattern)
            assert result.pattern == pattern
            assert result.warning is None


class TestRangeAndExact:
    def test_parse_range_valid(self):
        assert parse_range("1.20.*") is not None
        assert parse_range("^1.19") is not None
        assert parse_range("1.20.4") is not None

    def test_parse_range_allows_space_after_operator(self):
        spec = parse_range(">= 1.20 < 1.21")
        assert spec is not None
        assert spec.match(semantic_version.Version("1.20.4"))
        assert not spec.match(semantic_version.Version("1.21.0"))

    def test_parse_exact(self):
        assert parse_exact("1.16.5-fixed") == semantic_version.Version("1.16.5-fixed")
        assert parse_exact("v2.0.0") == semantic_version.Version("2.0.0")
        assert parse_exact("1.20") is None
        assert parse_exact("^1.20.0") is None

    def test_parse_range_invalid(self):
        assert parse_range("nonsense") is None
        assert parse_range("latest") is None

    def test_is_exact_version(self):
        assert is_exact_version("2.0.0")
        assert not is_exact_version("2.0")
        assert not is_exact_version("^2.0.0")


class TestOrdering:
    """Descending order with the reverse-lexicographic fallback pinned."""

    def test_semver_descending(self):
        assert sort_descending(["1.19.4", "1.20.4", "1.20.1"]) == ["1.20.4", "1.20.1", "1.19.4"]

    def test_normalized_comparison(self):
        assert sort_descending(["1.19", "1.20", "1.19.4"]) == ["1.20", "1.19.4", "1.19"]

    def test_numeric_not_lexicographic(self):
        assert sort_descending(["1.9", "1.10"]) == ["1.10", "1.9"]

    def test_equal_normalized_values_keep_input_order(self):
        assert sort_descending(["1.20", "1.20.0"]) == ["1.20", "1.20.0"]
        assert compare_descending("1.20", "1.20.0") == 0

    def test_fallback_is_reverse_lexicographic(self):
        assert compare_descending("alpha", "beta") == 1
        assert compare_descending("beta", "alpha") == -1
        assert compare_descending("same", "same") == 0
        assert sort_descending(["alpha", "gamma", "beta"]) == ["gamma", "beta", "alpha"]

    def test_fallback_applies_when_one_side_unnormalizable(self):
        # "b1.7.3" > "1.20.4" as strings, so it sorts first
        assert compare_descending("1.20.4", "b1.7.3") == 1
        assert compare_descending("b1.7.3", "1.20.4") == -1
