"""Tests for mdbvm._core.version module."""

import itertools

import pytest

from mdbvm._core.version import (
    MDBVM_VERSION,
    TOOLS_SPLIT_VERSION,
    TOOLS_DEDICATED_VERSION,
    parse_version,
    is_valid_version,
    is_prerelease,
    version_series,
    compare,
    lt,
    lte,
    gt,
    gte,
    eq,
    sort_versions,
    max_version,
)
from mdbvm.errors import InvalidVersionFormat
from mdbvm.types import Ordering


SAMPLE = [
    "2.6.0-rc0",
    "2.6.0",
    "3.6.0-beta2",
    "3.6.0-rc1",
    "3.6.0-rc10",
    "3.6.0",
    "4.3.2",
    "4.3.10",
    "7.0.0-alpha",
    "7.0.0",
    "10.0.0",
    "100.7.0",
]


class TestVersionConstants:
    """Tests for version constants."""

    def test_mdbvm_version_format(self):
        """Package version should be valid semver."""
        parts = MDBVM_VERSION.split(".")
        assert len(parts) == 3
        for part in parts:
            assert part.isdigit()

    def test_thresholds_are_valid(self):
        """Thresholds should parse and be ordered."""
        assert lt(TOOLS_SPLIT_VERSION, TOOLS_DEDICATED_VERSION)


class TestParseVersion:
    """Tests for parse_version function."""

    def test_parse_final(self):
        """Final release gets the highest tag rank."""
        assert parse_version("7.0.2") == (7, 0, 2, 3, 0)

    def test_parse_rc(self):
        """Release candidates keep their number."""
        assert parse_version("7.1.0-rc1") == (7, 1, 0, 2, 1)

    def test_parse_tag_without_number(self):
        """A bare tag counts as number zero."""
        assert parse_version("7.0.0-alpha") == (7, 0, 0, 0, 0)

    def test_parse_rejects_v_prefix(self):
        """Release identifiers carry no leading 'v'."""
        with pytest.raises(InvalidVersionFormat):
            parse_version("v1.2.3")

    @pytest.mark.parametrize("bad", ["1.2", "not.a.version", "1.2.3.4", "1.2.3-", "1.2.3-ent", "", " 1.2.3"])
    def test_parse_invalid_format(self, bad):
        """Malformed strings raise InvalidVersionFormat."""
        with pytest.raises(InvalidVersionFormat):
            parse_version(bad)

    def test_non_string(self):
        """Non-string input is rejected, not coerced."""
        with pytest.raises(InvalidVersionFormat):
            parse_version(7)

    def test_invalid_is_value_error(self):
        """InvalidVersionFormat can be caught as ValueError."""
        with pytest.raises(ValueError):
            parse_version("x")


class TestPredicates:
    """Tests for is_valid_version, is_prerelease and version_series."""

    def test_is_valid_version(self):
        assert is_valid_version("4.4.25") is True
        assert is_valid_version("4.4") is False

    def test_is_prerelease(self):
        assert is_prerelease("7.0.3-rc0") is True
        assert is_prerelease("7.0.3") is False

    def test_version_series(self):
        assert version_series("7.0.3-rc0") == (7, 0)


class TestCompare:
    """Tests for compare and derived predicates."""

    def test_numeric_not_lexicographic(self):
        """4.3.10 is newer than 4.3.2."""
        assert compare("4.3.10", "4.3.2") == Ordering.GT
        assert compare("10.0.0", "9.9.9") == Ordering.GT

    def test_equal(self):
        """A version compares equal to itself."""
        for v in SAMPLE:
            assert compare(v, v) == Ordering.EQ

    def test_prerelease_before_final(self):
        """Pre-releases sort before their final release."""
        assert compare("7.0.3-rc0", "7.0.3") == Ordering.LT
        assert compare("7.0.3-rc0", "7.0.2") == Ordering.GT

    def test_tag_ordering(self):
        """alpha < beta < rc, then numeric within a tag."""
        assert lt("3.6.0-alpha1", "3.6.0-beta1")
        assert lt("3.6.0-beta9", "3.6.0-rc0")
        assert lt("3.6.0-rc2", "3.6.0-rc10")

    def test_malformed_fails(self):
        """Comparing against a malformed string fails."""
        with pytest.raises(InvalidVersionFormat):
            compare("7.0.0", "7.0")

    def test_antisymmetric(self):
        """compare(a, b) is the negation of compare(b, a)."""
        for a, b in itertools.product(SAMPLE, repeat=2):
            assert compare(a, b) == Ordering(-compare(b, a))

    def test_transitive(self):
        """a <= b and b <= c implies a <= c."""
        for a, b, c in itertools.product(SAMPLE, repeat=3):
            if lte(a, b) and lte(b, c):
                assert lte(a, c)

    def test_derived_predicates(self):
        """Predicates agree with compare."""
        assert gt("6.0.0", "5.0.0")
        assert gte("6.0.0", "6.0.0")
        assert lte("5.0.0", "6.0.0")
        assert eq("6.0.0", "6.0.0")
        assert not lt("6.0.0", "6.0.0")


class TestSorting:
    """Tests for sort_versions and max_version."""

    def test_sort_ascending(self):
        """Sorting is numeric with pre-releases first."""
        shuffled = list(reversed(SAMPLE))
        assert sort_versions(shuffled) == SAMPLE

    def test_sort_descending(self):
        assert sort_versions(SAMPLE, reverse=True) == list(reversed(SAMPLE))

    def test_max_version(self):
        assert max_version(["7.0.2", "7.1.0-rc1", "7.0.10"]) == "7.1.0-rc1"

    def test_max_version_empty(self):
        assert max_version([]) is None
