"""
Tests for mdbvm.errors module.
"""

import pytest

from mdbvm.errors import (
    MdbvmError,
    ConfigError,
    InvalidVersionFormat,
    CatalogUnavailable,
    NoMatchingRelease,
    ArtifactNotFound,
)
from mdbvm.types import Edition, Flavor, OSFamily, PlatformFingerprint, SeriesSpec


class TestMdbvmError:
    """Tests for base MdbvmError."""

    def test_is_exception(self):
        assert issubclass(MdbvmError, Exception)

    def test_message(self):
        error = MdbvmError("Test error message")
        assert str(error) == "Test error message"

    @pytest.mark.parametrize(
        "cls",
        [ConfigError, InvalidVersionFormat, CatalogUnavailable, NoMatchingRelease, ArtifactNotFound],
    )
    def test_inheritance(self, cls):
        assert issubclass(cls, MdbvmError)


class TestInvalidVersionFormat:
    """Tests for InvalidVersionFormat."""

    def test_carries_value(self):
        error = InvalidVersionFormat("7.x")
        assert error.value == "7.x"
        assert "7.x" in str(error)

    def test_detail(self):
        error = InvalidVersionFormat("7.x", "expected X.Y.Z")
        assert "expected X.Y.Z" in str(error)

    def test_is_value_error(self):
        assert issubclass(InvalidVersionFormat, ValueError)


class TestCatalogUnavailable:
    """Tests for CatalogUnavailable."""

    def test_carries_url(self):
        error = CatalogUnavailable("timed out", url="https://example.com/full.json")
        assert error.url == "https://example.com/full.json"
        assert "timed out" in str(error)

    def test_url_optional(self):
        assert CatalogUnavailable("down").url is None


class TestNoMatchingRelease:
    """Tests for NoMatchingRelease."""

    def test_message(self):
        spec = SeriesSpec(9, 9)
        error = NoMatchingRelease(spec, Flavor.STABLE)
        assert error.spec == spec
        assert error.flavor == Flavor.STABLE
        assert "9.9" in str(error)
        assert "stable" in str(error)


class TestArtifactNotFound:
    """Tests for ArtifactNotFound."""

    def test_context(self):
        fingerprint = PlatformFingerprint(OSFamily.LINUX, "x86_64", "rhel", "8.6")
        error = ArtifactNotFound(
            "7.0.2",
            Edition.ENTERPRISE,
            fingerprint,
            tried=["https://a", "https://b"],
        )
        assert error.version == "7.0.2"
        assert error.edition == Edition.ENTERPRISE
        assert error.fingerprint is fingerprint
        assert error.tried == ["https://a", "https://b"]
        assert "enterprise" in str(error)
        assert "linux/x86_64" in str(error)
        assert "2 URL" in str(error)

    def test_repr(self):
        fingerprint = PlatformFingerprint(OSFamily.OSX, "arm64")
        error = ArtifactNotFound("5.0.0", Edition.COMMUNITY, fingerprint)
        assert "ArtifactNotFound" in repr(error)
        assert error.tried == []
