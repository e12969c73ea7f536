"""Tests for mdbvm.distros module."""

import pytest

from mdbvm.distros import (
    DISTRO_CANDIDATES,
    candidate_chain,
    major_band,
    normalize_distro,
)


class TestNormalizeDistro:
    """Tests for normalize_distro function."""

    @pytest.mark.parametrize("distro_id", ["centos", "rocky", "almalinux", "ol", "redhat", "RHEL"])
    def test_rhel_derivatives(self, distro_id):
        assert normalize_distro(distro_id, "8.6") == ("rhel", "8.6")

    def test_fedora_maps_to_rhel_version(self):
        assert normalize_distro("fedora", "38") == ("rhel", "8")

    def test_linuxmint_maps_to_ubuntu_version(self):
        assert normalize_distro("linuxmint", "21.2") == ("ubuntu", "22.04")

    def test_pop_keeps_version(self):
        assert normalize_distro("pop", "22.04") == ("ubuntu", "22.04")

    def test_unknown_passthrough(self):
        assert normalize_distro("arch", "") == ("arch", "")

    def test_none_safe(self):
        assert normalize_distro(None, None) == ("", "")


class TestMajorBand:
    """Tests for major_band function."""

    def test_dotted(self):
        assert major_band("22.04") == "22"

    def test_plain(self):
        assert major_band("2023") == "2023"

    def test_missing(self):
        assert major_band(None) is None
        assert major_band("") is None
        assert major_band("rolling") is None


class TestCandidateChain:
    """Tests for candidate_chain function."""

    def test_rhel8(self):
        """RHEL 8 walks back to RHEL 7 builds."""
        assert candidate_chain("rhel", "8.6") == ("rhel80", "rhel70")

    def test_ubuntu(self):
        assert candidate_chain("ubuntu", "22.04") == ("ubuntu2204", "ubuntu2004")

    def test_amazon(self):
        assert candidate_chain("amzn", "2") == ("amazon2", "amazon")

    def test_unmapped(self):
        """Unmapped distributions get an empty chain."""
        assert candidate_chain("arch", "") == ()
        assert candidate_chain("rhel", "3") == ()
        assert candidate_chain(None, None) == ()

    def test_table_shape(self):
        """Every entry lists one to three build tags."""
        for key, chain in DISTRO_CANDIDATES.items():
            assert 1 <= len(chain) <= 3, key
            assert len(set(chain)) == len(chain), key
