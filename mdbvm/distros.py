"""
Linux distribution tables.

Newer releases are not rebuilt for every historical distribution, so each
distribution band maps to an ordered list of build tags to probe, most
specific first.
"""

from __future__ import annotations

from fnmatch import fnmatch
from typing import Optional, Tuple

#: Map derivative distribution ids to the distribution their builds target
DISTRO_ID_ALIASES = {
    # RHEL derivatives
    "almalinux": "rhel",
    "centos": "rhel",
    "fedora": "rhel",
    "ol": "rhel",
    "oracle": "rhel",
    "redhat": "rhel",
    "rocky": "rhel",
    "scientific": "rhel",
    # Debian derivatives built on Ubuntu
    "elementary": "ubuntu",
    "linuxmint": "ubuntu",
    "mint": "ubuntu",
    "neon": "ubuntu",
    "pop": "ubuntu",
    "zorin": "ubuntu",
    # SUSE family
    "opensuse": "sles",
    "opensuse-leap": "sles",
    "suse": "sles",
    "amazon": "amzn",
}

#: Map derivative distribution versions (fnmatch patterns) to upstream versions
DISTRO_VERSION_ALIASES = {
    "elementary": {
        "5.*": "18.04",
        "6": "20.04",
        "6.*": "20.04",
        "7": "22.04",
        "7.*": "22.04",
    },
    "fedora": {
        "2[0-7]": "7",
        "2[89]": "8",
        "3*": "8",
        "4*": "9",
    },
    "linuxmint": {
        "19": "18.04",
        "19.*": "18.04",
        "20": "20.04",
        "20.*": "20.04",
        "21": "22.04",
        "21.*": "22.04",
        "22": "24.04",
        "22.*": "24.04",
    },
    "zorin": {
        "15*": "18.04",
        "16*": "20.04",
        "17*": "22.04",
    },
}

#: "{distro_id}-{major}" -> build tags, most specific first
DISTRO_CANDIDATES = {
    "ubuntu-24": ("ubuntu2404", "ubuntu2204"),
    "ubuntu-22": ("ubuntu2204", "ubuntu2004"),
    "ubuntu-20": ("ubuntu2004", "ubuntu1804"),
    "ubuntu-18": ("ubuntu1804", "ubuntu1604"),
    "ubuntu-16": ("ubuntu1604", "ubuntu1404"),
    "ubuntu-14": ("ubuntu1404", "ubuntu1204"),
    "ubuntu-12": ("ubuntu1204",),
    "debian-12": ("debian12", "debian11"),
    "debian-11": ("debian11", "debian10"),
    "debian-10": ("debian10", "debian92"),
    "debian-9": ("debian92", "debian81"),
    "debian-8": ("debian81", "debian71"),
    "debian-7": ("debian71",),
    "rhel-9": ("rhel90", "rhel80"),
    "rhel-8": ("rhel80", "rhel70"),
    "rhel-7": ("rhel70", "rhel62"),
    "rhel-6": ("rhel62", "rhel55"),
    "rhel-5": ("rhel55",),
    "amzn-2023": ("amazon2023", "amazon2"),
    "amzn-2": ("amazon2", "amazon"),
    "amzn-2018": ("amazon",),
    "amzn-2017": ("amazon",),
    "sles-15": ("suse15", "suse12"),
    "sles-12": ("suse12", "suse11"),
    "sles-11": ("suse11",),
}


def normalize_distro(distro_id: str, distro_version: str) -> Tuple[str, str]:
    """
    Collapse a derivative distribution onto the one its builds target.

    Versions of derivatives with their own numbering are mapped to the
    upstream version; unknown versions are kept as reported.
    """
    raw_id = (distro_id or "").strip().lower()
    version = (distro_version or "").strip()

    for pattern, upstream in DISTRO_VERSION_ALIASES.get(raw_id, {}).items():
        if fnmatch(version, pattern):
            version = upstream
            break

    return DISTRO_ID_ALIASES.get(raw_id, raw_id), version


def major_band(distro_version: Optional[str]) -> Optional[str]:
    """Major version component: "22.04" -> "22", "2018.03" -> "2018"."""
    if not distro_version:
        return None
    major = distro_version.split(".", 1)[0]
    return major if major.isdigit() else None


def candidate_chain(distro_id: Optional[str], distro_version: Optional[str]) -> Tuple[str, ...]:
    """Build tags for a canonical distribution, or () when unmapped."""
    major = major_band(distro_version)
    if not distro_id or major is None:
        return ()
    return DISTRO_CANDIDATES.get(f"{distro_id}-{major}", ())
