"""
Version constraint checks for Go module and toolchain versions.

Go versions (``v1.5.0``, ``go1.15.2``, pseudo-versions such as
``v0.0.0-20201021153110-b8a32a7db3e6``) are reduced to their release part
and compared with packaging's PEP 440 specifiers.
"""

import logging
import re
from typing import Optional

from packaging.specifiers import InvalidSpecifier, SpecifierSet
from packaging.version import InvalidVersion, Version

logger = logging.getLogger(__name__)

_GO_PREFIX = re.compile(r'^(?:go|v)')


def parse_go_version(text: str) -> Optional[Version]:
    """Parse a Go module or toolchain version; None if it is not a version."""
    if not text:
        return None
    release = _GO_PREFIX.sub('', text.strip())
    release = release.split('+', 1)[0].split('-', 1)[0]
    try:
        return Version(release)
    except InvalidVersion:
        logger.warning(f"Could not parse version {text}")
        return None


def satisfies(version_text: str, constraint: str) -> bool:
    """
    Check a Go version against a constraint such as ``>=1.5.0``.

    Unparsable versions never satisfy a constraint.
    """
    version = parse_go_version(version_text)
    if version is None:
        return False
    try:
        specifier = SpecifierSet(constraint)
    except InvalidSpecifier:
        raise ValueError(f"invalid version constraint: {constraint}")
    return specifier.contains(version, prereleases=True)
