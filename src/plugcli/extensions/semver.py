"""``context.semver`` -- version parsing, comparison and range checks.

Versions follow PEP 440 as implemented by :mod:`packaging`, which accepts
plain ``MAJOR.MINOR.PATCH`` strings. Ranges are specifier sets such as
``">=1.2,<2"``; whitespace between comparators works as a separator too, so
``">=1.2 <2"`` is the same range.
"""

from __future__ import annotations

import re
from typing import Any, Optional

from packaging.specifiers import SpecifierSet
from packaging.version import InvalidVersion, Version

_RANGE_SEPARATOR = re.compile(r"\s*,\s*|\s+(?=[<>=!~])")

BUMP_PARTS = ("major", "minor", "patch")


def _split_range(spec: str) -> str:
    return _RANGE_SEPARATOR.sub(",", spec.strip())


class SemverToolbox:
    def valid(self, version: str) -> Optional[str]:
        """Return the normalised form of *version*, or ``None`` if invalid."""
        try:
            return str(Version(version))
        except InvalidVersion:
            return None

    def clean(self, version: str) -> Optional[str]:
        """Like :meth:`valid`, after stripping whitespace and a leading ``=``."""
        return self.valid(version.strip().lstrip("="))

    def compare(self, left: str, right: str) -> int:
        """Return -1, 0 or 1 as *left* is lower than, equal to or above *right*.

        Raises:
            ValueError: If either version is invalid.
        """
        a, b = Version(left), Version(right)
        return (a > b) - (a < b)

    def gt(self, left: str, right: str) -> bool:
        return Version(left) > Version(right)

    def lt(self, left: str, right: str) -> bool:
        return Version(left) < Version(right)

    def eq(self, left: str, right: str) -> bool:
        return Version(left) == Version(right)

    def satisfies(self, version: str, spec: str, prereleases: bool = False) -> bool:
        """Return True if *version* falls inside the range *spec*."""
        specifiers = SpecifierSet(_split_range(spec))
        return specifiers.contains(Version(version), prereleases=prereleases)

    def bump(self, version: str, part: str = "patch") -> str:
        """Increment one release component and reset the ones after it.

        Pre-release, post-release and local segments are dropped.

        Raises:
            ValueError: If *version* is invalid or *part* is not one of
                ``major``, ``minor`` or ``patch``.
        """
        if part not in BUMP_PARTS:
            raise ValueError(f"Unknown version part '{part}'; expected one of {', '.join(BUMP_PARTS)}")
        parsed = Version(version)
        major, minor, patch = parsed.major, parsed.minor, parsed.micro
        if part == "major":
            return f"{major + 1}.0.0"
        if part == "minor":
            return f"{major}.{minor + 1}.0"
        return f"{major}.{minor}.{patch + 1}"


def setup(context: Any) -> None:
    context.semver = SemverToolbox()
