"""
Semantic version parsing for cluster compatibility checks.

Cluster versions come back from the API server as e.g. "v1.15.3-gke.1".
Only major and minor take part in compatibility decisions; a patch-level
difference never blocks an install.
"""

import re
from dataclasses import dataclass

from oppack.errors import VersionError

VERSION_PATTERN = re.compile(
    r"^v?(?P<major>\d+)(?:\.(?P<minor>\d+))?(?:\.(?P<patch>\d+))?(?P<rest>[-+].*)?$"
)


@dataclass(frozen=True, order=True)
class Version:
    major: int
    minor: int = 0
    patch: int = 0

    @classmethod
    def parse(cls, value: str) -> "Version":
        """
        Parse "1.15", "1.15.3", "v1.15.3" or "v1.15.3-gke.1".

        Pre-release and build suffixes are dropped.

        Raises:
            VersionError: If value is not a version
        """
        match = VERSION_PATTERN.match((value or "").strip())
        if not match:
            raise VersionError(f"invalid version: {value!r}")
        return cls(
            major=int(match.group("major")),
            minor=int(match.group("minor") or 0),
            patch=int(match.group("patch") or 0),
        )

    def compare_major_minor(self, other: "Version") -> int:
        """-1, 0 or 1 comparing only major and minor."""
        mine = (self.major, self.minor)
        theirs = (other.major, other.minor)
        return (mine > theirs) - (mine < theirs)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"
