"""
Go release version parsing and comparison.

Go names its releases `go1`, `go1.21`, `go1.21.1`, `go1.22rc1` or
`go1.9beta2`. A GoVersion decomposes such a name into
(major, minor, patch, prerelease kind, prerelease number); missing minor or
patch components are 0.

Ordering is component-wise on major, minor and patch. A final release
outranks every rc or beta of the same major.minor.patch; between two
prereleases the rc number decides, then the beta number.

Example:
    >>> a = GoVersion.parse("go1.21.0")
    >>> b = GoVersion.parse("go1.21rc4")
    >>> compare_versions(a, b) is a
    True
"""

import re
from dataclasses import dataclass, field
from typing import Optional

from ..core.exceptions import InvalidVersionError, VersionInvariantError

RC = "rc"
BETA = "beta"

_VERSION_RE = re.compile(
    r"^go(?P<major>\d+)"
    r"(?:\.(?P<minor>\d+))?"
    r"(?:\.(?P<patch>\d+))?"
    r"(?:(?P<kind>rc|beta)(?P<number>\d+))?$"
)


@dataclass(frozen=True)
class GoVersion:
    """A parsed Go release name."""

    major: int
    minor: int
    patch: int
    prerelease_kind: Optional[str] = None
    prerelease_number: int = 0
    name: str = field(default="", compare=False)

    @classmethod
    def parse(cls, name: str) -> "GoVersion":
        """
        Parse a Go release name.

        Args:
            name: Release name such as "go1.21.1" or "go1.22rc1"

        Returns:
            Parsed GoVersion

        Raises:
            InvalidVersionError: If the name is not a Go release name
        """
        if not isinstance(name, str):
            raise InvalidVersionError(repr(name), "not a string")

        match = _VERSION_RE.match(name.strip())
        if not match:
            raise InvalidVersionError(name, "expected go<major>[.<minor>[.<patch>]][rcN|betaN]")

        kind = match.group("kind")
        number = int(match.group("number")) if kind else 0
        if kind and number == 0:
            raise InvalidVersionError(name, f"{kind} number must be positive")

        return cls(
            major=int(match.group("major")),
            minor=int(match.group("minor") or 0),
            patch=int(match.group("patch") or 0),
            prerelease_kind=kind,
            prerelease_number=number,
            name=name.strip(),
        )

    @property
    def rc(self) -> int:
        return self.prerelease_number if self.prerelease_kind == RC else 0

    @property
    def beta(self) -> int:
        return self.prerelease_number if self.prerelease_kind == BETA else 0

    @property
    def is_final(self) -> bool:
        return self.rc + self.beta == 0

    def parts(self):
        """Return (major, minor, patch, rc, beta)."""
        return self.major, self.minor, self.patch, self.rc, self.beta

    def __str__(self) -> str:
        if self.name:
            return self.name
        text = f"go{self.major}.{self.minor}"
        if self.patch:
            text += f".{self.patch}"
        if self.prerelease_kind:
            text += f"{self.prerelease_kind}{self.prerelease_number}"
        return text


def _larger(a: GoVersion, b: GoVersion, an: int, bn: int) -> Optional[GoVersion]:
    if an > bn:
        return a
    if bn > an:
        return b
    return None


def compare_versions(a: GoVersion, b: GoVersion) -> GoVersion:
    """
    Return whichever of two versions is larger.

    Args:
        a: First version
        b: Second version

    Returns:
        a or b itself, never a new object

    Raises:
        VersionInvariantError: If both decompose to the same parts
    """
    for an, bn in ((a.major, b.major), (a.minor, b.minor), (a.patch, b.patch)):
        larger = _larger(a, b, an, bn)
        if larger is not None:
            return larger

    # Same major.minor.patch: a final release beats any rc/beta.
    if a.is_final and not b.is_final:
        return a
    if b.is_final and not a.is_final:
        return b

    for an, bn in ((a.rc, b.rc), (a.beta, b.beta)):
        larger = _larger(a, b, an, bn)
        if larger is not None:
            return larger

    raise VersionInvariantError(a, b)
