"""
Selection of the Go SDK versions to keep.

The release list is folded into the newest version of each minor line
(go1.21.0, go1.21.1, go1.21rc2 ... collapse to go1.21.1). Lines older than
the configured floor are dropped, and the rolling development build is
always kept.
"""

import logging
from typing import Dict, FrozenSet, Iterable

from .source import ReleaseRecord
from .version import GoVersion, compare_versions

logger = logging.getLogger(__name__)

SENTINEL_TOKEN = "gotip"
DEFAULT_MIN_MINOR = 11


def latest_per_minor(releases: Iterable[ReleaseRecord]) -> Dict[int, GoVersion]:
    """
    Map each minor version number to the largest release of that line.

    Args:
        releases: Release records in any order

    Returns:
        Dictionary of minor -> newest GoVersion

    Raises:
        VersionInvariantError: If two releases decompose to identical parts
    """
    latest: Dict[int, GoVersion] = {}
    for release in releases:
        version = release.version
        current = latest.get(version.minor)
        if current is None:
            latest[version.minor] = version
            continue
        latest[version.minor] = compare_versions(version, current)
    return latest


def reduce_releases(
    releases: Iterable[ReleaseRecord], min_minor: int = DEFAULT_MIN_MINOR
) -> FrozenSet[str]:
    """
    Build the set of version tokens to keep installed.

    Args:
        releases: Release records
        min_minor: Earliest minor line to keep (inclusive)

    Returns:
        Frozen set of tokens, always containing "gotip"

    Example:
        >>> releases = [ReleaseRecord(GoVersion.parse(v)) for v in
        ...             ("go1.21.0", "go1.21.1", "go1.22rc1", "go1.20.5")]
        >>> sorted(reduce_releases(releases, min_minor=21))
        ['go1.21.1', 'go1.22rc1', 'gotip']
    """
    keep = {SENTINEL_TOKEN}
    for minor, version in latest_per_minor(releases).items():
        if minor < min_minor:
            continue
        keep.add(str(version))

    logger.debug(f"Selected {len(keep)} versions with min minor {min_minor}")
    return frozenset(keep)
