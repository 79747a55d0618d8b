"""
Go release handling for sdkprune.

This package provides:
- Parsing and ordering of Go release names
- Fetching the published release list
- Reducing releases to the set of SDK versions to keep
"""

from .version import GoVersion, compare_versions
from .source import (
    RELEASES_URL,
    ReleaseRecord,
    parse_releases,
    fetch_releases,
    load_releases_file,
)
from .reducer import (
    SENTINEL_TOKEN,
    DEFAULT_MIN_MINOR,
    latest_per_minor,
    reduce_releases,
)

__all__ = [
    "GoVersion",
    "compare_versions",
    "RELEASES_URL",
    "ReleaseRecord",
    "parse_releases",
    "fetch_releases",
    "load_releases_file",
    "SENTINEL_TOKEN",
    "DEFAULT_MIN_MINOR",
    "latest_per_minor",
    "reduce_releases",
]
