"""
Go release listing.

Releases come from the go.dev download index
(`https://go.dev/dl/?mode=json&include=all`), a JSON array of objects with
at least a `version` and a `stable` field. A saved copy of that document can
be used instead of the network.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional

import requests

from ..core.exceptions import ReleaseSourceError
from .version import GoVersion

logger = logging.getLogger(__name__)

RELEASES_URL = "https://go.dev/dl/?mode=json&include=all"
REQUEST_TIMEOUT = 30


@dataclass(frozen=True)
class ReleaseRecord:
    """A published Go release."""

    version: GoVersion
    stable: bool = False


def parse_releases(data: Any) -> List[ReleaseRecord]:
    """
    Convert a decoded download index into release records.

    Args:
        data: Decoded JSON (list of release objects)

    Returns:
        Release records in document order

    Raises:
        ReleaseSourceError: If the document does not have the expected shape
        InvalidVersionError: If a release name is malformed
    """
    if not isinstance(data, list):
        raise ReleaseSourceError(
            f"Expected a list of releases, got {type(data).__name__}"
        )

    records = []
    for index, entry in enumerate(data):
        if not isinstance(entry, dict) or "version" not in entry:
            raise ReleaseSourceError(f"Release entry {index} has no 'version' field")
        records.append(
            ReleaseRecord(
                version=GoVersion.parse(entry["version"]),
                stable=bool(entry.get("stable", False)),
            )
        )

    logger.debug(f"Parsed {len(records)} releases")
    return records


def fetch_releases(
    url: str = RELEASES_URL,
    timeout: int = REQUEST_TIMEOUT,
    session: Optional[requests.Session] = None,
) -> List[ReleaseRecord]:
    """
    Fetch every published Go release, including unstable ones.

    Args:
        url: Download index URL
        timeout: Request timeout in seconds
        session: Optional requests session

    Returns:
        Release records

    Raises:
        ReleaseSourceError: If the request or decoding fails
    """
    logger.debug(f"Fetching Go releases from {url}")
    http = session or requests

    try:
        response = http.get(url, timeout=timeout)
        response.raise_for_status()
        data = response.json()
    except requests.RequestException as e:
        raise ReleaseSourceError(f"get go releases: {e}") from e
    except ValueError as e:
        raise ReleaseSourceError(f"Invalid JSON from {url}: {e}") from e

    return parse_releases(data)


def load_releases_file(path: Path) -> List[ReleaseRecord]:
    """
    Load releases from a saved copy of the download index.

    Args:
        path: JSON file

    Returns:
        Release records

    Raises:
        ReleaseSourceError: If the file cannot be read or decoded
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ReleaseSourceError(f"Failed to read releases file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ReleaseSourceError(f"Invalid JSON in releases file {path}: {e}") from e

    return parse_releases(data)
