"""
Pruning of installed SDKs and launchers that are no longer wanted.

Two directories are reconciled against the set of tokens to keep:

    SDK root (~/sdk):
        go1.21.1/   kept if "go1.21.1" is wanted
        go1.20.5/   removed otherwise
        gotip/      always wanted
        other/      ignored (no release prefix)

    Binary root (GOBIN):
        go          the promoted default; always removed, relinked at the end
        go1.21.1    kept or removed like the SDK directory
        gopls       ignored (no release prefix)

The cache is assumed to have a single owner; any failure to list or remove
aborts the run.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import AbstractSet, List

from ..core.exceptions import ReconcileError
from ..core.filesystem import FilesystemError, list_entry_names, safe_remove

logger = logging.getLogger(__name__)

SDK_PREFIX = "go1"
BINARY_PREFIX = "go1."
DEFAULT_LAUNCHER = "go"


@dataclass
class ReconcileResult:
    """Paths removed (or, in a dry run, that would be removed)."""

    removed_sdks: List[Path] = field(default_factory=list)
    removed_binaries: List[Path] = field(default_factory=list)
    dry_run: bool = False

    @property
    def removed(self) -> List[Path]:
        return self.removed_sdks + self.removed_binaries


def stale_sdk_names(desired: AbstractSet[str], names: List[str]) -> List[str]:
    """Return SDK directory names carrying the release prefix but not wanted."""
    return [n for n in names if n.startswith(SDK_PREFIX) and n not in desired]


def stale_binary_names(desired: AbstractSet[str], names: List[str]) -> List[str]:
    """Return launcher names to remove, including the default launcher."""
    stale = []
    for name in names:
        if name == DEFAULT_LAUNCHER:
            stale.append(name)
        elif name.startswith(BINARY_PREFIX) and name not in desired:
            stale.append(name)
    return stale


def _list(directory: Path) -> List[str]:
    try:
        return list_entry_names(directory)
    except FilesystemError as e:
        raise ReconcileError(f"read {directory}: {e}") from e


def _remove(path: Path, root: Path, dry_run: bool) -> None:
    if dry_run:
        logger.info(f"[DRY RUN] Would remove: {path}")
        return
    try:
        safe_remove(path, require_prefix=root)
    except (FilesystemError, ValueError) as e:
        raise ReconcileError(f"removing {path}: {e}") from e
    logger.info(f"Removed: {path}")


def reconcile_sdks(
    desired: AbstractSet[str], sdk_root: Path, dry_run: bool = False
) -> List[Path]:
    """
    Remove SDK directories that are not wanted.

    Args:
        desired: Tokens to keep
        sdk_root: Directory holding go<version> SDK directories
        dry_run: Only report what would be removed

    Returns:
        Removed paths

    Raises:
        ReconcileError: If listing or removal fails
    """
    sdk_root = Path(sdk_root)
    removed = []
    for name in stale_sdk_names(desired, _list(sdk_root)):
        path = sdk_root / name
        _remove(path, sdk_root, dry_run)
        removed.append(path)
    return removed


def reconcile_binaries(
    desired: AbstractSet[str], bin_root: Path, dry_run: bool = False
) -> List[Path]:
    """
    Remove the default launcher and versioned launchers that are not wanted.

    Args:
        desired: Tokens to keep
        bin_root: Directory holding go1.* launchers
        dry_run: Only report what would be removed

    Returns:
        Removed paths

    Raises:
        ReconcileError: If listing or removal fails
    """
    bin_root = Path(bin_root)
    removed = []
    for name in stale_binary_names(desired, _list(bin_root)):
        path = bin_root / name
        _remove(path, bin_root, dry_run)
        removed.append(path)
    return removed


def reconcile(
    desired: AbstractSet[str],
    sdk_root: Path,
    bin_root: Path,
    dry_run: bool = False,
) -> ReconcileResult:
    """
    Bring the SDK and binary directories in line with the wanted tokens.

    Args:
        desired: Tokens to keep
        sdk_root: Directory holding installed SDKs
        bin_root: Directory holding launchers
        dry_run: Only report what would be removed

    Returns:
        ReconcileResult

    Raises:
        ReconcileError: On the first listing or removal failure
    """
    result = ReconcileResult(dry_run=dry_run)
    result.removed_sdks = reconcile_sdks(desired, sdk_root, dry_run=dry_run)
    result.removed_binaries = reconcile_binaries(desired, bin_root, dry_run=dry_run)
    logger.debug(
        f"Reconciled: {len(result.removed_sdks)} sdks, "
        f"{len(result.removed_binaries)} binaries"
    )
    return result
