"""
The sync pipeline: select, prune, install, promote.

    releases ──reduce──> desired set ──reconcile──> pruned cache
                                      └──install (bounded, isolated)──┐
                                                                      v
                                                          promote gotip as go

Listing, reduction, bootstrap and pruning failures abort the run. Install
failures are logged per version and do not stop promotion.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, FrozenSet, List, Optional

from .config import SyncConfig
from .core.cancellation import CancellationToken
from .core.exceptions import ReconcileError
from .core.locking import sync_lock
from .core.process import CommandResult, run_command
from .releases.reducer import reduce_releases
from .releases.source import ReleaseRecord, fetch_releases, load_releases_file
from .sdk.bootstrap import derive_environment, resolve_bin_dir
from .sdk.installer import InstallOrchestrator, InstallReport
from .sdk.promote import promote
from .sdk.reconcile import ReconcileResult, reconcile

logger = logging.getLogger(__name__)


@dataclass
class SyncResult:
    """Summary of a sync run."""

    desired: FrozenSet[str]
    bin_root: Path
    reconciled: ReconcileResult
    report: Optional[InstallReport] = None
    promoted: bool = False
    dry_run: bool = False


def load_releases(
    config: SyncConfig, releases_file: Optional[Path] = None
) -> List[ReleaseRecord]:
    """Read releases from a saved index if given, otherwise from the network."""
    if releases_file is not None:
        logger.debug(f"Loading releases from {releases_file}")
        return load_releases_file(releases_file)
    return fetch_releases(config.releases_url)


def plan(
    config: SyncConfig, releases_file: Optional[Path] = None
) -> FrozenSet[str]:
    """Return the tokens a sync would keep."""
    return reduce_releases(load_releases(config, releases_file), config.min_minor)


def run_sync(
    config: SyncConfig,
    dry_run: bool = False,
    releases_file: Optional[Path] = None,
    cancel: Optional[CancellationToken] = None,
    runner: Callable[..., CommandResult] = run_command,
) -> SyncResult:
    """
    Run a full sync.

    Args:
        config: Effective configuration
        dry_run: Report removals and installs without changing anything
        releases_file: Saved download index to use instead of the network
        cancel: Cancellation token for the external commands
        runner: Command runner (for testing)

    Returns:
        SyncResult

    Raises:
        ReleaseSourceError: If releases cannot be listed
        InvalidVersionError, VersionInvariantError: On bad release data
        BootstrapError: If the launcher directory cannot be resolved
        ReconcileError: If the SDK root is missing or pruning fails
        RunLockError: If another sync is running
    """
    cancel = cancel or CancellationToken()

    desired = plan(config, releases_file)
    logger.info(f"keeping sdks: {', '.join(sorted(desired))}")

    if config.bin_dir is not None:
        bin_root = Path(config.bin_dir)
    else:
        bin_root = resolve_bin_dir(config.bootstrap_go, cancel=cancel, runner=runner)
    logger.info(f"resolved GOBIN: {bin_root}")

    if dry_run:
        reconciled = reconcile(desired, config.sdk_root, bin_root, dry_run=True)
        for token in sorted(desired):
            logger.info(f"[DRY RUN] Would install: {token}")
        return SyncResult(
            desired=desired, bin_root=bin_root, reconciled=reconciled, dry_run=True
        )

    sdk_root = Path(config.sdk_root)
    if not sdk_root.is_dir():
        raise ReconcileError(f"read {sdk_root}: no such directory")

    with sync_lock(sdk_root):
        reconciled = reconcile(desired, config.sdk_root, bin_root)

        orchestrator = InstallOrchestrator(
            bootstrap_go=config.bootstrap_go,
            bin_root=bin_root,
            env=derive_environment(config.bootstrap_go),
            parallel=config.parallel,
            cancel=cancel,
            runner=runner,
        )
        report = orchestrator.run(desired)

        promoted = promote(bin_root)

    return SyncResult(
        desired=desired,
        bin_root=bin_root,
        reconciled=reconciled,
        report=report,
        promoted=promoted,
    )
