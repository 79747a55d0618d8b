"""
Sync command implementation.

Prunes the Go SDK cache, reinstalls the kept versions and promotes gotip.
"""

import logging

from sdkprune.cli.utils import config_from_args, format_list, safe_print
from sdkprune.core.cancellation import CancellationToken, cancel_on_signals
from sdkprune.sync import SyncResult, run_sync

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the sync command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code: 0 when the run completed (even with failed installs),
        130 when it was interrupted
    """
    config = config_from_args(args)
    logger.debug(f"Effective configuration: {config}")

    token = CancellationToken()
    with cancel_on_signals(token):
        result = run_sync(
            config,
            dry_run=args.dry_run,
            releases_file=args.releases_file,
            cancel=token,
        )

    _print_summary(result)

    if token.cancelled:
        logger.info("Operation cancelled by user")
        return 130
    return 0


def _print_summary(result: SyncResult) -> None:
    """Print what the run removed and installed."""
    verb = "Would remove" if result.dry_run else "Removed"
    print(format_list(verb, result.reconciled.removed))

    if result.report is None:
        return

    report = result.report
    print(format_list("Installed", report.installed))
    if report.failed:
        safe_print(f"⚠️  {len(report.failed)} version(s) failed, see log above:")
        print(format_list("Failed", report.failed))
    if report.not_started:
        print(format_list("Not started", report.not_started))
    if not result.promoted:
        safe_print(f"⚠️  {result.bin_root / 'go'} was not relinked to gotip")
