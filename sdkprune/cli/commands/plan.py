"""
Plan command implementation.

Prints the Go versions a sync would keep and install.
"""

import logging

from sdkprune.cli.utils import config_from_args, format_list
from sdkprune.sync import plan

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the plan command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    config = config_from_args(args)
    logger.debug(f"Effective configuration: {config}")

    desired = plan(config, releases_file=args.releases_file)
    print(format_list(f"Keeping (min minor {config.min_minor})", sorted(desired)))
    return 0
