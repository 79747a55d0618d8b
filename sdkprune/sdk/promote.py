"""
Promotion of the development build as the default `go` launcher.

Runs after every install task has finished, whatever their outcome. The
gotip install is not checked: if it failed, `go` ends up missing or
pointing at a stale gotip, which only shows when `go` is next run.
"""

import logging
from pathlib import Path

from ..core.filesystem import LinkCreationError, create_hardlink
from ..releases.reducer import SENTINEL_TOKEN
from .reconcile import DEFAULT_LAUNCHER

logger = logging.getLogger(__name__)


def promote(bin_root: Path, token: str = SENTINEL_TOKEN) -> bool:
    """
    Hard-link <bin_root>/<token> as <bin_root>/go.

    Args:
        bin_root: Directory holding the launchers
        token: Launcher to promote (default: gotip)

    Returns:
        True if the link was created
    """
    bin_root = Path(bin_root)
    source = bin_root / token
    target = bin_root / DEFAULT_LAUNCHER

    try:
        create_hardlink(source, target)
    except LinkCreationError as e:
        logger.warning(f"Default launcher not updated: {e}")
        return False

    logger.info(f"Promoted {token} as {target}")
    return True
