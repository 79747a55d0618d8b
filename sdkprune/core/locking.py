"""
Run lock for the SDK cache.

Pruning assumes it is the only writer of the SDK and binary directories.
A file lock next to the SDKs keeps two sdkprune runs from pruning and
installing into the same cache at once.

Usage:
    with sync_lock(sdk_root):
        ...
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from filelock import FileLock, Timeout as LockTimeout

from .exceptions import RunLockError

logger = logging.getLogger(__name__)

LOCK_FILE_NAME = ".sdkprune.lock"


@contextmanager
def sync_lock(sdk_root: Path, timeout: float = 0) -> Iterator[Path]:
    """
    Hold the cache lock for the duration of a sync.

    The lock file name does not carry the release prefix, so pruning never
    touches it. The SDK root must already exist; it is never created here.

    Args:
        sdk_root: Directory holding the installed SDKs
        timeout: Seconds to wait; 0 fails immediately if held

    Yields:
        Path to the lock file

    Raises:
        RunLockError: If sdk_root is missing or another process holds the lock
    """
    sdk_root = Path(sdk_root)
    if not sdk_root.is_dir():
        raise RunLockError(f"Cannot lock {sdk_root}: not a directory")
    lock_path = sdk_root / LOCK_FILE_NAME
    lock = FileLock(str(lock_path), timeout=timeout)

    try:
        lock.acquire()
    except LockTimeout as e:
        raise RunLockError(
            f"Could not acquire {lock_path}. Another sdkprune run may be in progress."
        ) from e

    logger.debug(f"Acquired sync lock: {lock_path}")
    try:
        yield lock_path
    finally:
        lock.release()
        logger.debug(f"Released sync lock: {lock_path}")
