"""
Core functionality for sdkprune.

This package contains the foundational modules that other components depend on.
"""

from .cancellation import CancellationToken, cancel_on_signals
from .locking import sync_lock
from .process import CommandResult, run_command

from .exceptions import (
    SdkPruneError,
    ConfigurationError,
    ReleaseError,
    ReleaseSourceError,
    InvalidVersionError,
    VersionInvariantError,
    BootstrapError,
    ReconcileError,
    RunLockError,
    InstallError,
    ShimInstallError,
    SdkDownloadError,
    CommandError,
    CommandCancelledError,
)

__all__ = [
    "CancellationToken",
    "cancel_on_signals",
    "sync_lock",
    "CommandResult",
    "run_command",
    "SdkPruneError",
    "ConfigurationError",
    "ReleaseError",
    "ReleaseSourceError",
    "InvalidVersionError",
    "VersionInvariantError",
    "BootstrapError",
    "ReconcileError",
    "RunLockError",
    "InstallError",
    "ShimInstallError",
    "SdkDownloadError",
    "CommandError",
    "CommandCancelledError",
]
