"""
SDK cache management for sdkprune.

This package provides:
- Bootstrap go environment resolution
- Pruning of unwanted SDKs and launchers
- Concurrent installation of wanted versions
- Promotion of gotip as the default go
"""

from .bootstrap import DEFAULT_BOOTSTRAP_GO, resolve_bin_dir, derive_environment
from .reconcile import (
    SDK_PREFIX,
    BINARY_PREFIX,
    DEFAULT_LAUNCHER,
    ReconcileResult,
    reconcile,
    reconcile_sdks,
    reconcile_binaries,
)
from .installer import (
    DEFAULT_PARALLEL,
    InstallStatus,
    InstallReport,
    InstallOrchestrator,
)
from .promote import promote

__all__ = [
    "DEFAULT_BOOTSTRAP_GO",
    "resolve_bin_dir",
    "derive_environment",
    "SDK_PREFIX",
    "BINARY_PREFIX",
    "DEFAULT_LAUNCHER",
    "ReconcileResult",
    "reconcile",
    "reconcile_sdks",
    "reconcile_binaries",
    "DEFAULT_PARALLEL",
    "InstallStatus",
    "InstallReport",
    "InstallOrchestrator",
    "promote",
]
