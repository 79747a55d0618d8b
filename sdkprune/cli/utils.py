"""
Shared utilities for CLI commands.

Provides config assembly from parsed arguments and consistent output
formatting for the sync and plan commands.
"""

from typing import Any, Dict, Iterable

from sdkprune.config import SyncConfig, build_config


# ============================================================================
# Configuration Management
# ============================================================================

_OVERRIDE_ARGS = (
    "min_minor",
    "bootstrap_go",
    "parallel",
    "sdk_root",
    "bin_dir",
    "releases_url",
)


def config_from_args(args) -> SyncConfig:
    """
    Build the effective configuration from parsed arguments.

    Flags that were not given (None) leave the file or default value alone.

    Args:
        args: Parsed command-line arguments

    Returns:
        Validated SyncConfig

    Raises:
        ConfigurationError: If the config file or a value is invalid
    """
    overrides: Dict[str, Any] = {
        name: getattr(args, name) for name in _OVERRIDE_ARGS if hasattr(args, name)
    }
    return build_config(getattr(args, "config", None), overrides)


# ============================================================================
# User Interface / Output Formatting
# ============================================================================


def format_list(title: str, items: Iterable[Any], indent: str = "  ") -> str:
    """Format a titled, one-item-per-line list."""
    lines = [f"{title}:"]
    entries = [f"{indent}{item}" for item in items]
    lines.extend(entries or [f"{indent}(none)"])
    return "\n".join(lines)


def safe_print(message: str, file=None):
    """
    Print message with safe encoding handling for limited consoles.

    Args:
        message: Message to print
        file: Output file (default: stdout)
    """
    try:
        print(message, file=file)
    except UnicodeEncodeError:
        safe_message = (
            message.replace("✅", "[OK]").replace("❌", "[ERROR]").replace("⚠️", "WARNING:")
        )
        print(safe_message, file=file)
