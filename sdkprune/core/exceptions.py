"""
Centralized exception hierarchy for sdkprune.

Errors fall into two classes. Everything except the install errors aborts
the run: the CLI reports it and exits non-zero. Install errors are caught
inside the task that raised them, logged with the version token, and never
reach the caller.
"""


# ============================================================================
# Base Exceptions
# ============================================================================


class SdkPruneError(Exception):
    """Base exception for all sdkprune errors."""

    pass


class ConfigurationError(SdkPruneError):
    """Raised when the configuration file or a tunable is invalid."""

    pass


# ============================================================================
# Release Exceptions
# ============================================================================


class ReleaseError(SdkPruneError):
    """Base exception for release listing and version handling."""

    pass


class ReleaseSourceError(ReleaseError):
    """Raised when the list of Go releases cannot be fetched or decoded."""

    pass


class InvalidVersionError(ReleaseError):
    """Raised when a release name cannot be decomposed into version parts."""

    def __init__(self, version: str, reason: str = ""):
        self.version = version
        msg = f"Invalid Go version: {version!r}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class VersionInvariantError(ReleaseError):
    """Raised when two distinct releases decompose to identical parts."""

    def __init__(self, a, b):
        self.a = a
        self.b = b
        super().__init__(f"no larger version: {a} {b}")


# ============================================================================
# SDK Cache Exceptions
# ============================================================================


class BootstrapError(SdkPruneError):
    """Raised when the bootstrap go command cannot resolve its environment."""

    pass


class ReconcileError(SdkPruneError):
    """Raised when the SDK or binary directory cannot be listed or pruned."""

    pass


class RunLockError(SdkPruneError):
    """Raised when another sync already holds the cache lock."""

    pass


# ============================================================================
# Install Exceptions (recoverable, per task)
# ============================================================================


class InstallError(SdkPruneError):
    """Base exception for a failed per-version install step."""

    def __init__(self, token: str, message: str, output: str = ""):
        self.token = token
        self.output = output
        super().__init__(f"{token}: {message}")


class ShimInstallError(InstallError):
    """Raised when `go install golang.org/dl/<token>@latest` fails."""

    pass


class SdkDownloadError(InstallError):
    """Raised when `<token> download` fails."""

    pass


# ============================================================================
# Process Exceptions
# ============================================================================


class CommandError(SdkPruneError):
    """Raised when an external command cannot be started."""

    pass


class CommandCancelledError(CommandError):
    """Raised when a running command was killed by cancellation."""

    pass
