"""
Bootstrap go command helpers.

The bootstrap go is an already installed Go toolchain (default
/usr/bin/go) used to install the per-version `golang.org/dl` launchers.
"""

import logging
import os
from pathlib import Path
from typing import Callable, Dict, Mapping, Optional

from ..core.cancellation import CancellationToken
from ..core.exceptions import BootstrapError, CommandError
from ..core.process import CommandResult, run_command

logger = logging.getLogger(__name__)

DEFAULT_BOOTSTRAP_GO = Path("/usr/bin/go")

Runner = Callable[..., CommandResult]


def resolve_bin_dir(
    bootstrap_go: Path,
    cancel: Optional[CancellationToken] = None,
    runner: Runner = run_command,
) -> Path:
    """
    Resolve the directory `go install` writes launchers into.

    Uses `go env GOBIN`; if that fails or is empty, falls back to
    `$(go env GOPATH)/bin`.

    Args:
        bootstrap_go: Path to the bootstrap go command
        cancel: Optional cancellation token
        runner: Command runner (for testing)

    Returns:
        Path to the binary directory

    Raises:
        BootstrapError: If GOPATH cannot be resolved either
    """
    try:
        result = runner([str(bootstrap_go), "env", "GOBIN"], cancel=cancel)
        gobin = result.output.strip() if result.ok else ""
    except CommandError as e:
        logger.debug(f"go env GOBIN failed: {e}")
        gobin = ""

    if gobin:
        return Path(gobin)

    try:
        result = runner([str(bootstrap_go), "env", "GOPATH"], cancel=cancel)
    except CommandError as e:
        raise BootstrapError(f"go env GOPATH: {e}") from e

    gopath = result.output.strip()
    if not result.ok or not gopath:
        raise BootstrapError(
            f"go env GOPATH exited with {result.returncode}: {result.output.strip()}"
        )

    # GOPATH may list several directories; go install uses the first one.
    first = gopath.split(os.pathsep)[0]
    return Path(first) / "bin"


def derive_environment(
    bootstrap_go: Path, base_env: Optional[Mapping[str, str]] = None
) -> Dict[str, str]:
    """
    Build the environment for install and download commands.

    Everything is inherited except PATH, which only holds the bootstrap go's
    directory so `go` always resolves to the bootstrap command and freshly
    installed launchers cannot shadow it.

    Args:
        bootstrap_go: Path to the bootstrap go command
        base_env: Environment to start from (default: os.environ)

    Returns:
        New environment dictionary
    """
    env = dict(os.environ if base_env is None else base_env)
    env["PATH"] = str(Path(bootstrap_go).parent)
    return env
