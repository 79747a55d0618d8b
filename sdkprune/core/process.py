"""
External command execution with combined output capture and cancellation.

Each invocation either succeeds or fails as a whole; the captured combined
stdout/stderr is kept for diagnostics. There is no timeout: a hung command
runs until the cancellation token is tripped.
"""

import logging
import subprocess
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from .cancellation import CancellationToken
from .exceptions import CommandCancelledError, CommandError

logger = logging.getLogger(__name__)

POLL_INTERVAL = 0.2


@dataclass
class CommandResult:
    """Result of a finished external command."""

    args: Sequence[str]
    returncode: int
    output: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def run_command(
    args: Sequence[str],
    env: Optional[Mapping[str, str]] = None,
    cancel: Optional[CancellationToken] = None,
    poll_interval: float = POLL_INTERVAL,
) -> CommandResult:
    """
    Run a command to completion, capturing combined stdout and stderr.

    Args:
        args: Command line
        env: Environment for the child (inherits ours if None)
        cancel: Token that kills the child when tripped
        poll_interval: Seconds between cancellation checks

    Returns:
        CommandResult with exit code and captured output

    Raises:
        CommandError: If the command cannot be started
        CommandCancelledError: If cancelled before or while running
    """
    args = [str(a) for a in args]

    if cancel is not None and cancel.cancelled:
        raise CommandCancelledError(f"Not started, run cancelled: {' '.join(args)}")

    logger.debug(f"Running: {' '.join(args)}")

    try:
        proc = subprocess.Popen(
            args,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            errors="replace",
            env=dict(env) if env is not None else None,
        )
    except OSError as e:
        raise CommandError(f"Failed to start {args[0]}: {e}") from e

    while True:
        try:
            output, _ = proc.communicate(timeout=poll_interval)
            break
        except subprocess.TimeoutExpired:
            if cancel is not None and cancel.cancelled:
                proc.kill()
                proc.communicate()
                raise CommandCancelledError(
                    f"Killed after cancellation ({cancel.reason}): {' '.join(args)}"
                )

    return CommandResult(args=args, returncode=proc.returncode, output=output or "")
