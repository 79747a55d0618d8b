"""
Concurrent (re)installation of the wanted Go SDKs.

For each token two commands run in sequence:

    1. <bootstrap go> install golang.org/dl/<token>@latest
    2. <bin root>/<token> download

A counting semaphore bounds how many tokens are being installed at once;
the rest wait for a free slot. Each token is isolated: a failure is logged
with its captured output and affects nothing else. Results are only
counted for the final summary.
"""

import logging
import threading
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import AbstractSet, Callable, Dict, List, Mapping, Optional

from ..core.cancellation import CancellationToken
from ..core.exceptions import (
    CommandCancelledError,
    CommandError,
    InstallError,
    SdkDownloadError,
    ShimInstallError,
)
from ..core.process import CommandResult, run_command

logger = logging.getLogger(__name__)

DL_MODULE = "golang.org/dl"
DEFAULT_PARALLEL = 3
ADMISSION_POLL = 0.2


class InstallStatus(Enum):
    """Outcome of one install task."""

    INSTALLED = "installed"
    SHIM_FAILED = "shim_failed"
    DOWNLOAD_FAILED = "download_failed"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass
class InstallReport:
    """Per-token outcomes of an install run. Safe for concurrent recording."""

    outcomes: Dict[str, InstallStatus] = field(default_factory=dict)
    not_started: List[str] = field(default_factory=list)

    def __post_init__(self):
        self._lock = threading.Lock()

    def record(self, token: str, status: InstallStatus) -> None:
        with self._lock:
            self.outcomes[token] = status

    @property
    def completed(self) -> int:
        with self._lock:
            return len(self.outcomes)

    def tokens_with(self, status: InstallStatus) -> List[str]:
        with self._lock:
            return sorted(t for t, s in self.outcomes.items() if s == status)

    @property
    def installed(self) -> List[str]:
        return self.tokens_with(InstallStatus.INSTALLED)

    @property
    def failed(self) -> List[str]:
        with self._lock:
            return sorted(
                t
                for t, s in self.outcomes.items()
                if s not in (InstallStatus.INSTALLED, InstallStatus.CANCELLED)
            )


def shim_package(token: str) -> str:
    """Return the `go install` argument for a version token."""
    return f"{DL_MODULE}/{token}@latest"


class InstallOrchestrator:
    """
    Installs version launchers and downloads their SDKs with bounded parallelism.

    Example:
        >>> orchestrator = InstallOrchestrator(
        ...     bootstrap_go=Path("/usr/bin/go"),
        ...     bin_root=Path.home() / "go" / "bin",
        ...     env=derive_environment(Path("/usr/bin/go")),
        ...     parallel=3,
        ... )
        >>> report = orchestrator.run({"gotip", "go1.22.1"})
    """

    def __init__(
        self,
        bootstrap_go: Path,
        bin_root: Path,
        env: Optional[Mapping[str, str]] = None,
        parallel: int = DEFAULT_PARALLEL,
        cancel: Optional[CancellationToken] = None,
        runner: Callable[..., CommandResult] = run_command,
    ):
        """
        Initialize orchestrator.

        Args:
            bootstrap_go: Path to the bootstrap go command
            bin_root: Directory the launchers are installed into
            env: Environment for every command (see derive_environment)
            parallel: Maximum number of tokens installed at once
            cancel: Token that stops admission and kills running commands
            runner: Command runner (for testing)

        Raises:
            ValueError: If parallel is less than 1
        """
        if parallel < 1:
            raise ValueError(f"parallel must be at least 1, got {parallel}")

        self.bootstrap_go = Path(bootstrap_go)
        self.bin_root = Path(bin_root)
        self.env = dict(env) if env is not None else None
        self.parallel = parallel
        self.cancel = cancel or CancellationToken()
        self.runner = runner
        self._gate = threading.BoundedSemaphore(parallel)

    def install_shim(self, token: str) -> None:
        """
        Install the golang.org/dl launcher for a token.

        Raises:
            ShimInstallError: If go install fails or cannot start
            CommandCancelledError: If cancelled
        """
        args = [str(self.bootstrap_go), "install", shim_package(token)]
        logger.info(" ".join(args))
        try:
            result = self.runner(args, env=self.env, cancel=self.cancel)
        except CommandCancelledError:
            raise
        except CommandError as e:
            raise ShimInstallError(token, str(e)) from e

        if not result.ok:
            raise ShimInstallError(
                token, f"exit status {result.returncode}", output=result.output
            )

    def download_sdk(self, token: str) -> None:
        """
        Run the installed launcher's download command.

        Raises:
            SdkDownloadError: If the download fails or cannot start
            CommandCancelledError: If cancelled
        """
        args = [str(self.bin_root / token), "download"]
        logger.debug(" ".join(args))
        try:
            result = self.runner(args, env=self.env, cancel=self.cancel)
        except CommandCancelledError:
            raise
        except CommandError as e:
            raise SdkDownloadError(token, str(e)) from e

        if not result.ok:
            raise SdkDownloadError(
                token, f"exit status {result.returncode}", output=result.output
            )

    def install(self, token: str) -> InstallStatus:
        """
        Install one token. Failures are logged, never raised.

        Args:
            token: Version token, e.g. "go1.22.1"

        Returns:
            InstallStatus
        """
        try:
            self.install_shim(token)
        except CommandCancelledError:
            logger.warning(f"install shim {token}: cancelled")
            return InstallStatus.CANCELLED
        except InstallError as e:
            logger.error(f"install shim {e} output\n{e.output}")
            return InstallStatus.SHIM_FAILED

        try:
            self.download_sdk(token)
        except CommandCancelledError:
            logger.warning(f"download sdk {token}: cancelled")
            return InstallStatus.CANCELLED
        except InstallError as e:
            logger.error(f"download sdk {e} output\n{e.output}")
            return InstallStatus.DOWNLOAD_FAILED

        logger.info(f"downloaded {token}")
        return InstallStatus.INSTALLED

    def _run_task(self, token: str, report: InstallReport) -> None:
        status = InstallStatus.FAILED
        try:
            status = self.install(token)
        except Exception:
            logger.exception(f"Unexpected error installing {token}")
        finally:
            self._gate.release()
            report.record(token, status)

    def _admit(self) -> bool:
        """Wait for a free slot; False if cancelled while waiting."""
        while not self.cancel.cancelled:
            if self._gate.acquire(timeout=ADMISSION_POLL):
                if self.cancel.cancelled:
                    self._gate.release()
                    return False
                return True
        return False

    def run(self, desired: AbstractSet[str]) -> InstallReport:
        """
        Install every token and wait for all of them to finish.

        Args:
            desired: Tokens to install

        Returns:
            InstallReport once every started task has finished
        """
        report = InstallReport()
        threads = []
        pending = sorted(desired)

        for index, token in enumerate(pending):
            if not self._admit():
                report.not_started = pending[index:]
                logger.warning(
                    f"Cancelled, not starting: {', '.join(report.not_started)}"
                )
                break
            thread = threading.Thread(
                target=self._run_task,
                args=(token, report),
                name=f"install-{token}",
                daemon=True,
            )
            thread.start()
            threads.append(thread)

        for thread in threads:
            thread.join()

        logger.debug(
            f"Install run finished: {report.completed} completed, "
            f"{len(report.installed)} installed, "
            f"{len(report.failed)} failed"
        )
        return report
