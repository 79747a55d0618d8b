"""
Pytest configuration and shared fixtures for sdkprune tests.
"""

import json
import threading
import time
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import pytest

from sdkprune.core.exceptions import CommandCancelledError
from sdkprune.core.process import CommandResult
from sdkprune.releases.source import ReleaseRecord
from sdkprune.releases.version import GoVersion


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run integration tests that require network access",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless --integration flag is provided."""
    if not config.getoption("--integration"):
        skip_integration = pytest.mark.skip(reason="need --integration option to run")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip_integration)


# ============================================================================
# Fakes
# ============================================================================


class FakeRunner:
    """
    Stand-in for run_command that records calls and concurrency.

    responses maps a substring of the joined command line to
    (returncode, output); the first match wins, default is (0, "").
    on_call, if set, is invoked with the argument list before responding.
    """

    def __init__(
        self,
        responses: Optional[Dict[str, Tuple[int, str]]] = None,
        delay: float = 0.0,
        on_call: Optional[Callable[[List[str]], None]] = None,
    ):
        self.responses = responses or {}
        self.delay = delay
        self.on_call = on_call
        self.calls: List[List[str]] = []
        self.envs: List[Optional[dict]] = []
        self.active = 0
        self.peak = 0
        self._lock = threading.Lock()

    def __call__(self, args: Sequence[str], env=None, cancel=None) -> CommandResult:
        args = [str(a) for a in args]
        if cancel is not None and cancel.cancelled:
            raise CommandCancelledError(f"cancelled: {' '.join(args)}")

        with self._lock:
            self.calls.append(args)
            self.envs.append(env)
            self.active += 1
            self.peak = max(self.peak, self.active)
        try:
            if self.on_call is not None:
                self.on_call(args)
            if self.delay:
                time.sleep(self.delay)
            returncode, output = self._respond(args)
            return CommandResult(args=args, returncode=returncode, output=output)
        finally:
            with self._lock:
                self.active -= 1

    def _respond(self, args: List[str]) -> Tuple[int, str]:
        line = " ".join(args)
        for needle, response in self.responses.items():
            if needle in line:
                return response
        return 0, ""

    def joined(self) -> List[str]:
        with self._lock:
            return [" ".join(c) for c in self.calls]


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def no_user_config(tmp_path, monkeypatch):
    """Keep a real ~/.config/sdkprune.yaml from leaking into tests."""
    monkeypatch.setenv("SDKPRUNE_CONFIG", str(tmp_path / "absent-config.yaml"))


@pytest.fixture
def fake_runner_factory():
    """Create FakeRunner instances."""
    return FakeRunner


@pytest.fixture
def fake_runner():
    """A FakeRunner where every command succeeds."""
    return FakeRunner()


@pytest.fixture
def make_releases():
    """Build release records from Go release names."""

    def _make(*names: str) -> List[ReleaseRecord]:
        return [ReleaseRecord(version=GoVersion.parse(n)) for n in names]

    return _make


@pytest.fixture
def releases_file(tmp_path) -> Callable[..., Path]:
    """Write a download-index style JSON file from release names."""

    def _write(*names: str) -> Path:
        path = tmp_path / "releases.json"
        data = [{"version": n, "stable": "rc" not in n and "beta" not in n} for n in names]
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sdk_layout(tmp_path) -> Tuple[Path, Path]:
    """
    Create an SDK root and a binary root.

    Returns:
        (sdk_root, bin_root)
    """
    sdk_root = tmp_path / "sdk"
    bin_root = tmp_path / "gopath" / "bin"
    sdk_root.mkdir()
    bin_root.mkdir(parents=True)
    return sdk_root, bin_root


def populate(root: Path, dirs: Sequence[str] = (), files: Sequence[str] = ()) -> None:
    """Create directories (with a file inside) and plain files under root."""
    for name in dirs:
        (root / name / "bin").mkdir(parents=True)
        (root / name / "bin" / "go").write_text("#!/bin/sh\n")
    for name in files:
        (root / name).write_text(f"launcher {name}\n")


@pytest.fixture
def populate_dir():
    """Expose populate() to tests."""
    return populate
