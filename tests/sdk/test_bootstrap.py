"""
Tests for sdkprune.sdk.bootstrap module.
"""

import os
from pathlib import Path

import pytest

from sdkprune.core.exceptions import BootstrapError, CommandError
from sdkprune.sdk.bootstrap import derive_environment, resolve_bin_dir


class TestResolveBinDir:
    def test_gobin(self, fake_runner_factory):
        runner = fake_runner_factory(responses={"env GOBIN": (0, "/custom/bin\n")})

        assert resolve_bin_dir(Path("/usr/bin/go"), runner=runner) == Path("/custom/bin")
        assert runner.calls == [["/usr/bin/go", "env", "GOBIN"]]

    def test_empty_gobin_falls_back_to_gopath(self, fake_runner_factory):
        runner = fake_runner_factory(
            responses={"env GOBIN": (0, "\n"), "env GOPATH": (0, "/home/gopher/go\n")}
        )

        assert resolve_bin_dir(Path("/usr/bin/go"), runner=runner) == Path(
            "/home/gopher/go/bin"
        )

    def test_failing_gobin_falls_back_to_gopath(self, fake_runner_factory):
        runner = fake_runner_factory(
            responses={"env GOBIN": (1, "oops"), "env GOPATH": (0, "/gp")}
        )

        assert resolve_bin_dir(Path("/usr/bin/go"), runner=runner) == Path("/gp/bin")

    def test_first_gopath_entry(self, fake_runner_factory):
        gopath = os.pathsep.join(["/first", "/second"])
        runner = fake_runner_factory(
            responses={"env GOBIN": (0, ""), "env GOPATH": (0, gopath)}
        )

        assert resolve_bin_dir(Path("/usr/bin/go"), runner=runner) == Path("/first/bin")

    def test_gopath_failure_is_fatal(self, fake_runner_factory):
        runner = fake_runner_factory(
            responses={"env GOBIN": (0, ""), "env GOPATH": (1, "go: broken")}
        )

        with pytest.raises(BootstrapError):
            resolve_bin_dir(Path("/usr/bin/go"), runner=runner)

    def test_missing_bootstrap_go_is_fatal(self):
        def runner(args, env=None, cancel=None):
            raise CommandError(f"Failed to start {args[0]}")

        with pytest.raises(BootstrapError):
            resolve_bin_dir(Path("/nonexistent/go"), runner=runner)


class TestDeriveEnvironment:
    def test_path_replaced(self):
        env = derive_environment(
            Path("/usr/local/go/bin/go"),
            base_env={"PATH": "/home/gopher/go/bin:/usr/bin", "HOME": "/home/gopher"},
        )

        assert env["PATH"] == str(Path("/usr/local/go/bin"))
        assert env["HOME"] == "/home/gopher"

    def test_base_env_untouched(self):
        base = {"PATH": "/usr/bin"}
        derive_environment(Path("/opt/go/bin/go"), base_env=base)
        assert base == {"PATH": "/usr/bin"}

    def test_defaults_to_process_environment(self, monkeypatch):
        monkeypatch.setenv("SDKPRUNE_TEST_MARKER", "1")

        env = derive_environment(Path("/usr/bin/go"))

        assert env["SDKPRUNE_TEST_MARKER"] == "1"
        assert env["PATH"] == str(Path("/usr/bin"))
