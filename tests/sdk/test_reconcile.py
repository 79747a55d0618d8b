"""
Tests for sdkprune.sdk.reconcile module.
"""

import os
from unittest.mock import patch

import pytest

from sdkprune.core.exceptions import ReconcileError
from sdkprune.core.filesystem import FilesystemError
from sdkprune.sdk.reconcile import (
    reconcile,
    reconcile_binaries,
    reconcile_sdks,
    stale_binary_names,
    stale_sdk_names,
)


def names(root):
    return sorted(os.listdir(root))


class TestStaleNames:
    def test_sdk_names(self):
        desired = {"gotip", "go1.21.1"}
        listing = ["go1.20.5", "go1.21.1", "gotip", "gounrelated", "x"]
        assert stale_sdk_names(desired, listing) == ["go1.20.5"]

    def test_binary_names(self):
        desired = {"gotip", "go1.21.1"}
        listing = ["go", "go1.20.5", "go1.21.1", "gotip", "gopls", "dlv"]
        assert stale_binary_names(desired, listing) == ["go", "go1.20.5"]


class TestReconcileSdks:
    def test_example_scenario(self, sdk_layout, populate_dir):
        """Test only stale release directories are removed."""
        sdk_root, _ = sdk_layout
        populate_dir(sdk_root, dirs=["go1.20.5", "go1.21.1", "gotip", "gounrelated"])

        removed = reconcile_sdks({"gotip", "go1.21.1"}, sdk_root)

        assert removed == [sdk_root / "go1.20.5"]
        assert names(sdk_root) == ["go1.21.1", "gotip", "gounrelated"]

    def test_removes_recursively(self, sdk_layout, populate_dir):
        sdk_root, _ = sdk_layout
        populate_dir(sdk_root, dirs=["go1.19.13"])
        (sdk_root / "go1.19.13" / "pkg" / "deep").mkdir(parents=True)

        reconcile_sdks({"gotip"}, sdk_root)

        assert not (sdk_root / "go1.19.13").exists()

    def test_missing_root_is_fatal(self, tmp_path):
        with pytest.raises(ReconcileError):
            reconcile_sdks({"gotip"}, tmp_path / "nope")

    def test_removal_failure_is_fatal(self, sdk_layout, populate_dir):
        sdk_root, _ = sdk_layout
        populate_dir(sdk_root, dirs=["go1.20.5", "go1.19.13"])

        with patch(
            "sdkprune.sdk.reconcile.safe_remove",
            side_effect=FilesystemError("permission denied"),
        ) as mock_remove:
            with pytest.raises(ReconcileError):
                reconcile_sdks({"gotip"}, sdk_root)

        # Stops at the first failure
        assert mock_remove.call_count == 1

    def test_dry_run(self, sdk_layout, populate_dir):
        sdk_root, _ = sdk_layout
        populate_dir(sdk_root, dirs=["go1.20.5", "go1.21.1"])

        removed = reconcile_sdks({"gotip", "go1.21.1"}, sdk_root, dry_run=True)

        assert removed == [sdk_root / "go1.20.5"]
        assert names(sdk_root) == ["go1.20.5", "go1.21.1"]


class TestReconcileBinaries:
    def test_default_launcher_always_removed(self, sdk_layout, populate_dir):
        """Test the bare go launcher is removed even with nothing else stale."""
        _, bin_root = sdk_layout
        populate_dir(bin_root, files=["go", "gotip", "go1.21.1", "gopls"])

        removed = reconcile_binaries({"gotip", "go1.21.1"}, bin_root)

        assert removed == [bin_root / "go"]
        assert names(bin_root) == ["go1.21.1", "gopls", "gotip"]

    def test_stale_versioned_launchers(self, sdk_layout, populate_dir):
        _, bin_root = sdk_layout
        populate_dir(bin_root, files=["go1.20.5", "go1.21.1", "go1.22rc1"])

        reconcile_binaries({"gotip", "go1.21.1"}, bin_root)

        assert names(bin_root) == ["go1.21.1"]

    def test_symlinked_launcher_removed_without_following(self, sdk_layout, tmp_path):
        _, bin_root = sdk_layout
        target = tmp_path / "real-go"
        target.write_text("binary")
        (bin_root / "go").symlink_to(target)

        reconcile_binaries({"gotip"}, bin_root)

        assert not (bin_root / "go").is_symlink()
        assert target.exists()


class TestReconcile:
    def test_full(self, sdk_layout, populate_dir):
        sdk_root, bin_root = sdk_layout
        populate_dir(sdk_root, dirs=["go1.20.5", "go1.21.1", "gotip"])
        populate_dir(bin_root, files=["go", "go1.20.5", "go1.21.1", "gotip"])
        desired = {"gotip", "go1.21.1"}

        result = reconcile(desired, sdk_root, bin_root)

        assert result.removed_sdks == [sdk_root / "go1.20.5"]
        assert result.removed_binaries == [bin_root / "go", bin_root / "go1.20.5"]
        assert len(result.removed) == 3

    def test_idempotent(self, sdk_layout, populate_dir):
        """Test a second pass over the same state removes nothing."""
        sdk_root, bin_root = sdk_layout
        populate_dir(sdk_root, dirs=["go1.18.10", "go1.21.1", "gotip", "other"])
        populate_dir(bin_root, files=["go", "go1.18.10", "go1.21.1", "gotip"])
        desired = {"gotip", "go1.21.1"}

        reconcile(desired, sdk_root, bin_root)
        second = reconcile(desired, sdk_root, bin_root)

        assert second.removed == []

    def test_never_deletes_desired(self, sdk_layout, populate_dir):
        sdk_root, bin_root = sdk_layout
        desired = {"gotip", "go1.21.1", "go1.22rc1"}
        populate_dir(sdk_root, dirs=sorted(desired))
        populate_dir(bin_root, files=sorted(desired))

        result = reconcile(desired, sdk_root, bin_root)

        assert result.removed == []
        assert set(names(sdk_root)) == desired
        assert set(names(bin_root)) == desired
