"""
File system utilities for sdkprune.

This module provides the small set of file operations the SDK cache needs:
- Directory listing with consistent error reporting
- Safe removal of directory trees and launcher files
- Hard link creation for the default launcher

Removals are guarded by a required parent directory so a bad path can never
escape the cache roots.
"""

import os
import shutil
from pathlib import Path
from typing import List, Optional, Union

IS_WINDOWS = os.name == "nt"


class FilesystemError(Exception):
    """Base exception for filesystem operations."""

    pass


class LinkCreationError(FilesystemError):
    """Failed to create a hard link."""

    pass


# ============================================================================
# Path Utilities
# ============================================================================


def is_relative_to(path: Path, parent: Path) -> bool:
    """
    Check if path is relative to (under) parent directory.

    Args:
        path: Path to check
        parent: Parent directory

    Returns:
        True if path is under parent directory

    Example:
        >>> is_relative_to(Path("/home/user/sdk/go1.21.1"), Path("/home/user/sdk"))
        True
    """
    try:
        path.relative_to(parent)
        return True
    except ValueError:
        return False


def list_entry_names(directory: Union[str, Path]) -> List[str]:
    """
    List the names of all entries directly under a directory.

    Args:
        directory: Directory to list

    Returns:
        Sorted list of entry names

    Raises:
        FilesystemError: If the directory cannot be read
    """
    directory = Path(directory)
    try:
        return sorted(entry.name for entry in os.scandir(directory))
    except OSError as e:
        raise FilesystemError(f"Failed to read directory '{directory}': {e}") from e


# ============================================================================
# Safe File Operations
# ============================================================================


def safe_remove(
    path: Union[str, Path], require_prefix: Optional[Union[str, Path]] = None
) -> None:
    """
    Remove a file, link or directory tree with safeguards.

    Symbolic links are removed without following them. Directories are
    removed recursively. A missing path is not an error.

    Args:
        path: Path to remove
        require_prefix: If specified, path must be under this directory

    Raises:
        ValueError: If path is not under require_prefix
        FilesystemError: If deletion fails

    Example:
        >>> safe_remove('/home/user/sdk/go1.20.5', require_prefix='/home/user/sdk')
        >>> safe_remove('/usr/bin', require_prefix='/home')  # ValueError
    """
    path = Path(os.path.abspath(path))

    if require_prefix is not None:
        require_prefix = Path(require_prefix).resolve()
        if not is_relative_to(path.parent.resolve() / path.name, require_prefix):
            raise ValueError(
                f"Refusing to delete '{path}': not under required prefix '{require_prefix}'"
            )

    if not path.exists() and not path.is_symlink():
        return

    try:
        if path.is_dir() and not path.is_symlink():
            if IS_WINDOWS:

                def handle_remove_readonly(func, p, exc):
                    """Error handler for Windows read-only files."""
                    if not os.access(p, os.W_OK):
                        os.chmod(p, 0o777)
                        func(p)
                    else:
                        raise

                shutil.rmtree(path, onerror=handle_remove_readonly)
            else:
                shutil.rmtree(path)
        else:
            path.unlink()
    except Exception as e:
        raise FilesystemError(f"Failed to remove '{path}': {e}") from e


def create_hardlink(source: Union[str, Path], target: Union[str, Path]) -> None:
    """
    Create a hard link at target pointing to the same inode as source.

    An existing file at target is not replaced.

    Args:
        source: Existing file
        target: Path of the new link

    Raises:
        LinkCreationError: If the link cannot be created
    """
    source = Path(source)
    target = Path(target)

    try:
        os.link(source, target)
    except OSError as e:
        raise LinkCreationError(
            f"Failed to link '{target}' -> '{source}': {e}"
        ) from e
