"""
Deletion helpers for files and directory trees that may already be gone.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import os
import shutil
from pathlib import Path


# Methods --------------------------------------------------------------------------------------------------------------

def delete_if_exists(path: str | os.PathLike[str]) -> bool:
    """
    Delete a single file, symlink or empty directory if it exists.

    Symlinks are removed as links, their targets are never touched.

    Args:
        path: Path to delete.

    Returns:
        bool: True if the path was deleted, False if it did not exist.

    Raises:
        OSError: If the path exists but cannot be deleted (permission denied, directory
            not empty, etc.). The exception's filename names the offending path.

    Examples:
        >>> delete_if_exists("/tmp/report.tmp")
        True
        >>> delete_if_exists("/tmp/report.tmp")
        False
    """
    target = Path(path)
    try:
        if target.is_dir() and not target.is_symlink():
            target.rmdir()
        else:
            target.unlink()
    except FileNotFoundError:
        return False
    return True


def delete_recursively(path: str | os.PathLike[str]) -> None:
    """
    Delete a file, or a directory including all of its contents.

    Directories are emptied depth-first before being removed. A missing path is not
    an error, so this is safe to call on paths that were already cleaned up by someone
    else, or to call repeatedly.

    Deletion is best-effort across siblings: if an entry cannot be deleted, the remaining
    entries of the same directory are still attempted, then the first failure is raised.
    The directory holding the failing entry is left in place.

    Symlinks inside the tree are deleted as links and never followed.

    Args:
        path: File or directory to delete.

    Raises:
        OSError: If an existing entry cannot be deleted. The exception's filename names
            the entry that failed.

    Examples:
        >>> delete_recursively("/tmp/build-x81kd")
        >>> delete_recursively("/tmp/build-x81kd")  # already gone, no-op
    """
    target = Path(path)

    if target.is_symlink() or not target.is_dir():
        delete_if_exists(target)
        return

    errors: list[OSError] = []

    def on_error(func, failed_path, exc: OSError) -> None:
        if isinstance(exc, FileNotFoundError):
            # Removed concurrently
            return
        # rmtree deletes relative to directory descriptors, name the full path
        exc.filename = os.fspath(failed_path)
        errors.append(exc)

    # Keeps going after a failure; the ancestors of a failing entry then fail as not empty
    shutil.rmtree(target, onexc=on_error)

    if errors:
        raise errors[0]
