"""
Process-wide registry of best-effort cleanup actions run at interpreter exit.

Only normal interpreter shutdown runs the registry. A process killed by a signal, or
terminated through os._exit(), leaves registered paths behind.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import atexit
import os
import threading
from functools import partial
from typing import Callable

# Local ----------------------------------------------------------------------------------------------------------------
from .os import delete_if_exists, delete_recursively


# Classes --------------------------------------------------------------------------------------------------------------

class ExitCleanup:
    """
    Thread-safe list of zero-argument actions to run once, at exit.

    Actions run newest first, so a path registered after its parent directory is
    deleted before the parent. Each action is isolated: an exception raised by one of
    them is discarded and never prevents the others from running.

    Examples:
        >>> registry = ExitCleanup()
        >>> registry.register(lambda: print("bye"))
        >>> len(registry)
        1
        >>> registry.run()
        bye
        >>> len(registry)
        0
    """

    def __init__(self) -> None:
        self._actions: list[Callable[[], object]] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._actions)

    def register(self, action: Callable[[], object]) -> None:
        if not callable(action):
            raise TypeError(f"cleanup action must be callable, got {type(action).__name__}")
        with self._lock:
            self._actions.append(action)

    def run(self) -> None:
        """Run and forget all registered actions, swallowing their errors."""
        with self._lock:
            actions = self._actions[::-1]
            self._actions.clear()

        for action in actions:
            try:
                action()
            except Exception:
                # Exit-time cleanup must never block or crash interpreter shutdown
                pass


# Module state ---------------------------------------------------------------------------------------------------------

exit_cleanup = ExitCleanup()
atexit.register(exit_cleanup.run)


# Methods --------------------------------------------------------------------------------------------------------------

def delete_at_exit(path: str | os.PathLike[str], *, recursive: bool = False) -> None:
    """
    Schedule a path for deletion when the interpreter exits normally.

    Args:
        path: File or directory to delete at exit.
        recursive: If True, delete a directory including its contents. If False, only
            a file or an empty directory is deleted.
    """
    deleter = delete_recursively if recursive else delete_if_exists
    exit_cleanup.register(partial(deleter, os.fspath(path)))
