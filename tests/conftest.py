#
# Pytest Fixtures
#

# Standard library -----------------------------------------------------------------------------------------------------
import pathlib
import tempfile

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
import tempaths.cleanup
from tempaths.cleanup import ExitCleanup


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def exit_registry(monkeypatch: pytest.MonkeyPatch) -> ExitCleanup:
    """Replace the process-wide exit cleanup registry with a fresh one for each test."""
    registry = ExitCleanup()
    monkeypatch.setattr(tempaths.cleanup, "exit_cleanup", registry)
    return registry


@pytest.fixture
def default_tmp(tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch) -> pathlib.Path:
    """Point the platform temp directory at a per-test directory."""
    root = tmp_path / "system-tmp"
    root.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(root))
    return root


@pytest.fixture
def populated_dir(tmp_path: pathlib.Path) -> pathlib.Path:
    """Create a directory with mixed contents (files and nested subdirectories)."""
    root = tmp_path / "root"
    root.mkdir()
    # Top-level files
    (root / "a.txt").write_text("A")
    (root / "b.log").write_text("B")
    # Nested directory with files
    sub = root / "sub"
    sub.mkdir()
    (sub / "c.dat").write_text("C")
    (sub / "d.bin").write_bytes(b"\x00\x01")
    # Deeper nesting, including an empty directory
    deep = sub / "deep"
    deep.mkdir()
    (deep / "e.txt").write_text("E")
    (deep / "empty").mkdir()
    return root
