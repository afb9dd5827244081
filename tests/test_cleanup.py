#
# Tempaths - Cleanup Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
from pathlib import Path

# Third Party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from tempaths.cleanup import ExitCleanup, delete_at_exit


# Tests ----------------------------------------------------------------------------------------------------------------

class TestExitCleanup:
    def test_runs_newest_first(self) -> None:
        """Run actions in reverse registration order."""
        calls = []
        registry = ExitCleanup()
        for name in ("a", "b", "c"):
            registry.register(lambda name=name: calls.append(name))
        registry.run()
        assert calls == ["c", "b", "a"]

    def test_failures_are_isolated(self) -> None:
        """Swallow action errors and keep running the others."""
        calls = []

        def boom() -> None:
            raise OSError("cannot delete")

        registry = ExitCleanup()
        registry.register(lambda: calls.append("first"))
        registry.register(boom)
        registry.register(lambda: calls.append("last"))

        registry.run()

        assert calls == ["last", "first"]

    def test_run_empties_registry(self) -> None:
        """Run each action only once."""
        calls = []
        registry = ExitCleanup()
        registry.register(lambda: calls.append(1))
        assert len(registry) == 1

        registry.run()
        registry.run()

        assert calls == [1]
        assert len(registry) == 0

    def test_register_requires_callable(self) -> None:
        """Reject non-callable actions at registration."""
        with pytest.raises(TypeError, match=r"(?i).*callable.*"):
            ExitCleanup().register("not callable")  # type: ignore[arg-type]


class TestDeleteAtExit:
    def test_file(self, tmp_path: Path, exit_registry: ExitCleanup) -> None:
        """Delete a registered file when the registry runs."""
        p = tmp_path / "f.tmp"
        p.write_text("x")
        delete_at_exit(p)
        assert len(exit_registry) == 1
        assert p.exists()

        exit_registry.run()

        assert not p.exists()

    def test_recursive_dir(self, populated_dir: Path, exit_registry: ExitCleanup) -> None:
        """Delete a directory tree when registered as recursive."""
        delete_at_exit(populated_dir, recursive=True)
        exit_registry.run()
        assert not populated_dir.exists()

    def test_non_recursive_dir_failure_is_silent(self, populated_dir: Path, exit_registry: ExitCleanup) -> None:
        """A non-empty directory registered without recursion stays, and nothing is raised."""
        delete_at_exit(populated_dir)
        exit_registry.run()
        assert populated_dir.exists()

    def test_already_deleted(self, tmp_path: Path, exit_registry: ExitCleanup) -> None:
        """Tolerate paths removed before exit."""
        p = tmp_path / "gone.tmp"
        p.write_text("x")
        delete_at_exit(p)
        p.unlink()
        exit_registry.run()
        assert not p.exists()
