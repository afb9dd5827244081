#
# Temp File Tools
#

# Standard library -----------------------------------------------------------------------------------------------------
import os
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Any, Callable, Iterator, Self

# Local ----------------------------------------------------------------------------------------------------------------
from . import cleanup
from .io import check_encoding, write_file
from .os import delete_if_exists, delete_recursively


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class FileAttributes:
    """
    Attributes applied to a temp path right after it is created.

    Attributes:
        mode: Permission bits passed to os.chmod(), e.g. 0o600. None keeps the defaults
            of the tempfile module (0o600 for files, 0o700 for directories).
    """
    mode: int | None = None


@dataclass(frozen=True)
class _PathOps:
    """The four steps in which temp files and temp directories differ."""
    create_path: Callable[[Path, str, FileAttributes], Path]
    path_name: Callable[[Path, str], str]
    delete_at_exit: Callable[[Path], None]
    create_content: Callable[[Path], None]


class _TempPathBuilder:
    """
    Configuration shared by temp file and temp directory builders.

    Configuration methods mutate the builder in place and return it for chaining.
    A builder can create any number of paths, each call to create() makes a new one.
    Builders are not meant to be shared between threads while being configured.
    """

    def __init__(self, ops: _PathOps) -> None:
        self._ops = ops
        self._dir: Path | None = None
        self._prefix: str = ""
        self._delete_on_exit: bool = True
        self._attributes: FileAttributes = FileAttributes()

    def dir(self, path: str | os.PathLike[str]) -> Self:
        """
        Parent directory of created paths, default is the platform temp directory.

        Empty paths ("", "." or Path("")) are rejected, pass Path.cwd() to create paths
        in the current working directory.
        """
        if path is None or not Path(path).parts:
            raise ValueError(f"dir must be a non-empty path, got {path!r}")
        self._dir = Path(path)
        return self

    def prefix(self, prefix: str) -> Self:
        """Prefix of the randomly generated name."""
        if prefix is None:
            raise ValueError("prefix must not be None")
        self._prefix = str(prefix)
        return self

    def no_delete_on_exit(self) -> Self:
        """
        Do not delete created paths automatically when the interpreter exits.

        By default every created path is scheduled for deletion at exit, directories
        including their contents.
        """
        self._delete_on_exit = False
        return self

    def file_attributes(self, attributes: FileAttributes | None = None, *, mode: int | None = None) -> Self:
        """
        Attributes to apply to created paths.

        Either pass a FileAttributes instance, or the individual attributes as keywords.
        """
        if attributes is not None and mode is not None:
            raise ValueError("pass either a FileAttributes instance or keyword attributes, not both")
        if attributes is None:
            attributes = FileAttributes(mode=mode)
        elif not isinstance(attributes, FileAttributes):
            raise TypeError(f"attributes must be FileAttributes, got {type(attributes).__name__}")
        self._attributes = attributes
        return self

    def create(self) -> Path:
        """
        Create a fresh temp path according to the configuration of this builder.

        Use create_delete_on_close() instead if the path should be removed once a
        block of code is done with it.

        Returns:
            Path: The created path. It exists when this method returns.

        Raises:
            OSError: If the path cannot be created. The message names the intended
                location when the underlying error does not.
        """
        parent = self._dir if self._dir is not None else Path(tempfile.gettempdir())
        return _create_temp_path(
            self._ops, parent, self._prefix, self._attributes, self._delete_on_exit
        )


class TempFileBuilder(_TempPathBuilder):
    """
    Builder for temporary files.

    Examples:
        >>> path = TempFileBuilder().prefix("report-").suffix(".csv").create()
        >>> path.name  # doctest: +SKIP
        'report-k2j4_8sx.csv'

        >>> with TempFileBuilder().initial_content("a,b\\n1,2\\n").create_delete_on_close() as tmp:
        ...     rows = tmp.read_text().splitlines()
        >>> rows
        ['a,b', '1,2']
    """

    def __init__(self) -> None:
        super().__init__(_PathOps(
            create_path=self._create_file,
            path_name=self._path_name,
            delete_at_exit=_delete_file_at_exit,
            create_content=self._write_content,
        ))
        self._suffix: str = ".tmp"
        self._content: Any = None
        self._encoding: str | None = None

    def suffix(self, suffix: str) -> Self:
        """Suffix of the randomly generated name, default is '.tmp'."""
        if suffix is None:
            raise ValueError("suffix must not be None")
        self._suffix = str(suffix)
        return self

    def initial_content(self, content: Any, encoding: str = "utf-8") -> Self:
        """
        Content to write to the file immediately after creating it.

        Accepts str, bytes-like objects or an iterable of lines, see tempaths.io.write_file().

        Raises:
            ValueError: If content is None.
            LookupError: If encoding is not a known codec.
        """
        if content is None:
            raise ValueError("content must not be None")
        self._encoding = check_encoding(encoding)
        self._content = content
        return self

    def create_delete_on_close(self) -> "DeleteOnCloseFile":
        """
        Create a fresh temp file wrapped in a DeleteOnCloseFile.

        The file is deleted as soon as the handle is closed. Recommended usage:

            with TempFileBuilder().create_delete_on_close() as tmp:
                ...  # use tmp.path, the file can be reopened any number of times

        """
        return DeleteOnCloseFile(self.create())

    def _create_file(self, parent: Path, prefix: str, attributes: FileAttributes) -> Path:
        fd, name = tempfile.mkstemp(suffix=self._suffix, prefix=prefix, dir=parent)
        os.close(fd)
        path = Path(name)
        _apply_attributes(path, attributes)
        return path

    def _path_name(self, parent: Path, prefix: str) -> str:
        return str(parent / f"{prefix}*{self._suffix}")

    def _write_content(self, path: Path) -> None:
        if self._content is None:
            return
        try:
            write_file(path, self._content, self._encoding)
        except Exception as exc:
            # Created, but writing failed: do not leave a half-written file behind
            try:
                delete_if_exists(path)
            except OSError as delete_exc:
                exc.add_note(f"Deleting the partially written temp file {path} also failed: {delete_exc!r}")
            raise


class TempDirBuilder(_TempPathBuilder):
    """
    Builder for temporary directories.

    Examples:
        >>> with TempDirBuilder().prefix("run-").create_delete_on_close() as tmp:
        ...     _ = (tmp.path / "out.txt").write_text("done")
        >>> tmp.path.exists()
        False
    """

    def __init__(self) -> None:
        super().__init__(_PathOps(
            create_path=_create_dir,
            path_name=_dir_path_name,
            delete_at_exit=_delete_dir_at_exit,
            create_content=_no_content,
        ))

    def create_delete_on_close(self) -> "DeleteOnCloseDir":
        """
        Create a fresh temp directory wrapped in a DeleteOnCloseDir.

        The directory and everything in it is deleted as soon as the handle is closed.
        Recommended usage:

            with TempDirBuilder().create_delete_on_close() as tmp:
                ...  # use tmp.path

        """
        return DeleteOnCloseDir(self.create())


@dataclass(frozen=True)
class DeleteOnCloseFile:
    """
    A temp file path that is deleted by close(), or at the end of a with block.

    Closing a handle whose file is already gone is fine. The file itself can be opened
    and closed any number of times while the handle is alive.
    """
    path: Path

    def __fspath__(self) -> str:
        return os.fspath(self.path)

    def __enter__(self) -> Self:
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def close(self) -> None:
        delete_if_exists(self.path)

    def open(self, mode: str = "r", encoding: str | None = None, **kwargs) -> IO[Any]:
        """Open the file, text modes default to UTF-8 like read_text() and write_text()."""
        if encoding is None and "b" not in mode:
            encoding = "utf-8"
        return open(self.path, mode, encoding=encoding, **kwargs)

    def read_bytes(self) -> bytes:
        return self.path.read_bytes()

    def write_bytes(self, data: bytes) -> int:
        return self.path.write_bytes(data)

    def read_text(self, encoding: str = "utf-8") -> str:
        return self.path.read_text(encoding=encoding)

    def write_text(self, data: str, encoding: str = "utf-8") -> int:
        return self.path.write_text(data, encoding=encoding)


@dataclass(frozen=True)
class DeleteOnCloseDir:
    """
    A temp directory path that is deleted with all its contents by close(), or at the
    end of a with block. Closing a handle whose directory is already gone is fine.
    """
    path: Path

    def __fspath__(self) -> str:
        return os.fspath(self.path)

    def __enter__(self) -> Self:
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def close(self) -> None:
        delete_recursively(self.path)


# Methods --------------------------------------------------------------------------------------------------------------

@contextmanager
def temp_dir(prefix: str = None, dir: str | os.PathLike[str] = None, ignore_cleanup_errors: bool = False, *,
             delete: bool = True, mode: int | None = None, delete_on_exit: bool = True) -> Iterator[Path]:
    """
    Context manager that provides a Path object to a temporary directory.
    The directory and its contents are automatically removed upon exiting the 'with' block.

    Directory names carry no suffix. With delete=False the directory is kept when the block
    exits, and is removed at interpreter exit unless delete_on_exit=False too.
    ignore_cleanup_errors=True silences OSErrors raised while removing the directory.
    """
    builder = TempDirBuilder().file_attributes(mode=mode)
    if prefix is not None:
        builder.prefix(prefix)
    if dir is not None:
        builder.dir(dir)
    if not delete_on_exit:
        builder.no_delete_on_exit()
    tmp = builder.create_delete_on_close()
    try:
        yield tmp.path
    finally:
        if delete:
            _close(tmp, ignore_cleanup_errors)


@contextmanager
def temp_file(suffix: str = None, prefix: str = None, dir: str | os.PathLike[str] = None,
              ignore_cleanup_errors: bool = False, *, delete: bool = True,
              content: Any = None, encoding: str = "utf-8",
              mode: int | None = None, delete_on_exit: bool = True) -> Iterator[Path]:
    """
    Context manager that provides a Path object to a temporary file, optionally
    pre-filled with content. The file is automatically removed upon exiting the 'with' block.

    suffix=None uses the builder default '.tmp'. delete and ignore_cleanup_errors behave
    as in temp_dir().
    """
    builder = TempFileBuilder().file_attributes(mode=mode)
    if suffix is not None:
        builder.suffix(suffix)
    if prefix is not None:
        builder.prefix(prefix)
    if dir is not None:
        builder.dir(dir)
    if content is not None:
        builder.initial_content(content, encoding)
    if not delete_on_exit:
        builder.no_delete_on_exit()
    tmp = builder.create_delete_on_close()
    try:
        yield tmp.path
    finally:
        if delete:
            _close(tmp, ignore_cleanup_errors)


# Private methods ------------------------------------------------------------------------------------------------------

def _create_temp_path(ops: _PathOps, parent: Path, prefix: str, attributes: FileAttributes,
                      delete_on_exit: bool) -> Path:
    try:
        path = ops.create_path(parent, prefix, attributes)
    except OSError as exc:
        # The message of this exception is often unhelpful,
        # add the location where we attempted to create the path.
        if str(parent) in str(exc):
            raise

        path_name = ops.path_name(parent, prefix)
        detail = exc.strerror or (exc.args[0] if len(exc.args) == 1 else "")
        message = f"{path_name} ({detail})" if detail else path_name
        if exc.errno is not None:
            raise OSError(exc.errno, message) from exc
        raise OSError(message) from exc

    if delete_on_exit:
        ops.delete_at_exit(path)

    ops.create_content(path)

    return path


def _apply_attributes(path: Path, attributes: FileAttributes) -> None:
    if attributes.mode is None:
        return
    try:
        os.chmod(path, attributes.mode)
    except OSError as exc:
        try:
            delete_if_exists(path)
        except OSError as delete_exc:
            exc.add_note(f"Deleting the temp path {path} also failed: {delete_exc!r}")
        raise


def _create_dir(parent: Path, prefix: str, attributes: FileAttributes) -> Path:
    path = Path(tempfile.mkdtemp(prefix=prefix, dir=parent))
    _apply_attributes(path, attributes)
    return path


def _dir_path_name(parent: Path, prefix: str) -> str:
    return str(parent / f"{prefix}*")


def _delete_file_at_exit(path: Path) -> None:
    cleanup.delete_at_exit(path)


def _delete_dir_at_exit(path: Path) -> None:
    cleanup.delete_at_exit(path, recursive=True)


def _no_content(path: Path) -> None:
    pass


def _close(handle: "DeleteOnCloseFile | DeleteOnCloseDir", ignore_errors: bool) -> None:
    try:
        handle.close()
    except OSError:
        if not ignore_errors:
            raise
