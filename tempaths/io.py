"""
Content writing for freshly created files.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import codecs
import collections.abc as abc
import os
from pathlib import Path
from typing import Any


# Methods --------------------------------------------------------------------------------------------------------------

def check_encoding(encoding: str) -> str:
    """
    Validate a text encoding name and return its canonical codec name.

    Raises:
        ValueError: If encoding is None or empty.
        LookupError: If no codec is registered under this name.

    Examples:
        >>> check_encoding("UTF8")
        'utf-8'
    """
    if not encoding:
        raise ValueError(f"encoding must be a non-empty codec name, got {encoding!r}")
    return codecs.lookup(encoding).name


def write_file(path: str | os.PathLike[str], content: Any, encoding: str = "utf-8") -> None:
    """
    Write content to a file, replacing anything it already holds.

    The shape of the content decides how it is written:
        - str: encoded with encoding.
        - bytes, bytearray, memoryview: written as-is, encoding is not used.
        - other iterables (list of lines, generator, ...): one item per line, each item
          converted with str() and followed by the platform line separator.
        - anything else: written as str(content).

    Args:
        path: File to write. Created if it does not exist.
        content: Data to write, see above.
        encoding: Text encoding for str and line content.

    Raises:
        OSError: If the file cannot be opened or written.
        UnicodeEncodeError: If text content cannot be represented in encoding.
        LookupError: If encoding is unknown.

    Examples:
        >>> write_file("notes.txt", "hello")
        >>> write_file("data.bin", b"\\x00\\x01")
        >>> write_file("lines.txt", ["first", "second"], encoding="latin-1")
    """
    file_path = Path(path)

    if isinstance(content, (bytes, bytearray, memoryview)):
        file_path.write_bytes(content)
        return

    if isinstance(content, str):
        # newline="" keeps the text byte-exact, no newline translation
        with open(file_path, "w", encoding=encoding, newline="") as f:
            f.write(content)
        return

    if isinstance(content, abc.Iterable):
        # newline=None translates "\n" to os.linesep
        with open(file_path, "w", encoding=encoding, newline=None) as f:
            for line in content:
                f.write(f"{line}\n")
        return

    with open(file_path, "w", encoding=encoding, newline="") as f:
        f.write(str(content))
