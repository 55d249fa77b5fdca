"""Infrastructure: filesystem-backed argument converters.

These are the only converters with side effects.  Each one checks that
the named file exists *at conversion time*; nothing guarantees it still
exists when the command body runs.

Rules
-----
* :class:`~pathlib.Path` arguments are checked, never opened.
* ``TextIO`` / ``BinaryIO`` arguments are opened for reading and are
  released by the dispatcher after the command has run.
* No ``print()`` — failures surface as
  :class:`~clidispatch.exceptions.ConversionError`.
"""

from __future__ import annotations

from pathlib import Path
from typing import IO, BinaryIO, TextIO

from clidispatch.core.converters import ConverterRegistry
from clidispatch.exceptions import ConversionError

ENCODING: str = "utf-8"
"""Encoding used for ``TextIO`` arguments."""


def existing_path(text: str) -> Path:
    """Return *text* as a :class:`Path`, requiring that it exists."""
    path = Path(text)
    if not path.exists():
        raise ConversionError(f"File not found: {path}")
    return path


def open_text(text: str) -> TextIO:
    """Open an existing file for reading as UTF-8 text.

    Line endings are passed through untranslated.
    """
    return _open(existing_path(text), "r")  # type: ignore[return-value]


def open_binary(text: str) -> BinaryIO:
    """Open an existing file for reading in binary mode."""
    return _open(existing_path(text), "rb")  # type: ignore[return-value]


def _open(path: Path, mode: str) -> IO[object]:
    try:
        if "b" in mode:
            return path.open(mode)
        return path.open(mode, encoding=ENCODING, newline="")
    except IsADirectoryError:
        raise ConversionError(f"Not a file: {path}") from None
    except PermissionError:
        raise ConversionError(f"Permission denied: {path}") from None


def register_file_converters(registry: ConverterRegistry) -> ConverterRegistry:
    """Seed *registry* with the filesystem converters."""
    registry.register(Path, existing_path)
    registry.register(TextIO, open_text)
    registry.register(BinaryIO, open_binary)
    return registry
