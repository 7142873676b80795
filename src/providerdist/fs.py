"""Local filesystem operations used to build the release tree.

Thin wrappers around pathlib/shutil. ``OSError`` propagates to callers, which
translate it into the packaging error that fits the document being handled.
"""

from __future__ import annotations

import shutil
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


def read_lines(path: Path) -> list[str]:
    """Read a text file into lines without their line terminators.

    Raises:
        OSError: If the file cannot be opened or read.
    """
    with path.open(encoding="utf-8") as f:
        return f.read().splitlines()


def write_bytes(path: Path, data: bytes) -> None:
    """Write (or overwrite) a file with ``data``."""
    path.write_bytes(data)
    path.chmod(0o644)


def create_dir(path: Path) -> None:
    """Create a single directory. An existing directory is not an error."""
    path.mkdir(exist_ok=True)


def create_dir_recursive(path: Path) -> None:
    """Create a directory and any missing parents."""
    path.mkdir(parents=True, exist_ok=True)


def delete_dir(path: Path) -> None:
    """Remove a directory tree. A missing directory is not an error."""
    if path.exists():
        shutil.rmtree(path)


def copy_file(src: Path, dst: Path) -> None:
    """Copy a regular file's contents to ``dst``.

    Raises:
        FileNotFoundError: If ``src`` does not exist.
        OSError: If ``src`` is not a regular file or the copy fails.
    """
    if not src.exists():
        msg = f"No such file or directory: {src}"
        raise FileNotFoundError(msg)
    if not src.is_file():
        msg = f"{src} is not a regular file"
        raise OSError(msg)
    shutil.copyfile(src, dst)
