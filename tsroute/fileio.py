"""Small file helpers."""

from __future__ import annotations

import os
from typing import Union

PathLike = Union[str, "os.PathLike[str]"]


def path_to_absolute(filename: PathLike) -> str:
    """Return ``filename`` unchanged if absolute, else joined to the working directory."""
    filename = os.fspath(filename)
    if os.path.isabs(filename):
        return filename
    return os.path.join(os.getcwd(), filename)


def delete_file(filepath: PathLike) -> None:
    """Remove ``filepath`` if it exists."""
    if os.path.exists(filepath):
        os.remove(filepath)


def write_data_to_file(filepath: PathLike, data: str) -> None:
    """Write ``data`` to ``filepath``, replacing any previous content."""
    with open(filepath, "w", encoding="utf-8") as handle:
        handle.write(data)