"""
Wildcard expansion for package path arguments.

A path without ``?`` or ``*`` is passed through untouched; existence is only
checked when the package is opened.
"""

import os
from pathlib import Path
from typing import Iterator

from ..utils.exceptions import NotFoundError

WILDCARD_CHARS = ("?", "*")


def has_wildcards(path: str) -> bool:
    return any(char in path for char in WILDCARD_CHARS)


def expand_path(path: str) -> Iterator[str]:
    """
    Expand a path argument into concrete file paths.

    Args:
        path: File path, optionally with ``?``/``*`` in its filename part

    Yields:
        Matching file paths, sorted by name; no recursion into subdirectories

    Raises:
        NotFoundError: If the directory part of a wildcard path does not exist
    """
    if not has_wildcards(path):
        yield path
        return

    directory, pattern = os.path.split(path)
    base = Path(directory) if directory else Path(".")
    if not base.is_dir():
        raise NotFoundError("Package directory not found", path=str(base))

    matches = sorted(p for p in base.glob(pattern) if p.is_file())
    for match in matches:
        yield str(match)
