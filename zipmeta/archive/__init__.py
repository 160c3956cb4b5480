"""
Archive traversal for firmware packages.

This package expands package paths, opens zip archives (on disk or in
memory) and walks them recursively to find embedded boot files.
"""

from .path_expander import expand_path, has_wildcards
from .reader import ArchiveReader
from .walker import DEFAULT_NESTED_EXTENSION, ArchiveWalker

__all__ = [
    "ArchiveReader",
    "ArchiveWalker",
    "DEFAULT_NESTED_EXTENSION",
    "expand_path",
    "has_wildcards",
]
