"""
Depth-first traversal of nested package archives.

Every entry named like the boot file, at any nesting depth, is read out and
yielded as a BootExtraction. Nested archives are walked as soon as they are
encountered, before the parent's remaining entries.
"""

import logging
from typing import Iterator, Optional

from ..cancellation import CancellationToken, ensure_token
from ..models import ArchiveEntry, BootExtraction
from .reader import ArchiveReader

DEFAULT_NESTED_EXTENSION = ".zip"


class ArchiveWalker:
    """Recursive boot file finder."""

    def __init__(self, boot_file_name: str, nested_extension: str = DEFAULT_NESTED_EXTENSION):
        """
        Initialize the walker.

        Args:
            boot_file_name: Boot filename, compared case-insensitively with entry names
            nested_extension: Extension marking entries to open as nested archives
        """
        self.boot_file_name = boot_file_name
        self.nested_extension = nested_extension
        self.logger = logging.getLogger(self.__class__.__name__)

    def is_nested_archive(self, entry: ArchiveEntry) -> bool:
        return entry.extension.lower() == self.nested_extension.lower()

    def is_boot_file(self, entry: ArchiveEntry) -> bool:
        return entry.name.lower() == self.boot_file_name.lower()

    def walk(
        self,
        reader: ArchiveReader,
        name: str,
        token: Optional[CancellationToken] = None
    ) -> Iterator[BootExtraction]:
        """
        Walk an open archive and its nested archives.

        Args:
            reader: Open archive
            name: Display name of the archive
            token: Cancellation token checked before each entry

        Yields:
            BootExtraction for every boot file entry found

        Raises:
            MalformedArchiveError: If a nested archive cannot be opened
            OperationCancelledError: If the token is cancelled mid-walk
        """
        token = ensure_token(token)
        self.logger.info(f"Enter {name}")
        for entry in reader.entries():
            token.raise_if_cancelled()
            if not entry.is_file:
                continue

            if self.is_nested_archive(entry):
                with reader.open_archive(entry) as nested:
                    yield from self.walk(nested, entry.file_name, token)

            if self.is_boot_file(entry):
                self.logger.debug(f"Extracting {entry.name} from {name}")
                yield BootExtraction(data=reader.read(entry), archive_name=name, entry=entry)
        self.logger.info(f"Exit {name}")
