"""
Zip archive access for package traversal.

Archives are opened either from a file on disk or from a byte buffer that was
read out of a parent archive, so nested archives never touch the disk.
"""

import calendar
import io
import logging
import zipfile
import zlib
from datetime import datetime
from typing import BinaryIO, Iterator, Optional, Tuple

from ..models import ArchiveEntry
from ..utils.exceptions import MalformedArchiveError, NotFoundError

logger = logging.getLogger(__name__)


def _entry_timestamp(date_time: Tuple[int, int, int, int, int, int]) -> datetime:
    """
    Convert a DOS date/time tuple into a datetime.

    Zip headers can carry a zero month or day and seconds up to 62; each field
    is clamped into its valid range instead of failing the whole listing.
    """
    year, month, day, hour, minute, second = date_time
    month = min(max(month, 1), 12)
    day = min(max(day, 1), calendar.monthrange(year, month)[1])
    return datetime(year, month, day, min(hour, 23), min(minute, 59), min(second, 59))


class ArchiveReader:
    """
    Read-only view of a zip archive.

    Use as a context manager; closing the reader closes the underlying
    stream when the reader opened it.
    """

    def __init__(self, stream: BinaryIO, name: str, owns_stream: bool = False):
        """
        Initialize the reader.

        Args:
            stream: Seekable binary stream holding the archive
            name: Display name used in logs and errors
            owns_stream: Whether closing the reader also closes the stream

        Raises:
            MalformedArchiveError: If the stream is not a valid zip container
        """
        self.name = name
        self._stream = stream
        self._owns_stream = owns_stream
        try:
            self._zip = zipfile.ZipFile(stream)
        except (zipfile.BadZipFile, EOFError) as e:
            if owns_stream:
                stream.close()
            raise MalformedArchiveError(
                "Cannot open archive", path=name, original_exception=e
            ) from e

    @classmethod
    def open_file(cls, path: str, name: Optional[str] = None) -> "ArchiveReader":
        """Open an archive stored on disk."""
        try:
            stream = open(path, "rb")
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError) as e:
            raise NotFoundError("Package not found", path=path, original_exception=e) from e
        return cls(stream, name or path, owns_stream=True)

    @classmethod
    def from_bytes(cls, data: bytes, name: str) -> "ArchiveReader":
        """Open an archive held in memory."""
        return cls(io.BytesIO(data), name, owns_stream=True)

    def entries(self) -> Iterator[ArchiveEntry]:
        """Yield archive entries in archive order."""
        for info in self._zip.infolist():
            yield ArchiveEntry(
                name=info.filename,
                is_file=not info.is_dir(),
                size=info.file_size,
                last_modified=_entry_timestamp(info.date_time),
                info=info,
            )

    def open_entry(self, entry: ArchiveEntry) -> BinaryIO:
        """Open a stream over the decompressed entry content."""
        # Names can repeat within an archive; the ZipInfo pins the member
        member = entry.info if entry.info is not None else entry.name
        try:
            return self._zip.open(member)
        except (zipfile.BadZipFile, KeyError, NotImplementedError, RuntimeError) as e:
            # NotImplementedError: unsupported compression; RuntimeError: encrypted member
            raise MalformedArchiveError(
                "Cannot open entry", path=self.name, entry=entry.name, original_exception=e
            ) from e

    def read(self, entry: ArchiveEntry) -> bytes:
        """Read the full decompressed content of an entry."""
        with self.open_entry(entry) as stream:
            try:
                return stream.read()
            except (zipfile.BadZipFile, zlib.error, EOFError) as e:
                raise MalformedArchiveError(
                    "Cannot read entry", path=self.name, entry=entry.name, original_exception=e
                ) from e

    def open_archive(self, entry: ArchiveEntry) -> "ArchiveReader":
        """Open an entry as a nested archive named after the entry's filename."""
        logger.debug(f"Reading nested archive {entry.name} ({entry.size} bytes) from {self.name}")
        return ArchiveReader.from_bytes(self.read(entry), entry.file_name)

    def close(self) -> None:
        self._zip.close()
        if self._owns_stream:
            self._stream.close()

    def __enter__(self) -> "ArchiveReader":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
