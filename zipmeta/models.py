from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import PurePosixPath
from typing import Any, Dict, Optional


@dataclass
class CategoryInfo:
    """Product family a firmware build belongs to."""
    name: str


@dataclass
class ProductInfo:
    """Product identity: name, version and language of a build."""
    name: str
    version: str
    language: Optional[str] = None
    created: Optional[datetime] = None


@dataclass
class CameraInfo:
    """Camera platform and firmware revision a build targets."""
    platform: str
    revision: str


@dataclass
class SourceInfo:
    name: str
    channel: Optional[str] = None
    url: Optional[str] = None


@dataclass
class BuildInfo:
    name: Optional[str] = None
    status: Optional[str] = None
    changeset: Optional[str] = None
    creator: Optional[str] = None


@dataclass
class CompilerInfo:
    name: str
    platform: Optional[str] = None
    version: Optional[str] = None


@dataclass
class EncodingInfo:
    name: str
    data: Optional[int] = None


@dataclass
class SoftwareInfo:
    """
    Metadata record describing one firmware build.

    The binary detector fills in what it can recognize; the enrichment
    pipeline populates the rest. Every record leaving the pipeline has all
    fields set.
    """
    category: Optional[CategoryInfo] = None
    product: Optional[ProductInfo] = None
    camera: Optional[CameraInfo] = None
    source: Optional[SourceInfo] = None
    build: Optional[BuildInfo] = None
    compiler: Optional[CompilerInfo] = None
    encoding: Optional[EncodingInfo] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert the record to a JSON-serializable dictionary."""
        data = asdict(self)
        product = data.get("product")
        if product and isinstance(product.get("created"), datetime):
            product["created"] = product["created"].isoformat()
        return data


@dataclass(frozen=True)
class ArchiveEntry:
    """One member of an archive, as seen while iterating it."""
    name: str
    is_file: bool
    size: int
    last_modified: datetime
    info: Any = field(default=None, compare=False, repr=False)

    @property
    def file_name(self) -> str:
        return PurePosixPath(self.name).name

    @property
    def extension(self) -> str:
        return PurePosixPath(self.name).suffix

    @property
    def created_utc(self) -> datetime:
        # Zip timestamps are naive local time
        return self.last_modified.astimezone(timezone.utc)


@dataclass(frozen=True)
class BootExtraction:
    """
    A boot file read out of an archive.

    Attributes:
        data: Raw boot file content
        archive_name: Display name of the archive directly containing the entry
        entry: The archive entry the content was read from
    """
    data: bytes
    archive_name: str
    entry: ArchiveEntry


@dataclass(frozen=True)
class ValidationMismatch:
    """Disagreement between binary-derived and filename-derived metadata."""
    field: str
    expected: Any
    actual: Any


@dataclass
class ProcessingFailure:
    """A failure isolated to one path or one record during a scan."""
    path: str
    error: Exception
    archive_name: Optional[str] = None
    entry_name: Optional[str] = None
    level: str = field(default="record")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "archive": self.archive_name,
            "entry": self.entry_name,
            "level": self.level,
            "error_type": type(self.error).__name__,
            "message": str(self.error),
        }
