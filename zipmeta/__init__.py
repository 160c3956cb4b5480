"""
zipmeta - firmware build metadata from zip distribution packages.

Locates the boot file inside (possibly nested) zip packages and derives one
SoftwareInfo record per boot file through pluggable metadata providers.
"""

from .cancellation import CancellationToken
from .models import (
    ArchiveEntry,
    BootExtraction,
    BuildInfo,
    CameraInfo,
    CategoryInfo,
    CompilerInfo,
    EncodingInfo,
    ProcessingFailure,
    ProductInfo,
    SoftwareInfo,
    SourceInfo,
    ValidationMismatch,
)
from .provider import SoftwareScan, ZipSoftwareMetaProvider

__version__ = "1.0.0"

__all__ = [
    "ArchiveEntry",
    "BootExtraction",
    "BuildInfo",
    "CameraInfo",
    "CancellationToken",
    "CategoryInfo",
    "CompilerInfo",
    "EncodingInfo",
    "ProcessingFailure",
    "ProductInfo",
    "SoftwareInfo",
    "SoftwareScan",
    "SourceInfo",
    "ValidationMismatch",
    "ZipSoftwareMetaProvider",
]
