"""Shared utilities: exception hierarchy and provider error handling."""

from .exceptions import (
    ConfigurationError,
    DetectionError,
    MalformedArchiveError,
    NotFoundError,
    OperationCancelledError,
    ProviderFailure,
    ZipMetaError,
)

__all__ = [
    "ConfigurationError",
    "DetectionError",
    "MalformedArchiveError",
    "NotFoundError",
    "OperationCancelledError",
    "ProviderFailure",
    "ZipMetaError",
]
