"""
Exception hierarchy for package traversal and metadata derivation.

Each exception includes:
- Clear error message
- Package path and archive entry context
- Suggested user action
- Original exception preserved for debugging
"""

from typing import Optional


class ZipMetaError(Exception):
    """
    Base exception for all traversal and metadata errors.

    Used directly for generic failures that don't fit a more specific category.
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        entry: Optional[str] = None,
        original_exception: Optional[Exception] = None,
        suggested_action: Optional[str] = None,
    ):
        """
        Initialize ZipMetaError.

        Args:
            message: Human-readable error message
            path: Package path or archive display name the error relates to
            entry: Archive entry name the error relates to
            original_exception: The original exception that was caught
            suggested_action: Suggested action for the user to resolve the issue
        """
        self.message = message
        self.path = path
        self.entry = entry
        self.original_exception = original_exception
        self.suggested_action = suggested_action

        error_parts = [message]

        if path:
            error_parts.append(f"Path: {path}")

        if entry:
            error_parts.append(f"Entry: {entry}")

        if suggested_action:
            error_parts.append(f"Action: {suggested_action}")

        if original_exception:
            error_parts.append(f"Original error: {str(original_exception)}")

        super().__init__(" | ".join(error_parts))


class NotFoundError(ZipMetaError):
    """Raised when a concrete package path does not exist."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        original_exception: Optional[Exception] = None,
    ):
        super().__init__(
            message=message,
            path=path,
            original_exception=original_exception,
            suggested_action="Check the package path or wildcard pattern",
        )


class MalformedArchiveError(ZipMetaError):
    """
    Raised when a stream that should be an archive cannot be opened as one.

    This typically indicates:
    - A truncated or corrupt download
    - A nested entry named like an archive that holds something else
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        entry: Optional[str] = None,
        original_exception: Optional[Exception] = None,
    ):
        super().__init__(
            message=message,
            path=path,
            entry=entry,
            original_exception=original_exception,
            suggested_action="Verify the package is a valid zip archive",
        )


class DetectionError(ZipMetaError):
    """Raised when the binary detector cannot classify boot file content."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        entry: Optional[str] = None,
        original_exception: Optional[Exception] = None,
    ):
        super().__init__(
            message=message,
            path=path,
            entry=entry,
            original_exception=original_exception,
            suggested_action="The boot file may belong to an unsupported build",
        )


class ProviderFailure(ZipMetaError):
    """
    Raised when an enrichment provider rejects its input.

    This typically indicates a package filename that doesn't follow the
    expected naming convention, or a provider returning no value.
    """

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        path: Optional[str] = None,
        entry: Optional[str] = None,
        original_exception: Optional[Exception] = None,
    ):
        self.provider = provider
        if provider:
            message = f"{message} [{provider}]"
        super().__init__(
            message=message,
            path=path,
            entry=entry,
            original_exception=original_exception,
        )


class OperationCancelledError(ZipMetaError):
    """Raised when a scan observes a cancellation request."""


class ConfigurationError(ZipMetaError):
    """Raised for invalid configuration or provider wiring."""


__all__ = [
    "ZipMetaError",
    "NotFoundError",
    "MalformedArchiveError",
    "DetectionError",
    "ProviderFailure",
    "OperationCancelledError",
    "ConfigurationError",
]
