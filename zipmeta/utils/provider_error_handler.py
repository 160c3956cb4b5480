"""
Reusable decorator for handling metadata provider failures.

Provider implementations are external collaborators; whatever they raise is
wrapped into a ProviderFailure carrying the package and entry context, so a
failing provider aborts exactly one record with an actionable message.
"""

import functools
import logging
from typing import Any, Callable, Optional, Tuple

from ..models import BootExtraction
from .exceptions import ProviderFailure, ZipMetaError


def handle_provider_errors(provider: str, allow_none: bool = False, log_stats: bool = True):
    """
    Decorator that converts provider exceptions into ProviderFailure.

    Usage:
        @handle_provider_errors(provider="source")
        def _get_source(self, extraction, software):
            return self.source_provider.get_source(software)

    Args:
        provider: Name of the provider role (e.g. "product", "source")
        allow_none: If False, a None result is treated as a failure
        log_stats: Whether to increment self.stats["provider_errors"] on failure

    Returns:
        Decorated function raising ProviderFailure on any provider error
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(self, *args, **kwargs):
            logger = getattr(self, "logger", logging.getLogger(func.__name__))
            path, entry = _extract_context(args, kwargs)
            stats = getattr(self, "stats", None) if log_stats else None

            try:
                result = func(self, *args, **kwargs)
            except ZipMetaError:
                # Already classified (cancellation, nested provider failure)
                raise
            except Exception as e:
                error = ProviderFailure(
                    message="Provider rejected its input",
                    provider=provider,
                    path=path,
                    entry=entry,
                    original_exception=e,
                )
                _record_error(error, logger, stats)
                raise error from e

            if result is None and not allow_none:
                error = ProviderFailure(
                    message="Provider returned no value",
                    provider=provider,
                    path=path,
                    entry=entry,
                )
                _record_error(error, logger, stats)
                raise error

            return result

        return wrapper

    return decorator


def _extract_context(args: tuple, kwargs: dict) -> Tuple[Optional[str], Optional[str]]:
    """Find the archive name and entry name of the extraction being processed."""
    candidates = list(args) + list(kwargs.values())
    for candidate in candidates:
        if isinstance(candidate, BootExtraction):
            return candidate.archive_name, candidate.entry.name
    return None, None


def _record_error(error: ProviderFailure, logger: logging.Logger, stats: Optional[Any]) -> None:
    logger.error(str(error))
    if isinstance(stats, dict):
        stats["provider_errors"] = stats.get("provider_errors", 0) + 1
