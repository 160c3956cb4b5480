"""Cooperative cancellation for long nested-archive scans."""

import threading
from typing import Optional

from .utils.exceptions import OperationCancelledError


class CancellationToken:
    """
    Cancellation flag checked at every traversal step and provider call.

    The token may be cancelled from another thread; the scan itself stays
    single-threaded and stops at the next check.
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise OperationCancelledError("Operation was cancelled")


def ensure_token(token: Optional[CancellationToken]) -> CancellationToken:
    """Return the given token, or a fresh token nobody else can cancel."""
    return token if token is not None else CancellationToken()
