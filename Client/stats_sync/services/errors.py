"""
Sync Errors

Failure classes raised by the fetcher and the cache store. All of them are
recovered inside the reconciler and never reach the presentation layer.
"""

from typing import Optional


class StatsSyncError(Exception):
    """Base class for recoverable sync failures."""


class RemoteUnavailable(StatsSyncError):
    """The stats API could not be reached (network error or timeout)."""


class RemoteRejected(StatsSyncError):
    """The stats API answered with a non-success status."""

    def __init__(self, status_code: int, message: Optional[str] = None):
        self.status_code = status_code
        super().__init__(message or f"Stats API returned HTTP {status_code}")


class MalformedCachePayload(StatsSyncError):
    """A cached stats entry could not be decoded."""
