"""Exception types raised by the content synchronization layer."""

from __future__ import annotations


class SiteSyncError(Exception):
    """Base error for sitesync."""


class StoreUnavailableError(SiteSyncError):
    """The remote document store is missing or misconfigured."""


class RemoteWriteError(SiteSyncError):
    """An upsert or delete against the remote store failed."""

    def __init__(self, path: str, message: str = "") -> None:
        self.path = path
        super().__init__(f"Write to {path} failed" + (f": {message}" if message else ""))


class SubscriptionError(SiteSyncError):
    """A live subscription reported a failure."""

    def __init__(self, target: str, message: str = "") -> None:
        self.target = target
        super().__init__(f"Subscription to {target} failed" + (f": {message}" if message else ""))
