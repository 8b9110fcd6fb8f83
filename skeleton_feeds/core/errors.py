from typing import Any


class FeedStoreError(Exception):
    """
    Base class for every error the feed store reports to its callers.

    The class of the error identifies its kind, ``details`` carries the
    identifiers involved so that the caller can report them unchanged.
    """

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class NotFoundError(FeedStoreError):
    ...


class ConflictError(FeedStoreError):
    ...


class InvalidArgumentError(FeedStoreError):
    ...


class InvalidLanguageError(FeedStoreError):
    ...


class MalformedCursorError(FeedStoreError):
    ...


class StorageFailureError(FeedStoreError):
    ...


class UnknownFeedError(NotFoundError):
    """Raised by use cases when a feed is absent (or hidden from public reads)."""
