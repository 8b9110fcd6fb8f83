from abc import ABC, abstractmethod

from skeleton_feeds.core.entity.feed import Feed, FeedUpdates, NewFeed
from skeleton_feeds.core.errors import ConflictError, NotFoundError


class FeedNotFoundError(NotFoundError):
    ...


class FeedAlreadyExistsError(ConflictError):
    ...


class FeedRepository(ABC):
    @abstractmethod
    async def get_by_uri(self, uri: str) -> Feed:
        ...

    @abstractmethod
    async def get_active_by_uri(self, uri: str) -> Feed:
        """Same as get_by_uri, but an inactive feed is reported as not found."""

    @abstractmethod
    async def get_by_uri_with_post_count(self, uri: str) -> tuple[Feed, int]:
        ...

    @abstractmethod
    async def get_list(self, *, active_only: bool = False) -> list[Feed]:
        ...

    @abstractmethod
    async def create(self, new_feed: NewFeed) -> Feed:
        ...

    @abstractmethod
    async def update(self, *, uri: str, updates: FeedUpdates) -> Feed:
        ...

    @abstractmethod
    async def delete(self, feed_id: int) -> None:
        """Delete the feed along with every post it owns."""
