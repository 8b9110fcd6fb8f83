from dataclasses import dataclass

import structlog

from skeleton_feeds.core.entity.feed import Feed
from skeleton_feeds.core.errors import UnknownFeedError
from skeleton_feeds.core.repository import feed as feed_repo
from skeleton_feeds.core.usecase.base import BaseUseCase

logger = structlog.get_logger()


@dataclass
class UnregisterFeedInput:
    uri: str


@dataclass
class UnregisterFeedUseCase(BaseUseCase):
    feed_repository: feed_repo.FeedRepository

    async def execute(self, data: UnregisterFeedInput) -> None:
        feed = await self._get_feed(data.uri)

        try:
            await self.feed_repository.delete(feed.id)
        except feed_repo.FeedNotFoundError:
            # the feed has been unregistered concurrently
            logger.info("Requested feed to unregister not found", feed_uri=data.uri)
            raise UnknownFeedError(f"Feed with URI {data.uri} does not exist.", feed_uri=data.uri)

        logger.info("Unregistered feed", feed_uri=feed.uri, feed_id=feed.id)

    async def _get_feed(self, uri: str) -> Feed:
        try:
            return await self.feed_repository.get_by_uri(uri)
        except feed_repo.FeedNotFoundError:
            logger.info("Requested feed to unregister not found", feed_uri=uri)
            raise UnknownFeedError(f"Feed with URI {uri} does not exist.", feed_uri=uri)
