from dataclasses import dataclass

import structlog

from skeleton_feeds.core.entity.feed import Feed, FeedUpdates
from skeleton_feeds.core.errors import InvalidArgumentError, UnknownFeedError
from skeleton_feeds.core.repository import feed as feed_repo
from skeleton_feeds.core.usecase.base import BaseUseCase

logger = structlog.get_logger()


@dataclass
class UpdateFeedInput:
    uri: str
    lang_filter: bool | None = None
    is_active: bool | None = None


@dataclass
class UpdateFeedOutput:
    feed: Feed


@dataclass
class UpdateFeedUseCase(BaseUseCase):
    feed_repository: feed_repo.FeedRepository

    async def execute(self, data: UpdateFeedInput) -> UpdateFeedOutput:
        updates = FeedUpdates(lang_filter=data.lang_filter, is_active=data.is_active)
        if updates.is_empty():
            raise InvalidArgumentError("No value for update in request", feed_uri=data.uri)

        try:
            feed = await self.feed_repository.update(uri=data.uri, updates=updates)
        except feed_repo.FeedNotFoundError:
            logger.info("Requested feed to update not found", feed_uri=data.uri)
            raise UnknownFeedError(f"Feed with URI {data.uri} does not exist.", feed_uri=data.uri)

        # fmt: off
        logger.info(
            "Updated feed",
            feed_uri=feed.uri, lang_filter=feed.lang_filter, is_active=feed.is_active,
        )
        # fmt: on

        return UpdateFeedOutput(feed=feed)
