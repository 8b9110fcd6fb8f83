from dataclasses import dataclass

import structlog
from pydantic import BaseModel

from skeleton_feeds.core.entity.atproto import FeedUri
from skeleton_feeds.core.entity.feed import Feed, NewFeed
from skeleton_feeds.core.repository import feed as feed_repo
from skeleton_feeds.core.usecase.base import BaseUseCase

logger = structlog.get_logger()


class RegisterFeedInput(BaseModel):
    uri: FeedUri
    lang_filter: bool = True
    is_active: bool = True


@dataclass
class RegisterFeedOutput:
    feed: Feed


@dataclass
class RegisterFeedUseCase(BaseUseCase):
    feed_repository: feed_repo.FeedRepository

    async def execute(self, data: RegisterFeedInput) -> RegisterFeedOutput:
        new_feed = NewFeed(uri=data.uri, lang_filter=data.lang_filter, is_active=data.is_active)

        try:
            feed = await self.feed_repository.create(new_feed)
        except feed_repo.FeedAlreadyExistsError:
            logger.info("Requested feed to register already exists", feed_uri=data.uri)
            raise

        # fmt: off
        logger.info(
            "Registered feed",
            feed_uri=feed.uri, feed_id=feed.id,
            lang_filter=feed.lang_filter, is_active=feed.is_active,
        )
        # fmt: on

        return RegisterFeedOutput(feed=feed)
