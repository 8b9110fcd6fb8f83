from dataclasses import dataclass

import structlog

from skeleton_feeds.core.errors import InvalidArgumentError, UnknownFeedError
from skeleton_feeds.core.repository import feed as feed_repo
from skeleton_feeds.core.repository.post import PostRepository
from skeleton_feeds.core.usecase.base import BaseUseCase

logger = structlog.get_logger()


@dataclass
class TrimFeedInput:
    uri: str
    remain: int


@dataclass
class TrimFeedOutput:
    feed_uri: str
    # Computed from the post count read before the delete. Posts added concurrently
    # in between make it approximate, the feed itself always keeps the newest `remain` posts.
    deleted_count: int


@dataclass
class TrimFeedUseCase(BaseUseCase):
    feed_repository: feed_repo.FeedRepository
    post_repository: PostRepository

    async def execute(self, data: TrimFeedInput) -> TrimFeedOutput:
        if data.remain < 0:
            raise InvalidArgumentError("remain must not be negative", remain=data.remain)

        try:
            feed, post_count = await self.feed_repository.get_by_uri_with_post_count(data.uri)
        except feed_repo.FeedNotFoundError:
            logger.info("Requested feed to trim not found", feed_uri=data.uri)
            raise UnknownFeedError(f"Feed with URI {data.uri} does not exist.", feed_uri=data.uri)

        deleted = await self.post_repository.trim(feed_id=feed.id, remain=data.remain)

        # fmt: off
        logger.info(
            "Trimmed feed",
            feed_uri=feed.uri, remain=data.remain, post_count=post_count, deleted_rows=deleted,
        )
        # fmt: on

        return TrimFeedOutput(feed_uri=feed.uri, deleted_count=max(0, post_count - data.remain))
