from dataclasses import dataclass

import structlog
from pydantic import AwareDatetime, BaseModel

from skeleton_feeds.core.entity.feed import Feed
from skeleton_feeds.core.errors import NotFoundError, UnknownFeedError
from skeleton_feeds.core.repository import feed as feed_repo
from skeleton_feeds.core.repository.post import PostRepository
from skeleton_feeds.core.usecase.base import BaseUseCase
from skeleton_feeds.utils.dtime import to_canonical_instant

logger = structlog.get_logger()


class RemovePostInput(BaseModel):
    feed_uri: str
    uri: str
    # every post with the uri is removed when omitted
    indexed_at: AwareDatetime | None = None


class PostNotFoundError(NotFoundError):
    ...


@dataclass
class RemovePostUseCase(BaseUseCase):
    feed_repository: feed_repo.FeedRepository
    post_repository: PostRepository

    async def execute(self, data: RemovePostInput) -> None:
        feed = await self._get_feed(data.feed_uri)
        indexed_at = to_canonical_instant(data.indexed_at) if data.indexed_at else None

        deleted = await self.post_repository.delete_by_uri(
            feed_id=feed.id,
            uri=data.uri,
            indexed_at=indexed_at,
        )

        if not deleted:
            logger.info(
                "Requested post to remove not found",
                feed_uri=feed.uri,
                post_uri=data.uri,
                indexed_at=indexed_at,
            )
            post_desc = f"uri:{data.uri}"
            if indexed_at:
                post_desc += f" indexedAt:{indexed_at.isoformat()}"
            raise PostNotFoundError(
                f"Post not found feed:{feed.uri}, post:{{{post_desc}}}",
                feed_uri=feed.uri,
                post_uri=data.uri,
                indexed_at=indexed_at,
            )

        logger.info("Removed post from feed", feed_uri=feed.uri, post_uri=data.uri, deleted=deleted)

    async def _get_feed(self, uri: str) -> Feed:
        try:
            return await self.feed_repository.get_by_uri(uri)
        except feed_repo.FeedNotFoundError:
            logger.info("Requested feed to remove post from not found", feed_uri=uri)
            raise UnknownFeedError(f"Feed with URI {uri} does not exist.", feed_uri=uri)
