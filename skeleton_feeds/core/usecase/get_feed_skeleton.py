from dataclasses import dataclass

import structlog
from pydantic import BaseModel, Field

from skeleton_feeds.core.cursor import PageCursor
from skeleton_feeds.core.entity.feed import Feed
from skeleton_feeds.core.entity.post import PinReason, RepostReason
from skeleton_feeds.core.errors import UnknownFeedError
from skeleton_feeds.core.language import content_language, parse_language_preferences
from skeleton_feeds.core.repository import feed as feed_repo
from skeleton_feeds.core.repository.post import PostRepository
from skeleton_feeds.core.usecase.base import BaseUseCase
from skeleton_feeds.core.usecase.get_posts import next_cursor

logger = structlog.get_logger()


class GetFeedSkeletonInput(BaseModel):
    feed_uri: str
    limit: int = Field(50, ge=1, le=100)
    cursor: str | None = None
    accept_language: str | None = Field(None, description="Accept-Language of the requester")


@dataclass
class SkeletonItem:
    post: str
    reason: RepostReason | PinReason | None = None
    feed_context: str | None = None


@dataclass
class GetFeedSkeletonOutput:
    feed: list[SkeletonItem]
    cursor: str | None = None
    # languages the skeleton was filtered by, as a Content-Language value
    content_language: str | None = None


@dataclass
class GetFeedSkeletonUseCase(BaseUseCase):
    feed_repository: feed_repo.FeedRepository
    post_repository: PostRepository

    async def execute(self, data: GetFeedSkeletonInput) -> GetFeedSkeletonOutput:
        after = PageCursor.decode(data.cursor) if data.cursor else None
        feed = await self._get_active_feed(data.feed_uri)

        languages = parse_language_preferences(data.accept_language) if feed.lang_filter else []

        posts = await self.post_repository.get_list(
            feed_id=feed.id,
            limit=data.limit,
            after=after,
            languages=languages or None,
        )

        return GetFeedSkeletonOutput(
            feed=[
                SkeletonItem(post=post.uri, reason=post.reason, feed_context=post.feed_context)
                for post in posts
            ],
            cursor=next_cursor(posts, data.limit),
            content_language=content_language(languages),
        )

    async def _get_active_feed(self, uri: str) -> Feed:
        # inactive feeds are reported exactly like unknown ones
        try:
            return await self.feed_repository.get_active_by_uri(uri)
        except feed_repo.FeedNotFoundError:
            logger.info("Requested feed skeleton not found or inactive", feed_uri=uri)
            raise UnknownFeedError(f"Feed with URI {uri} does not exist.", feed_uri=uri)
