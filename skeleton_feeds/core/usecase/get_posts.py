from dataclasses import dataclass
from datetime import datetime

import structlog
from pydantic import BaseModel, Field

from skeleton_feeds.core.cursor import PageCursor
from skeleton_feeds.core.entity.feed import Feed
from skeleton_feeds.core.entity.post import PinReason, Post, RepostReason
from skeleton_feeds.core.errors import UnknownFeedError
from skeleton_feeds.core.language import public_languages
from skeleton_feeds.core.repository import feed as feed_repo
from skeleton_feeds.core.repository.post import PostRepository
from skeleton_feeds.core.usecase.base import BaseUseCase

logger = structlog.get_logger()


class GetPostsInput(BaseModel):
    feed_uri: str
    limit: int = Field(1000, ge=1, le=3000)
    cursor: str | None = None


@dataclass
class EditorPost:
    uri: str
    cid: str
    # None stands for a post that is not restricted to any language
    languages: list[str] | None
    indexed_at: datetime
    reason: RepostReason | PinReason | None = None
    feed_context: str | None = None

    @classmethod
    def from_post(cls, post: Post) -> "EditorPost":
        return cls(
            uri=post.uri,
            cid=post.cid,
            languages=public_languages(post.languages),
            indexed_at=post.indexed_at,
            reason=post.reason,
            feed_context=post.feed_context,
        )


@dataclass
class GetPostsOutput:
    posts: list[EditorPost]
    cursor: str | None = None


@dataclass
class GetPostsUseCase(BaseUseCase):
    """Page through every post of a feed, regardless of its languages or active flag."""

    feed_repository: feed_repo.FeedRepository
    post_repository: PostRepository

    async def execute(self, data: GetPostsInput) -> GetPostsOutput:
        after = PageCursor.decode(data.cursor) if data.cursor else None
        feed = await self._get_feed(data.feed_uri)

        posts = await self.post_repository.get_list(feed_id=feed.id, limit=data.limit, after=after)

        return GetPostsOutput(
            posts=[EditorPost.from_post(post) for post in posts],
            cursor=next_cursor(posts, data.limit),
        )

    async def _get_feed(self, uri: str) -> Feed:
        try:
            return await self.feed_repository.get_by_uri(uri)
        except feed_repo.FeedNotFoundError:
            logger.info("Requested feed to list posts of not found", feed_uri=uri)
            raise UnknownFeedError(f"Feed with URI {uri} does not exist.", feed_uri=uri)


def next_cursor(posts: list[Post], limit: int) -> str | None:
    # a full page suggests that more posts may follow
    if not posts or len(posts) != limit:
        return None
    last = posts[-1]
    return PageCursor.from_post(last.indexed_at, last.cid).encode()
