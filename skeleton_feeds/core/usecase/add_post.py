from dataclasses import dataclass
from typing import assert_never

import structlog
from pydantic import AwareDatetime, BaseModel, Field

from skeleton_feeds.core.entity.atproto import Cid, PostUri, did_from_uri
from skeleton_feeds.core.entity.feed import Feed
from skeleton_feeds.core.entity.post import (
    FEED_CONTEXT_MAX_LENGTH,
    REASON_REPOST,
    NewPost,
    PinReason,
    PostReason,
    RepostReason,
)
from skeleton_feeds.core.errors import InvalidArgumentError, UnknownFeedError
from skeleton_feeds.core.language import normalize_languages
from skeleton_feeds.core.repository import feed as feed_repo
from skeleton_feeds.core.repository import post as post_repo
from skeleton_feeds.core.usecase.base import BaseUseCase
from skeleton_feeds.utils.dtime import now_aware, to_canonical_instant

logger = structlog.get_logger()


class AddPostInput(BaseModel):
    """
    Malformed input (a bad post uri or cid, an unknown reason $type) fails here
    with a pydantic ValidationError. A repost reason without its repost uri
    passes this schema and is rejected by the use case as InvalidArgumentError.
    """

    feed_uri: str
    uri: PostUri
    cid: Cid
    languages: list[str] | None = None
    indexed_at: AwareDatetime | None = None
    feed_context: str | None = Field(None, max_length=FEED_CONTEXT_MAX_LENGTH)
    reason: PostReason | None = None


@dataclass
class AddPostOutput:
    feed_uri: str
    post: NewPost
    # False when the very same post had already been added
    created: bool


@dataclass
class AddPostUseCase(BaseUseCase):
    feed_repository: feed_repo.FeedRepository
    post_repository: post_repo.PostRepository

    async def execute(self, data: AddPostInput) -> AddPostOutput:
        feed = await self._get_feed(data.feed_uri)

        languages = normalize_languages(data.languages)
        indexed_at = to_canonical_instant(data.indexed_at or now_aware())
        self._check_reason(data.reason)

        new_post = NewPost(
            feed_id=feed.id,
            did=did_from_uri(data.uri),
            uri=data.uri,
            cid=data.cid,
            indexed_at=indexed_at,
            feed_context=data.feed_context,
            reason=data.reason,
            languages=languages,
        )

        try:
            post = await self.post_repository.create(new_post)
        except post_repo.PostAlreadyExistsError:
            # retried requests are expected to end up here, the post is there already
            # fmt: off
            logger.info(
                "Post already exists in feed",
                feed_uri=feed.uri, post_uri=new_post.uri, cid=new_post.cid, indexed_at=indexed_at,
            )
            # fmt: on
            return AddPostOutput(feed_uri=feed.uri, post=new_post, created=False)

        # fmt: off
        logger.debug(
            "Added post to feed",
            feed_uri=feed.uri, post_id=post.id, post_uri=post.uri, languages=post.languages,
        )
        # fmt: on

        return AddPostOutput(feed_uri=feed.uri, post=post, created=True)

    async def _get_feed(self, uri: str) -> Feed:
        try:
            return await self.feed_repository.get_by_uri(uri)
        except feed_repo.FeedNotFoundError:
            logger.info("Requested feed to add post to not found", feed_uri=uri)
            raise UnknownFeedError(f"Feed with URI {uri} does not exist.", feed_uri=uri)

    def _check_reason(self, reason: RepostReason | PinReason | None) -> None:
        match reason:
            case None | PinReason():
                return
            case RepostReason(repost=None):
                raise InvalidArgumentError(
                    f"Reason type {REASON_REPOST} needs repost field", reason=REASON_REPOST
                )
            case RepostReason():
                return
            case _:
                assert_never(reason)
