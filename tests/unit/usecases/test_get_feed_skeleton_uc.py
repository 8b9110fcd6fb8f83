from datetime import UTC, datetime
from unittest import mock

import pytest
from pydantic import ValidationError

from skeleton_feeds.application.di import Container
from skeleton_feeds.core.entity.post import RepostReason
from skeleton_feeds.core.errors import MalformedCursorError, UnknownFeedError
from skeleton_feeds.core.repository.feed import FeedNotFoundError
from skeleton_feeds.core.usecase.get_feed_skeleton import (
    GetFeedSkeletonInput,
    GetFeedSkeletonUseCase,
    SkeletonItem,
)
from tests.factories.feed import FeedFactory
from tests.factories.post import PostFactory

FEED_URI = "at://did:plc:abcdefghijklmnopqrstuvwx/app.bsky.feed.generator/whats-hot"
REPOST_URI = "at://did:plc:ragtjsm2j2vknwkz3zp4oxrd/app.bsky.feed.repost/3kmx2c4dbyc2e"
NOW = datetime(2024, 5, 17, 8, 30, 12, 345000, tzinfo=UTC)


@pytest.fixture()
def uc(
    container: Container,
    feed_repository: mock.Mock,
    post_repository: mock.Mock,
) -> GetFeedSkeletonUseCase:
    return container.use_cases.get_feed_skeleton()


async def test_happy_path(
    feed_repository: mock.Mock,
    post_repository: mock.Mock,
    uc: GetFeedSkeletonUseCase,
) -> None:
    feed = FeedFactory.build(uri=FEED_URI, lang_filter=True)
    post = PostFactory.build(
        feed_id=feed.id,
        indexed_at=NOW,
        reason=RepostReason(repost=REPOST_URI),
        feed_context="because you follow",
    )
    feed_repository.get_active_by_uri.return_value = feed
    post_repository.get_list.return_value = [post]

    uc_input = GetFeedSkeletonInput(
        feed_uri=FEED_URI,
        limit=1,
        accept_language="ja-JP, en-US;q=0.9, *;q=0.1",
    )
    uc_result = await uc.execute(uc_input)

    assert uc_result.feed == [
        SkeletonItem(
            post=post.uri,
            reason=RepostReason(repost=REPOST_URI),
            feed_context="because you follow",
        ),
    ]
    assert uc_result.cursor == f"1715934612345::{post.cid}"
    assert uc_result.content_language == "ja, en"

    feed_repository.get_active_by_uri.assert_called_once_with(FEED_URI)
    post_repository.get_list.assert_called_once_with(
        feed_id=feed.id,
        limit=1,
        after=None,
        languages=["ja", "en"],
    )


@pytest.mark.parametrize("accept_language", [None, "", "*"])
async def test_no_language_preferences(
    feed_repository: mock.Mock,
    post_repository: mock.Mock,
    uc: GetFeedSkeletonUseCase,
    accept_language: str | None,
) -> None:
    feed = FeedFactory.build(uri=FEED_URI, lang_filter=True)
    feed_repository.get_active_by_uri.return_value = feed
    post_repository.get_list.return_value = []

    uc_input = GetFeedSkeletonInput(feed_uri=FEED_URI, accept_language=accept_language)
    uc_result = await uc.execute(uc_input)

    assert uc_result.feed == []
    assert uc_result.cursor is None
    assert uc_result.content_language is None
    post_repository.get_list.assert_called_once_with(
        feed_id=feed.id,
        limit=50,
        after=None,
        languages=None,
    )


async def test_feed_without_language_filter(
    feed_repository: mock.Mock,
    post_repository: mock.Mock,
    uc: GetFeedSkeletonUseCase,
) -> None:
    feed = FeedFactory.build(uri=FEED_URI, lang_filter=False)
    feed_repository.get_active_by_uri.return_value = feed
    post_repository.get_list.return_value = []

    uc_input = GetFeedSkeletonInput(feed_uri=FEED_URI, accept_language="en")
    uc_result = await uc.execute(uc_input)

    assert uc_result.content_language is None
    post_repository.get_list.assert_called_once_with(
        feed_id=feed.id,
        limit=50,
        after=None,
        languages=None,
    )


async def test_unknown_or_inactive_feed(
    feed_repository: mock.Mock,
    post_repository: mock.Mock,
    uc: GetFeedSkeletonUseCase,
) -> None:
    feed_repository.get_active_by_uri.side_effect = FeedNotFoundError("Feed not found")

    with pytest.raises(UnknownFeedError):
        await uc.execute(GetFeedSkeletonInput(feed_uri=FEED_URI))

    post_repository.get_list.assert_not_called()


async def test_malformed_cursor(
    feed_repository: mock.Mock,
    post_repository: mock.Mock,
    uc: GetFeedSkeletonUseCase,
) -> None:
    with pytest.raises(MalformedCursorError):
        await uc.execute(GetFeedSkeletonInput(feed_uri=FEED_URI, cursor="1715934612345"))

    feed_repository.get_active_by_uri.assert_not_called()


@pytest.mark.parametrize("limit", [0, 101])
def test_limit_out_of_range(limit: int) -> None:
    with pytest.raises(ValidationError):
        GetFeedSkeletonInput(feed_uri=FEED_URI, limit=limit)
