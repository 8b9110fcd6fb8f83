from dataclasses import dataclass

from skeleton_feeds.core.entity.feed import Feed
from skeleton_feeds.core.repository.feed import FeedRepository
from skeleton_feeds.core.usecase.base import BaseUseCase


@dataclass
class ListFeedsOutput:
    feeds: list[Feed]


@dataclass
class ListFeedsUseCase(BaseUseCase):
    feed_repository: FeedRepository

    async def execute(self) -> ListFeedsOutput:
        feeds = await self.feed_repository.get_list()
        return ListFeedsOutput(feeds=feeds)
