from pydantic import BaseModel, Field

from skeleton_feeds.core.entity.atproto import FeedUri


class NewFeed(BaseModel):
    uri: FeedUri = Field(description="AT-URI of the feed generator record")
    lang_filter: bool = Field(True, description="Whether skeleton reads filter by language")
    is_active: bool = Field(True, description="Whether the skeleton is served publicly")


class Feed(NewFeed):
    id: int  # noqa: A003


class FeedUpdates(BaseModel):
    lang_filter: bool | None = None
    is_active: bool | None = None

    def is_empty(self) -> bool:
        return self.lang_filter is None and self.is_active is None
