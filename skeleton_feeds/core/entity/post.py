from typing import Annotated, Literal

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, TypeAdapter

from skeleton_feeds.core.entity.atproto import Cid, Did, PostUri, RepostUri

REASON_REPOST = "app.bsky.feed.defs#skeletonReasonRepost"
REASON_PIN = "app.bsky.feed.defs#skeletonReasonPin"

FEED_CONTEXT_MAX_LENGTH = 2000


class RepostReason(BaseModel):
    type: Literal["app.bsky.feed.defs#skeletonReasonRepost"] = Field(  # noqa: A003
        REASON_REPOST, alias="$type"
    )
    repost: RepostUri | None = Field(None, description="AT-URI of the repost record")

    model_config = ConfigDict(populate_by_name=True)


class PinReason(BaseModel):
    type: Literal["app.bsky.feed.defs#skeletonReasonPin"] = Field(  # noqa: A003
        REASON_PIN, alias="$type"
    )

    model_config = ConfigDict(populate_by_name=True)


PostReason = Annotated[RepostReason | PinReason, Field(discriminator="type")]

post_reason_adapter: TypeAdapter[RepostReason | PinReason] = TypeAdapter(PostReason)


class NewPost(BaseModel):
    feed_id: int
    did: Did = Field(description="Author of the post, extracted from its uri")
    uri: PostUri
    cid: Cid
    indexed_at: AwareDatetime
    feed_context: str | None = Field(None, max_length=FEED_CONTEXT_MAX_LENGTH)
    reason: PostReason | None = None
    languages: list[str] = Field(description="Normalized language codes of the post")


class Post(NewPost):
    id: int  # noqa: A003
