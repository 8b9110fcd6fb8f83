from datetime import UTC, datetime
from typing import Any

import sqlalchemy as sa
from sqlalchemy.engine import Dialect


class UTCDateTime(sa.types.TypeDecorator):
    """
    Timezone-aware datetime stored as UTC.

    SQLite has no timezone support, so values are stored naive there
    and get their UTC timezone back when loaded.
    """

    impl = sa.DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        value = value.astimezone(UTC)
        if dialect.name == "sqlite":
            value = value.replace(tzinfo=None)
        return value

    def process_result_value(self, value: Any, dialect: Dialect) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)


metadata = sa.MetaData()


Feed = sa.Table(
    "feed",
    metadata,
    sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
    sa.Column("uri", sa.Text, nullable=False),
    sa.Column("lang_filter", sa.Boolean, nullable=False, server_default=sa.true()),
    sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
    sa.UniqueConstraint("uri", name="feed_uri_key"),
)


Post = sa.Table(
    "post",
    metadata,
    sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
    sa.Column("feed_id", sa.Integer, nullable=False),
    sa.Column("did", sa.Text, nullable=False, index=True),
    sa.Column("uri", sa.Text, nullable=False),
    sa.Column("cid", sa.Text, nullable=False),
    sa.Column("indexed_at", UTCDateTime, nullable=False),
    sa.Column("feed_context", sa.Text, nullable=True),
    sa.Column("reason", sa.JSON, nullable=True),
    sa.ForeignKeyConstraint(["feed_id"], ["feed.id"], name="post_feed_id_fkey"),
    sa.UniqueConstraint("feed_id", "cid", "indexed_at", name="post_feed_id_cid_indexed_at_key"),
    sa.Index("post_feed_id_indexed_at_cid_idx", "feed_id", "indexed_at", "cid"),
    sa.Index("post_feed_id_uri_idx", "feed_id", "uri"),
)


PostLanguage = sa.Table(
    "post_language",
    metadata,
    sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
    sa.Column("post_id", sa.Integer, nullable=False),
    sa.Column("language", sa.Text, nullable=False),
    sa.ForeignKeyConstraint(
        ["post_id"], ["post.id"], name="post_language_post_id_fkey", ondelete="CASCADE"
    ),
    sa.Index("post_language_post_id_language_idx", "post_id", "language"),
)


Document = sa.Table(
    "document",
    metadata,
    sa.Column("type", sa.Text, primary_key=True),
    sa.Column("url", sa.Text, nullable=True),
    sa.Column("content", sa.Text, nullable=True),
)
