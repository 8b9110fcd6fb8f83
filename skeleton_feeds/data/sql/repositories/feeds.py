import sqlalchemy as sa
import structlog
from sqlalchemy.exc import IntegrityError

from skeleton_feeds.core.entity.feed import Feed, FeedUpdates, NewFeed
from skeleton_feeds.core.repository.feed import (
    FeedAlreadyExistsError,
    FeedNotFoundError,
    FeedRepository,
)
from skeleton_feeds.data.sql import models as mdl
from skeleton_feeds.data.sql.repositories.base import (
    BaseSqlRepository,
    is_unique_violation,
    storage_errors,
)

logger = structlog.get_logger()


class SqlFeedRepository(BaseSqlRepository, FeedRepository):
    @storage_errors
    async def get_by_uri(self, uri: str) -> Feed:
        query = sa.select(mdl.Feed).where(mdl.Feed.c.uri == uri)

        async with self.db.connect() as conn:
            result = await conn.execute(query)

            if row := result.mappings().fetchone():
                return Feed.model_validate(dict(row))

        raise FeedNotFoundError(f"Feed with uri {uri} not found", feed_uri=uri)

    @storage_errors
    async def get_active_by_uri(self, uri: str) -> Feed:
        query = sa.select(mdl.Feed).where(
            sa.and_(
                mdl.Feed.c.uri == uri,
                mdl.Feed.c.is_active.is_(True),
            )
        )

        async with self.db.connect() as conn:
            result = await conn.execute(query)

            if row := result.mappings().fetchone():
                return Feed.model_validate(dict(row))

        raise FeedNotFoundError(f"Active feed with uri {uri} not found", feed_uri=uri)

    @storage_errors
    async def get_by_uri_with_post_count(self, uri: str) -> tuple[Feed, int]:
        # fmt: off
        post_count = (
            sa.select(sa.func.count())
            .select_from(mdl.Post)
            .where(mdl.Post.c.feed_id == mdl.Feed.c.id)
            .scalar_subquery()
        )
        # fmt: on
        query = sa.select(mdl.Feed, post_count.label("post_count")).where(mdl.Feed.c.uri == uri)

        async with self.db.connect() as conn:
            result = await conn.execute(query)

            if row := result.mappings().fetchone():
                values = dict(row)
                count = values.pop("post_count")
                return Feed.model_validate(values), count

        raise FeedNotFoundError(f"Feed with uri {uri} not found", feed_uri=uri)

    @storage_errors
    async def get_list(self, *, active_only: bool = False) -> list[Feed]:
        query = sa.select(mdl.Feed).order_by(mdl.Feed.c.id.asc())

        if active_only:
            query = query.where(mdl.Feed.c.is_active.is_(True))

        async with self.db.connect() as conn:
            result = await conn.execute(query)

        return [Feed.model_validate(dict(row)) for row in result.mappings()]

    @storage_errors
    async def create(self, new_feed: NewFeed) -> Feed:
        query = sa.insert(mdl.Feed).values(new_feed.model_dump()).returning(mdl.Feed)

        try:
            async with self.db.begin() as conn:
                result = await conn.execute(query)
                row = result.mappings().one()
        except IntegrityError as ie:
            logger.warning("Failed to insert feed", feed_uri=new_feed.uri, error=ie)
            self._handle_integrity_error_on_create(ie, new_feed)

        return Feed.model_validate(dict(row))

    def _handle_integrity_error_on_create(self, ie: IntegrityError, new_feed: NewFeed) -> None:
        if is_unique_violation(ie):
            raise FeedAlreadyExistsError(
                f"Feed with URI {new_feed.uri} already exists", feed_uri=new_feed.uri
            ) from ie
        raise ie

    @storage_errors
    async def update(self, *, uri: str, updates: FeedUpdates) -> Feed:
        update_q = (
            sa.update(mdl.Feed)
            .where(mdl.Feed.c.uri == uri)
            .values(**updates.model_dump(exclude_none=True))
            .returning(mdl.Feed)
        )

        async with self.db.begin() as conn:
            result = await conn.execute(update_q)

            if row := result.mappings().fetchone():
                return Feed.model_validate(dict(row))

        raise FeedNotFoundError(f"Failed to update feed with {uri=}", feed_uri=uri)

    @storage_errors
    async def delete(self, feed_id: int) -> None:
        delete_posts_q = sa.delete(mdl.Post).where(mdl.Post.c.feed_id == feed_id)
        delete_feed_q = sa.delete(mdl.Feed).where(mdl.Feed.c.id == feed_id)

        # both statements are committed together or not at all
        async with self.db.begin() as conn:
            await conn.execute(delete_posts_q)
            result = await conn.execute(delete_feed_q)

            if result.rowcount == 0:
                raise FeedNotFoundError(f"Feed with id {feed_id} not found", feed_id=feed_id)
