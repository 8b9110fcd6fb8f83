from collections import defaultdict
from datetime import datetime
from typing import Any

import sqlalchemy as sa
import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncConnection

from skeleton_feeds.core.cursor import PageCursor
from skeleton_feeds.core.entity.post import NewPost, Post
from skeleton_feeds.core.language import ALL_LANGUAGES
from skeleton_feeds.core.repository.post import PostAlreadyExistsError, PostRepository
from skeleton_feeds.data.sql import models as mdl
from skeleton_feeds.data.sql.repositories.base import (
    BaseSqlRepository,
    is_unique_violation,
    storage_errors,
)

logger = structlog.get_logger()


class SqlPostRepository(BaseSqlRepository, PostRepository):
    @storage_errors
    async def create(self, new_post: NewPost) -> Post:
        values = new_post.model_dump(exclude={"languages"}, by_alias=True, exclude_none=True)
        insert_post_q = sa.insert(mdl.Post).values(values).returning(mdl.Post.c.id)

        try:
            # the post and its languages are committed together or not at all
            async with self.db.begin() as conn:
                result = await conn.execute(insert_post_q)
                post_id = result.scalar_one()

                await conn.execute(
                    sa.insert(mdl.PostLanguage),
                    [{"post_id": post_id, "language": lang} for lang in new_post.languages],
                )
        except IntegrityError as ie:
            self._handle_integrity_error_on_create(ie, new_post)

        return Post.model_validate({**new_post.model_dump(by_alias=True), "id": post_id})

    def _handle_integrity_error_on_create(self, ie: IntegrityError, new_post: NewPost) -> None:
        if is_unique_violation(ie):
            raise PostAlreadyExistsError(
                f"Post already exists. uri:{new_post.uri} indexedAt:{new_post.indexed_at}",
                feed_id=new_post.feed_id,
                post_uri=new_post.uri,
                cid=new_post.cid,
                indexed_at=new_post.indexed_at,
            ) from ie
        logger.warning("Failed to insert post", post_uri=new_post.uri, error=ie)
        raise ie

    @storage_errors
    async def delete_by_uri(
        self,
        *,
        feed_id: int,
        uri: str,
        indexed_at: datetime | None = None,
    ) -> int:
        query = sa.delete(mdl.Post).where(
            sa.and_(
                mdl.Post.c.feed_id == feed_id,
                mdl.Post.c.uri == uri,
            )
        )

        if indexed_at is not None:
            query = query.where(mdl.Post.c.indexed_at == indexed_at)

        async with self.db.begin() as conn:
            result = await conn.execute(query)

        return result.rowcount

    @storage_errors
    async def trim(self, *, feed_id: int, remain: int) -> int:
        # fmt: off
        retained_q = (
            sa.select(mdl.Post.c.id)
            .where(mdl.Post.c.feed_id == feed_id)
            .order_by(mdl.Post.c.indexed_at.desc(), mdl.Post.c.cid.desc())
            .limit(remain)
        )
        query = (
            sa.delete(mdl.Post)
            .where(
                sa.and_(
                    mdl.Post.c.feed_id == feed_id,
                    mdl.Post.c.id.not_in(retained_q),
                )
            )
        )
        # fmt: on

        async with self.db.begin() as conn:
            result = await conn.execute(query)

        return result.rowcount

    @storage_errors
    async def get_list(
        self,
        *,
        feed_id: int,
        limit: int,
        after: PageCursor | None = None,
        languages: list[str] | None = None,
    ) -> list[Post]:
        # fmt: off
        query = (
            sa.select(mdl.Post)
            .where(mdl.Post.c.feed_id == feed_id)
            .order_by(
                mdl.Post.c.indexed_at.desc(),
                mdl.Post.c.cid.desc(),
                mdl.Post.c.id.desc(),
            )
            .limit(limit)
        )
        # fmt: on

        if after:
            query = self._apply_cursor(query, after)

        if languages:
            query = self._filter_by_languages(query, languages)

        async with self.db.connect() as conn:
            result = await conn.execute(query)
            rows = [dict(row) for row in result.mappings()]
            post_languages = await self._get_languages(conn, [row["id"] for row in rows])

        return [self._make_post(row, post_languages[row["id"]]) for row in rows]

    def _apply_cursor(self, query: sa.Select, after: PageCursor) -> sa.Select:
        return query.where(
            sa.or_(
                mdl.Post.c.indexed_at < after.indexed_at,
                sa.and_(
                    mdl.Post.c.indexed_at == after.indexed_at,
                    mdl.Post.c.cid < after.cid,
                ),
            )
        )

    def _filter_by_languages(self, query: sa.Select, languages: list[str]) -> sa.Select:
        # posts tagged with the wildcard match any language filter
        # fmt: off
        subq = (
            sa.select(mdl.PostLanguage.c.id)
            .where(
                sa.and_(
                    mdl.PostLanguage.c.post_id == mdl.Post.c.id,
                    mdl.PostLanguage.c.language.in_([*languages, ALL_LANGUAGES]),
                )
            )
            .exists()
        )
        # fmt: on
        return query.where(subq)

    async def _get_languages(
        self,
        conn: AsyncConnection,
        post_ids: list[int],
    ) -> dict[int, list[str]]:
        post_languages: dict[int, list[str]] = defaultdict(list)
        if not post_ids:
            return post_languages

        # fmt: off
        query = (
            sa.select(mdl.PostLanguage.c.post_id, mdl.PostLanguage.c.language)
            .where(mdl.PostLanguage.c.post_id.in_(post_ids))
            .order_by(mdl.PostLanguage.c.post_id, mdl.PostLanguage.c.id)
        )
        # fmt: on
        result = await conn.execute(query)

        for post_id, language in result:
            if language not in post_languages[post_id]:
                post_languages[post_id].append(language)

        return post_languages

    def _make_post(self, row: dict[str, Any], languages: list[str]) -> Post:
        return Post.model_validate({**row, "languages": languages})
