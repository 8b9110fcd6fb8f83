from abc import ABC, abstractmethod
from datetime import datetime

from skeleton_feeds.core.cursor import PageCursor
from skeleton_feeds.core.entity.post import NewPost, Post
from skeleton_feeds.core.errors import ConflictError


class PostAlreadyExistsError(ConflictError):
    """A post with the same feed, cid and indexed_at is already stored."""


class PostRepository(ABC):
    @abstractmethod
    async def create(self, new_post: NewPost) -> Post:
        ...

    @abstractmethod
    async def delete_by_uri(
        self,
        *,
        feed_id: int,
        uri: str,
        indexed_at: datetime | None = None,
    ) -> int:
        """Delete posts with the given uri, returning the number of deleted rows."""

    @abstractmethod
    async def trim(self, *, feed_id: int, remain: int) -> int:
        """Keep the `remain` most recent posts of the feed, returning the number of deleted rows."""

    @abstractmethod
    async def get_list(
        self,
        *,
        feed_id: int,
        limit: int,
        after: PageCursor | None = None,
        languages: list[str] | None = None,
    ) -> list[Post]:
        ...
