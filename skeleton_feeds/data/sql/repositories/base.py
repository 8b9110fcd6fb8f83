import functools
import sqlite3
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import ParamSpec, TypeVar

import structlog
from asyncpg import UniqueViolationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from skeleton_feeds.core.errors import StorageFailureError

logger = structlog.get_logger()

P = ParamSpec("P")
R = TypeVar("R")

_SQLITE_UNIQUE_ERRORS = {"SQLITE_CONSTRAINT_UNIQUE", "SQLITE_CONSTRAINT_PRIMARYKEY"}


@dataclass
class BaseSqlRepository:
    db: AsyncEngine


def is_unique_violation(ie: IntegrityError) -> bool:
    # asyncpg errors are wrapped by the sqlalchemy adapter, sqlite ones are raised as is
    for error in (ie.orig, ie.orig.__cause__ if ie.orig else None):
        match error:
            case UniqueViolationError():
                return True
            case sqlite3.IntegrityError() if error.sqlite_errorname in _SQLITE_UNIQUE_ERRORS:
                return True
    return False


def storage_errors(
    func: Callable[P, Awaitable[R]],
) -> Callable[P, Awaitable[R]]:
    """Report database failures not handled by a repository method as StorageFailureError."""

    @functools.wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return await func(*args, **kwargs)
        except SQLAlchemyError as exc:
            logger.error("Database operation failed", operation=func.__qualname__, exc_info=exc)
            raise StorageFailureError(
                f"Failed to execute {func.__name__}", operation=func.__qualname__
            ) from exc

    return wrapper
