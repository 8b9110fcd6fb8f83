from collections.abc import AsyncIterator, Iterator
from pathlib import Path

import pytest
import pytest_asyncio
import structlog
from sqlalchemy.ext.asyncio import AsyncEngine

from skeleton_feeds.application import di
from skeleton_feeds.application.di import Container
from skeleton_feeds.application.settings import GeneratorSettings
from skeleton_feeds.data.sql.database import DatabaseSettings, init_async_engine
from skeleton_feeds.data.sql.models import metadata

logger = structlog.get_logger()

pytest_plugins = [
    "tests.pytest_fixtures.data",
    "tests.pytest_fixtures.db",
]


@pytest.fixture()
def db_settings(tmp_path: Path) -> DatabaseSettings:
    return DatabaseSettings(dsn=f"sqlite+aiosqlite:///{tmp_path / 'skeleton-feeds.db'}")


@pytest_asyncio.fixture()
async def db(db_settings: DatabaseSettings) -> AsyncIterator[AsyncEngine]:
    engine = init_async_engine(db_settings)

    async with engine.begin() as conn:
        logger.info("creating tables in the test database", dsn=db_settings.dsn)
        await conn.run_sync(metadata.create_all, checkfirst=False)

    yield engine

    logger.info("closing connections to the test database", dsn=db_settings.dsn)
    await engine.dispose()


@pytest.fixture()
def generator_settings() -> GeneratorSettings:
    return GeneratorSettings(publisher_did="did:web:feeds.example.com", host="feeds.example.com")


@pytest.fixture()
def container(generator_settings: GeneratorSettings) -> Iterator[Container]:
    container = di.init()

    with container.settings.generator.override(generator_settings):
        yield container


@pytest.fixture()
def sql_database(container: Container, db: AsyncEngine) -> Iterator[AsyncEngine]:
    with container.database.engine.override(db):
        yield db
