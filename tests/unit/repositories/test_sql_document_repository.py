import pytest
import pytest_asyncio
import sqlalchemy as sa
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine

from skeleton_feeds.core.entity.document import Document, DocumentType
from skeleton_feeds.core.errors import StorageFailureError
from skeleton_feeds.core.repository.document import DocumentNotFoundError
from skeleton_feeds.data.sql import models as mdl
from skeleton_feeds.data.sql.repositories.documents import SqlDocumentRepository
from tests.pytest_fixtures.types import FetchManyFixtureT, InsertDocumentsFixtureT


@pytest_asyncio.fixture()
async def repo(db: AsyncEngine) -> SqlDocumentRepository:
    return SqlDocumentRepository(db=db)


async def test_get_by_type(
    repo: SqlDocumentRepository,
    insert_documents: InsertDocumentsFixtureT,
) -> None:
    (tos,) = await insert_documents(
        Document(type=DocumentType.tos, url="https://example.com/tos", content="Be nice"),
    )

    assert await repo.get_by_type(DocumentType.tos) == tos

    with pytest.raises(DocumentNotFoundError) as exc_info:
        await repo.get_by_type(DocumentType.privacy_policy)

    assert exc_info.value.details == {"document_type": "privacy_policy"}


async def test_get_list(
    repo: SqlDocumentRepository,
    insert_documents: InsertDocumentsFixtureT,
) -> None:
    assert await repo.get_list() == []

    await insert_documents(
        Document(type=DocumentType.tos, content="Be nice"),
        Document(type=DocumentType.privacy_policy, url="https://example.com/privacy"),
    )

    assert await repo.get_list() == [
        Document(type=DocumentType.privacy_policy, url="https://example.com/privacy"),
        Document(type=DocumentType.tos, content="Be nice"),
    ]


async def test_save_creates_and_replaces(
    repo: SqlDocumentRepository,
    fetchmany: FetchManyFixtureT,
) -> None:
    saved = await repo.save(Document(type=DocumentType.tos, url="https://example.com/tos"))
    assert saved == Document(type=DocumentType.tos, url="https://example.com/tos")

    # fields left out are cleared rather than kept
    saved = await repo.save(Document(type=DocumentType.tos, content="Be nice"))
    assert saved == Document(type=DocumentType.tos, content="Be nice")

    db_rows = await fetchmany(sa.select(mdl.Document))
    assert db_rows == [{"type": "tos", "url": None, "content": "Be nice"}]


async def test_read_failure_is_storage_failure(
    repo: SqlDocumentRepository,
    db: AsyncEngine,
) -> None:
    async with db.begin() as conn:
        await conn.execute(sa.text("DROP TABLE document"))

    with pytest.raises(StorageFailureError) as exc_info:
        await repo.get_list()

    assert isinstance(exc_info.value.__cause__, OperationalError)
    assert exc_info.value.message == "Failed to execute get_list"
