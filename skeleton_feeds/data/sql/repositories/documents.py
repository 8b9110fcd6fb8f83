import sqlalchemy as sa

from skeleton_feeds.core.entity.document import Document, DocumentType
from skeleton_feeds.core.repository.document import DocumentNotFoundError, DocumentRepository
from skeleton_feeds.data.sql import models as mdl
from skeleton_feeds.data.sql.repositories.base import BaseSqlRepository, storage_errors


class SqlDocumentRepository(BaseSqlRepository, DocumentRepository):
    @storage_errors
    async def get_by_type(self, document_type: DocumentType) -> Document:
        query = sa.select(mdl.Document).where(mdl.Document.c.type == document_type.value)

        async with self.db.connect() as conn:
            result = await conn.execute(query)

            if row := result.mappings().fetchone():
                return Document.model_validate(dict(row))

        raise DocumentNotFoundError(
            f"Document of type {document_type.value} not found", document_type=document_type.value
        )

    @storage_errors
    async def get_list(self) -> list[Document]:
        query = sa.select(mdl.Document).order_by(mdl.Document.c.type.asc())

        async with self.db.connect() as conn:
            result = await conn.execute(query)

        return [Document.model_validate(dict(row)) for row in result.mappings()]

    @storage_errors
    async def save(self, document: Document) -> Document:
        delete_q = sa.delete(mdl.Document).where(mdl.Document.c.type == document.type.value)
        insert_q = (
            sa.insert(mdl.Document)
            .values(type=document.type.value, url=document.url, content=document.content)
            .returning(mdl.Document)
        )

        async with self.db.begin() as conn:
            await conn.execute(delete_q)
            result = await conn.execute(insert_q)
            row = result.mappings().one()

        return Document.model_validate(dict(row))
