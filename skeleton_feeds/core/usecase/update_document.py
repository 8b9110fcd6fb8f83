from dataclasses import dataclass

import structlog

from skeleton_feeds.core.entity.document import Document, DocumentType
from skeleton_feeds.core.repository.document import DocumentRepository
from skeleton_feeds.core.usecase.base import BaseUseCase

logger = structlog.get_logger()


@dataclass
class UpdateDocumentInput:
    type: DocumentType  # noqa: A003
    url: str | None = None
    content: str | None = None


@dataclass
class UpdateDocumentOutput:
    document: Document


@dataclass
class UpdateDocumentUseCase(BaseUseCase):
    document_repository: DocumentRepository

    async def execute(self, data: UpdateDocumentInput) -> UpdateDocumentOutput:
        document = await self.document_repository.save(
            Document(type=data.type, url=data.url, content=data.content)
        )
        logger.info("Updated document", document_type=document.type.value, url=document.url)
        return UpdateDocumentOutput(document=document)
