from dataclasses import dataclass

import structlog

from skeleton_feeds.core.entity.document import Document, DocumentType
from skeleton_feeds.core.repository import document as document_repo
from skeleton_feeds.core.usecase.base import BaseUseCase

logger = structlog.get_logger()


@dataclass
class GetDocumentInput:
    type: DocumentType  # noqa: A003


@dataclass
class GetDocumentOutput:
    text: str


@dataclass
class GetDocumentUseCase(BaseUseCase):
    """Render a service document (terms of service, privacy policy) as plain text."""

    document_repository: document_repo.DocumentRepository

    async def execute(self, data: GetDocumentInput) -> GetDocumentOutput:
        document = await self.document_repository.get_by_type(data.type)

        if not document.url and not document.content:
            logger.info("Requested document is empty", document_type=data.type.value)
            raise document_repo.DocumentNotFoundError(
                "Document not found", document_type=data.type.value
            )

        return GetDocumentOutput(text=render_document(document))


def render_document(document: Document) -> str:
    if document.url and document.content:
        return f"You can view the document at {document.url}\n{document.content}"
    if document.url:
        return f"See document at {document.url}"
    return document.content or ""
