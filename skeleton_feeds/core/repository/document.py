from abc import ABC, abstractmethod

from skeleton_feeds.core.entity.document import Document, DocumentType
from skeleton_feeds.core.errors import NotFoundError


class DocumentNotFoundError(NotFoundError):
    ...


class DocumentRepository(ABC):
    @abstractmethod
    async def get_by_type(self, document_type: DocumentType) -> Document:
        ...

    @abstractmethod
    async def get_list(self) -> list[Document]:
        ...

    @abstractmethod
    async def save(self, document: Document) -> Document:
        """Replace the document of the same type, creating it if necessary."""
