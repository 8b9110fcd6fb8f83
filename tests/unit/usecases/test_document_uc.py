from unittest import mock

import pytest

from skeleton_feeds.application.di import Container
from skeleton_feeds.core.entity.document import Document, DocumentType
from skeleton_feeds.core.errors import NotFoundError
from skeleton_feeds.core.repository.document import DocumentNotFoundError
from skeleton_feeds.core.usecase.get_document import GetDocumentInput, GetDocumentUseCase
from skeleton_feeds.core.usecase.update_document import (
    UpdateDocumentInput,
    UpdateDocumentUseCase,
)


@pytest.fixture()
def get_uc(container: Container, document_repository: mock.Mock) -> GetDocumentUseCase:
    return container.use_cases.get_document()


@pytest.fixture()
def update_uc(container: Container, document_repository: mock.Mock) -> UpdateDocumentUseCase:
    return container.use_cases.update_document()


@pytest.mark.parametrize(
    "url, content, expected",
    [
        ("https://example.com/tos", None, "See document at https://example.com/tos"),
        (None, "Be nice", "Be nice"),
        (
            "https://example.com/tos",
            "Be nice",
            "You can view the document at https://example.com/tos\nBe nice",
        ),
    ],
)
async def test_get_document(
    document_repository: mock.Mock,
    get_uc: GetDocumentUseCase,
    url: str | None,
    content: str | None,
    expected: str,
) -> None:
    document_repository.get_by_type.return_value = Document(
        type=DocumentType.tos, url=url, content=content
    )

    uc_result = await get_uc.execute(GetDocumentInput(type=DocumentType.tos))

    assert uc_result.text == expected
    document_repository.get_by_type.assert_called_once_with(DocumentType.tos)


async def test_get_empty_document(
    document_repository: mock.Mock,
    get_uc: GetDocumentUseCase,
) -> None:
    document_repository.get_by_type.return_value = Document(
        type=DocumentType.privacy_policy, url="", content=None
    )

    with pytest.raises(NotFoundError):
        await get_uc.execute(GetDocumentInput(type=DocumentType.privacy_policy))


async def test_get_missing_document(
    document_repository: mock.Mock,
    get_uc: GetDocumentUseCase,
) -> None:
    document_repository.get_by_type.side_effect = DocumentNotFoundError("Document not found")

    with pytest.raises(NotFoundError):
        await get_uc.execute(GetDocumentInput(type=DocumentType.tos))


async def test_update_document(
    document_repository: mock.Mock,
    update_uc: UpdateDocumentUseCase,
) -> None:
    document = Document(type=DocumentType.tos, url="https://example.com/tos")
    document_repository.save.return_value = document

    uc_input = UpdateDocumentInput(type=DocumentType.tos, url="https://example.com/tos")
    uc_result = await update_uc.execute(uc_input)

    assert uc_result.document == document
    document_repository.save.assert_called_once_with(document)
