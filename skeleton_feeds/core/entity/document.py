from enum import Enum

from pydantic import BaseModel


class DocumentType(str, Enum):
    tos = "tos"
    privacy_policy = "privacy_policy"


class Document(BaseModel):
    type: DocumentType  # noqa: A003
    url: str | None = None
    content: str | None = None
