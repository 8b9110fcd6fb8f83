from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

from skeleton_feeds.application.settings import GeneratorSettings
from skeleton_feeds.core.usecase.base import BaseUseCase

DID_CONTEXT = "https://www.w3.org/ns/did/v1"
FEED_GENERATOR_SERVICE_ID = "#bsky_fg"
FEED_GENERATOR_SERVICE_TYPE = "BskyFeedGenerator"


class DidService(BaseModel):
    id: str = FEED_GENERATOR_SERVICE_ID  # noqa: A003
    type: str = FEED_GENERATOR_SERVICE_TYPE  # noqa: A003
    service_endpoint: str = Field(alias="serviceEndpoint")

    model_config = ConfigDict(populate_by_name=True)


class DidDocument(BaseModel):
    """
    did:web document of the feed generator service.

    Dump with ``by_alias=True`` to get the ``@context`` / ``serviceEndpoint``
    keys of the published JSON. See https://www.w3.org/TR/did-core/
    """

    context: list[str] = Field(default_factory=lambda: [DID_CONTEXT], alias="@context")
    id: str  # noqa: A003
    service: list[DidService]

    model_config = ConfigDict(populate_by_name=True)


@dataclass
class GetDidDocumentOutput:
    document: DidDocument


@dataclass
class GetDidDocumentUseCase(BaseUseCase):
    generator_settings: GeneratorSettings

    async def execute(self) -> GetDidDocumentOutput:
        host = self.generator_settings.host
        document = DidDocument(
            id=f"did:web:{host}",
            service=[DidService(service_endpoint=f"https://{host}")],
        )
        return GetDidDocumentOutput(document=document)
