from dataclasses import dataclass

from skeleton_feeds.application.settings import GeneratorSettings
from skeleton_feeds.core.entity.document import DocumentType
from skeleton_feeds.core.repository.document import DocumentRepository
from skeleton_feeds.core.repository.feed import FeedRepository
from skeleton_feeds.core.usecase.base import BaseUseCase


@dataclass
class FeedGeneratorLinks:
    privacy_policy: str | None = None
    terms_of_service: str | None = None


@dataclass
class DescribeFeedGeneratorOutput:
    did: str
    feeds: list[str]
    links: FeedGeneratorLinks | None = None


@dataclass
class DescribeFeedGeneratorUseCase(BaseUseCase):
    feed_repository: FeedRepository
    document_repository: DocumentRepository
    generator_settings: GeneratorSettings

    async def execute(self) -> DescribeFeedGeneratorOutput:
        feeds = await self.feed_repository.get_list(active_only=True)
        documents = await self.document_repository.get_list()

        links = None
        for document in documents:
            links = links or FeedGeneratorLinks()
            # a document without url is served by the generator itself
            url = document.url or self.generator_settings.document_url(document.type)
            match document.type:
                case DocumentType.privacy_policy:
                    links.privacy_policy = url
                case DocumentType.tos:
                    links.terms_of_service = url

        return DescribeFeedGeneratorOutput(
            did=self.generator_settings.publisher_did,
            feeds=[feed.uri for feed in feeds],
            links=links,
        )
