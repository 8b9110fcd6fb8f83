from pydantic_settings import BaseSettings, SettingsConfigDict

from skeleton_feeds.core.entity.document import DocumentType


class GeneratorSettings(BaseSettings):
    publisher_did: str
    host: str

    model_config = SettingsConfigDict(env_prefix="FEEDGEN_")

    def document_url(self, document_type: DocumentType) -> str:
        return f"https://{self.host}/doc/{document_type.value}"
