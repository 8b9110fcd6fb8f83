import pytest

from skeleton_feeds.application import di
from skeleton_feeds.core.entity.document import DocumentType


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FEEDGEN_PUBLISHER_DID", "did:web:feeds.example.org")
    monkeypatch.setenv("FEEDGEN_HOST", "feeds.example.org")
    monkeypatch.setenv("DATABASE_DSN", "sqlite+aiosqlite:///skeleton-feeds.db")

    container = di.init()

    # only the generator and the database are configured
    assert set(container.settings.providers) == {"generator", "database"}

    generator = container.settings.generator()
    assert generator.publisher_did == "did:web:feeds.example.org"
    assert generator.document_url(DocumentType.tos) == "https://feeds.example.org/doc/tos"
    assert container.settings.database().dsn == "sqlite+aiosqlite:///skeleton-feeds.db"
