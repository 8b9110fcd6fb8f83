from collections.abc import Iterator
from unittest import mock

import pytest

from skeleton_feeds.application.di import Container
from skeleton_feeds.core.repository.document import DocumentRepository
from skeleton_feeds.core.repository.feed import FeedRepository
from skeleton_feeds.core.repository.post import PostRepository


@pytest.fixture()
def feed_repository(container: Container) -> Iterator[mock.Mock]:
    repo_mock = mock.Mock(spec=FeedRepository)

    with container.repositories.feeds.override(repo_mock):
        yield repo_mock


@pytest.fixture()
def post_repository(container: Container) -> Iterator[mock.Mock]:
    repo_mock = mock.Mock(spec=PostRepository)

    with container.repositories.posts.override(repo_mock):
        yield repo_mock


@pytest.fixture()
def document_repository(container: Container) -> Iterator[mock.Mock]:
    repo_mock = mock.Mock(spec=DocumentRepository)

    with container.repositories.documents.override(repo_mock):
        yield repo_mock
