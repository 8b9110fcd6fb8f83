# mypy: disable-error-code="assignment"
from dependency_injector import containers, providers

from skeleton_feeds.application.settings import GeneratorSettings
from skeleton_feeds.core.usecase.add_post import AddPostUseCase
from skeleton_feeds.core.usecase.describe_feed_generator import DescribeFeedGeneratorUseCase
from skeleton_feeds.core.usecase.get_did_document import GetDidDocumentUseCase
from skeleton_feeds.core.usecase.get_document import GetDocumentUseCase
from skeleton_feeds.core.usecase.get_feed_skeleton import GetFeedSkeletonUseCase
from skeleton_feeds.core.usecase.get_posts import GetPostsUseCase
from skeleton_feeds.core.usecase.list_feeds import ListFeedsUseCase
from skeleton_feeds.core.usecase.register_feed import RegisterFeedUseCase
from skeleton_feeds.core.usecase.remove_post import RemovePostUseCase
from skeleton_feeds.core.usecase.trim_feed import TrimFeedUseCase
from skeleton_feeds.core.usecase.unregister_feed import UnregisterFeedUseCase
from skeleton_feeds.core.usecase.update_document import UpdateDocumentUseCase
from skeleton_feeds.core.usecase.update_feed import UpdateFeedUseCase
from skeleton_feeds.data.sql.database import DatabaseSettings, init_async_engine
from skeleton_feeds.data.sql.repositories.documents import SqlDocumentRepository
from skeleton_feeds.data.sql.repositories.feeds import SqlFeedRepository
from skeleton_feeds.data.sql.repositories.posts import SqlPostRepository


class Settings(containers.DeclarativeContainer):
    generator = providers.Singleton(GeneratorSettings)
    database = providers.Singleton(DatabaseSettings)


class Database(containers.DeclarativeContainer):
    settings: Settings = providers.DependenciesContainer()

    engine = providers.Singleton(init_async_engine, settings=settings.database)


class Repositories(containers.DeclarativeContainer):
    database: Database = providers.DependenciesContainer()

    feeds = providers.Singleton(SqlFeedRepository, db=database.engine)
    posts = providers.Singleton(SqlPostRepository, db=database.engine)
    documents = providers.Singleton(SqlDocumentRepository, db=database.engine)


class UseCases(containers.DeclarativeContainer):
    settings: Settings = providers.DependenciesContainer()
    repositories: Repositories = providers.DependenciesContainer()

    # feed registry
    list_feeds = providers.Factory(
        ListFeedsUseCase,
        feed_repository=repositories.feeds,
    )
    register_feed = providers.Factory(
        RegisterFeedUseCase,
        feed_repository=repositories.feeds,
    )
    update_feed = providers.Factory(
        UpdateFeedUseCase,
        feed_repository=repositories.feeds,
    )
    unregister_feed = providers.Factory(
        UnregisterFeedUseCase,
        feed_repository=repositories.feeds,
    )

    # feed posts
    add_post = providers.Factory(
        AddPostUseCase,
        feed_repository=repositories.feeds,
        post_repository=repositories.posts,
    )
    remove_post = providers.Factory(
        RemovePostUseCase,
        feed_repository=repositories.feeds,
        post_repository=repositories.posts,
    )
    trim_feed = providers.Factory(
        TrimFeedUseCase,
        feed_repository=repositories.feeds,
        post_repository=repositories.posts,
    )
    get_posts = providers.Factory(
        GetPostsUseCase,
        feed_repository=repositories.feeds,
        post_repository=repositories.posts,
    )
    get_feed_skeleton = providers.Factory(
        GetFeedSkeletonUseCase,
        feed_repository=repositories.feeds,
        post_repository=repositories.posts,
    )

    # service documents
    update_document = providers.Factory(
        UpdateDocumentUseCase,
        document_repository=repositories.documents,
    )
    get_document = providers.Factory(
        GetDocumentUseCase,
        document_repository=repositories.documents,
    )
    describe_feed_generator = providers.Factory(
        DescribeFeedGeneratorUseCase,
        feed_repository=repositories.feeds,
        document_repository=repositories.documents,
        generator_settings=settings.generator,
    )
    get_did_document = providers.Factory(
        GetDidDocumentUseCase,
        generator_settings=settings.generator,
    )


class Container(containers.DeclarativeContainer):
    settings: Settings = providers.Container(Settings)
    database: Database = providers.Container(Database, settings=settings)
    repositories: Repositories = providers.Container(Repositories, database=database)
    use_cases: UseCases = providers.Container(
        UseCases, settings=settings, repositories=repositories
    )


def init() -> Container:
    container = Container()
    container.check_dependencies()
    return container
