import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

import click
import structlog
from pydantic import ValidationError

from skeleton_feeds.application import di
from skeleton_feeds.application.di import Container
from skeleton_feeds.core.entity.feed import Feed
from skeleton_feeds.core.errors import FeedStoreError
from skeleton_feeds.core.usecase.register_feed import RegisterFeedInput
from skeleton_feeds.core.usecase.trim_feed import TrimFeedInput
from skeleton_feeds.core.usecase.unregister_feed import UnregisterFeedInput
from skeleton_feeds.core.usecase.update_feed import UpdateFeedInput

logger = structlog.get_logger()

T = TypeVar("T")


@click.group()
def feeds() -> None:
    """Manage registered feeds."""


def run(func: Callable[[Container], Awaitable[T]]) -> T:
    container = di.init()

    async def runner() -> T:
        try:
            return await func(container)
        finally:
            await container.database.engine().dispose()

    try:
        return asyncio.run(runner())
    except FeedStoreError as exc:
        logger.error("Feed operation failed", error=exc.message, **exc.details)
        raise click.ClickException(exc.message)


def echo_feed(feed: Feed) -> None:
    click.echo(f"{feed.uri}\tlang_filter={feed.lang_filter}\tis_active={feed.is_active}")


@feeds.command(name="list")
def list_feeds() -> None:
    output = run(lambda container: container.use_cases.list_feeds().execute())
    for feed in output.feeds:
        echo_feed(feed)


@feeds.command()
@click.argument("uri")
@click.option("--lang-filter/--no-lang-filter", default=True, help="Filter skeleton by language")
@click.option("--active/--inactive", default=True, help="Serve the skeleton publicly")
def register(
    uri: str,
    lang_filter: bool,  # noqa: FBT001
    active: bool,  # noqa: FBT001
) -> None:
    try:
        uc_input = RegisterFeedInput(uri=uri, lang_filter=lang_filter, is_active=active)
    except ValidationError as exc:
        raise click.BadParameter(f"{uri} is not a feed generator AT-URI", param_hint="URI") from exc

    output = run(lambda container: container.use_cases.register_feed().execute(uc_input))
    echo_feed(output.feed)


@feeds.command()
@click.argument("uri")
@click.option("--lang-filter/--no-lang-filter", default=None, help="Filter skeleton by language")
@click.option("--active/--inactive", default=None, help="Serve the skeleton publicly")
def update(
    uri: str,
    lang_filter: bool | None,  # noqa: FBT001
    active: bool | None,  # noqa: FBT001
) -> None:
    uc_input = UpdateFeedInput(uri=uri, lang_filter=lang_filter, is_active=active)
    output = run(lambda container: container.use_cases.update_feed().execute(uc_input))
    echo_feed(output.feed)


@feeds.command()
@click.argument("uri")
@click.confirmation_option(prompt="The feed and all of its posts will be deleted. Continue?")
def unregister(uri: str) -> None:
    uc_input = UnregisterFeedInput(uri=uri)
    run(lambda container: container.use_cases.unregister_feed().execute(uc_input))
    click.echo(f"Unregistered {uri}")


@feeds.command()
@click.argument("uri")
@click.option("--remain", required=True, type=click.IntRange(min=0), help="Posts to keep")
def trim(uri: str, remain: int) -> None:
    uc_input = TrimFeedInput(uri=uri, remain=remain)
    output = run(lambda container: container.use_cases.trim_feed().execute(uc_input))
    click.echo(f"Deleted {output.deleted_count} posts from {output.feed_uri}")
