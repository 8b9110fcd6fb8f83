import click

from skeleton_feeds.cli.feeds import feeds


@click.group()
def main() -> None:
    ...


main.add_command(feeds)
