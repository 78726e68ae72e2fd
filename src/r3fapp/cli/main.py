"""create-r3f-app CLI entry point: Click group with subcommands."""

import logging

import click

from r3fapp import __version__


@click.group()
@click.version_option(version=__version__, prog_name="create-r3f-app")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """create-r3f-app - scaffold react-three-fiber projects."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Import and register subcommands
from r3fapp.cli.create import create  # noqa: E402
from r3fapp.cli.migrate import migrate  # noqa: E402

cli.add_command(create)
cli.add_command(migrate)
