"""stylescope CLI entry point: Click group with subcommands."""

import logging

import click

from stylescope import __version__


@click.group()
@click.version_option(version=__version__, prog_name="stylescope")
@click.option("-v", "--verbose", is_flag=True, help="Log scoping decisions to stderr.")
def cli(verbose: bool) -> None:
    """stylescope - rewrite CSS selectors so they only match one scope."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )


# Import and register subcommands
from stylescope.cli.scope import scope, selector  # noqa: E402
from stylescope.cli.check import check  # noqa: E402

cli.add_command(scope)
cli.add_command(selector)
cli.add_command(check)
