"""Tina CLI entry point."""

import logging
import os

import click


@click.group()
@click.option(
    "--log-level",
    default=lambda: os.environ.get("TINA_LOG_LEVEL", "WARNING"),
    show_default="TINA_LOG_LEVEL or WARNING",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging verbosity.",
)
def cli(log_level: str):
    """Tina page declaration tooling."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(levelname)s %(name)s: %(message)s",
    )


# Register subcommand groups
from tina.cli.page_cmd import page  # noqa: E402

cli.add_command(page)
