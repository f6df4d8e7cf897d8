"""Entry point for the ``text-itemizer`` command."""

from __future__ import annotations

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from text_itemizer import __version__
from text_itemizer.cli.commands import batch, itemize, shape
from text_itemizer.config import LOG_LEVELS, Config
from text_itemizer.exceptions import ConfigError

err_console = Console(stderr=True)


def setup_logging(level: str) -> None:
    """Route library logging through rich on stderr."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(__version__, prog_name="text-itemizer")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML configuration file",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Override the configured log level",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, log_level: str | None) -> None:
    """Split text into bidi/script runs and shape them."""
    try:
        config = Config.load(config_path)
    except ConfigError as e:
        raise click.UsageError(str(e)) from e

    log_level = (log_level or config.log_level).upper()
    setup_logging(log_level)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["log_level"] = log_level


cli.add_command(itemize)
cli.add_command(batch)
cli.add_command(shape)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
