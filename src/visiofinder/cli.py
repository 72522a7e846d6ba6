"""
Command line interface for Visiofinder.

Runs the headless find-and-link cycle from a configuration file, validates
configuration files and writes configuration templates.
"""

import logging
from pathlib import Path
from typing import Optional

import coloredlogs
import typer
from typing_extensions import Annotated

from . import __version__
from .config.parser import ConfigParser, ConfigurationError, create_config_template
from .tools.search_coordinator import SearchCoordinator
from .tools.shortcut_writer import ShortcutWriter


logger = logging.getLogger(__name__)

EXIT_CONFIG_ERROR = 1
EXIT_SHORTCUT_ERROR = 2

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


app = typer.Typer(
    name="visiofinder",
    help="Find files and folders described by a configuration file and create shortcuts to them.",
    add_completion=False,
    no_args_is_help=True,
)


def setup_logging(verbose: bool = False) -> None:
    """Install colored console logging for the visiofinder loggers."""
    level = logging.DEBUG if verbose else logging.WARNING
    coloredlogs.install(level=level, logger=logging.getLogger("visiofinder"), fmt=LOG_FORMAT)


def version_callback(value: bool):
    if value:
        typer.echo(f"visiofinder version: {__version__}")
        raise typer.Exit()


@app.callback()
def main_options(
    version: Annotated[Optional[bool], typer.Option(
        "--version", "-V",
        help="Show the application's version and exit.",
        callback=version_callback,
        is_eager=True
    )] = None,
):
    """
    visiofinder: locate targets and link them into a folder.
    """


@app.command()
def run(
    config: Annotated[Path, typer.Option(
        "--config", "-c",
        help="Path to the JSON config file.",
    )],
    strict: Annotated[bool, typer.Option(
        "--strict",
        help="Fail on any malformed search object instead of skipping it.",
    )] = False,
    overwrite: Annotated[bool, typer.Option(
        "--overwrite",
        help="Replace shortcuts that already exist in the target folder.",
    )] = False,
    verbose: Annotated[bool, typer.Option(
        "--verbose", "-v",
        help="Show debug logging.",
    )] = False,
):
    """
    Search every target of the configuration and create its shortcut.
    """
    setup_logging(verbose)

    try:
        result = ConfigParser(strict_mode=strict).load_config(config)
    except ConfigurationError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=EXIT_CONFIG_ERROR)

    for warning in result.warnings:
        typer.secho(f"Warning: {warning}", fg=typer.colors.YELLOW, err=True)

    spec = result.specification
    report = SearchCoordinator().run(spec)

    for search_result in report.results:
        if search_result.found:
            typer.echo(f"Found {search_result.link_name}: {search_result.path}")
        else:
            typer.secho(f"Not found: {search_result.link_name}", fg=typer.colors.YELLOW)

    shortcut_report = ShortcutWriter(overwrite=overwrite).write(spec, report)
    if shortcut_report.target_folder:
        typer.echo(f"Created {len(shortcut_report.created())} shortcuts in {shortcut_report.target_folder}")

    if shortcut_report.has_errors():
        for error in shortcut_report.errors:
            typer.secho(f"Error: {error}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=EXIT_SHORTCUT_ERROR)


@app.command()
def validate(
    config: Annotated[Path, typer.Argument(help="Path to the config file to validate.")],
    strict: Annotated[bool, typer.Option(
        "--strict",
        help="Treat skipped search objects as errors.",
    )] = False,
):
    """
    Check a configuration file and list its problems.
    """
    try:
        result = ConfigParser(strict_mode=strict).load_config(config)
    except ConfigurationError as e:
        typer.secho(f"Invalid configuration: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=EXIT_CONFIG_ERROR)

    for warning in result.warnings:
        typer.secho(f"Warning: {warning}", fg=typer.colors.YELLOW, err=True)

    count = len(result.specification.search_objects)
    typer.secho(f"Configuration is valid: {count} search objects", fg=typer.colors.GREEN)


@app.command()
def init(
    output: Annotated[Path, typer.Argument(help="Where to write the template config file.")],
):
    """
    Write a template configuration file.
    """
    if output.exists():
        typer.secho(f"Error: {output} already exists", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=EXIT_CONFIG_ERROR)

    try:
        create_config_template(output)
    except ConfigurationError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=EXIT_CONFIG_ERROR)

    typer.secho(f"Template written to {output}", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
