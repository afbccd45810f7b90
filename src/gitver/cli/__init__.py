"""Command-line interface package for gitver."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer

from gitver import __version__
from gitver.utils.log_setup import setup_logging

from .changelog_cmd import register_command as register_changelog_command
from .describe_cmd import register_command as register_describe_command
from .info_cmd import register_command as register_info_command

logger = logging.getLogger(__name__)

app = typer.Typer(
	help=f"gitver - Git describe versions and changelogs for build tooling\n\nVersion: {__version__}",
	no_args_is_help=True,
	context_settings={"help_option_names": ["-h", "--help"]},
)


def _version_callback(value: bool) -> None:
	"""Callback for --version option."""
	if value:
		typer.echo(f"gitver version: {__version__}")
		raise typer.Exit


@app.callback(invoke_without_command=True)
def global_options(
	ctx: typer.Context,
	is_verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable verbose logging.")] = False,
	log_file: Annotated[
		Path | None,
		typer.Option("--log-file", help="Also write debug logs to this file."),
	] = None,
	_version: Annotated[
		bool | None,
		typer.Option("--version", help="Show version and exit.", callback=_version_callback, is_eager=True),
	] = None,
) -> None:
	"""Global CLI options and logging setup."""
	ctx.meta["is_verbose"] = is_verbose
	setup_logging(is_verbose=is_verbose, log_file_path=log_file)


register_describe_command(app)
register_info_command(app)
register_changelog_command(app)


def main() -> None:
	"""Entry point for the ``gitver`` script."""
	app()
