"""Command printing a ``git describe`` style version string."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer

from .cli_types import BackendOpt, ConfigOpt, MatchOpt, PathArg

logger = logging.getLogger(__name__)

LongFlag = Annotated[
	bool | None,
	typer.Option("--long/--short", help="Always use the <tag>-<count>-g<hash> format"),
]

TagsFlag = Annotated[
	bool | None,
	typer.Option("--tags/--annotated-only", help="Include lightweight tags"),
]

TargetOpt = Annotated[
	str,
	typer.Option("--target", "-t", help="Revision to describe"),
]


def register_command(app: typer.Typer) -> None:
	"""Register the describe command with the CLI app."""

	@app.command(name="describe")
	def describe_command(
		path: PathArg = Path(),
		long_format: LongFlag = None,
		tags: TagsFlag = None,
		match: MatchOpt = None,
		target: TargetOpt = "HEAD",
		backend: BackendOpt = None,
		config: ConfigOpt = None,
	) -> None:
		"""Describe a revision using the nearest reachable tag."""
		_describe_command_impl(
			path=path,
			long_format=long_format,
			tags=tags,
			match=match,
			target=target,
			backend=backend,
			config=config,
		)


def _describe_command_impl(
	path: Path,
	long_format: bool | None,
	tags: bool | None,
	match: list[str] | None,
	target: str,
	backend: str | None,
	config: Path | None,
) -> None:
	"""Actual implementation of the describe command."""
	from gitver.git import open_git_provider
	from gitver.utils.cli_utils import exit_on_error
	from gitver.utils.config_loader import ConfigLoader

	with exit_on_error(f"Failed to describe {target}"):
		loader = ConfigLoader(config, repo_root=path)
		describe_config = loader.get_describe_config()

		with open_git_provider(path, backend=backend or loader.get_backend()) as provider:
			call = (
				provider.describe()
				.long_format(long_format if long_format is not None else bool(describe_config.get("long")))
				.include_lightweight_tags(tags if tags is not None else bool(describe_config.get("tags")))
				.target(target)
			)
			patterns = match or describe_config.get("match") or []
			if patterns:
				call.matching(*patterns)
			result = call.run()

	typer.echo(result)
