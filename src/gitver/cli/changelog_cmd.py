"""Command generating a changelog from Git history."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer

from .cli_types import BackendOpt, ConfigOpt, PathArg

logger = logging.getLogger(__name__)

StartCommitOpt = Annotated[
	str | None,
	typer.Option("--from-commit", help="Commit to start the changelog from"),
]

StartTagOpt = Annotated[
	str | None,
	typer.Option("--from-tag", help="Tag to start the changelog from"),
]

MarkdownFlag = Annotated[
	bool | None,
	typer.Option("--markdown/--text", help="Render markdown with commit links instead of plain text"),
]

ProjectUrlOpt = Annotated[
	str | None,
	typer.Option("--project-url", help="Project web URL for commit links (defaults to the remote's URL)"),
]

OutputOpt = Annotated[
	Path | None,
	typer.Option("--output", "-o", help="Output file path (overrides config)"),
]

StdoutFlag = Annotated[
	bool,
	typer.Option("--stdout", help="Print the changelog instead of writing a file"),
]


def register_command(app: typer.Typer) -> None:
	"""Register the changelog command with the CLI app."""

	@app.command(name="changelog")
	def changelog_command(
		path: PathArg = Path(),
		from_commit: StartCommitOpt = None,
		from_tag: StartTagOpt = None,
		markdown: MarkdownFlag = None,
		project_url: ProjectUrlOpt = None,
		output: OutputOpt = None,
		to_stdout: StdoutFlag = False,
		backend: BackendOpt = None,
		config: ConfigOpt = None,
	) -> None:
		"""
		Generate a changelog from a starting commit or tag up to HEAD.

		Without a starting point the merge-base with the upstream branch is used.

		"""
		_changelog_command_impl(
			path=path,
			from_commit=from_commit,
			from_tag=from_tag,
			markdown=markdown,
			project_url=project_url,
			output=output,
			to_stdout=to_stdout,
			backend=backend,
			config=config,
		)


def _changelog_command_impl(
	path: Path,
	from_commit: str | None,
	from_tag: str | None,
	markdown: bool | None,
	project_url: str | None,
	output: Path | None,
	to_stdout: bool,
	backend: str | None,
	config: Path | None,
) -> None:
	"""Actual implementation of the changelog command."""
	from gitver.changelog import ChangelogSettings, generate_changelog, write_changelog
	from gitver.git import open_git_provider
	from gitver.utils.cli_utils import console, exit_on_error
	from gitver.utils.config_loader import ConfigLoader
	from gitver.version import build_project_url

	with exit_on_error("Failed to generate changelog", OSError):
		loader = ConfigLoader(config, repo_root=path)
		settings = ChangelogSettings.from_config(loader.get_changelog_config())
		settings.remote = str(loader.get("git.remote", "origin"))
		if from_commit is not None:
			settings.start_commit = from_commit
		if from_tag is not None:
			settings.start_tag = from_tag
		if markdown is not None:
			settings.markdown = markdown
		if project_url is not None:
			settings.project_url = project_url
		if output is not None:
			settings.output_file = output
		# Fail on conflicting starting points before touching the repository
		settings.validate()

		with open_git_provider(
			path,
			backend=backend or loader.get_backend(),
			require_commit_ranges=True,
		) as provider:
			if not settings.project_url:
				settings.project_url = build_project_url(provider, settings.remote)
			changelog = generate_changelog(provider, settings)

		output_file: Path | None = None
		if not to_stdout and settings.output_file is not None:
			output_file = settings.output_file if settings.output_file.is_absolute() else path / settings.output_file
			write_changelog(changelog, output_file)

	if output_file is None:
		typer.echo(changelog, nl=False)
	else:
		console.print(f"[green]Changelog written to {output_file}[/green]")
