"""Command showing repository state and the derived version strings."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import typer

from .cli_types import BackendOpt, ConfigOpt, MatchOpt, PathArg

if TYPE_CHECKING:
	from collections.abc import Sequence

	from rich.table import Table

	from gitver.version import GitInfo

logger = logging.getLogger(__name__)


def register_command(app: typer.Typer) -> None:
	"""Register the info command with the CLI app."""

	@app.command(name="info")
	def info_command(
		path: PathArg = Path(),
		match: MatchOpt = None,
		backend: BackendOpt = None,
		config: ConfigOpt = None,
	) -> None:
		"""Show the nearest tag, branch, commit and version strings of HEAD."""
		_info_command_impl(path=path, match=match, backend=backend, config=config)


def _build_table(info: GitInfo, allowed_branches: Sequence[str]) -> Table:
	from rich.table import Table

	from gitver.version import tag_offset_branch_version, tag_offset_version

	table = Table(show_header=False, box=None)
	table.add_column("key", style="bold cyan")
	table.add_column("value")
	table.add_row("tag", info.tag)
	table.add_row("offset", info.offset)
	table.add_row("hash", info.hash)
	table.add_row("branch", info.branch or "(detached)")
	table.add_row("commit", info.commit)
	table.add_row("abbreviated", info.abbreviated_id)
	table.add_row("url", info.url or "(none)")
	table.add_row("version", tag_offset_version(info))
	table.add_row("branch version", tag_offset_branch_version(info, allowed_branches))
	return table


def _info_command_impl(
	path: Path,
	match: list[str] | None,
	backend: str | None,
	config: Path | None,
) -> None:
	"""Actual implementation of the info command."""
	from gitver.git import open_git_provider
	from gitver.utils.cli_utils import console, exit_on_error, show_warning
	from gitver.utils.config_loader import ConfigLoader
	from gitver.version import gather_git_info

	with exit_on_error("Failed to read repository information"):
		loader = ConfigLoader(config, repo_root=path)
		patterns = match or loader.get("version.match", [])
		allowed_branches = loader.get("version.allowed_branches", ["master", "main", "HEAD"])

		with open_git_provider(path, backend=backend or loader.get_backend()) as provider:
			info = gather_git_info(provider, patterns, remote_name=loader.get("git.remote", "origin"))

	console.print(_build_table(info, allowed_branches))
	if not info.url:
		show_warning("No remote configured, the project URL is empty.")
