"""Renders a commit list as a plain-text or markdown changelog."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
	from collections.abc import Sequence

	from gitver.git.models import CommitData

MARKDOWN_HEADER = "<!-- Changelog generated by gitver, newest commits first -->"


def commit_url(project_url: str, commit: CommitData) -> str:
	"""Web URL of a commit, e.g. ``https://github.com/org/repo/commit/<hash>``."""
	return f"{project_url.rstrip('/')}/commit/{commit.full_hash}"


def render_entry(commit: CommitData, project_url: str = "", *, markdown: bool = False) -> str:
	"""Render a single changelog line for ``commit``."""
	if not markdown:
		return f" - {commit.abbreviated_hash} {commit.summary}"
	if project_url:
		return f" - [`{commit.abbreviated_hash}`]({commit_url(project_url, commit)}) {commit.summary}"
	return f" - `{commit.abbreviated_hash}` {commit.summary}"


def render_changelog(commits: Sequence[CommitData], project_url: str = "", *, markdown: bool = False) -> str:
	"""
	Render ``commits`` in the order given (latest first).

	Args:
	    commits: Commits as returned by ``GitProvider.get_commits``.
	    project_url: Web URL of the project; links commits in markdown mode.
	    markdown: Emit markdown with a header comment and links instead of plain text.

	Returns:
	    str: The changelog document, newline-terminated.

	"""
	lines = [render_entry(commit, project_url, markdown=markdown) for commit in commits]
	if markdown:
		lines = [MARKDOWN_HEADER, "", *lines]
	return "\n".join(lines) + "\n"
