"""
Changelog generation on top of a GitProvider.

The starting point of a changelog is one of:

1. an explicit starting commit,
2. a starting tag, resolved to the commit it points at,
3. the merge-base of HEAD with the current branch's upstream or, without one,
   with the default branch of the remote (``refs/remotes/<remote>/HEAD``),
4. the whole history when neither exists.

Supplying both a starting commit and a starting tag is rejected before any Git
operation runs.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from gitver.changelog.renderer import render_changelog
from gitver.git.errors import CommandFailedError, ConfigurationConflictError, RevisionResolutionError

if TYPE_CHECKING:
	from gitver.git.provider import GitProvider

logger = logging.getLogger(__name__)


@dataclass
class ChangelogSettings:
	"""Options of a changelog generation run."""

	start_commit: str = ""
	start_tag: str = ""
	markdown: bool = False
	project_url: str = ""
	output_file: Path | None = None
	remote: str = "origin"

	@classmethod
	def from_config(cls, config: dict[str, Any]) -> ChangelogSettings:
		"""Build settings from the ``changelog`` config section."""
		output_file = config.get("output_file")
		return cls(
			start_commit=str(config.get("start_commit") or ""),
			start_tag=str(config.get("start_tag") or ""),
			markdown=bool(config.get("markdown", False)),
			project_url=str(config.get("project_url") or ""),
			output_file=Path(output_file) if output_file else None,
		)

	def validate(self) -> None:
		if self.start_commit and self.start_tag:
			msg = (
				f"Both a starting commit ({self.start_commit}) and a starting tag ({self.start_tag}) "
				"were supplied for changelog generation. Only supply one!"
			)
			raise ConfigurationConflictError(msg)


def resolve_tag_commit(provider: GitProvider, tag_name: str) -> str:
	"""Commit a tag points at, for annotated and lightweight tags alike."""
	for tag in provider.get_tags(include_lightweight=True):
		if tag.name == tag_name:
			return tag.target_commit_hash
	msg = f"Tag '{tag_name}' does not exist"
	raise RevisionResolutionError(tag_name, msg)


def resolve_start_revision(provider: GitProvider, settings: ChangelogSettings) -> str | None:
	"""
	Work out where the changelog starts.

	Returns:
	    str | None: The earliest revision to include, or None for the full history.

	"""
	settings.validate()

	if settings.start_commit:
		return settings.start_commit
	if settings.start_tag:
		return resolve_tag_commit(provider, settings.start_tag)

	upstream = provider.get_upstream_branch()
	if upstream is None:
		upstream = f"refs/remotes/{settings.remote}/HEAD"
		logger.info("Current branch has no upstream, trying the default branch of %s", settings.remote)
		try:
			merge_base = provider.get_merge_base("HEAD", upstream)
		except (RevisionResolutionError, CommandFailedError) as e:
			logger.info("No default branch for %s, using the full history", settings.remote)
			logger.debug("Resolving %s failed: %s", upstream, e)
			return None
	else:
		merge_base = provider.get_merge_base("HEAD", upstream)
	if merge_base is None:
		logger.warning("HEAD shares no history with %s, using the full history", upstream)
	else:
		logger.debug("Using merge-base %s of HEAD and %s", merge_base, upstream)
	return merge_base


def generate_changelog(provider: GitProvider, settings: ChangelogSettings) -> str:
	"""
	Generate the changelog from the start revision up to HEAD, both included.

	Raises:
	    ConfigurationConflictError: If both a starting commit and tag are set.
	    UnsupportedOperationError: If the provider cannot enumerate commits.

	"""
	settings.validate()
	start = resolve_start_revision(provider, settings)
	commits = provider.get_commits("HEAD", start)
	logger.info("Generating changelog from %d commits", len(commits))
	return render_changelog(commits, settings.project_url, markdown=settings.markdown)


def write_changelog(changelog: str, output_file: Path) -> Path:
	"""Write ``changelog`` to ``output_file``, replacing any existing file."""
	output_file.parent.mkdir(parents=True, exist_ok=True)
	output_file.unlink(missing_ok=True)
	output_file.write_text(changelog, encoding="utf-8")
	logger.info("Changelog written to %s", output_file)
	return output_file
