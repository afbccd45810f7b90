"""Changelog generation from Git history."""

from gitver.changelog.generator import (
	ChangelogSettings,
	generate_changelog,
	resolve_start_revision,
	resolve_tag_commit,
	write_changelog,
)
from gitver.changelog.renderer import render_changelog, render_entry

__all__ = [
	"ChangelogSettings",
	"generate_changelog",
	"render_changelog",
	"render_entry",
	"resolve_start_revision",
	"resolve_tag_commit",
	"write_changelog",
]
