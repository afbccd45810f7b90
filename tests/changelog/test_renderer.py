"""Tests for changelog rendering."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from gitver.changelog.renderer import MARKDOWN_HEADER, commit_url, render_changelog, render_entry
from gitver.git.models import CommitData

FULL_HASH = "abc1234" + "0" * 33


def make_commit(full_hash: str = FULL_HASH, message: str = "Fix bug\n") -> CommitData:
	return CommitData(
		full_hash=full_hash,
		abbreviated_hash=full_hash[:7],
		commit_time=datetime(2024, 1, 1, tzinfo=UTC),
		message=message,
	)


@pytest.mark.unit
class TestRenderEntry:
	"""Formatting of single changelog lines."""

	def test_plain_text(self) -> None:
		assert render_entry(make_commit()) == " - abc1234 Fix bug"

	def test_uses_first_line_only(self) -> None:
		commit = make_commit(message="Add feature  \n\nA longer body\nover several lines\n")
		assert render_entry(commit) == " - abc1234 Add feature"

	def test_markdown_with_link(self) -> None:
		entry = render_entry(make_commit(), "https://example.com/repo", markdown=True)
		assert entry == f" - [`abc1234`](https://example.com/repo/commit/{FULL_HASH}) Fix bug"

	def test_markdown_without_project_url(self) -> None:
		assert render_entry(make_commit(), markdown=True) == " - `abc1234` Fix bug"

	def test_project_url_ignored_for_plain_text(self) -> None:
		assert render_entry(make_commit(), "https://example.com/repo") == " - abc1234 Fix bug"

	def test_commit_url_strips_trailing_slash(self) -> None:
		assert commit_url("https://example.com/repo/", make_commit()) == f"https://example.com/repo/commit/{FULL_HASH}"


@pytest.mark.unit
class TestRenderChangelog:
	"""Whole changelog documents."""

	def test_plain_text_keeps_order(self) -> None:
		commits = [
			make_commit("d" * 40, "Latest change\n"),
			make_commit("c" * 40, "Older change\n"),
		]
		assert render_changelog(commits) == " - ddddddd Latest change\n - ccccccc Older change\n"

	def test_markdown_header(self) -> None:
		text = render_changelog([make_commit()], "https://example.com/repo", markdown=True)
		lines = text.split("\n")
		assert lines[0] == MARKDOWN_HEADER
		assert lines[0].startswith("<!--")
		assert lines[1] == ""
		assert lines[2] == f" - [`abc1234`](https://example.com/repo/commit/{FULL_HASH}) Fix bug"
		assert text.endswith("\n")

	def test_empty_history(self) -> None:
		assert render_changelog([]) == "\n"
		assert render_changelog([], markdown=True) == f"{MARKDOWN_HEADER}\n\n"
