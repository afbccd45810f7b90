"""Both backends report the same repository state."""

from __future__ import annotations

import pytest

from gitver.git.command_line import CommandLineGitProvider
from gitver.git.library import LibraryGitProvider
from tests.base import GitTestBase, requires_git


@requires_git
@pytest.mark.integration
@pytest.mark.git
class TestBackendParity(GitTestBase):
	"""Runs the real git executable next to pygit2 on the same repository."""

	@pytest.fixture(autouse=True)
	def _history(self, _setup_repo: None) -> None:
		self.commits = self.build_linear_history()
		self.builder.lightweight_tag("nightly", self.commits["B"])
		self.builder.add_remote("origin", "https://example.com/org/repo.git", push_url="git@example.com:org/repo.git")
		self.builder.set_upstream("main", "origin", self.commits["B"])

	def _providers(self) -> tuple[CommandLineGitProvider, LibraryGitProvider]:
		return CommandLineGitProvider.probe(self.repo_path), LibraryGitProvider.probe(self.repo_path)

	def test_repository_state(self) -> None:
		cli, library = self._providers()
		with cli, library:
			assert cli.get_dot_git_directory().resolve() == library.get_dot_git_directory()
			assert cli.get_head() == library.get_head() == self.commits["D"]
			assert cli.get_full_branch() == library.get_full_branch() == "refs/heads/main"
			assert cli.get_remotes_count() == library.get_remotes_count() == 1
			assert cli.get_remote_push_url("origin") == library.get_remote_push_url("origin")
			assert cli.get_remote_push_url("missing") is library.get_remote_push_url("missing") is None

	def test_upstream_and_merge_base(self) -> None:
		cli, library = self._providers()
		with cli, library:
			upstream = cli.get_upstream_branch()
			assert upstream == library.get_upstream_branch() == "refs/remotes/origin/main"
			assert cli.get_merge_base("HEAD", upstream) == library.get_merge_base("HEAD", upstream)

	@pytest.mark.parametrize("minimum_length", [4, 10])
	def test_abbreviate(self, minimum_length: int) -> None:
		cli, library = self._providers()
		with cli, library:
			assert cli.abbreviate_ref("HEAD", minimum_length) == library.abbreviate_ref("HEAD", minimum_length)

	@pytest.mark.parametrize("ref", ["refs/heads/main", "refs/tags/v1.0", "refs/remotes/origin/main"])
	def test_shorten_ref(self, ref: str) -> None:
		cli, library = self._providers()
		with cli, library:
			assert cli.shorten_ref(ref) == library.shorten_ref(ref)

	@pytest.mark.parametrize("include_lightweight", [False, True])
	def test_tags(self, include_lightweight: bool) -> None:
		cli, library = self._providers()
		with cli, library:
			assert cli.get_tags(include_lightweight) == library.get_tags(include_lightweight)

	@pytest.mark.parametrize(
		("long_format", "lightweight", "patterns", "target"),
		[
			(False, False, (), "HEAD"),
			(True, False, (), "HEAD"),
			(False, False, (), "HEAD~1"),
			(True, False, (), "HEAD~1"),
			(False, True, (), "HEAD~2"),
			(False, True, ("v*",), "HEAD"),
			(False, True, ("v*", "night*"), "HEAD"),
			(False, False, ("v*", "none-*"), "HEAD"),
			(True, False, ("none-*", "v*"), "HEAD~1"),
		],
	)
	def test_describe(self, long_format: bool, lightweight: bool, patterns: tuple[str, ...], target: str) -> None:
		cli, library = self._providers()
		with cli, library:
			results = []
			for provider in (cli, library):
				call = provider.describe().long_format(long_format).include_lightweight_tags(lightweight).target(target)
				if patterns:
					call.matching(*patterns)
				results.append(call.run())
		assert results[0] == results[1]

	def test_detached_head(self) -> None:
		self.builder.detach_head(self.commits["C"])
		cli, library = self._providers()
		with cli, library:
			assert cli.get_full_branch() is library.get_full_branch() is None
			assert cli.get_upstream_branch() is library.get_upstream_branch() is None
			assert cli.get_head() == library.get_head() == self.commits["C"]
