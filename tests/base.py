"""Base classes and builders shared by the Git tests."""

from __future__ import annotations

import shutil
from pathlib import Path

import pygit2
import pytest
from pygit2.enums import ObjectType

BASE_TIME = 1_700_000_000

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git executable not available")


class RepoBuilder:
	"""Builds small repositories with pygit2 and deterministic commit times."""

	def __init__(self, path: Path, initial_branch: str = "main") -> None:
		self.path = path
		self.repo = pygit2.init_repository(str(path), initial_head=initial_branch)
		self.repo.config["user.name"] = "Test User"
		self.repo.config["user.email"] = "test@example.com"
		self._tick = 0

	def _signature(self) -> pygit2.Signature:
		self._tick += 1
		return pygit2.Signature("Test User", "test@example.com", BASE_TIME + self._tick * 60, 0)

	def commit(self, message: str, filename: str = "file.txt") -> str:
		"""Commit a change to ``filename`` on HEAD and return the commit id."""
		(self.path / filename).write_text(f"{message}\n{self._tick}\n", encoding="utf-8")
		self.repo.index.add(filename)
		self.repo.index.write()
		tree = self.repo.index.write_tree()
		parents = [] if self.repo.head_is_unborn else [self.repo.head.target]
		signature = self._signature()
		return str(self.repo.create_commit("HEAD", signature, signature, message, tree, parents))

	def annotated_tag(self, name: str, target: str | None = None) -> str:
		"""Create an annotated tag and return the tag object's id."""
		commit_id = pygit2.Oid(hex=target) if target else self.repo.head.target
		tag_id = self.repo.create_tag(name, commit_id, ObjectType.COMMIT, self._signature(), f"Release {name}\n")
		return str(tag_id)

	def lightweight_tag(self, name: str, target: str | None = None) -> None:
		commit_id = pygit2.Oid(hex=target) if target else self.repo.head.target
		self.repo.references.create(f"refs/tags/{name}", commit_id)

	def add_remote(self, name: str, url: str, push_url: str | None = None) -> None:
		self.repo.remotes.create(name, url)
		if push_url:
			self.repo.remotes.set_push_url(name, push_url)

	def set_upstream(self, branch: str, remote: str, remote_commit: str) -> None:
		"""Point ``branch`` at ``remote/branch`` as upstream, with the remote ref at ``remote_commit``."""
		self.repo.references.create(f"refs/remotes/{remote}/{branch}", pygit2.Oid(hex=remote_commit))
		self.repo.config[f"branch.{branch}.remote"] = remote
		self.repo.config[f"branch.{branch}.merge"] = f"refs/heads/{branch}"

	def set_remote_head(self, remote: str, branch: str, remote_commit: str) -> None:
		"""Create ``remote/branch`` at ``remote_commit`` and make it the remote's default branch."""
		self.repo.references.create(f"refs/remotes/{remote}/{branch}", pygit2.Oid(hex=remote_commit))
		self.repo.create_reference_symbolic(f"refs/remotes/{remote}/HEAD", f"refs/remotes/{remote}/{branch}", False)

	def detach_head(self, target: str | None = None) -> None:
		commit_id = pygit2.Oid(hex=target) if target else self.repo.head.target
		self.repo.set_head(commit_id)

	def close(self) -> None:
		self.repo.free()


class GitTestBase:
	"""Base class for tests that need a throwaway repository."""

	builder: RepoBuilder

	@pytest.fixture(autouse=True)
	def _setup_repo(self, tmp_path: Path):
		self.repo_path = tmp_path / "repo"
		self.repo_path.mkdir()
		self.builder = RepoBuilder(self.repo_path)
		yield
		self.builder.close()

	def build_linear_history(self) -> dict[str, str]:
		"""
		Create ``A(root) -> B -> C(tag v1.0) -> D(HEAD)``.

		Returns:
		    dict[str, str]: Commit ids keyed by letter.

		"""
		commits = {
			"A": self.builder.commit("A: initial commit"),
			"B": self.builder.commit("B: add feature\n\nLonger description of the feature."),
			"C": self.builder.commit("C: prepare release"),
		}
		self.builder.annotated_tag("v1.0")
		commits["D"] = self.builder.commit("D: fix bug")
		return commits
