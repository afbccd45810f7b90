"""Git provider backed by pygit2, without spawning any process."""

from __future__ import annotations

import contextlib
import logging
import re
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

from pygit2 import Commit, Repository, discover_repository
from pygit2 import GitError as Pygit2GitError
from pygit2.enums import DescribeStrategy, ReferenceFilter, ReferenceType, SortMode

from gitver.git.describe import DescribeCall, DescribeOptions
from gitver.git.errors import GitError, ProbeFailedError, RevisionResolutionError
from gitver.git.models import CommitData, Tag
from gitver.git.provider import GitProvider, validate_minimum_length

if TYPE_CHECKING:
	from collections.abc import Iterator

	from pygit2 import Object

logger = logging.getLogger(__name__)

TAGS_PREFIX = "refs/tags/"
SHORTENED_PREFIXES = ("refs/heads/", TAGS_PREFIX, "refs/remotes/")
ABBREVIATED_HASH_LENGTH = 7

_LONG_DESCRIBE_RE = re.compile(r"^(?P<tag>.+)-(?P<distance>\d+)-g(?P<abbrev>[0-9a-f]+)$")


@dataclass(frozen=True)
class _DescribeCandidate:
	tag: str
	distance: int
	abbrev: str


class LibraryGitProvider(GitProvider):
	"""
	Reads repository state through an open pygit2 ``Repository``.

	Linked work trees are not supported by the library; the command-line
	backend should be preferred for those.

	"""

	def __init__(self, directory: Path, repo: Repository) -> None:
		super().__init__(directory)
		self.repo = repo

	@classmethod
	def probe(cls, directory: Path) -> LibraryGitProvider:
		"""
		Open the repository containing ``directory``.

		Raises:
		    ProbeFailedError: If no repository can be opened.

		"""
		try:
			git_dir = discover_repository(str(directory))
		except (Pygit2GitError, OSError, ValueError) as e:
			msg = f"Failed to discover a repository from {directory}: {e}"
			raise ProbeFailedError(msg) from e
		if git_dir is None:
			msg = f"No repository found at or above {directory}"
			raise ProbeFailedError(msg)

		try:
			repo = Repository(git_dir)
		except (Pygit2GitError, OSError, KeyError, ValueError) as e:
			msg = f"Failed to open repository at {git_dir}: {e}"
			raise ProbeFailedError(msg) from e

		try:
			return cls(directory, repo)
		except BaseException:
			repo.free()
			raise

	@classmethod
	def create(cls, directory: Path) -> LibraryGitProvider | None:
		"""Create a provider, or None if no repository can be opened."""
		try:
			return cls.probe(directory)
		except ProbeFailedError as e:
			logger.debug("Library backend unavailable: %s", e)
			return None

	@property
	def backend_name(self) -> str:
		return "library"

	def _release(self) -> None:
		self.repo.free()

	@contextlib.contextmanager
	def _translate_errors(self, operation: str) -> Iterator[None]:
		"""Re-raise pygit2 errors as GitError naming the operation."""
		try:
			yield
		except GitError:
			raise
		except (Pygit2GitError, KeyError, ValueError) as e:
			msg = f"Failed to {operation}: {e}"
			raise GitError(msg) from e

	def _resolve_object(self, rev: str) -> Object:
		try:
			return self.repo.revparse_single(rev)
		except (Pygit2GitError, KeyError, ValueError) as e:
			raise RevisionResolutionError(rev) from e

	def _resolve_commit(self, rev: str) -> Commit:
		obj = self._resolve_object(rev)
		try:
			return obj.peel(Commit)
		except (Pygit2GitError, ValueError) as e:
			msg = f"Revision '{rev}' does not point at a commit"
			raise RevisionResolutionError(rev, msg) from e

	def get_dot_git_directory(self) -> Path:
		return Path(self.repo.path).resolve()

	def abbreviate_ref(self, ref: str, minimum_length: int = 0) -> str:
		validate_minimum_length(minimum_length)
		obj = self._resolve_object(ref)
		if minimum_length == 0:
			return obj.short_id

		full_id = str(obj.id)
		with self._translate_errors(f"abbreviate {ref}"):
			for length in range(minimum_length, len(full_id)):
				prefix = full_id[:length]
				try:
					self.repo[prefix]
				except ValueError:
					# Ambiguous prefix, try a longer one
					continue
				return prefix
		return full_id

	def shorten_ref(self, ref: str) -> str:
		for prefix in SHORTENED_PREFIXES:
			if ref.startswith(prefix):
				return ref[len(prefix) :]
		return ref

	def get_head(self) -> str:
		return str(self._resolve_commit("HEAD").id)

	def get_full_branch(self) -> str | None:
		with self._translate_errors("read HEAD"):
			head = self.repo.lookup_reference("HEAD")
			if head.type == ReferenceType.SYMBOLIC:
				return head.target
		return None

	def get_remote_push_url(self, remote_name: str) -> str | None:
		try:
			remote = self.repo.remotes[remote_name]
		except (KeyError, ValueError):
			return None
		# Same fallback as `git remote get-url --push`
		return remote.push_url or remote.url

	def get_remotes_count(self) -> int:
		with self._translate_errors("list remotes"):
			return len(self.repo.remotes)

	def get_upstream_branch(self) -> str | None:
		with self._translate_errors("read upstream branch"):
			if self.repo.head_is_detached or self.repo.head_is_unborn:
				return None
			branch = self.repo.branches.local.get(self.repo.head.shorthand)
			if branch is None:
				return None
			try:
				upstream = branch.upstream
			except KeyError:
				logger.warning("Upstream of %s is configured but does not exist", branch.branch_name)
				return None
			return upstream.name if upstream is not None else None

	def get_merge_base(self, rev_a: str, rev_b: str) -> str | None:
		commit_a = self._resolve_commit(rev_a)
		commit_b = self._resolve_commit(rev_b)
		with self._translate_errors(f"compute merge-base of {rev_a} and {rev_b}"):
			base = self.repo.merge_base(commit_a.id, commit_b.id)
		return str(base) if base is not None else None

	def get_commits(self, latest_rev: str, earliest_rev: str | None = None) -> list[CommitData]:
		latest = self._resolve_commit(latest_rev)
		earliest = self._resolve_commit(earliest_rev) if earliest_rev is not None else None

		with self._translate_errors(f"list commits {earliest_rev or 'root'}..{latest_rev}"):
			walker = self.repo.walk(latest.id, SortMode.TOPOLOGICAL | SortMode.TIME)
			# Hiding the parents rather than the commit keeps the earliest commit itself
			if earliest is not None:
				for parent_id in earliest.parent_ids:
					walker.hide(parent_id)
			commits = [self._to_commit_data(commit) for commit in walker]

		logger.debug("Found %d commits between %s and %s", len(commits), earliest_rev or "root", latest_rev)
		return commits

	@staticmethod
	def _to_commit_data(commit: Commit) -> CommitData:
		message = commit.message
		if not message.endswith("\n"):
			message += "\n"
		full_hash = str(commit.id)
		return CommitData(
			full_hash=full_hash,
			abbreviated_hash=full_hash[:ABBREVIATED_HASH_LENGTH],
			commit_time=datetime.fromtimestamp(commit.commit_time, tz=UTC),
			message=message,
		)

	def get_tags(self, include_lightweight: bool = False) -> list[Tag]:
		tags = []
		with self._translate_errors("list tags"):
			for ref in self.repo.references.iterator(ReferenceFilter.TAGS):
				if not ref.name.startswith(TAGS_PREFIX):
					continue
				name = ref.name[len(TAGS_PREFIX) :]
				leaf_id = ref.resolve().target
				peeled_id = ref.peel().id
				# Annotated tags peel to a different object than the tag ref itself
				if peeled_id != leaf_id:
					tags.append(Tag(target_commit_hash=str(peeled_id), name=name))
				elif include_lightweight:
					tags.append(Tag(target_commit_hash=str(leaf_id), name=name))
		tags.sort(key=lambda tag: tag.name)
		return tags

	def describe(self) -> DescribeCall:
		return LibraryDescribeCall(self)

	def run_describe(self, options: DescribeOptions) -> str:
		"""
		Describe ``options.target`` with pygit2's native describe.

		libgit2 takes a single match pattern, so each pattern is tried on its own
		and the tag closest to the target wins, as ``git describe`` does when
		given several ``--match`` options.

		"""
		target = self._resolve_commit(options.target)
		strategy = DescribeStrategy.TAGS if options.include_lightweight_tags else DescribeStrategy.DEFAULT

		candidates: list[_DescribeCandidate] = []
		with self._translate_errors(f"describe {options.target}"):
			for pattern in options.match_patterns or (None,):
				try:
					text = self.repo.describe(
						committish=target,
						describe_strategy=strategy,
						pattern=pattern,
						always_use_long_format=True,
					)
				except (Pygit2GitError, KeyError):
					# libgit2 reports "no reference found" when no tag matches this pattern
					logger.debug("No tag matching %s describes %s", pattern or "*", options.target)
					continue
				candidates.append(self._parse_long_describe(text))

		if not candidates:
			msg = f"No names found, cannot describe {options.target}"
			raise GitError(msg)

		best = min(candidates, key=lambda candidate: candidate.distance)
		if best.distance == 0 and not options.long_format:
			return best.tag
		return f"{best.tag}-{best.distance}-g{best.abbrev}"

	@staticmethod
	def _parse_long_describe(text: str) -> _DescribeCandidate:
		match = _LONG_DESCRIBE_RE.match(text.strip())
		if match is None:
			msg = f"Unexpected describe output: {text!r}"
			raise GitError(msg)
		return _DescribeCandidate(
			tag=match.group("tag"),
			distance=int(match.group("distance")),
			abbrev=match.group("abbrev"),
		)


class LibraryDescribeCall(DescribeCall):
	"""Describe call executed with pygit2."""

	def __init__(self, provider: LibraryGitProvider) -> None:
		super().__init__()
		self._provider = provider

	def run(self) -> str:
		return self._provider.run_describe(self.options)
