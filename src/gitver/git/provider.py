"""
Common interface of the Git backends.

A provider is bound to one working directory and owns whatever resources its
backend needs (an open repository handle, or nothing for the command-line
backend). Providers are context managers and must be closed when done.

The command-line backend is preferred when the ``git`` executable is present
since it understands everything the repository may use, for example linked
work trees, which the library backend cannot open. The library backend is the
fallback and the only one that enumerates commit ranges.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Self

from gitver.git.errors import InvalidArgumentError

if TYPE_CHECKING:
	from pathlib import Path
	from types import TracebackType

	from gitver.git.describe import DescribeCall
	from gitver.git.models import CommitData, Tag

MIN_ABBREVIATION_LENGTH = 4


def validate_minimum_length(minimum_length: int) -> None:
	"""Raise InvalidArgumentError unless the length is 0 or at least 4."""
	if minimum_length != 0 and minimum_length < MIN_ABBREVIATION_LENGTH:
		msg = f"Minimum length must either be 0, or equal or greater than {MIN_ABBREVIATION_LENGTH}: {minimum_length}"
		raise InvalidArgumentError(msg)


class GitProvider(ABC):
	"""Read-only view of a Git repository."""

	#: Whether ``get_commits`` is implemented by this backend.
	supports_commit_ranges: bool = True

	def __init__(self, directory: Path) -> None:
		self.directory = directory
		self._closed = False

	def __enter__(self) -> Self:
		return self

	def __exit__(
		self,
		exc_type: type[BaseException] | None,
		exc_val: BaseException | None,
		exc_tb: TracebackType | None,
	) -> None:
		self.close()

	def close(self) -> None:
		"""Release backend resources. Safe to call more than once."""
		if self._closed:
			return
		self._closed = True
		self._release()

	def _release(self) -> None:  # noqa: B027
		"""Backend hook for ``close``."""

	@property
	def closed(self) -> bool:
		return self._closed

	@property
	@abstractmethod
	def backend_name(self) -> str:
		"""Short name of the backend, used in logs and errors."""

	@abstractmethod
	def get_dot_git_directory(self) -> Path:
		"""Absolute path of the repository's git directory."""

	@abstractmethod
	def abbreviate_ref(self, ref: str, minimum_length: int = 0) -> str:
		"""
		Get an abbreviated commit id for ``ref``.

		Args:
		    ref: Revision to abbreviate.
		    minimum_length: Minimum number of characters, or 0 for the
		        backend's default (never lower than 4).

		Raises:
		    InvalidArgumentError: If ``minimum_length`` is neither 0 nor >= 4.

		"""

	@abstractmethod
	def shorten_ref(self, ref: str) -> str:
		"""User-friendly name of a ref, e.g. ``refs/heads/main`` -> ``main``."""

	@abstractmethod
	def get_head(self) -> str:
		"""Full commit id HEAD points at."""

	@abstractmethod
	def get_full_branch(self) -> str | None:
		"""Full branch name (``refs/heads/...``) of HEAD, or None when detached."""

	@abstractmethod
	def get_remote_push_url(self, remote_name: str) -> str | None:
		"""Push URL of a remote, or None if no such remote exists."""

	@abstractmethod
	def get_remotes_count(self) -> int:
		"""Number of configured remotes."""

	@abstractmethod
	def get_upstream_branch(self) -> str | None:
		"""Full name of the current branch's upstream, or None."""

	@abstractmethod
	def get_merge_base(self, rev_a: str, rev_b: str) -> str | None:
		"""Best common ancestor of two revisions, or None if they share no history."""

	@abstractmethod
	def get_commits(self, latest_rev: str, earliest_rev: str | None = None) -> list[CommitData]:
		"""
		List commits from ``latest_rev`` back to ``earliest_rev``, both included.

		History reachable from any parent of ``earliest_rev`` is excluded. Without
		``earliest_rev`` the full history of ``latest_rev`` is listed. The result
		is ordered latest first.

		"""

	@abstractmethod
	def get_tags(self, include_lightweight: bool = False) -> list[Tag]:
		"""
		List tags with the commit they ultimately point at, sorted by name.

		Annotated tags are always included; lightweight tags only on request.

		"""

	@abstractmethod
	def describe(self) -> DescribeCall:
		"""Start a new describe call."""

	def __repr__(self) -> str:
		return f"{type(self).__name__}({str(self.directory)!r})"
