"""Version strings derived from ``git describe`` and repository metadata."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from gitver.git.errors import GitError

if TYPE_CHECKING:
	from collections.abc import Sequence

	from gitver.git.provider import GitProvider

logger = logging.getLogger(__name__)

DEFAULT_ALLOWED_BRANCHES = ("master", "main", "HEAD")

_SCP_LIKE_RE = re.compile(r"^(?:[^@/]+@)?(?P<host>[^:/]+):(?P<path>(?!//).+)$")
_URL_RE = re.compile(r"^(?P<scheme>[a-z][a-z0-9+.-]*)://(?:[^@/]+@)?(?P<host>[^/:]+)(?::\d+)?/(?P<path>.+)$")


@dataclass(frozen=True)
class GitInfo:
	"""Repository state used to compute version strings."""

	tag: str
	offset: str
	hash: str
	branch: str | None
	commit: str
	abbreviated_id: str
	url: str


def split_long_describe(describe: str) -> tuple[str, str, str]:
	"""
	Split ``<tag>-<offset>-g<hash>`` into its parts.

	Tags may contain dashes themselves, so the split is on the last two.

	Raises:
	    GitError: If the string is not in the long describe format.

	"""
	parts = describe.rsplit("-", 2)
	if len(parts) != 3 or not parts[1].isdigit() or not parts[2].startswith("g"):  # noqa: PLR2004
		msg = f"Not a long-format describe string: {describe!r}"
		raise GitError(msg)
	tag, offset, hash_part = parts
	return tag, offset, hash_part[1:]


def to_web_url(remote_url: str) -> str:
	"""
	Convert a remote URL into an ``https://`` project URL.

	``git@github.com:org/repo.git``, ``ssh://git@github.com/org/repo.git`` and
	``https://github.com/org/repo.git`` all become ``https://github.com/org/repo``.
	Local paths are returned unchanged.

	"""
	url = remote_url.strip()
	match = _URL_RE.match(url)
	if match is None:
		match = _SCP_LIKE_RE.match(url)
	if match is None:
		return url
	path = match.group("path").strip("/").removesuffix(".git")
	return f"https://{match.group('host')}/{path}"


def build_project_url(provider: GitProvider, remote_name: str = "origin") -> str:
	"""Web URL of the project from a remote's push URL, or "" if there is none."""
	remote_url = provider.get_remote_push_url(remote_name)
	if not remote_url:
		logger.debug("Remote '%s' not found, no project URL", remote_name)
		return ""
	return to_web_url(remote_url)


def gather_git_info(
	provider: GitProvider,
	match_patterns: Sequence[str] = (),
	*,
	remote_name: str = "origin",
) -> GitInfo:
	"""
	Collect the nearest tag, distance, and branch information for HEAD.

	Lightweight tags are taken into account, like ``git describe --long --tags``.

	"""
	call = provider.describe().long_format(True).include_lightweight_tags(True)
	if match_patterns:
		call.matching(*match_patterns)
	tag, offset, hash_part = split_long_describe(call.run())

	full_branch = provider.get_full_branch()
	branch = provider.shorten_ref(full_branch) if full_branch else None

	return GitInfo(
		tag=tag,
		offset=offset,
		hash=hash_part,
		branch=branch,
		commit=provider.get_head(),
		abbreviated_id=provider.abbreviate_ref("HEAD", 0),
		url=build_project_url(provider, remote_name),
	)


def tag_offset_version(info: GitInfo) -> str:
	"""``<tag>.<offset>``, e.g. ``1.2.14``."""
	return f"{info.tag}.{info.offset}"


def tag_offset_branch_version(info: GitInfo, allowed_branches: Sequence[str] = DEFAULT_ALLOWED_BRANCHES) -> str:
	"""
	``<tag>.<offset>`` on an allowed branch, ``<tag>.<offset>-<branch>`` elsewhere.

	Slashes in the branch name are replaced with dashes.

	"""
	version = tag_offset_version(info)
	if not info.branch or info.branch in allowed_branches:
		return version
	return f"{version}-{info.branch.replace('/', '-')}"
