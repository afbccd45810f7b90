"""Git provider backed by the ``git`` executable."""

from __future__ import annotations

import logging
from pathlib import Path

from gitver.git.describe import DescribeCall
from gitver.git.errors import CommandFailedError, GitError, ProbeFailedError, UnsupportedOperationError
from gitver.git.models import CommitData, Tag
from gitver.git.process import ProcessResult, ProcessRunner
from gitver.git.provider import GitProvider, validate_minimum_length

logger = logging.getLogger(__name__)

TAGS_PREFIX = "refs/tags/"


class CommandLineGitProvider(GitProvider):
	"""Runs one ``git`` command per operation and parses its line output."""

	supports_commit_ranges = False

	def __init__(self, directory: Path, runner: ProcessRunner | None = None) -> None:
		super().__init__(directory)
		self.runner = runner or ProcessRunner()

	@classmethod
	def probe(cls, directory: Path, runner: ProcessRunner | None = None) -> CommandLineGitProvider:
		"""
		Check that ``git`` runs and ``directory`` is inside a work tree.

		Raises:
		    ProbeFailedError: If either check fails.

		"""
		runner = runner or ProcessRunner()
		try:
			result = runner.run(directory, ["rev-parse", "--is-inside-work-tree"], check=False)
		except (GitError, OSError) as e:
			msg = f"git is not usable in {directory}: {e}"
			raise ProbeFailedError(msg) from e
		if result.exit_code != 0 or result.first_line != "true":
			msg = f"{directory} is not inside a git work tree"
			raise ProbeFailedError(msg)
		return cls(directory, runner)

	@classmethod
	def create(cls, directory: Path, runner: ProcessRunner | None = None) -> CommandLineGitProvider | None:
		"""Create a provider, or None if git or a repository is unavailable."""
		try:
			return cls.probe(directory, runner)
		except ProbeFailedError as e:
			logger.debug("Command-line backend unavailable: %s", e)
			return None

	@property
	def backend_name(self) -> str:
		return "cli"

	def _git(self, *args: str, check: bool = True) -> ProcessResult:
		return self.runner.run(self.directory, list(args), check=check)

	def _run_single_line(self, *args: str) -> str:
		result = self._git(*args)
		line = result.first_line
		if line is None:
			raise CommandFailedError([self.runner.executable, *args], result.exit_code, "no output")
		return line

	def _optional_line(self, *args: str) -> str | None:
		result = self._git(*args, check=False)
		if result.exit_code != 0:
			return None
		return result.first_line

	def get_dot_git_directory(self) -> Path:
		return Path(self._run_single_line("rev-parse", "--absolute-git-dir"))

	def abbreviate_ref(self, ref: str, minimum_length: int = 0) -> str:
		validate_minimum_length(minimum_length)
		args = ["rev-parse"]
		if minimum_length != 0:
			args.append(f"--short={minimum_length}")
		else:
			args.append("--short")
		args.append(ref)
		return self._run_single_line(*args)

	def shorten_ref(self, ref: str) -> str:
		return self._run_single_line("rev-parse", "--abbrev-ref", ref)

	def get_head(self) -> str:
		return self._run_single_line("rev-parse", "HEAD")

	def get_full_branch(self) -> str | None:
		# Exits non-zero on a detached HEAD
		return self._optional_line("symbolic-ref", "HEAD")

	def get_remote_push_url(self, remote_name: str) -> str | None:
		return self._optional_line("remote", "get-url", "--push", remote_name)

	def get_remotes_count(self) -> int:
		return sum(1 for line in self._git("remote").stdout_lines if line.strip())

	def get_upstream_branch(self) -> str | None:
		return self._optional_line("rev-parse", "--symbolic-full-name", "@{upstream}")

	def get_merge_base(self, rev_a: str, rev_b: str) -> str | None:
		args = ["merge-base", rev_a, rev_b]
		result = self._git(*args, check=False)
		# Exit code 1 means the revisions share no history; anything else is an error
		if result.exit_code == 1:
			return None
		if result.exit_code != 0:
			raise CommandFailedError([self.runner.executable, *args], result.exit_code, result.output)
		return result.first_line

	def get_commits(self, latest_rev: str, earliest_rev: str | None = None) -> list[CommitData]:
		msg = f"Commit range enumeration ({earliest_rev or 'root'}..{latest_rev}) is not supported by the cli backend"
		raise UnsupportedOperationError(msg)

	def get_tags(self, include_lightweight: bool = False) -> list[Tag]:
		result = self._git(
			"for-each-ref",
			"--sort=refname",
			"--format=%(objectname) %(*objectname) %(refname)",
			TAGS_PREFIX,
		)
		tags = []
		for line in result.stdout_lines:
			parts = line.split(" ", 2)
			if len(parts) != 3:  # noqa: PLR2004
				logger.warning("Unexpected for-each-ref output: %r", line)
				continue
			object_id, peeled_id, ref_name = parts
			if not ref_name.startswith(TAGS_PREFIX):
				continue
			name = ref_name[len(TAGS_PREFIX) :]
			# %(*objectname) is only filled in for annotated tags
			if peeled_id:
				tags.append(Tag(target_commit_hash=peeled_id, name=name))
			elif include_lightweight:
				tags.append(Tag(target_commit_hash=object_id, name=name))
		return tags

	def describe(self) -> DescribeCall:
		return CommandLineDescribeCall(self)


class CommandLineDescribeCall(DescribeCall):
	"""Describe call executed with ``git describe``."""

	def __init__(self, provider: CommandLineGitProvider) -> None:
		super().__init__()
		self._provider = provider

	def build_args(self) -> list[str]:
		options = self.options
		args = ["describe"]
		if options.long_format:
			args.append("--long")
		if options.include_lightweight_tags:
			args.append("--tags")
		for pattern in options.match_patterns:
			args.extend(["--match", pattern])
		args.append(options.target)
		return args

	def run(self) -> str:
		return self._provider._run_single_line(*self.build_args())  # noqa: SLF001
