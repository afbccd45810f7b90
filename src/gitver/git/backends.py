"""Selection of a Git backend for a working directory."""

from __future__ import annotations

import contextlib
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from gitver.git.command_line import CommandLineGitProvider
from gitver.git.errors import InvalidArgumentError, ProbeFailedError, UnsupportedOperationError
from gitver.git.library import LibraryGitProvider

if TYPE_CHECKING:
	from collections.abc import Iterator

	from gitver.git.process import ProcessRunner
	from gitver.git.provider import GitProvider

logger = logging.getLogger(__name__)

BACKENDS: dict[str, type[GitProvider]] = {
	"cli": CommandLineGitProvider,
	"library": LibraryGitProvider,
}
# Probing order for "auto"
PREFERRED_ORDER = ("cli", "library")


def _candidates(backend: str, require_commit_ranges: bool) -> list[str]:
	if backend == "auto":
		names = list(PREFERRED_ORDER)
	elif backend in BACKENDS:
		names = [backend]
	else:
		msg = f"Unknown git backend '{backend}', expected one of: auto, {', '.join(BACKENDS)}"
		raise InvalidArgumentError(msg)

	if require_commit_ranges:
		names = [name for name in names if BACKENDS[name].supports_commit_ranges]
		if not names:
			msg = f"The '{backend}' git backend does not support commit range enumeration"
			raise UnsupportedOperationError(msg)
	return names


def create_git_provider(
	directory: Path | str,
	*,
	backend: str = "auto",
	require_commit_ranges: bool = False,
	runner: ProcessRunner | None = None,
) -> GitProvider | None:
	"""
	Create a provider for ``directory`` with the first backend that works.

	Args:
	    directory: Working directory inside the repository.
	    backend: ``auto`` (command line first, then library), ``cli`` or ``library``.
	    require_commit_ranges: Skip backends that cannot enumerate commit ranges.
	    runner: Process runner for the command-line backend.

	Returns:
	    GitProvider | None: The provider, or None when no backend is usable.

	Raises:
	    InvalidArgumentError: If ``backend`` is not a known backend name.
	    UnsupportedOperationError: If commit ranges are required and ``backend`` cannot enumerate them.

	"""
	directory = Path(directory)
	for name in _candidates(backend, require_commit_ranges):
		try:
			if name == "cli":
				provider: GitProvider = CommandLineGitProvider.probe(directory, runner)
			else:
				provider = LibraryGitProvider.probe(directory)
		except ProbeFailedError as e:
			logger.debug("Backend '%s' unavailable for %s: %s", name, directory, e)
			continue
		logger.debug("Using '%s' git backend for %s", name, directory)
		return provider

	logger.debug("No git backend available for %s", directory)
	return None


@contextlib.contextmanager
def open_git_provider(
	directory: Path | str,
	*,
	backend: str = "auto",
	require_commit_ranges: bool = False,
	runner: ProcessRunner | None = None,
) -> Iterator[GitProvider]:
	"""
	Context manager around ``create_git_provider`` that always closes the provider.

	Raises:
	    ProbeFailedError: If no backend is usable for ``directory``.

	"""
	provider = create_git_provider(
		directory,
		backend=backend,
		require_commit_ranges=require_commit_ranges,
		runner=runner,
	)
	if provider is None:
		msg = f"No usable git backend ({backend}) for {directory}"
		raise ProbeFailedError(msg)
	with provider:
		yield provider
