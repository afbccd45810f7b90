"""Exceptions raised by the Git providers."""

from __future__ import annotations

from collections.abc import Sequence


class GitError(Exception):
	"""Base exception for Git-related errors."""


class ProbeFailedError(GitError):
	"""A backend is not usable for the given directory."""


class InvalidArgumentError(GitError, ValueError):
	"""An argument passed to a provider operation is out of range."""


class ProcessStartError(GitError):
	"""The external process could not be spawned."""

	def __init__(self, command: Sequence[str], message: str | None = None) -> None:
		self.command = list(command)
		super().__init__(message or f"Failed to start {' '.join(self.command)}")


class CommandNotFoundError(ProcessStartError):
	"""The executable could not be found on the PATH."""


class CommandFailedError(GitError):
	"""A command that was required to succeed exited with a non-zero code."""

	def __init__(self, command: Sequence[str], exit_code: int, output: str) -> None:
		self.command = list(command)
		self.exit_code = exit_code
		self.output = output
		msg = f"Command failed with exit code {exit_code}: {' '.join(self.command)}"
		if output.strip():
			msg += f"\n{output.rstrip()}"
		super().__init__(msg)


class RevisionResolutionError(GitError):
	"""A revision string could not be resolved to an object."""

	def __init__(self, revision: str, message: str | None = None) -> None:
		self.revision = revision
		super().__init__(message or f"Could not resolve revision '{revision}'")


class UnsupportedOperationError(GitError, NotImplementedError):
	"""The selected backend does not implement the operation."""


class ConfigurationConflictError(GitError):
	"""Mutually exclusive settings were supplied together."""
