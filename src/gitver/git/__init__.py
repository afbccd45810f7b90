"""Git access layer with command-line and library backends."""

from gitver.git.backends import create_git_provider, open_git_provider
from gitver.git.command_line import CommandLineGitProvider
from gitver.git.describe import DescribeCall, DescribeOptions
from gitver.git.errors import (
	CommandFailedError,
	CommandNotFoundError,
	ConfigurationConflictError,
	GitError,
	InvalidArgumentError,
	ProbeFailedError,
	ProcessStartError,
	RevisionResolutionError,
	UnsupportedOperationError,
)
from gitver.git.library import LibraryGitProvider
from gitver.git.models import CommitData, Tag
from gitver.git.process import ProcessResult, ProcessRunner
from gitver.git.provider import GitProvider

__all__ = [
	"CommandFailedError",
	"CommandLineGitProvider",
	"CommandNotFoundError",
	"CommitData",
	"ConfigurationConflictError",
	"DescribeCall",
	"DescribeOptions",
	"GitError",
	"GitProvider",
	"InvalidArgumentError",
	"LibraryGitProvider",
	"ProbeFailedError",
	"ProcessResult",
	"ProcessRunner",
	"ProcessStartError",
	"RevisionResolutionError",
	"Tag",
	"UnsupportedOperationError",
	"create_git_provider",
	"open_git_provider",
]
