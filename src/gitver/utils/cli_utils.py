"""Utility functions for CLI operations in gitver."""

from __future__ import annotations

import contextlib
import logging
from typing import TYPE_CHECKING

import typer
from rich.console import Console

from gitver.git.errors import GitError
from gitver.utils.config_loader import ConfigError
from gitver.utils.log_setup import display_error_summary, display_warning_summary

if TYPE_CHECKING:
	from collections.abc import Iterator

console = Console()
logger = logging.getLogger(__name__)

# Failures reported to the user instead of as a traceback
EXPECTED_ERRORS: tuple[type[Exception], ...] = (GitError, ConfigError)


def show_error(message: str, exception: Exception | None = None) -> None:
	"""
	Display an error summary with standardized formatting.

	Args:
	        message: The error message to display
	        exception: Optional exception that caused the error

	"""
	error_text = message
	if exception:
		error_text += f"\n\nDetails: {exception!s}"
		logger.debug("Error occurred", exc_info=exception)

	display_error_summary(error_text)


def show_warning(message: str) -> None:
	display_warning_summary(message)


def exit_with_error(message: str, exit_code: int = 1, exception: Exception | None = None) -> None:
	"""
	Display an error message and exit.

	Args:
	        message: Error message to display
	        exit_code: Exit code to use
	        exception: Optional exception that caused the error

	"""
	show_error(message, exception)
	raise typer.Exit(exit_code) from exception


@contextlib.contextmanager
def exit_on_error(message: str, *extra_errors: type[Exception]) -> Iterator[None]:
	"""
	Report expected failures inside the block and exit with code 1.

	Args:
	        message: Summary shown above the exception details
	        extra_errors: Exception types handled on top of ``EXPECTED_ERRORS``

	"""
	try:
		yield
	except (*EXPECTED_ERRORS, *extra_errors) as e:
		exit_with_error(message, exception=e)
