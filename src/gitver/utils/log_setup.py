"""
Logging setup for gitver.

Library modules only create ``logging.getLogger(__name__)`` loggers and never
install handlers. The command-line entry point calls ``setup_logging`` once per
invocation; diagnostics go to stderr so that stdout carries only command output.

"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.rule import Rule
from rich.text import Text

console = Console(stderr=True)

FILE_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(lineno)d - %(message)s"


def _file_handler(log_file_path: Path | str) -> logging.Handler:
	path = Path(log_file_path)
	path.parent.mkdir(parents=True, exist_ok=True)
	handler = logging.FileHandler(path, mode="a", encoding="utf-8")
	# The file always gets the full debug trail, whatever the console level
	handler.setLevel(logging.DEBUG)
	handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
	return handler


def setup_logging(
	is_verbose: bool = False,
	log_to_console: bool = True,
	log_file_path: Path | str | None = None,
) -> None:
	"""
	Set up logging configuration.

	Args:
	    is_verbose: Enable verbose logging
	    log_to_console: Whether to log to the console
	    log_file_path: Optional path to a file for logging. If None, no file logging.

	"""
	log_level = logging.DEBUG if is_verbose else logging.WARNING

	root_logger = logging.getLogger()
	root_logger.setLevel(log_level)

	# Clear existing handlers to avoid duplicate logs if called multiple times
	for handler in root_logger.handlers[:]:
		root_logger.removeHandler(handler)

	if log_to_console:
		root_logger.addHandler(
			RichHandler(
				console=console,
				level=log_level,
				rich_tracebacks=True,
				show_time=True,
				show_path=is_verbose,
			)
		)

	if not log_file_path:
		return
	try:
		root_logger.addHandler(_file_handler(log_file_path))
	except OSError:
		# File logging is optional, keep going with console logging only
		logging.getLogger(__name__).exception("Failed to set up file logging to %s", log_file_path)
	else:
		root_logger.debug("Logging to file: %s", log_file_path)


def _display_summary(title: str, message: str, style: str) -> None:
	console.print()
	console.print(Rule(Text(title, style=f"bold {style}"), style=style))
	# Messages carry git output, which must not be read as rich markup
	console.print(f"\n{message}\n", markup=False)
	console.print(Rule(style=style))
	console.print()


def display_error_summary(error_message: str) -> None:
	"""
	Display an error summary with a divider and a title.

	Args:
	        error_message: The error message to display

	"""
	_display_summary("Error Summary", error_message, "red")


def display_warning_summary(warning_message: str) -> None:
	"""Display a warning summary with a divider and a title."""
	_display_summary("Warning Summary", warning_message, "yellow")
