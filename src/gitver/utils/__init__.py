"""Utility module for gitver package."""

from .cli_utils import console, exit_on_error, exit_with_error, show_error
from .config_loader import ConfigError, ConfigLoader
from .log_setup import setup_logging

__all__ = [
	"ConfigError",
	"ConfigLoader",
	"console",
	"exit_on_error",
	"exit_with_error",
	"setup_logging",
	"show_error",
]
