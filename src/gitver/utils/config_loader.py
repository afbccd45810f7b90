"""
Configuration loader for gitver.

This module provides functionality for loading and managing
configuration settings.

"""

import copy
import logging
import os
from pathlib import Path
from typing import Any, TypeVar, cast

import yaml
from xdg.BaseDirectory import xdg_config_home

from gitver.config import DEFAULT_CONFIG

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Constant for minimum number of parts in environment variable
MIN_ENV_VAR_PARTS = 2

ENV_PREFIX = "GITVER_"
TRUE_VALUES = ("true", "yes", "1", "on")
FALSE_VALUES = ("false", "no", "0", "off")

ConfigValue = str | int | float | bool | dict[str, Any] | list[Any] | None


class ConfigError(Exception):
	"""Exception raised for configuration errors."""


class ConfigLoader:
	"""
	Loads and manages configuration for gitver.

	Values come from the defaults, then a YAML file, then ``GITVER_SECTION_KEY``
	environment variables, each layer overriding the previous one.

	"""

	def __init__(self, config_file: str | Path | None = None, repo_root: Path | None = None) -> None:
		"""
		Initialize the configuration loader.

		Args:
		        config_file: Path to configuration file (optional)
		        repo_root: Repository root searched for ``.gitver.yml`` (optional)

		"""
		self.config: dict[str, Any] = {}
		self.repo_root = repo_root
		self.config_file = self._resolve_config_file(config_file)
		self.load_config()

	def _resolve_config_file(self, config_file: str | Path | None = None) -> Path | None:
		"""
		Resolve the configuration file path.

		If a config file is specified, use that. Otherwise, look in standard locations:
		1. .gitver.yml in the repository root, or the current directory
		2. $XDG_CONFIG_HOME/gitver/config.yml

		Args:
		        config_file: Explicitly provided config file path (optional)

		Returns:
		        Optional[Path]: Resolved config file path or None if no suitable file found

		"""
		if config_file:
			path = Path(config_file).expanduser().resolve()
			if not path.exists():
				logger.warning("Specified config file not found: %s", path)
			return path

		local_config = (self.repo_root or Path.cwd()) / ".gitver.yml"
		if local_config.exists():
			return local_config

		xdg_config_file = Path(xdg_config_home) / "gitver" / "config.yml"
		if xdg_config_file.exists():
			return xdg_config_file

		return None

	def load_config(self) -> dict[str, Any]:
		"""
		Load configuration from file and apply environment variable overrides.

		Returns:
		        Dict[str, Any]: Loaded configuration

		Raises:
		        ConfigError: If configuration file exists but cannot be loaded

		"""
		self.config = copy.deepcopy(DEFAULT_CONFIG)

		if self.config_file:
			try:
				if self.config_file.exists():
					with self.config_file.open(encoding="utf-8") as f:
						file_config = yaml.safe_load(f)
					if file_config is not None and not isinstance(file_config, dict):
						msg = f"Configuration in {self.config_file} must be a mapping"
						raise ConfigError(msg)
					if file_config:
						self._merge_configs(self.config, file_config)
					logger.info("Loaded configuration from %s", self.config_file)
				else:
					logger.warning("Configuration file not found: %s", self.config_file)
			except (OSError, yaml.YAMLError) as e:
				error_msg = f"Error loading configuration from {self.config_file}: {e}"
				logger.exception(error_msg)
				raise ConfigError(error_msg) from e

		self._apply_env_overrides()
		return self.config

	def _merge_configs(self, base: dict[str, Any], override: dict[str, Any]) -> None:
		"""Recursively merge ``override`` into ``base``."""
		for key, value in override.items():
			if isinstance(value, dict) and key in base and isinstance(base[key], dict):
				self._merge_configs(base[key], value)
			else:
				base[key] = value

	@staticmethod
	def _coerce(env_var: str, value: str, default: object) -> ConfigValue:
		"""
		Convert an environment value to the type of the key's default.

		Keys without a known default, and string keys such as revisions or
		URLs, keep the raw string so values like ``1.10`` or ``0123456`` are
		never reinterpreted as numbers.

		Raises:
		        ConfigError: If the value cannot be converted.

		"""
		if isinstance(default, bool):
			lowered = value.strip().lower()
			if lowered in TRUE_VALUES:
				return True
			if lowered in FALSE_VALUES:
				return False
			msg = f"{env_var} must be a boolean, got {value!r}"
			raise ConfigError(msg)
		if isinstance(default, int | float):
			try:
				return type(default)(value)
			except ValueError as e:
				msg = f"{env_var} must be a {type(default).__name__}, got {value!r}"
				raise ConfigError(msg) from e
		if isinstance(default, list):
			return [item.strip() for item in value.split(",") if item.strip()]
		return value

	def _apply_env_overrides(self) -> None:
		"""Apply GITVER_SECTION_KEY environment variables."""
		for env_var, value in os.environ.items():
			if not env_var.startswith(ENV_PREFIX):
				continue
			parts = env_var.lower().split("_")[1:]
			if len(parts) < MIN_ENV_VAR_PARTS:
				continue
			section, key = parts[0], "_".join(parts[1:])

			section_defaults = DEFAULT_CONFIG.get(section)
			default = section_defaults.get(key) if isinstance(section_defaults, dict) else None
			typed_value = self._coerce(env_var, value, default)
			if not isinstance(self.config.get(section), dict):
				self.config[section] = {}
			self.config[section][key] = typed_value
			logger.debug("Applied environment override %s: %s", env_var, typed_value)

	def get(self, key: str, default: T = None) -> T:
		"""
		Get a configuration value using dot notation, e.g. ``changelog.markdown``.

		Args:
		        key: Configuration key, can include dots for nested access
		        default: Default value if key not found

		Returns:
		        T: Configuration value or default

		"""
		current: Any = self.config
		for part in key.split("."):
			if isinstance(current, dict) and part in current:
				current = current[part]
			else:
				return default
		return cast("T", current)

	def set(self, key: str, value: ConfigValue) -> None:
		"""
		Set a configuration value using dot notation.

		Args:
		        key: Configuration key, can include dots for nested access
		        value: Value to set

		"""
		parts = key.split(".")
		current = self.config
		for part in parts[:-1]:
			if not isinstance(current.get(part), dict):
				current[part] = {}
			current = current[part]
		current[parts[-1]] = value

	def get_changelog_config(self) -> dict[str, Any]:
		"""Changelog section of the configuration."""
		return self.get("changelog", {})

	def get_describe_config(self) -> dict[str, Any]:
		"""Describe section of the configuration."""
		return self.get("describe", {})

	def get_backend(self) -> str:
		"""Configured git backend name."""
		return str(self.get("git.backend", "auto"))
