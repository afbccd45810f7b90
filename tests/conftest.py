"""Global test fixtures and configuration."""

from __future__ import annotations

import os
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
	"""
	Keep user configuration out of the tests.

	Removes ``GITVER_*`` variables from the environment and points the XDG
	config directory at an empty temporary directory.

	"""
	for name in list(os.environ):
		if name.startswith("GITVER_"):
			monkeypatch.delenv(name)

	xdg_home = tmp_path / "xdg-config"
	xdg_home.mkdir()
	monkeypatch.setattr("gitver.utils.config_loader.xdg_config_home", str(xdg_home))
	return xdg_home
