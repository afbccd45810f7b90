"""Shared argument and option annotations for gitver commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

PathArg = Annotated[
	Path,
	typer.Argument(
		exists=True,
		file_okay=False,
		help="Directory inside the Git repository",
	),
]

ConfigOpt = Annotated[
	Path | None,
	typer.Option(
		"--config",
		"-c",
		help="Path to config file",
	),
]

BackendOpt = Annotated[
	str | None,
	typer.Option(
		"--backend",
		"-b",
		help="Git backend: auto, cli or library (overrides config)",
	),
]

MatchOpt = Annotated[
	list[str] | None,
	typer.Option(
		"--match",
		"-m",
		help="Only consider tags matching this glob (repeatable)",
	),
]
