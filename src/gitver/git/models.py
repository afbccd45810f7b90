"""Data records returned by the Git providers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class CommitData:
	"""A single commit produced by commit-range enumeration."""

	full_hash: str
	abbreviated_hash: str
	commit_time: datetime
	message: str

	@property
	def summary(self) -> str:
		"""First line of the commit message."""
		return self.message.split("\n", 1)[0].strip()


@dataclass(frozen=True)
class Tag:
	"""A tag and the commit it ultimately points at."""

	target_commit_hash: str
	name: str
