"""Chainable builder for ``git describe`` style queries."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Self


@dataclass(frozen=True)
class DescribeOptions:
	"""Snapshot of a describe call's configuration."""

	long_format: bool = False
	include_lightweight_tags: bool = False
	match_patterns: tuple[str, ...] = ()
	target: str = "HEAD"


class DescribeCall(ABC):
	"""
	Accumulates describe options; each backend supplies ``run``.

	A call is scoped to one caller and must not be shared between threads.
	``run`` re-executes the query every time it is invoked, nothing is cached.

	"""

	def __init__(self) -> None:
		self._long_format = False
		self._include_lightweight_tags = False
		self._match_patterns: list[str] = []
		self._target = "HEAD"

	def long_format(self, long_format: bool = True) -> Self:
		"""Always emit ``<tag>-<count>-g<hash>``, even on an exact tag match."""
		self._long_format = long_format
		return self

	def include_lightweight_tags(self, lightweight: bool = True) -> Self:
		"""Consider lightweight tags as well as annotated ones."""
		self._include_lightweight_tags = lightweight
		return self

	def matching(self, *patterns: str) -> Self:
		"""
		Add glob patterns that candidate tags must match.

		Calling this with no arguments clears every pattern added so far;
		otherwise the patterns are appended to the existing ones.

		"""
		if not patterns:
			self._match_patterns.clear()
		else:
			self._match_patterns.extend(patterns)
		return self

	def target(self, rev: str) -> Self:
		"""Describe ``rev`` instead of HEAD."""
		self._target = rev
		return self

	@property
	def options(self) -> DescribeOptions:
		return DescribeOptions(
			long_format=self._long_format,
			include_lightweight_tags=self._include_lightweight_tags,
			match_patterns=tuple(self._match_patterns),
			target=self._target,
		)

	@abstractmethod
	def run(self) -> str:
		"""Execute the describe query and return its single-line result."""
