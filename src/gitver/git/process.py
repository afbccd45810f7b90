"""Runs external commands and collects their output."""

from __future__ import annotations

import locale
import logging
import subprocess
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import IO, TYPE_CHECKING

from gitver.git.errors import CommandFailedError, CommandNotFoundError, ProcessStartError

if TYPE_CHECKING:
	from collections.abc import Sequence
	from pathlib import Path

logger = logging.getLogger(__name__)

# Console encoding can differ from Python's own default, so child output is
# decoded with the locale's preferred encoding. Resolved once per process.
NATIVE_ENCODING = locale.getpreferredencoding(do_setlocale=False) or "utf-8"


@dataclass
class ProcessResult:
	"""Outcome of a single process invocation."""

	exit_code: int
	stdout_lines: list[str] = field(default_factory=list)
	output: str = ""

	@property
	def first_line(self) -> str | None:
		return self.stdout_lines[0] if self.stdout_lines else None


class _Transcript:
	"""Combined stdout+stderr lines in arrival order."""

	def __init__(self) -> None:
		self._lines: list[str] = []
		self._lock = threading.Lock()

	def append(self, line: str) -> None:
		with self._lock:
			self._lines.append(line)

	def text(self) -> str:
		with self._lock:
			return "\n".join(self._lines)


class ProcessRunner:
	"""
	Spawns one child process per call and drains its output.

	stdout and stderr are read concurrently so that a child filling one pipe
	never blocks on the other. Both readers are joined before ``run`` returns.

	"""

	def __init__(self, executable: str = "git", encoding: str = NATIVE_ENCODING) -> None:
		self.executable = executable
		self.encoding = encoding

	def run(self, directory: Path, args: Sequence[str], *, check: bool = True) -> ProcessResult:
		"""
		Run the executable with ``args`` inside ``directory``.

		Args:
		    directory: Working directory of the child process.
		    args: Arguments, without the executable itself.
		    check: Raise ``CommandFailedError`` on a non-zero exit code.

		Returns:
		    ProcessResult: exit code, stdout lines and combined transcript.

		Raises:
		    CommandNotFoundError: If the executable does not exist.
		    ProcessStartError: If the process could not be spawned.
		    CommandFailedError: If ``check`` is set and the exit code is non-zero.

		"""
		command = [self.executable, *args]
		logger.debug("Running %s in %s", " ".join(command), directory)

		try:
			# Arguments are passed as a list, no shell is involved
			process = subprocess.Popen(  # noqa: S603
				command,
				cwd=directory,
				stdin=subprocess.DEVNULL,
				stdout=subprocess.PIPE,
				stderr=subprocess.PIPE,
			)
		except FileNotFoundError as e:
			raise CommandNotFoundError(command, f"Command not found: {self.executable} ({' '.join(command)})") from e
		except OSError as e:
			raise ProcessStartError(command, f"Failed to start {' '.join(command)}: {e}") from e

		transcript = _Transcript()
		with ThreadPoolExecutor(max_workers=2, thread_name_prefix="gitver-reader") as pool:
			stdout_future = pool.submit(self._drain, process.stdout, transcript)
			stderr_future = pool.submit(self._drain, process.stderr, transcript)
			exit_code = process.wait()
			stdout_lines = stdout_future.result()
			stderr_future.result()

		result = ProcessResult(exit_code=exit_code, stdout_lines=stdout_lines, output=transcript.text())
		logger.debug("%s exited with %d", " ".join(command), exit_code)

		if check and exit_code != 0:
			raise CommandFailedError(command, exit_code, result.output)
		return result

	def _drain(self, stream: IO[bytes] | None, transcript: _Transcript) -> list[str]:
		if stream is None:
			return []
		lines = []
		with stream:
			for raw in stream:
				line = raw.decode(self.encoding, errors="replace").rstrip("\r\n")
				lines.append(line)
				transcript.append(line)
		return lines
