from __future__ import annotations

import os
import shlex
import stat
import subprocess
import time
from collections.abc import Iterator
from datetime import datetime
from pathlib import Path
from shutil import which
from typing import override

from .exceptions import RequirementError, SysCallError
from .output import debug, logger


def locate_binary(name: str) -> str:
	if path := which(name):
		return path
	raise RequirementError(f'Binary {name} does not exist.')


def is_available(name: str) -> bool:
	return which(name) is not None


def timestamp(now: datetime, fmt: str = '%Y%m%d_%H%M%S') -> str:
	return now.strftime(fmt)


class SysCommand:
	"""
	Runs a command to completion and keeps its output around.

	Raises RequirementError when the binary cannot be found and SysCallError
	when it exits non-zero, unless ``check=False`` is given.
	With ``capture=False`` the output is discarded, for tools that fork
	into the background or open a window. Captured commands run with
	``LC_ALL=C`` unless ``pin_locale=False`` is given, as for pickers
	whose output is shown to the user first.
	"""

	def __init__(
		self,
		cmd: str | list[str],
		input_data: bytes | None = None,
		environment_vars: dict[str, str] | None = None,
		working_directory: str | Path | None = None,
		check: bool = True,
		capture: bool = True,
		pin_locale: bool | None = None,
	):
		if isinstance(cmd, str):
			cmd = shlex.split(cmd)
		else:
			cmd = list(cmd)

		if cmd and not cmd[0].startswith(('/', './')):  # Path() does not work well
			cmd[0] = locate_binary(cmd[0])

		self.cmd = cmd
		self.input_data = input_data
		# captured output is parsed, so the locale is pinned unless told otherwise
		if pin_locale is None:
			pin_locale = capture

		self.environment_vars = {'LC_ALL': 'C'} if pin_locale else {}
		if environment_vars:
			self.environment_vars.update(environment_vars)

		self.working_directory = working_directory
		self.check = check
		self.capture = capture

		self.exit_code: int | None = None
		self.started: float | None = None
		self.ended: float | None = None
		self._stdout = b''
		self._stderr = b''

		self.execute()

	def __iter__(self) -> Iterator[bytes]:
		for line in self._stdout.splitlines():
			if line.strip():
				yield line + b'\n'

	@override
	def __repr__(self) -> str:
		return self.decode('UTF-8', errors='backslashreplace') or ''

	def execute(self) -> None:
		_log_cmd(self.cmd)
		self.started = time.time()

		p = subprocess.run(
			self.cmd,
			input=self.input_data,
			stdout=subprocess.PIPE if self.capture else subprocess.DEVNULL,
			stderr=subprocess.PIPE if self.capture else subprocess.DEVNULL,
			cwd=self.working_directory,
			env={**os.environ, **self.environment_vars},
		)

		self.ended = time.time()
		self.exit_code = p.returncode
		self._stdout = p.stdout or b''
		self._stderr = p.stderr or b''

		if self._stderr:
			debug(f'STDERR {self._stderr.decode("utf-8", errors="backslashreplace").strip()}')

		if self.check and self.exit_code != 0:
			raise SysCallError(
				f'{self.cmd} exited with abnormal exit code [{self.exit_code}]: {self._stderr.decode(errors="backslashreplace")[-500:]}',
				self.exit_code,
				worker_log=self._stdout + self._stderr,
			)

	def decode(self, encoding: str = 'utf-8', errors: str = 'backslashreplace', strip: bool = True) -> str:
		val = self._stdout.decode(encoding, errors=errors)

		if strip:
			return val.strip()
		return val

	def output(self) -> bytes:
		return self._stdout

	def line_count(self) -> int:
		return sum(1 for _ in self)


def _log_cmd(cmd: list[str]) -> None:
	history_logfile = logger.directory / 'cmd_history.txt'

	change_perm = False
	if history_logfile.exists() is False:
		change_perm = True

	try:
		with history_logfile.open('a') as cmd_log:
			cmd_log.write(f'{time.time()} {cmd}\n')

		if change_perm:
			history_logfile.chmod(stat.S_IRUSR | stat.S_IWUSR | stat.S_IRGRP)
	except OSError:
		# the history is best effort, a missing or unwritable log folder is ignored
		pass
