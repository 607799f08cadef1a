from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path

STATE_TIMESTAMP_FORMAT = '%Y-%m-%d %H:%M:%S'


class RunMode(Enum):
	FIRST_RUN = 'first_run'
	SUBSEQUENT_RUN = 'subsequent_run'

	@property
	def default_answer(self) -> bool:
		return self == RunMode.FIRST_RUN


@dataclass
class InstallState:
	"""
	The ``key=value`` marker file written at the end of every installer run.

	Only the presence of the file matters for control flow, the recorded
	timestamps are informational.
	"""
	path: Path
	first_install_at: str | None = None
	last_run_at: list[str] = field(default_factory=list)

	@property
	def mode(self) -> RunMode:
		if self.path.is_file():
			return RunMode.SUBSEQUENT_RUN
		return RunMode.FIRST_RUN

	@staticmethod
	def parse(path: Path, content: str) -> 'InstallState':
		state = InstallState(path)

		for line in content.splitlines():
			key, sep, value = line.partition('=')
			if not sep:
				continue

			match key.strip():
				case 'first_install_at':
					state.first_install_at = value.strip()
				case 'last_run_at':
					state.last_run_at.append(value.strip())

		return state

	@staticmethod
	def load(path: Path) -> 'InstallState':
		if not path.is_file():
			return InstallState(path)

		return InstallState.parse(path, path.read_text())

	def record_run(self, now: datetime, mode: RunMode) -> None:
		"""
		Creates the file for a run that started as the first one and appends
		a ``last_run_at`` line for every later run. ``mode`` is the mode
		captured when the run started, not the file's current presence.
		"""
		ts = now.strftime(STATE_TIMESTAMP_FORMAT)
		self.path.parent.mkdir(parents=True, exist_ok=True)

		if mode == RunMode.FIRST_RUN:
			self.first_install_at = ts
			self.last_run_at = [ts]
			self.path.write_text(f'first_install_at={ts}\nlast_run_at={ts}\n')
		else:
			self.last_run_at.append(ts)
			with self.path.open('a') as fh:
				fh.write(f'last_run_at={ts}\n')
