import logging
import os
import sys
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import TextIO


def _default_log_dir() -> Path:
	cache_home = os.environ.get('XDG_CACHE_HOME') or str(Path.home() / '.cache')
	return Path(cache_home) / 'snowland'


class Logger:
	def __init__(self, path: Path | None = None) -> None:
		self._path = path or _default_log_dir()
		self.verbose = False
		self.enabled = True

	@property
	def path(self) -> Path:
		return self._path / 'install.log'

	@property
	def directory(self) -> Path:
		return self._path

	def set_directory(self, path: Path) -> None:
		self._path = path

	@staticmethod
	def _prepare(directory: Path) -> None:
		log_file = directory / 'install.log'

		directory.mkdir(exist_ok=True, parents=True)
		log_file.touch(exist_ok=True)

		with log_file.open('a') as f:
			f.write('')

	def _check_permissions(self) -> bool:
		"""
		Makes sure the log file can be written, falling back to the current
		folder and then to no file at all. Notices go to stderr, stdout
		belongs to the Waybar helpers' payload.
		"""
		if not self.enabled:
			return False

		log_file = self.path

		try:
			self._prepare(self._path)
			return True
		except OSError as err:
			problem = err

		fallback = Path('./').absolute()

		try:
			self._prepare(fallback)
		except OSError:
			self.enabled = False
			_notice(f'Cannot write log file at {log_file} ({problem}), file logging is disabled')
			return False

		self._path = fallback
		_notice(f'Cannot write log file at {log_file} ({problem}), creating it in {self.path} instead')
		return True

	def log(self, level: int, content: str) -> None:
		if not self._check_permissions():
			return

		with self.path.open('a') as f:
			ts = _timestamp()
			level_name = logging.getLevelName(level)
			f.write(f'[{ts}] - {level_name} - {content}\n')


logger = Logger()


def _supports_color(stream: TextIO) -> bool:
	"""
	Return True if the stream is attached to a terminal that understands
	ANSI escape codes. NO_COLOR (https://no-color.org) always disables it.
	"""
	if 'NO_COLOR' in os.environ:
		return False

	return hasattr(stream, 'isatty') and stream.isatty()


class Font(Enum):
	bold = '1'
	italic = '3'
	underscore = '4'


def _stylize_output(
	text: str,
	fg: str,
	font: list[Font] = [],
) -> str:
	"""
	Heavily influenced by:
		https://github.com/django/django/blob/ae8338daf34fd746771e0678081999b656177bae/django/utils/termcolors.py#L13

	Adds styling to a text given a set of color arguments.
	"""
	colors = {
		'black': '0',
		'red': '1',
		'green': '2',
		'yellow': '3',
		'blue': '4',
		'magenta': '5',
		'cyan': '6',
		'white': '7',
	}

	code_list = [f'3{colors[fg]}']

	for o in font:
		code_list.append(o.value)

	ansi = ';'.join(code_list)

	return f'\033[{ansi}m{text}\033[0m'


def _timestamp() -> str:
	return datetime.now().strftime('%Y-%m-%d %H:%M:%S')


# Label printed in front of each level, padded so messages line up
_LABELS = {
	logging.DEBUG: ('[DEBUG]', 'cyan'),
	logging.INFO: ('[INFO] ', 'blue'),
	logging.WARNING: ('[WARN] ', 'yellow'),
	logging.ERROR: ('[ERR]  ', 'red'),
}

SUCCESS = 25
logging.addLevelName(SUCCESS, 'SUCCESS')
_LABELS[SUCCESS] = ('[OK]   ', 'green')


def label(text: str, fg: str, stream: TextIO | None = None) -> str:
	if _supports_color(stream or sys.stdout):
		return _stylize_output(text, fg, [Font.bold])
	return text


def info(*msgs: str, level: int = logging.INFO) -> None:
	log(*msgs, level=level)


def debug(*msgs: str, level: int = logging.DEBUG) -> None:
	log(*msgs, level=level)


def error(*msgs: str, level: int = logging.ERROR) -> None:
	log(*msgs, level=level)


def warn(*msgs: str, level: int = logging.WARNING) -> None:
	log(*msgs, level=level)


def success(*msgs: str, level: int = SUCCESS) -> None:
	log(*msgs, level=level)


def log(*msgs: str, level: int = logging.INFO) -> None:
	text = ' '.join([str(x) for x in msgs])

	logger.log(level, text)

	if level == logging.DEBUG and not logger.verbose:
		return

	stream = sys.stderr if level >= logging.ERROR else sys.stdout
	tag, fg = _LABELS.get(level, _LABELS[logging.INFO])

	print(f'{label(tag, fg, stream)} {text}', file=stream, flush=True)


def _notice(text: str) -> None:
	tag, fg = _LABELS[logging.WARNING]
	print(f'{label(tag, fg, sys.stderr)} {text}', file=sys.stderr, flush=True)


def heading(text: str, fg: str = 'cyan') -> None:
	"""
	Prints an unlabeled, bold line (banner titles and section names).
	"""
	logger.log(logging.INFO, text)

	if _supports_color(sys.stdout):
		text = _stylize_output(text, fg, [Font.bold])

	print(text, flush=True)


def prompt_label() -> str:
	return label('[?]    ', 'magenta')
