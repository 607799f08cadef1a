import stat
import zipfile
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from snowland.lib.args import SnowlandConfig
from snowland.lib.output import logger


class Clock:
	"""
	Deterministic replacement for datetime.now, one second per call.
	"""

	def __init__(self, start: datetime = datetime(2024, 1, 2, 3, 4, 5)) -> None:
		self.current = start

	def __call__(self) -> datetime:
		now = self.current
		self.current += timedelta(seconds=1)
		return now


@pytest.fixture(autouse=True)
def log_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
	directory = tmp_path / 'log'
	monkeypatch.setattr(logger, '_path', directory)
	monkeypatch.setattr(logger, 'verbose', False)
	monkeypatch.setattr(logger, 'enabled', True)
	return directory


@pytest.fixture
def home(tmp_path: Path) -> Path:
	path = tmp_path / 'home'
	path.mkdir()
	return path


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
	path = tmp_path / 'src'
	for name in ('hypr', 'kitty', 'waybar'):
		(path / name).mkdir(parents=True)
		(path / name / f'{name}.conf').write_text(f'# bundled {name}\n')
	return path


@pytest.fixture
def config(home: Path, source_dir: Path, tmp_path: Path) -> SnowlandConfig:
	config = SnowlandConfig.for_home(home, source_dir)
	config.scratch_root = tmp_path / 'scratch'
	config.now = Clock()
	return config


def _make_zip(path: Path, files: dict[str, bytes], links: dict[str, str] | None = None) -> Path:
	with zipfile.ZipFile(path, 'w') as zf:
		for name, data in files.items():
			zf.writestr(name, data)

		for name, target in (links or {}).items():
			entry = zipfile.ZipInfo(name)
			entry.external_attr = (stat.S_IFLNK | 0o777) << 16
			zf.writestr(entry, target)
	return path


@pytest.fixture
def make_zip():  # type: ignore[no-untyped-def]
	return _make_zip
