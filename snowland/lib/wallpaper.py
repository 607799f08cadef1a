import re
from pathlib import Path

from .args import SnowlandConfig
from .assets import AssetInstaller, TargetFiles, extract_zip
from .exceptions import AssetError
from .general import timestamp
from .models.assets import RemoteAsset
from .networking import fetch_asset
from .output import info, success

WALLPAPER_ASSET = RemoteAsset('aurora', 'https://blog.greggant.com/media/2021-09-25-nature/aurora.zip')
WALLPAPER_FILE = 'Aurora.jpg'

_COMMENT = re.compile(r'^\s*#')
_AFTER_EQUALS = re.compile(r'=\s*([^,]+)$')
_AFTER_COMMA = re.compile(r',\s*(.+)$')


def parse_wallpaper_path(content: str, config: SnowlandConfig) -> Path | None:
	"""
	Returns the first path referenced by a hyprpaper config.

	``preload = ~/Pictures/wp.jpg`` yields the value after ``=``, while
	``wallpaper = DP-1,~/Pictures/wp.jpg`` yields the value after the comma.
	"""
	for line in content.splitlines():
		if _COMMENT.match(line):
			continue

		if match := _AFTER_EQUALS.search(line):
			path = match.group(1)
		elif match := _AFTER_COMMA.search(line):
			path = match.group(1)
		else:
			continue

		if path := path.strip():
			return config.expand_home(path)

	return None


def resolve_wallpaper_target(config: SnowlandConfig) -> Path:
	default = config.home / 'Pictures' / 'wp.jpg'

	for candidate in (
		config.config_root / 'hypr' / 'hyprpaper.conf',
		config.source_dir / 'hypr' / 'hyprpaper.conf',
	):
		if candidate.is_file():
			return parse_wallpaper_path(candidate.read_text(), config) or default

	return default


def wallpaper_backup_path(target: Path, stamp: str) -> Path:
	return target.with_name(f'{target.stem}_backup_{stamp}{target.suffix}')


def find_wallpaper(scratch: Path, name: str = WALLPAPER_FILE) -> Path | None:
	if (direct := scratch / name).is_file():
		return direct

	for path in sorted(scratch.rglob('*')):
		if path.is_file() and path.name.lower() == name.lower():
			return path

	return None


class WallpaperInstaller(AssetInstaller):
	kind = 'wallpaper'
	title = 'Snow Leopard Aurora wallpaper'

	def target_path(self) -> Path:
		return resolve_wallpaper_target(self._config)

	def target_dir(self) -> Path:
		return self.target_path().parent

	def describe(self) -> list[str]:
		return [f'  - Snow Leopard Aurora wallpaper ({WALLPAPER_FILE})']

	def backup_existing(self, target: Path, files: TargetFiles) -> Path | None:
		if not target.is_file():
			return None

		backup = wallpaper_backup_path(target, timestamp(self._config.now()))
		info(f'Backing up existing wallpaper to {backup}')
		files.copy_file(target, backup)
		return backup

	def _install(self, scratch: Path, target: Path, files: TargetFiles) -> Path:
		target_path = self.target_path()
		info(f'Target wallpaper path: {target_path}')

		files.mkdir(target)
		self.backup_existing(target_path, files)

		archive = fetch_asset(WALLPAPER_ASSET, scratch)
		extract_zip(archive, scratch)

		src = find_wallpaper(scratch)
		if src is None:
			raise AssetError(f'{WALLPAPER_FILE} not found in downloaded archive.')

		files.copy_file(src, target_path)

		success(f'Wallpaper installed at {target_path}')
		return target_path
