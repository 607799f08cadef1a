import shutil
import stat
import zipfile
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from tempfile import TemporaryDirectory

from .args import SnowlandConfig
from .exceptions import AssetError, RequirementError, SysCallError
from .general import SysCommand
from .models.assets import FetchMethod, RemoteAsset
from .networking import fetch_asset
from .output import debug, info, success, warn


class TargetFiles:
	"""
	File operations on an install target owned by the current user.
	"""

	def mkdir(self, path: Path) -> None:
		path.mkdir(parents=True, exist_ok=True)

	def remove(self, path: Path) -> None:
		if path.is_dir() and not path.is_symlink():
			shutil.rmtree(path)
		elif path.exists() or path.is_symlink():
			path.unlink()

	def copy_file(self, src: Path, destination: Path) -> None:
		shutil.copy2(src, destination)

	def copy_tree(self, src: Path, dst: Path) -> None:
		shutil.copytree(src, dst, symlinks=True)

	def refresh_font_cache(self, path: Path) -> None:
		SysCommand(['fc-cache', '-f', str(path)])


class PrivilegedTargetFiles(TargetFiles):
	"""
	The same operations routed through sudo, for targets outside $HOME.
	"""

	def mkdir(self, path: Path) -> None:
		SysCommand(['sudo', 'mkdir', '-p', str(path)])

	def remove(self, path: Path) -> None:
		SysCommand(['sudo', 'rm', '-rf', str(path)])

	def copy_file(self, src: Path, destination: Path) -> None:
		SysCommand(['sudo', 'cp', str(src), str(destination)])

	def copy_tree(self, src: Path, dst: Path) -> None:
		SysCommand(['sudo', 'cp', '-r', str(src), str(dst)])

	def refresh_font_cache(self, path: Path) -> None:
		SysCommand(['sudo', 'fc-cache', '-f', str(path)])


def extract_zip(archive: Path, destination: Path) -> None:
	"""
	Extracts an archive, recreating symlink entries as links instead of the
	small text files ``extractall`` writes for them.
	"""
	info(f'Extracting {archive.name}...')

	try:
		with zipfile.ZipFile(archive) as zf:
			for member in zf.infolist():
				if stat.S_ISLNK(member.external_attr >> 16):
					_extract_symlink(zf, member, destination)
				else:
					zf.extract(member, destination)
	except zipfile.BadZipFile as err:
		raise AssetError(f'{archive.name} is not a valid zip archive: {err}') from err


def _extract_symlink(zf: zipfile.ZipFile, member: zipfile.ZipInfo, destination: Path) -> None:
	name = Path(member.filename)
	if name.is_absolute() or '..' in name.parts:
		raise AssetError(f'Refusing to extract link outside of the archive root: {member.filename}')

	link = destination / name
	link.parent.mkdir(parents=True, exist_ok=True)
	if link.is_symlink() or link.exists():
		link.unlink()

	link.symlink_to(zf.read(member).decode())


class AssetInstaller:
	kind = 'asset'
	title = ''

	def __init__(self, config: SnowlandConfig) -> None:
		self._config = config

	def target_dir(self) -> Path:
		raise NotImplementedError()

	def describe(self) -> list[str]:
		return []

	def files_for(self, target: Path) -> TargetFiles:
		if self._config.is_inside_home(target):
			return TargetFiles()

		if not self._config.escalate_if_outside_home:
			raise AssetError(f'{target} is outside the home directory and privilege escalation is disabled')

		info(f'{target} is outside the home directory, using sudo')
		return PrivilegedTargetFiles()

	@contextmanager
	def scratch(self) -> Iterator[Path]:
		"""
		A private working directory, removed however the block is left.
		"""
		if self._config.scratch_root is not None:
			self._config.scratch_root.mkdir(parents=True, exist_ok=True)

		with TemporaryDirectory(prefix=f'snowland-{self.kind}-', dir=self._config.scratch_root) as tmp:
			debug(f'Using scratch directory {tmp}')
			yield Path(tmp)

	def install(self) -> Path:
		info(f'Installing {self.title}...')

		target = self.target_dir()
		info(f'Using {self.kind} directory: {target}')
		files = self.files_for(target)

		with self.scratch() as scratch:
			return self._install(scratch, target, files)

	def _install(self, scratch: Path, target: Path, files: TargetFiles) -> Path:
		raise NotImplementedError()


@dataclass(frozen=True)
class FontSet:
	asset: RemoteAsset
	pattern: str


FONT_SETS = [
	FontSet(RemoteAsset('sf-mono', 'https://github.com/supercomputra/SF-Mono-Font.git', FetchMethod.GIT), '*.otf'),
	FontSet(RemoteAsset('lucida-fonts', 'https://github.com/witt-bit/lucida-fonts.git', FetchMethod.GIT), '*.ttf'),
]


class FontInstaller(AssetInstaller):
	kind = 'fonts'
	title = 'fonts (SF Mono + Lucida)'

	def __init__(self, config: SnowlandConfig, font_sets: list[FontSet] = FONT_SETS) -> None:
		super().__init__(config)
		self._font_sets = font_sets

	def target_dir(self) -> Path:
		return self._config.font_dir

	def describe(self) -> list[str]:
		return [
			'  - SF Mono (from https://github.com/supercomputra/SF-Mono-Font)',
			'  - Lucida TTFs (from https://github.com/witt-bit/lucida-fonts)',
		]

	def _install(self, scratch: Path, target: Path, files: TargetFiles) -> Path:
		files.mkdir(target)

		for font_set in self._font_sets:
			checkout = fetch_asset(font_set.asset, scratch)

			fonts = sorted(p for p in checkout.glob(font_set.pattern) if p.is_file())
			if not fonts:
				warn(f'No {font_set.pattern} files found in {font_set.asset.name}')
				continue

			info(f'Installing {len(fonts)} {font_set.pattern} files from {font_set.asset.name}...')
			for font in fonts:
				files.copy_file(font, target)

		info('Refreshing font cache...')
		try:
			files.refresh_font_cache(target)
		except (SysCallError, RequirementError) as err:
			warn(f'Could not refresh the font cache: {err}')

		success(f'Fonts installed in {target}')
		return target


class ThemeInstaller(AssetInstaller):
	"""
	Downloads a zip archive, picks one top-level directory out of it and
	replaces the same-named theme in the target. Other themes are left alone.
	"""

	def __init__(
		self,
		config: SnowlandConfig,
		kind: str,
		title: str,
		asset: RemoteAsset,
		extracted_dir: str,
		installed_name: str,
		target: Path,
		description: list[str],
	) -> None:
		super().__init__(config)
		self.kind = kind
		self.title = title
		self._asset = asset
		self._extracted_dir = extracted_dir
		self._installed_name = installed_name
		self._target = target
		self._description = description

	def target_dir(self) -> Path:
		return self._target

	def describe(self) -> list[str]:
		return self._description

	def _install(self, scratch: Path, target: Path, files: TargetFiles) -> Path:
		archive = fetch_asset(self._asset, scratch)
		extract_zip(archive, scratch)

		src_dir = scratch / self._extracted_dir
		if not src_dir.is_dir():
			raise AssetError(f'Expected directory {self._extracted_dir} not found after extracting {self._asset.url}')

		installed = target / self._installed_name

		files.mkdir(target)
		files.remove(installed)
		files.copy_tree(src_dir, installed)

		success(f'{self.title} installed in {installed}')
		return installed


def gtk_theme_installer(config: SnowlandConfig) -> ThemeInstaller:
	return ThemeInstaller(
		config,
		kind='gtk',
		title='OS-X Leopard GTK theme',
		asset=RemoteAsset('osx-leopard-theme', 'https://github.com/B00merang-Project/OS-X-Leopard/archive/refs/tags/1.2.zip'),
		extracted_dir='OS-X-Leopard-1.2',
		installed_name='OS-X-Leopard-1.2',
		target=config.gtk_theme_dir,
		description=['  - Theme: OS-X Leopard (from B00merang-Project, tag 1.2)'],
	)


def icon_theme_installer(config: SnowlandConfig) -> ThemeInstaller:
	# master has no tag, the extracted content follows upstream
	return ThemeInstaller(
		config,
		kind='icons',
		title='Mac-OS-X Lion icon theme',
		asset=RemoteAsset('mac-osx-lion-icons', 'https://github.com/B00merang-Artwork/Mac-OS-X-Lion/archive/master.zip'),
		extracted_dir='Mac-OS-X-Lion-master',
		installed_name='Mac-OS-X-Lion',
		target=config.icon_theme_dir,
		description=['  - Theme: Mac-OS-X Lion icons (from B00merang-Artwork master branch)'],
	)
