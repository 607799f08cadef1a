import shutil
from pathlib import Path

from .args import SnowlandConfig
from .general import timestamp
from .models.install import BackupRecord, InstallItem
from .output import info, success, warn


def install_items(config: SnowlandConfig) -> list[InstallItem]:
	return [InstallItem.from_name(name, config.source_dir, config.config_root) for name in config.config_items]


def _copy(src: Path, dst: Path) -> None:
	if src.is_dir() and not src.is_symlink():
		shutil.copytree(src, dst, symlinks=True)
	else:
		shutil.copy2(src, dst, follow_symlinks=False)


def _remove(path: Path) -> None:
	if path.is_dir() and not path.is_symlink():
		shutil.rmtree(path)
	else:
		path.unlink()


def create_backup_root(config: SnowlandConfig) -> Path:
	"""
	One backup root per run, named after the run's start second. A second
	run within the same second gets a numeric suffix.
	"""
	base = config.backup_dir / f'config_{timestamp(config.now())}'
	root = base
	counter = 1

	while root.exists():
		root = base.with_name(f'{base.name}_{counter}')
		counter += 1

	root.mkdir(parents=True)
	return root


def backup_and_install_configs(config: SnowlandConfig) -> BackupRecord:
	info('Backing up existing configs and installing new ones...')

	record = BackupRecord(create_backup_root(config))

	for item in install_items(config):
		# a dangling symlink still counts as an existing destination
		if item.destination.exists() or item.destination.is_symlink():
			backup = record.path_for(item)
			info(f'Backing up existing {item.destination} to {backup}')
			_copy(item.destination, backup)
			record.items.append(item.name)

		if not item.source.is_dir():
			warn(f'Source directory {item.source} not found, skipping.')
			continue

		info(f'Installing {item.name} configuration to {item.destination}')
		item.destination.parent.mkdir(parents=True, exist_ok=True)

		if item.destination.exists() or item.destination.is_symlink():
			_remove(item.destination)

		shutil.copytree(item.source, item.destination, symlinks=True)

	success(f'Configuration files installed. Backup stored at: {record.root}')
	return record
