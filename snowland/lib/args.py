import argparse
import os
from argparse import ArgumentParser
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from importlib.metadata import version
from pathlib import Path

from pydantic.dataclasses import dataclass as p_dataclass

from snowland.lib.output import logger, warn

STATE_FILE_ENV = 'INSTALL_STATE_FILE'

CONFIG_ITEMS = ['hypr', 'kitty', 'waybar', 'wofi', 'dunst', 'fastfetch']


@p_dataclass
class Arguments:
	source_dir: Path = Path('.')
	debug: bool = False


@dataclass
class SnowlandConfig:
	home: Path
	source_dir: Path
	config_root: Path
	backup_dir: Path
	state_file: Path
	font_dir: Path
	gtk_theme_dir: Path
	icon_theme_dir: Path
	scratch_root: Path | None = None
	escalate_if_outside_home: bool = True
	config_items: list[str] = field(default_factory=lambda: list(CONFIG_ITEMS))
	now: Callable[[], datetime] = datetime.now

	@classmethod
	def for_home(cls, home: Path, source_dir: Path, state_file: Path | None = None) -> 'SnowlandConfig':
		return cls(
			home=home,
			source_dir=source_dir,
			config_root=home / '.config',
			backup_dir=home / 'snowland_backups',
			state_file=state_file or home / '.config' / 'snowland' / '.installed',
			font_dir=home / '.local' / 'share' / 'fonts',
			gtk_theme_dir=home / '.themes',
			icon_theme_dir=home / '.icons',
		)

	@classmethod
	def from_arguments(cls, args: Arguments, environ: Mapping[str, str] = os.environ) -> 'SnowlandConfig':
		state_file = None
		if override := environ.get(STATE_FILE_ENV):
			state_file = Path(override).expanduser()

		return cls.for_home(
			Path.home(),
			args.source_dir.expanduser().absolute(),
			state_file=state_file,
		)

	def is_inside_home(self, path: Path) -> bool:
		return path.absolute().is_relative_to(self.home.absolute())

	def expand_home(self, value: str) -> Path:
		if value == '~':
			return self.home
		if value.startswith('~/'):
			return self.home / value[2:]
		return Path(value)


class SnowlandConfigHandler:
	def __init__(self, argv: list[str] | None = None) -> None:
		self._parser: ArgumentParser = self._define_arguments()
		self._args = self._parse_args(argv)
		self._config = SnowlandConfig.from_arguments(self._args)

	@property
	def config(self) -> SnowlandConfig:
		return self._config

	@property
	def args(self) -> Arguments:
		return self._args

	def print_help(self) -> None:
		self._parser.print_help()

	def _get_version(self) -> str:
		try:
			return version('snowland')
		except Exception:
			return 'Snowland version not found'

	def _define_arguments(self) -> ArgumentParser:
		parser = ArgumentParser(prog='snowland-install', formatter_class=argparse.ArgumentDefaultsHelpFormatter)
		parser.add_argument(
			'-v',
			'--version',
			action='version',
			default=False,
			version='%(prog)s ' + self._get_version(),
		)
		parser.add_argument(
			'--source-dir',
			type=Path,
			default=Path('.'),
			help='Directory holding the bundled hypr, kitty, waybar, wofi, dunst and fastfetch configs',
		)
		parser.add_argument(
			'--debug',
			action='store_true',
			default=False,
			help='Also print debug messages to the terminal',
		)

		return parser

	def _parse_args(self, argv: list[str] | None) -> Arguments:
		argparse_args = vars(self._parser.parse_args(argv))
		argparse_args.pop('version', None)
		args: Arguments = Arguments(**argparse_args)

		if args.debug:
			logger.verbose = True

		if not args.source_dir.is_dir():
			warn(f'Source directory {args.source_dir} does not exist, bundled configs will be skipped')

		return args
