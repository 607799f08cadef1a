"""Snowland desktop installer - Hyprland dotfiles, themes, fonts and Waybar helpers."""

import traceback

from .lib.args import SnowlandConfig, SnowlandConfigHandler
from .lib.exceptions import InstallStepError, MissingDependencies
from .lib.output import debug, error, info, logger, success, warn
from .scripts import menu as _menu
from .scripts import updates as _updates
from .scripts.install import install


def main(argv: list[str] | None = None) -> int:
	"""
	Runs the interactive installer. Returns the process exit code.
	"""
	handler = SnowlandConfigHandler(argv)
	debug(f'Source directory: {handler.config.source_dir}')
	debug(f'State file: {handler.config.state_file}')

	try:
		install(handler.config)
	except MissingDependencies:
		return 1
	except InstallStepError as err:
		debug(''.join(traceback.format_exception(err.cause)))
		error(f'{err.step} failed: {err.cause}')
		error(f'Earlier steps were kept. See {logger.path} for details and rerun the installer.')
		return 1
	except KeyboardInterrupt:
		print()
		warn('Installation interrupted.')
		return 130

	return 0


def run_as_a_module() -> None:
	rc = 0

	try:
		rc = main()
	except Exception as exc:
		err = ''.join(traceback.format_exception(exc))
		error(err)

		warn(
			'Snowland experienced the above error. If you think this is a bug, please report it\n'
			f'and include the log file "{logger.path}".'
		)
		rc = 1

	exit(rc)


def run_updates() -> None:
	exit(_updates.main())


def run_menu() -> None:
	exit(_menu.main())


__all__ = [
	'SnowlandConfig',
	'debug',
	'error',
	'info',
	'install',
	'main',
	'run_as_a_module',
	'success',
	'warn',
]
