"""
Pending update counter for a Waybar ``custom`` module.

Prints a single JSON line and always exits 0 so the bar keeps rendering::

	"custom/updates": {
		"exec": "snowland-updates",
		"return-type": "json",
		"interval": 3600
	}
"""

from collections.abc import Callable

from snowland.lib.general import SysCommand, is_available
from snowland.lib.models.waybar import WaybarStatus
from snowland.lib.output import debug
from snowland.lib.providers import Provider, first_available

PRIMARY = Provider('pacman-contrib', ('checkupdates',))

# AUR helpers, the first one installed is asked
SECONDARY = [
	Provider('yay', ('yay', '-Qua')),
	Provider('paru', ('paru', '-Qua')),
]


def count_pending(argv: tuple[str, ...]) -> int:
	"""
	Counts the non-empty lines a tool prints. checkupdates exits 2 when
	there is nothing to do, so the exit code is not checked.
	"""
	cmd = SysCommand(list(argv), check=False)
	debug(f'{argv[0]} exited with {cmd.exit_code}')
	return cmd.line_count()


def update_status(available: Callable[[str], bool] = is_available) -> WaybarStatus:
	if not available(PRIMARY.binary):
		debug(f'{PRIMARY.binary} not found')
		return WaybarStatus(text='Err', tooltip=f'{PRIMARY.name} not installed')

	official = count_pending(PRIMARY.argv)

	aur = 0
	if helper := first_available(SECONDARY, available):
		aur = count_pending(helper.argv)

	total = official + aur
	debug(f'Pending updates: official={official} aur={aur}')

	if total > 0:
		return WaybarStatus(
			text=str(total),
			tooltip=f'Official: {official}\nAUR: {aur}',
			class_='updates',
		)

	return WaybarStatus(text='', tooltip='Up to date', class_='none')


def main() -> int:
	print(update_status().render(), flush=True)
	return 0
