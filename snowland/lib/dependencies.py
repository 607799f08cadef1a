from collections.abc import Callable
from dataclasses import dataclass

from .exceptions import MissingDependencies
from .general import is_available
from .output import error, info, warn

REQUIRED_BINARIES = [
	'git',
	'fc-cache',
	'kitty',
	'nemo',
	'wofi',
	'waybar',
	'hyprpaper',
	'grim',
	'slurp',
	'wl-copy',
	'wpctl',
	'playerctl',
	'notify-send',
	'pavucontrol',
	'nm-connection-editor',
	'dunst',
]

# Packages without a binary of their own, only mentioned in the hints
REQUIRED_FONT_PACKAGES = ['ttf-font-awesome', 'ttf-jetbrains-mono-nerd']

# Not in the official repositories, reported with where to get it
AUR_BINARIES = {'wlogout': 'wlogout (Available in AUR)'}


@dataclass(frozen=True)
class AlternativeGroup:
	label: str
	tools: tuple[str, ...]

	def describe(self) -> str:
		pretty = ' or '.join(self.tools)
		if self.label and self.label != pretty:
			return f'{self.label} ({pretty})'
		return pretty

	def is_satisfied(self, available: Callable[[str], bool]) -> bool:
		return any(available(tool) for tool in self.tools)


ALTERNATIVE_GROUPS = [
	AlternativeGroup('bluetooth_manager', ('blueman-manager', 'blueberry')),
	AlternativeGroup('swayosd', ('swayosd-server',)),
]


def find_missing(
	required: list[str] = REQUIRED_BINARIES,
	groups: list[AlternativeGroup] = ALTERNATIVE_GROUPS,
	aur: dict[str, str] = AUR_BINARIES,
	available: Callable[[str], bool] = is_available,
) -> list[str]:
	missing = [cmd for cmd in required if not available(cmd)]

	for binary, description in aur.items():
		if not available(binary):
			missing.append(description)

	for group in groups:
		if not group.is_satisfied(available):
			missing.append(group.describe())

	return missing


def check_dependencies(available: Callable[[str], bool] = is_available) -> None:
	"""
	Raises MissingDependencies after reporting every unsatisfied requirement.
	Nothing on disk is touched before or during this check.
	"""
	info('Checking required tools...')

	missing = find_missing(available=available)
	if not missing:
		return

	error('Missing required dependencies:')
	for dep in missing:
		error(f'  - {dep}')

	warn("Note: 'wlogout' is an AUR package on Arch Linux (yay -S wlogout).")
	warn(f'Fonts required: {", ".join(REQUIRED_FONT_PACKAGES)}')
	error('Install the missing packages with your package manager (pacman/yay) and rerun the installer.')

	raise MissingDependencies(missing)
