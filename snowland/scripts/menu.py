"""
The Waybar "goodies" menu: screenshots, launcher, audio, Bluetooth and the
power menu, picked through wofi.
"""

import argparse
import time
from argparse import ArgumentParser
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from snowland.lib.exceptions import SysCallError
from snowland.lib.general import SysCommand, is_available
from snowland.lib.output import debug
from snowland.lib.providers import Provider, first_available

MENU_FONT = 'JetBrainsMono Nerd Font'

BLUETOOTH_MANAGERS = [
	Provider('blueman', ('blueman-manager',)),
	Provider('blueberry', ('blueberry',)),
]

WOFI_ARGS = [
	'wofi',
	'--dmenu',
	'--allow-markup',
	'--cache-file', '/dev/null',
	'--prompt', 'Menu',
	'--width', '250',
	'--height', '320',
	'--location', 'top',
	'--x', '5',
	'--y', '30',
]


@dataclass
class MenuContext:
	home: Path
	# bundled configs, searched for a wofi style after the user's own
	source_dir: Path | None = None
	now: Callable[[], datetime] = datetime.now
	available: Callable[[str], bool] = is_available
	# lets wofi close before the screen is captured
	capture_delay: float = 0.2

	@property
	def screenshot_dir(self) -> Path:
		return self.home / 'Pictures' / 'Screenshots'

	def style_candidates(self) -> list[Path]:
		candidates = [
			self.home / '.config' / 'wofi' / 'style.css',
			self.home / '.config' / 'waybar' / 'wofi_style.css',
		]

		if self.source_dir is not None:
			candidates += [
				self.source_dir / 'waybar' / 'wofi_style.css',
				self.source_dir / 'wofi' / 'style.css',
			]

		return candidates

	def wofi_style(self) -> Path | None:
		for candidate in self.style_candidates():
			if candidate.is_file():
				return candidate
		return None

	def screenshot_path(self) -> Path:
		return self.screenshot_dir / f'Screenshot_{self.now().strftime("%Y-%m-%d_%H-%M-%S")}.png'


def notify(ctx: MenuContext, title: str, body: str) -> None:
	if not ctx.available('notify-send'):
		debug(f'notify-send missing, dropped notification: {title}: {body}')
		return

	SysCommand(['notify-send', title, body], check=False, capture=False)


def _take_screenshot(ctx: MenuContext, region: bool) -> Path | None:
	time.sleep(ctx.capture_delay)

	grim = ['grim']
	if region:
		try:
			geometry = SysCommand(['slurp']).decode()
		except SysCallError:
			debug('Region selection cancelled')
			return None
		grim += ['-g', geometry]

	try:
		image = SysCommand([*grim, '-']).output()
	except SysCallError as err:
		debug(f'Screen capture failed: {err}')
		return None

	path = ctx.screenshot_path()
	path.write_bytes(image)
	SysCommand(['wl-copy'], input_data=image, capture=False)

	return path


def screenshot_region(ctx: MenuContext) -> None:
	if path := _take_screenshot(ctx, region=True):
		notify(ctx, 'Screenshot', f'Region saved to {path} and clipboard')


def screenshot_full(ctx: MenuContext) -> None:
	if path := _take_screenshot(ctx, region=False):
		notify(ctx, 'Screenshot', f'Fullscreen saved to {path} and clipboard')


def run_command(ctx: MenuContext) -> None:
	SysCommand(['wofi', '--show', 'drun'], check=False, capture=False)


def audio_settings(ctx: MenuContext) -> None:
	SysCommand(['pavucontrol'], check=False, capture=False)


def bluetooth(ctx: MenuContext) -> None:
	if manager := first_available(BLUETOOTH_MANAGERS, ctx.available):
		manager.perform()
	else:
		notify(ctx, 'Error', "No bluetooth manager found. Install 'blueman'.")


def power_menu(ctx: MenuContext) -> None:
	SysCommand(['wlogout'], check=False, capture=False)


@dataclass(frozen=True)
class MenuEntry:
	icon: str
	label: str
	action: Callable[[MenuContext], None] = field(compare=False)

	def markup(self) -> str:
		return f"<span font_family='{MENU_FONT}'>{self.icon}</span>   {self.label}"

	def matches(self, selected: str) -> bool:
		# wofi echoes the markup back, only the label part is reliable
		return selected.rstrip('\n').endswith(f'  {self.label}')


MENU_ENTRIES = [
	MenuEntry('\uf030', 'Screenshot Region', screenshot_region),
	MenuEntry('\uf108', 'Screenshot Full', screenshot_full),
	MenuEntry('\uf120', 'Run Command', run_command),
	MenuEntry('\uf028', 'Audio Settings', audio_settings),
	MenuEntry('\uf293', 'Bluetooth', bluetooth),
	MenuEntry('\uf011', 'Power Menu', power_menu),
]


def pick(ctx: MenuContext, entries: list[MenuEntry] = MENU_ENTRIES) -> str:
	argv = list(WOFI_ARGS)
	if style := ctx.wofi_style():
		argv += ['--style', str(style)]

	listing = '\n'.join(entry.markup() for entry in entries).encode()
	# a dismissed picker exits non-zero with empty output
	return SysCommand(argv, input_data=listing, check=False, pin_locale=False).decode()


def dispatch(ctx: MenuContext, selected: str, entries: list[MenuEntry] = MENU_ENTRIES) -> MenuEntry | None:
	if not selected.strip():
		return None

	for entry in entries:
		if entry.matches(selected):
			debug(f'Menu selection: {entry.label}')
			entry.action(ctx)
			return entry

	debug(f'Unmatched menu selection: {selected!r}')
	return None


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
	parser = ArgumentParser(prog='snowland-menu', description='Snowland Waybar menu')
	parser.add_argument(
		'--source-dir',
		type=Path,
		default=None,
		help='Bundled Snowland configs, searched for a wofi style when ~/.config has none',
	)
	return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
	args = _parse_args(argv)
	ctx = MenuContext(home=Path.home(), source_dir=args.source_dir)

	if not ctx.available('wl-copy'):
		notify(ctx, 'Error', 'wl-clipboard is missing. Install it with: sudo pacman -S wl-clipboard')
		return 1

	ctx.screenshot_dir.mkdir(parents=True, exist_ok=True)

	dispatch(ctx, pick(ctx))
	return 0
