from collections.abc import Callable

from snowland.lib.args import SnowlandConfig
from snowland.lib.assets import FontInstaller, gtk_theme_installer, icon_theme_installer
from snowland.lib.configs import backup_and_install_configs
from snowland.lib.dependencies import check_dependencies
from snowland.lib.general import is_available
from snowland.lib.models.state import InstallState, RunMode
from snowland.lib.output import heading, info, success
from snowland.lib.steps import Step, StepOutcome, run_steps
from snowland.lib.wallpaper import WallpaperInstaller


def build_steps(config: SnowlandConfig) -> list[Step]:
	fonts = FontInstaller(config)
	gtk = gtk_theme_installer(config)
	icons = icon_theme_installer(config)
	wallpaper = WallpaperInstaller(config)

	return [
		Step(
			'Configuration step',
			[f'  - {", ".join(config.config_items)} configs in ~/.config'],
			lambda: backup_and_install_configs(config),
			first_run_prompt='Install these configs now?',
			update_prompt='Reinstall these configs?',
			skip_message='Skipping config reinstall.',
			always_on_first_run=True,
		),
		Step(
			'Fonts step',
			fonts.describe(),
			fonts.install,
			first_run_prompt='Install these fonts now?',
			update_prompt='Reinstall these fonts?',
			skip_message='Skipping font installation.',
		),
		Step(
			'GTK theme step',
			gtk.describe(),
			gtk.install,
			first_run_prompt='Install this GTK theme now?',
			update_prompt='Reinstall this GTK theme?',
			skip_message='Skipping GTK theme installation.',
		),
		Step(
			'Icon theme step',
			icons.describe(),
			icons.install,
			first_run_prompt='Install this icon theme now?',
			update_prompt='Reinstall this icon theme?',
			skip_message='Skipping icon theme installation.',
		),
		Step(
			'Wallpaper step',
			wallpaper.describe(),
			wallpaper.install,
			first_run_prompt='Download and install this wallpaper now?',
			update_prompt='(Re)install this wallpaper?',
			skip_message='Skipping wallpaper installation.',
		),
	]


def print_banner(config: SnowlandConfig) -> None:
	print()
	heading('Snowland setup script')
	print('-' * 45)
	print()
	heading(' DISCLAIMER', fg='yellow')
	print('Use this installer at your own risk. This script will:')
	print('  - Move and replace configuration files in ~/.config/')
	print('  - Download and install themes and fonts')
	print('  - Modify your system configuration')
	print()
	print('All existing configurations will be backed up to:')
	print(f'  {config.backup_dir}/')
	print('before any changes are made. You can restore them if needed.')
	print()
	print('-' * 45)
	print()
	print('This script will:')
	print(f'  - Backup your existing {", ".join(config.config_items)} configs from ~/.config')
	print('  - Copy the versions from this folder into ~/.config')
	print('  - Optionally install SF Mono + Lucida fonts (user-wide)')
	print('  - Optionally install the OS-X Leopard GTK theme (user-wide)')
	print('  - Optionally install the Mac-OS-X Lion icon theme (user-wide)')
	print()
	print('Nothing is removed permanently: old configs are copied to a timestamped backup folder.')
	print()


def print_epilogue() -> None:
	print()
	success("You're good to go, log out and Snowland should be installed!")
	info('Remember to open lxappearance (or another theme selector) to apply the Snowland GTK and icon themes.')
	info('Also, adjust your hyprland and hyprpaper config to your display. Use hyprctl monitors to get the correct names and values')


def install(
	config: SnowlandConfig,
	read: Callable[[str], str] = input,
	available: Callable[[str], bool] = is_available,
	steps: list[Step] | None = None,
) -> StepOutcome:
	check_dependencies(available)

	print_banner(config)

	state = InstallState.load(config.state_file)
	mode = state.mode

	if mode == RunMode.FIRST_RUN:
		info('No previous Snowland installation detected. Running full setup.')
	else:
		info('Previous Snowland installation detected. You can choose what to reinstall.')

	outcome = run_steps(steps if steps is not None else build_steps(config), mode, read)

	state.record_run(config.now(), mode)

	print_epilogue()
	return outcome
