from datetime import datetime
from pathlib import Path

from pytest import MonkeyPatch

from snowland.lib.args import Arguments, SnowlandConfig
from snowland.lib.models.state import InstallState, RunMode


def test_missing_file_is_first_run(tmp_path: Path) -> None:
	state = InstallState.load(tmp_path / '.installed')

	assert state.mode == RunMode.FIRST_RUN
	assert state.mode.default_answer is True
	assert state.first_install_at is None


def test_first_run_creates_file(tmp_path: Path) -> None:
	path = tmp_path / 'snowland' / '.installed'
	state = InstallState.load(path)

	state.record_run(datetime(2024, 5, 1, 12, 0, 0), state.mode)

	assert path.read_text() == 'first_install_at=2024-05-01 12:00:00\nlast_run_at=2024-05-01 12:00:00\n'
	assert InstallState.load(path).mode == RunMode.SUBSEQUENT_RUN


def test_later_runs_append(tmp_path: Path) -> None:
	path = tmp_path / '.installed'
	path.write_text('first_install_at=2024-05-01 12:00:00\nlast_run_at=2024-05-01 12:00:00\n')

	state = InstallState.load(path)
	assert state.mode == RunMode.SUBSEQUENT_RUN
	assert state.mode.default_answer is False

	state.record_run(datetime(2024, 6, 1, 8, 30, 0), state.mode)

	reloaded = InstallState.load(path)
	assert reloaded.first_install_at == '2024-05-01 12:00:00'
	assert reloaded.last_run_at == ['2024-05-01 12:00:00', '2024-06-01 08:30:00']


def test_start_mode_wins_over_file_removed_mid_run(tmp_path: Path) -> None:
	path = tmp_path / '.installed'
	path.write_text('first_install_at=2024-05-01 12:00:00\nlast_run_at=2024-05-01 12:00:00\n')
	state = InstallState.load(path)
	mode = state.mode

	path.unlink()
	state.record_run(datetime(2024, 6, 1, 8, 30, 0), mode)

	assert path.read_text() == 'last_run_at=2024-06-01 08:30:00\n'
	assert state.first_install_at == '2024-05-01 12:00:00'


def test_parse_ignores_unknown_lines(tmp_path: Path) -> None:
	state = InstallState.parse(tmp_path / 'x', 'garbage\nfirst_install_at=a\nother=1\nlast_run_at=b\n')

	assert state.first_install_at == 'a'
	assert state.last_run_at == ['b']


def test_state_file_env_override(monkeypatch: MonkeyPatch, tmp_path: Path) -> None:
	monkeypatch.setenv('HOME', str(tmp_path))

	config = SnowlandConfig.from_arguments(
		Arguments(source_dir=tmp_path),
		environ={'INSTALL_STATE_FILE': str(tmp_path / 'custom' / 'state')},
	)
	assert config.state_file == tmp_path / 'custom' / 'state'

	default = SnowlandConfig.from_arguments(Arguments(source_dir=tmp_path), environ={})
	assert default.state_file == tmp_path / '.config' / 'snowland' / '.installed'
