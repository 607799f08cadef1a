import pytest

from snowland.lib.exceptions import RequirementError, SysCallError
from snowland.lib.general import SysCommand


def test_SysCommand() -> None:
	assert SysCommand(['printf', 'a\\n\\nb\\n']).line_count() == 2
	assert SysCommand('echo snowland').decode() == 'snowland'

	with pytest.raises(RequirementError):
		SysCommand('nonexistingbinary-for-testing')

	with pytest.raises(SysCallError):
		SysCommand('ls --veryfaultyparameter')

	assert SysCommand('ls --veryfaultyparameter', check=False).exit_code != 0


def test_input_data() -> None:
	assert SysCommand(['cat'], input_data=b'piped').output() == b'piped'


def test_commands_are_logged(log_dir) -> None:  # type: ignore[no-untyped-def]
	log_dir.mkdir(parents=True, exist_ok=True)
	SysCommand('true')

	assert 'true' in (log_dir / 'cmd_history.txt').read_text()


def test_locale_pinning(monkeypatch: pytest.MonkeyPatch) -> None:
	monkeypatch.setenv('LC_ALL', 'en_US.UTF-8')
	show_locale = ['sh', '-c', 'printf %s "$LC_ALL"']

	assert SysCommand(show_locale).decode() == 'C'
	assert SysCommand(show_locale, pin_locale=False).decode() == 'en_US.UTF-8'
