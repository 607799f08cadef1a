from pathlib import Path

import pytest
from pytest import MonkeyPatch

from snowland.lib import assets
from snowland.lib.args import SnowlandConfig
from snowland.lib.assets import FontInstaller, PrivilegedTargetFiles, gtk_theme_installer, icon_theme_installer
from snowland.lib.exceptions import AssetError, DownloadError, SysCallError
from snowland.lib.models.assets import RemoteAsset


def _leftovers(config: SnowlandConfig) -> list[Path]:
	assert config.scratch_root is not None
	return list(config.scratch_root.iterdir()) if config.scratch_root.exists() else []


@pytest.fixture
def serve_theme(monkeypatch: MonkeyPatch, make_zip):  # type: ignore[no-untyped-def]
	def serve(files: dict[str, bytes], links: dict[str, str] | None = None) -> None:
		def fetch(asset: RemoteAsset, scratch: Path) -> Path:
			return make_zip(scratch / asset.filename, files, links)

		monkeypatch.setattr(assets, 'fetch_asset', fetch)

	return serve


def test_gtk_theme_replaces_only_its_own_directory(config: SnowlandConfig, serve_theme) -> None:  # type: ignore[no-untyped-def]
	serve_theme({
		'OS-X-Leopard-1.2/gtk-3.0/gtk.css': b'window {}',
		'OS-X-Leopard-1.2/index.theme': b'[Desktop Entry]',
	})
	other = config.gtk_theme_dir / 'Adwaita-dark'
	other.mkdir(parents=True)
	stale = config.gtk_theme_dir / 'OS-X-Leopard-1.2' / 'stale.css'
	stale.parent.mkdir(parents=True)
	stale.write_text('old')

	installed = gtk_theme_installer(config).install()

	assert installed == config.gtk_theme_dir / 'OS-X-Leopard-1.2'
	assert (installed / 'gtk-3.0' / 'gtk.css').read_bytes() == b'window {}'
	assert not stale.exists()
	assert other.is_dir()
	assert _leftovers(config) == []


def test_icon_theme_is_renamed(config: SnowlandConfig, serve_theme) -> None:  # type: ignore[no-untyped-def]
	serve_theme({'Mac-OS-X-Lion-master/index.theme': b'[Icon Theme]'})

	installed = icon_theme_installer(config).install()

	assert installed == config.icon_theme_dir / 'Mac-OS-X-Lion'
	assert (installed / 'index.theme').exists()


def test_icon_aliases_stay_symlinks(config: SnowlandConfig, serve_theme) -> None:  # type: ignore[no-untyped-def]
	serve_theme(
		{'Mac-OS-X-Lion-master/apps/real.svg': b'<svg/>'},
		links={'Mac-OS-X-Lion-master/apps/alias.svg': 'real.svg'},
	)

	installed = icon_theme_installer(config).install()

	alias = installed / 'apps' / 'alias.svg'
	assert alias.is_symlink()
	assert alias.readlink() == Path('real.svg')
	assert alias.read_bytes() == b'<svg/>'


def test_link_outside_archive_root_is_refused(tmp_path: Path, make_zip) -> None:  # type: ignore[no-untyped-def]
	archive = make_zip(tmp_path / 'evil.zip', {}, links={'../escape': '/etc/passwd'})

	with pytest.raises(AssetError, match='outside of the archive root'):
		assets.extract_zip(archive, tmp_path / 'out')

	assert not (tmp_path / 'escape').is_symlink()


def test_missing_extracted_directory_fails_and_cleans_up(config: SnowlandConfig, serve_theme) -> None:  # type: ignore[no-untyped-def]
	serve_theme({'Something-Else/index.theme': b''})

	with pytest.raises(AssetError, match='OS-X-Leopard-1.2'):
		gtk_theme_installer(config).install()

	assert _leftovers(config) == []
	assert not (config.gtk_theme_dir / 'OS-X-Leopard-1.2').exists()


def test_download_failure_cleans_up(config: SnowlandConfig, monkeypatch: MonkeyPatch) -> None:
	def fetch(asset: RemoteAsset, scratch: Path) -> Path:
		(scratch / 'partial.zip').write_bytes(b'PK')
		raise DownloadError('connection reset')

	monkeypatch.setattr(assets, 'fetch_asset', fetch)

	with pytest.raises(DownloadError):
		icon_theme_installer(config).install()

	assert _leftovers(config) == []


def test_corrupt_archive(config: SnowlandConfig, monkeypatch: MonkeyPatch) -> None:
	def fetch(asset: RemoteAsset, scratch: Path) -> Path:
		path = scratch / asset.filename
		path.write_bytes(b'<html>rate limited</html>')
		return path

	monkeypatch.setattr(assets, 'fetch_asset', fetch)

	with pytest.raises(AssetError, match='not a valid zip archive'):
		gtk_theme_installer(config).install()


def test_fonts_copy_top_level_matches_only(config: SnowlandConfig, monkeypatch: MonkeyPatch) -> None:
	refreshed: list[Path] = []

	def clone(asset: RemoteAsset, scratch: Path) -> Path:
		checkout = scratch / asset.filename
		(checkout / 'nested').mkdir(parents=True)
		(checkout / 'README.md').write_text('fonts')
		(checkout / 'nested' / 'Deep.otf').write_text('deep')
		(checkout / f'{asset.name}-Regular.otf').write_text('otf')
		(checkout / f'{asset.name}-Regular.ttf').write_text('ttf')
		return checkout

	monkeypatch.setattr(assets, 'fetch_asset', clone)
	monkeypatch.setattr(assets.TargetFiles, 'refresh_font_cache', lambda self, path: refreshed.append(path))

	existing = config.font_dir / 'Other.ttf'
	existing.parent.mkdir(parents=True)
	existing.write_text('keep')

	FontInstaller(config).install()

	assert sorted(p.name for p in config.font_dir.iterdir()) == [
		'Other.ttf',
		'lucida-fonts-Regular.ttf',
		'sf-mono-Regular.otf',
	]
	assert refreshed == [config.font_dir]
	assert _leftovers(config) == []


def test_font_cache_failure_is_not_fatal(config: SnowlandConfig, monkeypatch: MonkeyPatch) -> None:
	def clone(asset: RemoteAsset, scratch: Path) -> Path:
		checkout = scratch / asset.filename
		checkout.mkdir()
		return checkout

	def refresh(self: object, path: Path) -> None:
		raise SysCallError('fc-cache exited with abnormal exit code [1]', 1)

	monkeypatch.setattr(assets, 'fetch_asset', clone)
	monkeypatch.setattr(assets.TargetFiles, 'refresh_font_cache', refresh)

	assert FontInstaller(config).install() == config.font_dir


def test_target_outside_home_without_escalation(config: SnowlandConfig, tmp_path: Path, serve_theme) -> None:  # type: ignore[no-untyped-def]
	serve_theme({'OS-X-Leopard-1.2/index.theme': b''})
	config.gtk_theme_dir = tmp_path / 'usr' / 'share' / 'themes'
	config.escalate_if_outside_home = False

	with pytest.raises(AssetError, match='privilege escalation is disabled'):
		gtk_theme_installer(config).install()


def test_target_outside_home_uses_sudo(config: SnowlandConfig, tmp_path: Path, monkeypatch: MonkeyPatch, serve_theme) -> None:  # type: ignore[no-untyped-def]
	serve_theme({'OS-X-Leopard-1.2/index.theme': b''})
	config.gtk_theme_dir = tmp_path / 'usr' / 'share' / 'themes'
	commands: list[list[str]] = []

	monkeypatch.setattr(assets, 'SysCommand', lambda cmd, **kwargs: commands.append(cmd))

	installer = gtk_theme_installer(config)
	assert isinstance(installer.files_for(config.gtk_theme_dir), PrivilegedTargetFiles)

	installer.install()

	target = str(config.gtk_theme_dir / 'OS-X-Leopard-1.2')
	assert [cmd[:2] for cmd in commands] == [['sudo', 'mkdir'], ['sudo', 'rm'], ['sudo', 'cp']]
	assert commands[1][-1] == target
	assert commands[2][-1] == target
	assert _leftovers(config) == []
