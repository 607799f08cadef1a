from .assets import FetchMethod, RemoteAsset
from .install import BackupRecord, InstallItem
from .state import InstallState, RunMode
from .waybar import WaybarStatus

__all__ = [
	'BackupRecord',
	'FetchMethod',
	'InstallItem',
	'InstallState',
	'RemoteAsset',
	'RunMode',
	'WaybarStatus',
]
