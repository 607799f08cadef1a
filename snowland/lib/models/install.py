from dataclasses import dataclass, field
from pathlib import Path
from typing import TypedDict


class BackupRecordSerialization(TypedDict):
	root: str
	items: list[str]


@dataclass(frozen=True)
class InstallItem:
	name: str
	source: Path
	destination: Path

	@staticmethod
	def from_name(name: str, source_dir: Path, config_root: Path) -> 'InstallItem':
		return InstallItem(name, source_dir / name, config_root / name)


@dataclass
class BackupRecord:
	root: Path
	items: list[str] = field(default_factory=list)

	def path_for(self, item: InstallItem) -> Path:
		return self.root / item.name

	def json(self) -> BackupRecordSerialization:
		return {
			'root': str(self.root),
			'items': self.items,
		}
