from dataclasses import dataclass
from enum import StrEnum, auto


class FetchMethod(StrEnum):
	ARCHIVE = auto()
	GIT = auto()


@dataclass(frozen=True)
class RemoteAsset:
	name: str
	url: str
	method: FetchMethod = FetchMethod.ARCHIVE

	@property
	def filename(self) -> str:
		if self.method == FetchMethod.ARCHIVE:
			return f'{self.name}.zip'
		return self.name
