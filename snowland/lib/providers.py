from collections.abc import Callable, Sequence
from dataclasses import dataclass

from .general import SysCommand, is_available
from .output import debug


@dataclass(frozen=True)
class Provider:
	"""
	One external tool able to perform an action, e.g. a Bluetooth manager.
	"""
	name: str
	argv: tuple[str, ...]

	@property
	def binary(self) -> str:
		return self.argv[0]

	def perform(self) -> SysCommand:
		return SysCommand(list(self.argv), check=False, capture=False)


def first_available(
	providers: Sequence[Provider],
	available: Callable[[str], bool] = is_available,
) -> Provider | None:
	for provider in providers:
		if available(provider.binary):
			debug(f'Using {provider.name} ({provider.binary})')
			return provider

	return None
