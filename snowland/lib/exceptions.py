class RequirementError(Exception):
	pass


class SysCallError(Exception):
	def __init__(self, message: str, exit_code: int | None = None, worker_log: bytes = b'') -> None:
		super().__init__(message)
		self.message = message
		self.exit_code = exit_code
		self.worker_log = worker_log


class MissingDependencies(Exception):
	def __init__(self, missing: list[str]) -> None:
		super().__init__(f'Missing required dependencies: {", ".join(missing)}')
		self.missing = missing


class DownloadError(Exception):
	"""
	Raised when a remote archive or repository could not be fetched.
	"""


class AssetError(Exception):
	pass


class InstallStepError(Exception):
	def __init__(self, step: str, cause: Exception) -> None:
		super().__init__(f'{step} failed: {cause}')
		self.step = step
		self.cause = cause
