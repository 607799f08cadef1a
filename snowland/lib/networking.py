import shutil
from pathlib import Path
from urllib.error import URLError
from urllib.request import Request, urlopen

from .exceptions import DownloadError, RequirementError, SysCallError
from .general import SysCommand
from .models.assets import FetchMethod, RemoteAsset
from .output import debug, info

USER_AGENT = 'Snowland'


def download_file(url: str, destination: Path, timeout: int = 60) -> Path:
	"""
	Streams ``url`` into ``destination``, following redirects.
	"""
	debug(f'Downloading {url} to {destination}')

	try:
		req = Request(url, headers={'User-Agent': USER_AGENT})
		with urlopen(req, timeout=timeout) as resp, destination.open('wb') as fh:
			shutil.copyfileobj(resp, fh)
	except (URLError, TimeoutError) as err:
		raise DownloadError(f'Unable to fetch data from url: {url}\n{err}') from err

	return destination


def git_clone(url: str, destination: Path) -> Path:
	debug(f'Cloning {url} into {destination}')

	try:
		SysCommand(['git', 'clone', '--depth', '1', url, str(destination)])
	except (SysCallError, RequirementError) as err:
		raise DownloadError(f'Unable to clone repository: {url}\n{err}') from err

	return destination


def fetch_asset(asset: RemoteAsset, scratch: Path) -> Path:
	destination = scratch / asset.filename

	match asset.method:
		case FetchMethod.GIT:
			info(f'Cloning {asset.name} repository...')
			return git_clone(asset.url, destination)
		case FetchMethod.ARCHIVE:
			info(f'Downloading {asset.name} archive...')
			return download_file(asset.url, destination)
