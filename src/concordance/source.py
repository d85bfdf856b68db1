"""Obtaining document text from local files or HTTP(S) URLs."""

import hashlib
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlparse

import requests

# Cache directory name for downloaded documents
URL_CACHE_DIR_NAME = ".concordance-cache"

# Default timeout for HTTP requests (in seconds)
DEFAULT_TIMEOUT = 30

DEFAULT_HEADERS = {
    "User-Agent": "concordance/1.0 (text concordance builder)",
}


class SourceError(RuntimeError):
    """Raised when document text cannot be obtained."""


def is_url(path: str) -> bool:
    """Check if a path is an HTTP/HTTPS URL."""
    return path.startswith("http://") or path.startswith("https://")


def get_url_filename(url: str) -> str:
    """Extract filename from URL, or 'download' if there is none."""
    path = urlparse(url).path.rstrip("/")
    if path:
        return Path(path).name
    return "download"


def get_cache_path(url: str, cache_dir: Path) -> Path:
    """Get deterministic cache path for a URL.

    Args:
        url: The URL to cache.
        cache_dir: Directory to store cached files.

    Returns:
        ``cache_dir / "<hash>_<filename>"``.
    """
    url_hash = hashlib.sha256(url.encode()).hexdigest()[:16]
    return cache_dir / f"{url_hash}_{get_url_filename(url)}"


@dataclass
class FetchResult:
    """Result of downloading and caching a document."""

    success: bool
    local_path: Path | None
    error: str | None = None
    from_cache: bool = False


def download_url(
    url: str,
    cache_dir: Path,
    timeout: int = DEFAULT_TIMEOUT,
    force: bool = False,
) -> FetchResult:
    """Download a URL and cache it locally.

    Args:
        url: The URL to download.
        cache_dir: Directory to store cached files.
        timeout: Request timeout in seconds.
        force: If True, re-download even if cached.

    Returns:
        FetchResult with success status and local path.
    """
    cache_path = get_cache_path(url, cache_dir)

    if not force and cache_path.exists():
        return FetchResult(success=True, local_path=cache_path, from_cache=True)

    cache_dir.mkdir(parents=True, exist_ok=True)

    # Only a finished download may appear under cache_path
    part_path = cache_path.with_name(cache_path.name + ".part")
    try:
        response = requests.get(url, timeout=timeout, stream=True, headers=DEFAULT_HEADERS)
        response.raise_for_status()
        with open(part_path, "wb") as f:
            for chunk in response.iter_content(chunk_size=8192):
                f.write(chunk)
    except requests.RequestException as e:
        part_path.unlink(missing_ok=True)
        return FetchResult(success=False, local_path=None, error=str(e))

    part_path.replace(cache_path)
    return FetchResult(success=True, local_path=cache_path)


def resolve_source(source: str, cache_dir: Path | None = None) -> Path:
    """Return a local path for ``source``, downloading it first if it is a URL.

    Raises:
        SourceError: If a URL download fails.
    """
    if not is_url(source):
        return Path(source).expanduser()

    cache_dir = cache_dir or Path.cwd() / URL_CACHE_DIR_NAME
    result = download_url(source, cache_dir)
    if not result.success or result.local_path is None:
        raise SourceError(f"Failed to download {source}: {result.error}")
    return result.local_path


def read_text(source: str, cache_dir: Path | None = None, encoding: str = "utf-8") -> str:
    """Read the full text of a document.

    Local read errors (``OSError``, ``UnicodeDecodeError``) propagate.
    """
    path = resolve_source(source, cache_dir)
    with open(path, encoding=encoding) as f:
        return f.read()
