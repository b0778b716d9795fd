"""Fetcher: stream a remote resource into a local file."""

import logging
from pathlib import Path, PurePosixPath
from urllib.parse import unquote, urlsplit

import httpx

from wordlistctl.domain.errors import LocalIOError, TransferError
from wordlistctl.domain.types import DownloadProgressHook

logger = logging.getLogger(__name__)


def download_filename(url: str, fallback: str) -> str:
    """Return the file name to download url into.

    Uses the last path segment of the URL, or ``<fallback>.tar.gz`` when
    the URL path has none.
    """
    name = PurePosixPath(unquote(urlsplit(url).path)).name
    if name in ("", ".", ".."):
        return f"{fallback}.tar.gz"
    return name


def download_file(
    url: str,
    dest: Path,
    client: httpx.Client | None = None,
    progress_hook: DownloadProgressHook | None = None,
    chunk_size: int = 64 * 1024,
    timeout: float | None = None,
) -> int:
    """Download a single file, writing chunks to disk as they arrive.

    The destination is created before the request is sent. On failure the
    partially written file is left in place for the caller to discard.

    Args:
        url: Resource to fetch
        dest: Local file to write
        client: Optional shared client; a private one is created otherwise
        progress_hook: Optional callback(downloaded, total)
        chunk_size: Bytes per read from the response body
        timeout: Seconds before giving up on the connection; None waits forever

    Returns:
        Number of bytes written

    Raises:
        TransferError: On an empty URL or a failed request
        LocalIOError: If the destination cannot be created or written
    """
    if not url:
        raise TransferError(f"No URL to download {dest.name} from")

    if client is None:
        with httpx.Client(follow_redirects=True, timeout=httpx.Timeout(timeout)) as own_client:
            return download_file(url, dest, own_client, progress_hook, chunk_size, timeout)

    try:
        out = dest.open("wb")
    except OSError as e:
        raise LocalIOError(f"Cannot create {dest}: {e}") from e

    downloaded = 0
    with out:
        try:
            with client.stream("GET", url) as resp:
                resp.raise_for_status()

                total = resp.headers.get("Content-Length")
                total_bytes: int | None = int(total) if total is not None else None

                if progress_hook:
                    progress_hook(downloaded, total_bytes)

                for chunk in resp.iter_bytes(chunk_size=chunk_size):
                    try:
                        out.write(chunk)
                    except OSError as e:
                        raise LocalIOError(f"Failed writing {dest}: {e}") from e
                    downloaded += len(chunk)
                    if progress_hook:
                        progress_hook(downloaded, total_bytes)
        except httpx.HTTPStatusError as e:
            raise TransferError(
                f"Server returned {e.response.status_code} for {url}"
            ) from e
        except httpx.HTTPError as e:
            raise TransferError(f"Failed to download {url}: {e}") from e

    logger.debug(f"Downloaded {downloaded} bytes from {url} to {dest}")
    return downloaded
