"""Loading and refreshing the wordlist catalog (archive.json)."""

import logging
from pathlib import Path
from typing import Any

import orjson
import requests
from atomicwrites import atomic_write
from pydantic import TypeAdapter, ValidationError

from wordlistctl.domain.errors import (
    CatalogCorruptError,
    CatalogError,
    CatalogNotFoundError,
    TransferError,
)
from wordlistctl.domain.models import CatalogEntry

logger = logging.getLogger(__name__)

_ENTRIES = TypeAdapter(list[CatalogEntry])


def parse_catalog(content: bytes, source: str = "<catalog>") -> list[CatalogEntry]:
    """Parse catalog JSON bytes into entries, preserving catalog order.

    Raises:
        CatalogCorruptError: If the content is not a JSON list of entries
    """
    try:
        payload: Any = orjson.loads(content)
    except orjson.JSONDecodeError as e:
        raise CatalogCorruptError(f"Failed to parse catalog {source}: {e}") from e

    if not isinstance(payload, list):
        raise CatalogCorruptError(
            f"Catalog {source} must be a JSON list, got {type(payload).__name__}"
        )

    try:
        return _ENTRIES.validate_python(payload)
    except ValidationError as e:
        raise CatalogCorruptError(f"Invalid entry in catalog {source}: {e}") from e


def load_catalog(path: str | Path) -> list[CatalogEntry]:
    """Read the catalog file.

    Args:
        path: Path to archive.json

    Returns:
        Entries in catalog order

    Raises:
        CatalogNotFoundError: If the file does not exist
        CatalogCorruptError: If the file is not a valid catalog
        CatalogError: If the file cannot be read
    """
    path = Path(path)
    if not path.is_file():
        raise CatalogNotFoundError(f"Cannot find catalog {path}")

    try:
        content = path.read_bytes()
    except OSError as e:
        logger.error(f"Failed to read catalog {path}: {e}")
        raise CatalogError(f"Failed to read catalog {path}: {e}") from e

    entries = parse_catalog(content, str(path))
    logger.debug(f"Loaded {len(entries)} catalog entries from {path}")
    return entries


def update_catalog(url: str, path: str | Path, timeout: int = 30) -> list[CatalogEntry]:
    """Download a fresh catalog and replace the local copy atomically.

    The payload is validated before anything is written, so a failed update
    leaves the existing catalog untouched.

    Args:
        url: Catalog URL
        path: Destination for archive.json
        timeout: Request timeout in seconds

    Returns:
        The entries of the new catalog

    Raises:
        TransferError: On connection failure or non-success HTTP status
        CatalogCorruptError: If the downloaded payload is not a valid catalog
        CatalogError: If the catalog cannot be written
    """
    path = Path(path)

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise TransferError(f"Failed to download catalog from {url}: {e}") from e

    content = response.content
    entries = parse_catalog(content, url)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with atomic_write(path, mode="wb", overwrite=True) as f:
            f.write(content)
            if not content.endswith(b"\n"):
                f.write(b"\n")
    except OSError as e:
        logger.error(f"Failed to write catalog {path}: {e}")
        raise CatalogError(f"Failed to write catalog {path}: {e}") from e

    logger.info(f"Updated catalog {path} with {len(entries)} entries")
    return entries
