"""Placement of final payloads and cleanup of intermediate files."""

import logging
import os
import shutil
import tempfile
from pathlib import Path

from wordlistctl.domain.errors import LocalIOError, PermissionDeniedError

logger = logging.getLogger(__name__)

WORKDIR_PREFIX = "wordlistctl-"


def check_writable(path: Path) -> None:
    """Check that path can be written, or created if it does not exist yet.

    For a missing path the nearest existing ancestor must be a writable
    directory. Nothing is created.

    Raises:
        PermissionDeniedError: If the path cannot be written
    """
    candidate = path.absolute()
    while not candidate.exists() and candidate.parent != candidate:
        candidate = candidate.parent

    if not candidate.is_dir():
        raise PermissionDeniedError(f"{candidate} is not a directory")
    if not os.access(candidate, os.W_OK | os.X_OK):
        raise PermissionDeniedError(f"No write permission on {candidate}")


def ensure_destination(path: Path) -> Path:
    """Create the destination directory and any missing parents."""
    try:
        path.mkdir(mode=0o777, parents=True, exist_ok=True)
    except OSError as e:
        raise LocalIOError(f"Cannot create destination {path}: {e}") from e
    return path


def create_workdir(temp_dir: Path | None = None) -> Path:
    """Create a private temporary directory for one job."""
    try:
        return Path(tempfile.mkdtemp(prefix=WORKDIR_PREFIX, dir=temp_dir))
    except OSError as e:
        raise LocalIOError(f"Cannot create temporary directory: {e}") from e


def place_file(source: Path, destination: Path) -> Path:
    """Move a flat payload into destination, keeping its base name.

    An older copy with the same name is replaced.
    """
    ensure_destination(destination)
    target = destination / source.name
    try:
        if target.is_dir():
            raise LocalIOError(f"Cannot place {source.name}: {target} is a directory")
        shutil.move(str(source), str(target))
    except OSError as e:
        raise LocalIOError(f"Cannot move {source} to {target}: {e}") from e

    logger.debug(f"Placed {target}")
    return target


def discard(path: Path) -> str | None:
    """Delete a consumed intermediate file.

    Returns:
        A warning message if the file could not be deleted, else None
    """
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        message = f"Could not remove intermediate file {path}: {e}"
        logger.warning(message)
        return message
    return None


def remove_workdir(path: Path) -> str | None:
    """Remove a job's temporary directory and anything left inside it.

    Returns:
        A warning message if removal failed, else None
    """
    if not path.exists():
        return None

    try:
        shutil.rmtree(path)
    except OSError as e:
        message = f"Could not remove temporary directory {path}: {e}"
        logger.warning(message)
        return message
    return None
