"""Layered extraction: one gzip layer, then one tar layer, then placement.

A downloaded file moves through ``RAW -> (gzip) -> DECOMPRESSED -> (tar) ->
UNPACKED``, or straight to placement when it is opaque. Each consumed layer
is deleted as soon as the next one exists.
"""

import gzip
import logging
import os
import shutil
import tarfile
import zlib
from pathlib import Path

from wordlistctl.domain.errors import DecodeError, LocalIOError, UnsafeArchivePathError
from wordlistctl.domain.models import ArchiveKind, ArchiveLayer, UnpackOutcome
from wordlistctl.domain.types import ExtractionProgressHook
from wordlistctl.operations.placement import discard, ensure_destination, place_file
from wordlistctl.operations.sniff import GZIP_MAGIC, classify_file

logger = logging.getLogger(__name__)

COPY_CHUNK_SIZE = 64 * 1024

# RFC 1952 header flags
_FEXTRA = 0x04
_FNAME = 0x08
_GZIP_HEADER_SIZE = 10
_MAX_GZIP_NAME = 4096

_MEMBER_TYPES = {
    tarfile.SYMTYPE: "symlink",
    tarfile.LNKTYPE: "hardlink",
    tarfile.CHRTYPE: "character device",
    tarfile.BLKTYPE: "block device",
    tarfile.FIFOTYPE: "fifo",
}


def read_gzip_name(path: Path) -> str | None:
    """Return the original file name stored in a gzip header, if any.

    Only the base name is returned; directory parts recorded by the
    compressor are dropped.
    """
    with open(path, "rb") as f:
        header = f.read(_GZIP_HEADER_SIZE)
        if len(header) < _GZIP_HEADER_SIZE or not header.startswith(GZIP_MAGIC):
            return None

        flags = header[3]
        if flags & _FEXTRA:
            extra_len = f.read(2)
            if len(extra_len) < 2:
                return None
            f.seek(int.from_bytes(extra_len, "little"), os.SEEK_CUR)

        if not flags & _FNAME:
            return None

        raw = bytearray()
        while len(raw) <= _MAX_GZIP_NAME:
            byte = f.read(1)
            if not byte:
                return None
            if byte == b"\x00":
                break
            raw += byte
        else:
            return None

    name = raw.decode("latin-1").replace("\\", "/").rsplit("/", 1)[-1]
    if name in ("", ".", ".."):
        return None
    return name


def derive_decompressed_name(name: str) -> str:
    """Name for decompressed output when the gzip header carries none."""
    lowered = name.lower()
    if lowered.endswith(".tgz"):
        return name[:-4] + ".tar"
    for suffix in (".gzip", ".gz"):
        if lowered.endswith(suffix) and len(name) > len(suffix):
            return name[: -len(suffix)]
    return f"{name}.out"


def gunzip(source: Path, workdir: Path) -> tuple[Path, str | None]:
    """Decompress a gzip file into workdir and delete the compressed source.

    Returns:
        Tuple of (decompressed_path, cleanup_warning)

    Raises:
        DecodeError: If the gzip stream is malformed or truncated
        LocalIOError: If reading or writing fails
    """
    try:
        name = read_gzip_name(source) or derive_decompressed_name(source.name)
    except OSError as e:
        raise LocalIOError(f"Cannot read {source}: {e}") from e

    target = workdir / name
    if target == source:
        target = workdir / f"{name}.out"

    logger.info(f"Decompressing {source.name} to {target.name}")

    try:
        with gzip.open(source, "rb") as compressed, open(target, "wb") as out:
            shutil.copyfileobj(compressed, out, COPY_CHUNK_SIZE)
    except (gzip.BadGzipFile, EOFError, zlib.error) as e:
        raise DecodeError(f"Malformed gzip stream in {source.name}: {e}") from e
    except OSError as e:
        raise LocalIOError(f"Failed to decompress {source.name}: {e}") from e

    return target, discard(source)


def _member_target(destination: Path, name: str, allow_unsafe_paths: bool) -> Path:
    """Map a tar member name to its path under destination."""
    target = Path(os.path.normpath(os.path.join(destination, name.lstrip("/"))))
    if allow_unsafe_paths:
        return target

    if os.path.isabs(name):
        raise UnsafeArchivePathError(f"Refusing to extract {name}: absolute path")

    root = destination.resolve()
    try:
        target.resolve().relative_to(root)
    except ValueError as exc:
        raise UnsafeArchivePathError(f"Refusing to extract {name}: outside {destination}") from exc
    return target


def _access_time(member: tarfile.TarInfo) -> float:
    """Recorded access time, falling back to the modification time."""
    value = member.pax_headers.get("atime")
    if value is not None:
        try:
            return float(value)
        except ValueError:
            pass
    return member.mtime


def _apply_attributes(target: Path, member: tarfile.TarInfo) -> None:
    os.chmod(target, member.mode & 0o777)
    os.utime(target, (_access_time(member), member.mtime))


def _write_member(tar: tarfile.TarFile, member: tarfile.TarInfo, target: Path) -> None:
    """Copy a regular member's content to target byte for byte."""
    target.parent.mkdir(parents=True, exist_ok=True)
    if target.is_symlink() or target.is_file():
        target.unlink()

    extracted = tar.extractfile(member)
    if extracted is None:
        raise DecodeError(f"Failed to read {member.name} from archive")

    with extracted, open(target, "wb") as dest:
        shutil.copyfileobj(extracted, dest, COPY_CHUNK_SIZE)


def untar(
    source: Path,
    destination: Path,
    allow_unsafe_paths: bool = False,
    progress_hook: ExtractionProgressHook | None = None,
) -> UnpackOutcome:
    """Walk a tar file and materialize directories and regular files.

    Other member types are skipped with a warning. Directory modes and
    times are applied after the walk, deepest first, so populating a
    directory does not disturb them.

    Args:
        source: Uncompressed tar file
        destination: Directory the archive's layout is reproduced under
        allow_unsafe_paths: Follow member paths that leave destination
        progress_hook: Optional callback(member_name, current, total)

    Returns:
        UnpackOutcome with placed paths and skipped member names

    Raises:
        DecodeError: If the tar stream is malformed
        UnsafeArchivePathError: If a member escapes destination
        LocalIOError: If writing to destination fails
    """
    ensure_destination(destination)
    outcome = UnpackOutcome()
    directories: list[tuple[Path, tarfile.TarInfo]] = []

    logger.info(f"Extracting {source.name} to {destination}")

    try:
        with tarfile.open(source, mode="r:") as tar:
            members = tar.getmembers()
            total = len(members)

            for count, member in enumerate(members, start=1):
                if progress_hook:
                    progress_hook(member.name, count, total)

                target = _member_target(destination, member.name, allow_unsafe_paths)

                if member.isdir():
                    target.mkdir(parents=True, exist_ok=True)
                    directories.append((target, member))
                    outcome.placed.append(target)
                elif member.isreg():
                    _write_member(tar, member, target)
                    _apply_attributes(target, member)
                    outcome.placed.append(target)
                else:
                    kind = _MEMBER_TYPES.get(member.type, f"type {member.type!r}")
                    logger.warning(f"Skipping {member.name}: unsupported {kind}")
                    outcome.skipped.append(member.name)

            for target, member in sorted(
                directories, key=lambda item: len(item[0].parts), reverse=True
            ):
                _apply_attributes(target, member)
    except tarfile.TarError as e:
        raise DecodeError(f"Malformed tar stream in {source.name}: {e}") from e
    except OSError as e:
        raise LocalIOError(f"Failed to extract {source.name}: {e}") from e

    logger.info(f"Extracted {len(outcome.placed)} entries, skipped {len(outcome.skipped)}")
    return outcome


def _sniff(path: Path) -> ArchiveLayer:
    try:
        return ArchiveLayer(path=path, kind=classify_file(path))
    except OSError as e:
        raise LocalIOError(f"Cannot read {path}: {e}") from e


def peel_layers(
    source: Path,
    destination: Path,
    workdir: Path,
    allow_unsafe_paths: bool = False,
    progress_hook: ExtractionProgressHook | None = None,
) -> UnpackOutcome:
    """Unwrap at most one gzip and one tar layer and place the result.

    Args:
        source: Downloaded file
        destination: Directory the payload is materialized in
        workdir: Private directory for intermediate files
        allow_unsafe_paths: Follow tar member paths that leave destination
        progress_hook: Optional callback(member_name, current, total)

    Returns:
        UnpackOutcome describing layers peeled and paths placed

    Raises:
        DecodeError: If a gzip or tar stream is malformed
        LocalIOError: If a local read, write or move fails
    """
    layers: list[ArchiveKind] = []
    warnings: list[str] = []

    current = _sniff(source)
    logger.debug(f"{source.name} sniffed as {current.kind.value}")

    if current.kind is ArchiveKind.GZIP:
        decompressed, warning = gunzip(current.path, workdir)
        layers.append(ArchiveKind.GZIP)
        if warning:
            warnings.append(warning)

        current = _sniff(decompressed)
        logger.debug(f"{decompressed.name} sniffed as {current.kind.value}")

    if current.kind is ArchiveKind.TAR:
        outcome = untar(current.path, destination, allow_unsafe_paths, progress_hook)
        layers.append(ArchiveKind.TAR)
        warning = discard(current.path)
        if warning:
            warnings.append(warning)

        outcome.layers = layers
        outcome.warnings = warnings + outcome.warnings
        return outcome

    # Opaque from the start, or a non-tar payload after one gzip layer
    placed = place_file(current.path, destination)
    return UnpackOutcome(layers=layers, placed=[placed], warnings=warnings)
