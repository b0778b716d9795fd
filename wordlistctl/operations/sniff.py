"""Format sniffing by magic number, never by file name."""

from pathlib import Path

from wordlistctl.domain.models import ArchiveKind

GZIP_MAGIC = b"\x1f\x8b"
TAR_MAGIC = b"ustar"  # "ustar\x0000" (POSIX) and "ustar  \x00" (GNU)
TAR_MAGIC_OFFSET = 257
TAR_BLOCK_SIZE = 512
SNIFF_LENGTH = TAR_BLOCK_SIZE

_CHKSUM_START = 148
_CHKSUM_END = 156


def _is_v7_tar_header(block: bytes) -> bool:
    """Check a pre-POSIX tar header by its name field and checksum."""
    if len(block) < TAR_BLOCK_SIZE or block[0] == 0:
        return False

    field = block[_CHKSUM_START:_CHKSUM_END].replace(b"\x00", b" ").strip()
    if not field:
        return False
    try:
        recorded = int(field, 8)
    except ValueError:
        return False

    # The checksum is computed with its own field filled with spaces
    computed = (
        sum(block[:_CHKSUM_START])
        + ord(" ") * (_CHKSUM_END - _CHKSUM_START)
        + sum(block[_CHKSUM_END:TAR_BLOCK_SIZE])
    )
    return recorded == computed


def classify(data: bytes) -> ArchiveKind:
    """Classify content from its leading bytes."""
    if data.startswith(GZIP_MAGIC):
        return ArchiveKind.GZIP
    if data[TAR_MAGIC_OFFSET : TAR_MAGIC_OFFSET + len(TAR_MAGIC)] == TAR_MAGIC:
        return ArchiveKind.TAR
    if _is_v7_tar_header(data[:TAR_BLOCK_SIZE]):
        return ArchiveKind.TAR
    return ArchiveKind.OPAQUE


def classify_file(path: Path) -> ArchiveKind:
    """Classify a file by reading its first block."""
    with open(path, "rb") as f:
        return classify(f.read(SNIFF_LENGTH))
