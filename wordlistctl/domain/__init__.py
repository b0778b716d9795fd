"""Domain models and business logic."""

from wordlistctl.domain.errors import (
    CatalogCorruptError,
    CatalogError,
    CatalogNotFoundError,
    DecodeError,
    DuplicateEntryError,
    LocalIOError,
    NotFoundError,
    PermissionDeniedError,
    TransferError,
    UnsafeArchivePathError,
    UsageError,
    WordlistError,
)
from wordlistctl.domain.models import (
    ArchiveKind,
    ArchiveLayer,
    CatalogEntry,
    DestinationLayout,
    DuplicatePolicy,
    FetchJob,
    FetchResult,
    UnpackOutcome,
)
from wordlistctl.domain.services import CatalogIndex
from wordlistctl.domain.types import DownloadProgressHook, ExtractionProgressHook

__all__ = [
    "ArchiveKind",
    "ArchiveLayer",
    "CatalogEntry",
    "CatalogIndex",
    "DestinationLayout",
    "DuplicatePolicy",
    "FetchJob",
    "FetchResult",
    "UnpackOutcome",
    "DownloadProgressHook",
    "ExtractionProgressHook",
    # Errors
    "WordlistError",
    "NotFoundError",
    "PermissionDeniedError",
    "TransferError",
    "DecodeError",
    "UnsafeArchivePathError",
    "LocalIOError",
    "UsageError",
    "CatalogError",
    "CatalogNotFoundError",
    "CatalogCorruptError",
    "DuplicateEntryError",
]
