"""Error kinds raised by the catalog and the acquisition pipeline."""


class WordlistError(Exception):
    """Base class for every error wordlistctl reports."""

    kind = "error"


class NotFoundError(WordlistError):
    """Requested name or group is absent from the catalog."""

    kind = "not-found"


class PermissionDeniedError(WordlistError):
    """Destination directory is not writable."""

    kind = "permission-denied"


class TransferError(WordlistError):
    """Network or HTTP failure while fetching a resource."""

    kind = "transfer"


class DecodeError(WordlistError):
    """Malformed gzip or tar stream."""

    kind = "decode"


class UnsafeArchivePathError(DecodeError):
    """Tar member path is absolute or escapes the destination directory."""

    kind = "unsafe-path"


class LocalIOError(WordlistError):
    """Local file create, read, write or delete failure."""

    kind = "io"


class UsageError(WordlistError):
    """Invalid combination of selectors or an invalid search pattern."""

    kind = "usage"


class CatalogError(WordlistError):
    """The catalog could not be loaded."""

    kind = "catalog"


class CatalogNotFoundError(CatalogError):
    """The catalog file does not exist."""

    kind = "catalog-missing"


class CatalogCorruptError(CatalogError):
    """The catalog file is not a valid list of entries."""

    kind = "catalog-corrupt"


class DuplicateEntryError(CatalogError):
    """Two catalog entries share a name and the index rejects duplicates."""

    kind = "duplicate"
