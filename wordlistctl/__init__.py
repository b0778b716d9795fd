"""wordlistctl SDK.

A Python library for fetching, installing and searching wordlist archives
described by a JSON catalog.

Quick Start (High-Level API):
    >>> from wordlistctl import fetch_wordlist
    >>> fetch_wordlist("rockyou", base_dir="/data/wl")  # -> /data/wl/passwords/rockyou.txt

Quick Start (SDK API):
    >>> from wordlistctl import Settings, WordlistFetch
    >>> config = Settings(base_dir="/data/wl")
    >>> orchestrator = WordlistFetch(config)
    >>> orchestrator.fetch_group("usernames")

Configuration:
    >>> import os
    >>> os.environ["WORDLISTCTL_CATALOG_FILE"] = "~/.config/wordlistctl/archive.json"
    >>> config = Settings()  # Loads from environment

Public API:
    High-level functions:
        - fetch_wordlist: Fetch one wordlist by name
        - fetch_group: Fetch every wordlist in a group
        - load_index: Load the configured catalog into a CatalogIndex

    Orchestrators:
        - WordlistFetch: Name/group resolution and sequential fetching
        - Acquisition: Single-entry download, unpack, placement and cleanup

    Configuration:
        - Settings: Configuration model

    Domain:
        - CatalogEntry, CatalogIndex, FetchResult, ArchiveKind
        - WordlistError and its subclasses

    Reporters (for custom UIs):
        - Reporter: Progress reporter (use silent=True for headless mode)
"""

from pathlib import Path

# Catalog
from wordlistctl.catalog import load_catalog, update_catalog

# Configuration
from wordlistctl.config import Settings

# Domain
from wordlistctl.domain import (
    ArchiveKind,
    CatalogEntry,
    CatalogIndex,
    DecodeError,
    DestinationLayout,
    DuplicatePolicy,
    FetchResult,
    LocalIOError,
    NotFoundError,
    PermissionDeniedError,
    TransferError,
    UsageError,
    WordlistError,
)

# Orchestrators
from wordlistctl.orchestrators import Acquisition, WordlistFetch

# UI Reporters
from wordlistctl.ui import Reporter

__all__ = [
    # High-level functions
    "fetch_wordlist",
    "fetch_group",
    "load_index",
    # Catalog
    "load_catalog",
    "update_catalog",
    # Orchestrators
    "WordlistFetch",
    "Acquisition",
    # Configuration
    "Settings",
    # Domain
    "ArchiveKind",
    "CatalogEntry",
    "CatalogIndex",
    "DestinationLayout",
    "DuplicatePolicy",
    "FetchResult",
    "WordlistError",
    "NotFoundError",
    "PermissionDeniedError",
    "TransferError",
    "DecodeError",
    "LocalIOError",
    "UsageError",
    # Reporters
    "Reporter",
]

__version__ = "1.1.0"


def load_index(config: Settings | None = None) -> CatalogIndex:
    """Load the configured catalog into a read-only index."""
    config = config if config is not None else Settings()
    return CatalogIndex(load_catalog(config.catalog_file), config.duplicate_policy)


def fetch_wordlist(
    name: str,
    base_dir: str | Path | None = None,
    config: Settings | None = None,
    reporter: Reporter | None = None,
) -> FetchResult:
    """Fetch one wordlist by name (high-level convenience function).

    Args:
        name: Exact catalog name
        base_dir: Base directory. If None, uses config.base_dir.
        config: Configuration. If None, loads Settings() from environment.
        reporter: Progress reporter. If None, uses Reporter().

    Returns:
        FetchResult for the wordlist

    Raises:
        NotFoundError: If the name is not in the catalog
        PermissionDeniedError: If the base directory is not writable
    """
    orchestrator = WordlistFetch(config)
    return orchestrator.fetch_name(
        name, Path(base_dir) if base_dir is not None else None, reporter
    )


def fetch_group(
    group: str,
    base_dir: str | Path | None = None,
    config: Settings | None = None,
    reporter: Reporter | None = None,
) -> list[FetchResult]:
    """Fetch every wordlist in a group (high-level convenience function).

    Returns:
        One FetchResult per entry, in catalog order
    """
    orchestrator = WordlistFetch(config)
    return orchestrator.fetch_group(
        group, Path(base_dir) if base_dir is not None else None, reporter
    )
