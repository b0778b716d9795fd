"""Domain models for the acquisition pipeline."""

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ArchiveKind(str, Enum):
    """Encoding of a file as classified from its leading bytes."""

    GZIP = "gzip"
    TAR = "tar"
    OPAQUE = "opaque"  # Neither gzip nor tar, placed verbatim


class DuplicatePolicy(str, Enum):
    """What the name index does when two catalog entries share a name."""

    KEEP_FIRST = "keep-first"
    KEEP_LAST = "keep-last"
    REJECT = "reject"


class DestinationLayout(str, Enum):
    """Which catalog field names the directory a wordlist lands in."""

    GROUP = "group"  # base_dir/<group>/...
    NAME = "name"  # base_dir/<name>/...


OPTIONAL_ENTRY_FIELDS = ("url", "group", "size", "updated")


class CatalogEntry(BaseModel):
    """One named wordlist archive in the catalog.

    Accepts both the catalog's nested form
    ``{"name": ..., "info": {"url": ..., "group": ...}}`` and a flat form.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    url: str = ""  # Empty fails at download time, not at load time
    group: str = ""
    size: str = ""  # Display only
    updated: str = ""  # Display only

    @model_validator(mode="before")
    @classmethod
    def flatten_info(cls, data: Any) -> Any:
        """Lift the fields nested under ``info`` to the top level.

        A null optional field counts as missing.
        """
        if not isinstance(data, dict):
            return data

        flat = {key: value for key, value in data.items() if key != "info"}
        if isinstance(data.get("info"), dict):
            for key, value in data["info"].items():
                if flat.get(key) is None:
                    flat[key] = value
        return {
            key: value
            for key, value in flat.items()
            if value is not None or key not in OPTIONAL_ENTRY_FIELDS
        }


class ArchiveLayer(BaseModel):
    """A transient on-disk file and its sniffed classification."""

    path: Path
    kind: ArchiveKind


class FetchJob(BaseModel):
    """Describes one acquisition: where to download from and where to place."""

    name: str
    url: str
    download_path: Path
    destination: Path


class UnpackOutcome(BaseModel):
    """What the layered extractor produced for one downloaded file."""

    layers: list[ArchiveKind] = Field(default_factory=list)  # Layers peeled, in order
    placed: list[Path] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)  # Tar members of unsupported type
    warnings: list[str] = Field(default_factory=list)


class FetchResult(BaseModel):
    """Explicit success/failure result of one acquisition."""

    name: str
    url: str
    destination: Path
    success: bool
    layers: list[ArchiveKind] = Field(default_factory=list)
    placed: list[Path] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    bytes_downloaded: int = 0
    error: str | None = None
    error_kind: str | None = None

    def __repr__(self) -> str:
        """Return string representation of the result."""
        state = "ok" if self.success else f"failed[{self.error_kind}]"
        return (
            f"FetchResult({self.name!r}, {state}, "
            f"placed={len(self.placed)}, skipped={len(self.skipped)})"
        )
