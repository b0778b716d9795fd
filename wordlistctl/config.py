"""Configuration with environment variable support."""

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from wordlistctl.domain.models import DestinationLayout, DuplicatePolicy

DEFAULT_CATALOG_FILE = Path("/usr/share/wordlistctl/archive.json")
DEFAULT_CATALOG_URL = "https://wl.casalino.xyz/archive.json"
DEFAULT_BASE_DIR = Path("/usr/share/wordlists")


class Settings(BaseSettings):
    """Configuration loaded from environment variables.

    Loads from environment (WORDLISTCTL_*), .env file, or defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="WORDLISTCTL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Catalog
    catalog_file: Path = DEFAULT_CATALOG_FILE
    catalog_url: str = DEFAULT_CATALOG_URL
    catalog_timeout: int = 30
    duplicate_policy: DuplicatePolicy = DuplicatePolicy.KEEP_LAST

    # Directories
    base_dir: Path = DEFAULT_BASE_DIR
    temp_dir: Path | None = None
    layout: DestinationLayout = DestinationLayout.GROUP

    # Transfer
    download_timeout: float | None = None  # None blocks until the peer closes
    chunk_size: int = 64 * 1024

    # Extraction
    allow_unsafe_paths: bool = False

    @field_validator("catalog_file", "base_dir", "temp_dir", mode="after")
    @classmethod
    def expand_user(cls, v: Path | None) -> Path | None:
        """Expand a leading ~ without touching the filesystem."""
        if v is None:
            return None
        return v.expanduser()

    @field_validator("temp_dir", "download_timeout", mode="before")
    @classmethod
    def parse_null(cls, v):
        """Convert 'null' strings from the environment to None."""
        if isinstance(v, str) and v.lower() in ("null", "none", ""):
            return None
        return v
