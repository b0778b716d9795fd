"""Wordlist fetch orchestrator.

Resolves a name or a group against the catalog and runs each resolved entry
through the acquisition pipeline, one at a time in catalog order.
"""

from pathlib import Path

import httpx

from wordlistctl.catalog.loader import load_catalog
from wordlistctl.config import Settings
from wordlistctl.domain.errors import NotFoundError, UsageError
from wordlistctl.domain.models import CatalogEntry, DestinationLayout, FetchResult
from wordlistctl.domain.services import CatalogIndex
from wordlistctl.operations.placement import check_writable
from wordlistctl.orchestrators.acquisition import Acquisition
from wordlistctl.ui import Reporter


def destination_for(
    entry: CatalogEntry,
    base_dir: Path,
    layout: DestinationLayout = DestinationLayout.GROUP,
) -> Path:
    """Directory an entry's payload is materialized in.

    An entry without a group falls back to its name.
    """
    if layout is DestinationLayout.GROUP and entry.group:
        return base_dir / entry.group
    return base_dir / entry.name


class WordlistFetch:
    """Orchestrates fetching wordlists by name or by group.

    Lookups and the writability check happen before any network activity, so
    an unknown name leaves the destination untouched.
    """

    def __init__(
        self,
        config: Settings | None = None,
        index: CatalogIndex | None = None,
        client: httpx.Client | None = None,
    ):
        """Initialize the fetch orchestrator.

        Args:
            config: Configuration. If None, creates new Settings() from environment.
            index: Catalog index. If None, loads the catalog named by config.
            client: Optional HTTP client shared across fetches.
        """
        self.config = config if config is not None else Settings()
        if index is None:
            index = CatalogIndex(
                load_catalog(self.config.catalog_file), self.config.duplicate_policy
            )
        self.index = index
        self.acquisition = Acquisition(self.config, client)

    def fetch(
        self,
        name: str | None = None,
        group: str | None = None,
        base_dir: Path | None = None,
        reporter: Reporter | None = None,
    ) -> list[FetchResult]:
        """Fetch either one named wordlist or every wordlist in a group.

        Raises:
            UsageError: If both or neither of name and group are given
        """
        if name and group:
            raise UsageError("Choose either a name or a group, not both")
        if name:
            return [self.fetch_name(name, base_dir, reporter)]
        if group:
            return self.fetch_group(group, base_dir, reporter)
        raise UsageError("Choose either a name or a group")

    def fetch_name(
        self,
        name: str,
        base_dir: Path | None = None,
        reporter: Reporter | None = None,
    ) -> FetchResult:
        """Fetch a single wordlist by exact name.

        Raises:
            NotFoundError: If the name is not in the catalog
            PermissionDeniedError: If base_dir is not writable
        """
        if reporter is None:
            reporter = Reporter()

        entry = self.index.find_by_name(name)
        base_dir = self._resolve_base(base_dir)
        check_writable(base_dir)

        reporter.report_fetch_start(entry.name, entry.url)
        result = self.acquisition.run(
            entry, destination_for(entry, base_dir, self.config.layout), reporter
        )
        reporter.report_result(result)
        return result

    def fetch_group(
        self,
        group: str,
        base_dir: Path | None = None,
        reporter: Reporter | None = None,
    ) -> list[FetchResult]:
        """Fetch every wordlist in a group, one after another.

        A failed entry does not stop the entries after it.

        Raises:
            UsageError: If group is empty
            NotFoundError: If no entry belongs to the group
            PermissionDeniedError: If base_dir is not writable
        """
        if not group:
            raise UsageError("A group is required")
        if reporter is None:
            reporter = Reporter()

        entries = self.index.filter_by_group(group)
        if not entries:
            raise NotFoundError(f"No wordlists found in group {group!r}")

        base_dir = self._resolve_base(base_dir)
        check_writable(base_dir)

        results = []
        for position, entry in enumerate(entries, start=1):
            reporter.report_fetch_start(entry.name, entry.url, position, len(entries))
            result = self.acquisition.run(
                entry, destination_for(entry, base_dir, self.config.layout), reporter
            )
            reporter.report_result(result)
            results.append(result)

        reporter.report_summary(results)
        return results

    def _resolve_base(self, base_dir: Path | None) -> Path:
        return Path(base_dir).expanduser() if base_dir is not None else self.config.base_dir
