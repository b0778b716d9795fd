"""Acquisition orchestrator.

Runs one catalog entry through download, layer peeling, placement and cleanup.
"""

import logging
from pathlib import Path

import httpx

from wordlistctl.config import Settings
from wordlistctl.domain.errors import WordlistError
from wordlistctl.domain.models import CatalogEntry, FetchJob, FetchResult
from wordlistctl.operations.download import download_file, download_filename
from wordlistctl.operations.extract import peel_layers
from wordlistctl.operations.placement import create_workdir, remove_workdir
from wordlistctl.ui import Reporter

logger = logging.getLogger(__name__)


class Acquisition:
    """Orchestrates the acquisition pipeline for a single entry.

    Every job gets a private temporary directory. The downloaded file and any
    decompressed intermediate live there and the directory is removed when the
    job ends, whether it succeeded or not.
    """

    def __init__(self, config: Settings | None = None, client: httpx.Client | None = None):
        """Initialize the acquisition orchestrator.

        Args:
            config: Configuration. If None, creates new Settings() from environment.
            client: Optional HTTP client shared across jobs.
        """
        self.config = config if config is not None else Settings()
        self.client = client

    def prepare(self, entry: CatalogEntry, destination: Path) -> FetchJob:
        """Create the job's temporary directory and describe the job.

        Raises:
            LocalIOError: If the temporary directory cannot be created
        """
        workdir = create_workdir(self.config.temp_dir)
        return FetchJob(
            name=entry.name,
            url=entry.url,
            download_path=workdir / download_filename(entry.url, entry.name),
            destination=destination,
        )

    def run(
        self,
        entry: CatalogEntry,
        destination: Path,
        reporter: Reporter | None = None,
    ) -> FetchResult:
        """Fetch one entry into destination.

        Per-entry failures are returned as a failed FetchResult, never raised.

        Args:
            entry: Catalog entry to fetch
            destination: Directory to materialize the payload in
            reporter: Optional reporter for progress. Defaults to Reporter().

        Returns:
            FetchResult describing what was placed or why it failed
        """
        if reporter is None:
            reporter = Reporter()

        try:
            job = self.prepare(entry, destination)
        except WordlistError as e:
            return self._failure(entry.name, entry.url, destination, e)

        try:
            result = self.execute(job, reporter)
        finally:
            cleanup_warning = remove_workdir(job.download_path.parent)

        if cleanup_warning:
            result.warnings.append(cleanup_warning)
        return result

    def execute(self, job: FetchJob, reporter: Reporter) -> FetchResult:
        """Download and unpack a prepared job.

        The job's temporary directory is left for the caller to remove.
        """
        downloaded = 0
        try:
            with reporter.download_context():
                hook = reporter.create_download_progress_hook(job.download_path.name)
                downloaded = download_file(
                    url=job.url,
                    dest=job.download_path,
                    client=self.client,
                    progress_hook=hook,
                    chunk_size=self.config.chunk_size,
                    timeout=self.config.download_timeout,
                )

            with reporter.extraction_context():
                reporter.start_extraction(job.name)
                outcome = peel_layers(
                    source=job.download_path,
                    destination=job.destination,
                    workdir=job.download_path.parent,
                    allow_unsafe_paths=self.config.allow_unsafe_paths,
                    progress_hook=reporter.create_extraction_progress_hook(),
                )
                reporter.complete_extraction()
        except WordlistError as e:
            result = self._failure(job.name, job.url, job.destination, e)
            result.bytes_downloaded = downloaded
            return result

        logger.info(f"Fetched {job.name} into {job.destination}")
        return FetchResult(
            name=job.name,
            url=job.url,
            destination=job.destination,
            success=True,
            layers=outcome.layers,
            placed=outcome.placed,
            skipped=outcome.skipped,
            warnings=outcome.warnings,
            bytes_downloaded=downloaded,
        )

    @staticmethod
    def _failure(name: str, url: str, destination: Path, error: WordlistError) -> FetchResult:
        logger.error(f"Failed to fetch {name}: {error}")
        return FetchResult(
            name=name,
            url=url,
            destination=destination,
            success=False,
            error=str(error),
            error_kind=error.kind,
        )
