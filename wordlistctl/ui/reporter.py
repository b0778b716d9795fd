"""Reporter for fetch output and progress tracking."""

from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    TextColumn,
    TimeRemainingColumn,
    TransferSpeedColumn,
)

from wordlistctl.domain.models import FetchResult


class _NoOpContext:
    def __enter__(self):
        return self

    def __exit__(self, *args):
        pass


class Reporter:
    """Reporter with rich progress bars and formatted output."""

    PATH_PREVIEW_LIMIT = 10

    def __init__(self, silent: bool = False, console: Console | None = None) -> None:
        """Initialize reporter.

        Args:
            silent: If True, suppress all output (for testing/automation).
            console: Optional console to print to; stdout otherwise.
        """
        self.silent = silent
        self.console = console if console is not None else Console(quiet=silent)
        self._download_progress: Progress | None = None
        self._extraction_progress: Progress | None = None
        self._extraction_task_id: int | None = None

    def report_fetch_start(self, name: str, url: str, index: int = 1, total: int = 1) -> None:
        """Announce the start of one fetch."""
        if self.silent:
            return
        counter = f"[{index}/{total}] " if total > 1 else ""
        self.console.print(f"{counter}Fetching [bold]{escape(name)}[/bold] from {escape(url)}")

    def create_download_progress_hook(self, filename: str):
        """Create a progress hook for downloading a specific file."""
        if self.silent:

            def hook(downloaded: int, total: int | None) -> None:
                pass

            return hook

        if self._download_progress is None:
            raise RuntimeError("Must be called within download_context")

        task_id = self._download_progress.add_task("", total=None, filename=escape(filename))

        def hook(downloaded: int, total: int | None) -> None:
            if self._download_progress is None:
                return

            if total is not None and self._download_progress.tasks[task_id].total != total:
                self._download_progress.update(task_id, total=total)

            self._download_progress.update(task_id, completed=downloaded)

        return hook

    def download_context(self):
        """Context manager for download progress display."""
        if self.silent:
            return _NoOpContext()

        class DownloadContext:
            def __init__(ctx_self, reporter):
                ctx_self.reporter = reporter

            def __enter__(ctx_self):
                ctx_self.reporter._download_progress = Progress(
                    TextColumn("[bold blue]{task.fields[filename]}"),
                    BarColumn(),
                    DownloadColumn(),
                    TransferSpeedColumn(),
                    TimeRemainingColumn(),
                    console=ctx_self.reporter.console,
                    expand=True,
                )
                ctx_self.reporter._download_progress.__enter__()
                return ctx_self.reporter._download_progress

            def __exit__(ctx_self, *args):
                if ctx_self.reporter._download_progress:
                    ctx_self.reporter._download_progress.__exit__(*args)
                    ctx_self.reporter._download_progress = None

        return DownloadContext(self)

    def create_extraction_progress_hook(self):
        """Create a progress hook for extraction."""
        if self.silent:

            def hook(filename: str, current: int, total: int) -> None:
                pass

            return hook

        if self._extraction_progress is None:
            raise RuntimeError("Must be called within extraction_context")

        def hook(filename: str, current: int, total: int) -> None:
            if self._extraction_progress is None or self._extraction_task_id is None:
                return

            if self._extraction_progress.tasks[self._extraction_task_id].total is None:
                self._extraction_progress.update(self._extraction_task_id, total=total)
                self._extraction_progress.start_task(self._extraction_task_id)
            self._extraction_progress.update(self._extraction_task_id, completed=current)

        return hook

    def extraction_context(self):
        """Context manager for extraction progress display."""
        if self.silent:
            return _NoOpContext()

        class ExtractionContext:
            def __init__(ctx_self, reporter):
                ctx_self.reporter = reporter

            def __enter__(ctx_self):
                ctx_self.reporter._extraction_progress = Progress(
                    TextColumn("{task.description}"),
                    BarColumn(),
                    TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
                    TextColumn("•"),
                    TextColumn("{task.completed}/{task.total} entries"),
                    TimeRemainingColumn(),
                    console=ctx_self.reporter.console,
                )
                ctx_self.reporter._extraction_progress.__enter__()
                return ctx_self.reporter._extraction_progress

            def __exit__(ctx_self, *args):
                if ctx_self.reporter._extraction_progress:
                    ctx_self.reporter._extraction_progress.__exit__(*args)
                    ctx_self.reporter._extraction_progress = None
                    ctx_self.reporter._extraction_task_id = None

        return ExtractionContext(self)

    def start_extraction(self, name: str) -> None:
        """Signal the start of extraction for a wordlist."""
        if self.silent:
            return

        if self._extraction_progress is None:
            raise RuntimeError("Must be called within extraction_context")

        self._extraction_task_id = self._extraction_progress.add_task(
            f"Unpacking {escape(name)}", total=None, start=False
        )

    def complete_extraction(self) -> None:
        """Signal completion of current extraction."""
        if self.silent:
            return

        if self._extraction_progress is not None and self._extraction_task_id is not None:
            total = self._extraction_progress.tasks[self._extraction_task_id].total
            if total is not None:
                self._extraction_progress.update(self._extraction_task_id, completed=total)

    def report_result(self, result: FetchResult) -> None:
        """Report the outcome of one fetch."""
        if self.silent:
            return

        if not result.success:
            self.report_error(f"Failed to fetch {result.name}: {result.error}")
            return

        layers = " → ".join(layer.value for layer in result.layers) or "flat"
        self.console.print(
            f"[green]✓[/green] [bold]{escape(result.name)}[/bold] ({layers}) → "
            f"{escape(str(result.destination))}"
        )
        self._render_paths(result)

        if result.skipped:
            self.console.print(
                f"  [yellow]Skipped {len(result.skipped)} unsupported archive entries[/yellow]"
            )
        for warning in result.warnings:
            self.report_warning(warning)

    def report_summary(self, results: list[FetchResult]) -> None:
        """Report totals after a group fetch."""
        if self.silent or len(results) < 2:
            return

        failed = [result.name for result in results if not result.success]
        succeeded = len(results) - len(failed)
        self.console.print(f"\n[bold]Fetched {succeeded}/{len(results)} wordlists[/bold]")
        if failed:
            self.console.print(f"  [red]✗ Failed: {escape(', '.join(failed))}[/red]")

    def report_warning(self, message: str) -> None:
        """Report a warning message."""
        if not self.silent:
            self.console.print(f"[yellow]Warning:[/yellow] {escape(message)}")

    def report_error(self, message: str) -> None:
        """Report an error message."""
        if not self.silent:
            self.console.print(f"[red]Error:[/red] {escape(message)}")

    def _render_paths(self, result: FetchResult) -> None:
        """Print a short preview of placed files."""
        files = [path for path in result.placed if not path.is_dir()]
        preview = files[: self.PATH_PREVIEW_LIMIT]
        for path in preview:
            self.console.print(f"      {escape(str(path))}")

        remaining = len(files) - len(preview)
        if remaining > 0:
            self.console.print(f"      ... (+{remaining} more)")
