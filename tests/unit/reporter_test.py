"""Unit tests for the fetch reporter."""

import io
from pathlib import Path

import pytest
from rich.console import Console

from wordlistctl.domain.models import ArchiveKind, FetchResult
from wordlistctl.ui import Reporter


@pytest.fixture
def output():
    """Buffer the reporter prints into."""
    return io.StringIO()


@pytest.fixture
def reporter(output):
    """Reporter writing to the buffer."""
    return Reporter(console=Console(file=output, width=200, color_system=None))


def _result(success: bool = True, **fields) -> FetchResult:
    defaults = dict(
        name="rockyou",
        url="https://mirror.test/rockyou.txt.tar.gz",
        destination=Path("/wl/passwords"),
        success=success,
    )
    defaults.update(fields)
    return FetchResult(**defaults)


class TestReportResult:
    """Test per-entry output."""

    def test_success(self, reporter, output):
        """Test layers, destination and placed files are shown."""
        reporter.report_result(
            _result(
                layers=[ArchiveKind.GZIP, ArchiveKind.TAR],
                placed=[Path("/wl/passwords/rockyou.txt")],
            )
        )

        text = output.getvalue()
        assert "rockyou" in text
        assert "gzip → tar" in text
        assert "/wl/passwords/rockyou.txt" in text

    def test_flat_payload(self, reporter, output):
        """Test an opaque payload is labelled flat."""
        reporter.report_result(_result(placed=[Path("/wl/passwords/list.txt")]))

        assert "(flat)" in output.getvalue()

    def test_preview_is_limited(self, reporter, output):
        """Test long file lists are truncated."""
        placed = [Path(f"/wl/passwords/{i}.txt") for i in range(15)]

        reporter.report_result(_result(layers=[ArchiveKind.TAR], placed=placed))

        assert "(+5 more)" in output.getvalue()

    def test_skipped_and_warnings(self, reporter, output):
        """Test skipped members and cleanup warnings are surfaced."""
        reporter.report_result(
            _result(skipped=["link"], warnings=["Could not remove temporary directory /tmp/x"])
        )

        text = output.getvalue()
        assert "Skipped 1 unsupported archive entries" in text
        assert "Warning:" in text

    def test_failure(self, reporter, output):
        """Test failures are printed as errors."""
        reporter.report_result(
            _result(success=False, error="Server returned 404", error_kind="transfer")
        )

        assert "Error: Failed to fetch rockyou: Server returned 404" in output.getvalue()


class TestReportSummary:
    """Test group totals."""

    def test_counts_failures(self, reporter, output):
        """Test the summary lists failed names."""
        reporter.report_summary(
            [_result(), _result(name="names", success=False, error="boom")]
        )

        text = output.getvalue()
        assert "Fetched 1/2 wordlists" in text
        assert "Failed: names" in text

    def test_single_result_has_no_summary(self, reporter, output):
        """Test a single fetch prints no summary."""
        reporter.report_summary([_result()])

        assert output.getvalue() == ""


class TestBracketedText:
    """Test names and paths that look like console markup are printed as-is."""

    def test_placed_path(self, reporter, output):
        """Test a closing tag in an archive member name is shown literally."""
        reporter.report_result(
            _result(
                name="[bold]rock",
                layers=[ArchiveKind.TAR],
                placed=[Path("/wl/passwords/lists/[/x].txt")],
            )
        )

        text = output.getvalue()
        assert "[bold]rock" in text
        assert "/wl/passwords/lists/[/x].txt" in text

    def test_fetch_start(self, reporter, output):
        """Test the name and url are not parsed as markup."""
        reporter.report_fetch_start("[/b]", "https://mirror.test/[red]", index=1, total=2)

        assert "[1/2] Fetching [/b] from https://mirror.test/[red]" in output.getvalue()

    def test_error_and_warning(self, reporter, output):
        """Test messages with brackets survive intact."""
        reporter.report_error("Invalid search pattern 'rock|[/a]'")
        reporter.report_warning("Duplicate names (first): [/dup]")

        text = output.getvalue()
        assert "Error: Invalid search pattern 'rock|[/a]'" in text
        assert "Warning: Duplicate names (first): [/dup]" in text

    def test_summary_failed_names(self, reporter, output):
        """Test failed names are listed literally."""
        reporter.report_summary([_result(), _result(name="[/x]", success=False, error="boom")])

        assert "Failed: [/x]" in output.getvalue()

    def test_progress_labels(self, reporter):
        """Test progress tasks accept bracketed names."""
        with reporter.download_context():
            reporter.create_download_progress_hook("[/x].tar.gz")(1, 2)
        with reporter.extraction_context():
            reporter.start_extraction("[/x]")
            reporter.create_extraction_progress_hook()("[/x].txt", 1, 1)
            reporter.complete_extraction()


class TestProgress:
    """Test progress contexts and hooks."""

    def test_download_hook_requires_context(self, reporter):
        """Test hooks cannot be created outside their context."""
        with pytest.raises(RuntimeError, match="download_context"):
            reporter.create_download_progress_hook("rockyou.txt.tar.gz")

    def test_extraction_requires_context(self, reporter):
        """Test extraction cannot start outside its context."""
        with pytest.raises(RuntimeError, match="extraction_context"):
            reporter.start_extraction("rockyou")

    def test_download_hook_updates_task(self, reporter):
        """Test the hook tracks total and completed bytes."""
        with reporter.download_context() as progress:
            hook = reporter.create_download_progress_hook("rockyou.txt.tar.gz")
            hook(0, 100)
            hook(40, 100)

            task = progress.tasks[0]
            assert task.total == 100
            assert task.completed == 40

    def test_extraction_hook_updates_task(self, reporter):
        """Test entry counts are tracked and completed at the end."""
        with reporter.extraction_context() as progress:
            reporter.start_extraction("rockyou")
            hook = reporter.create_extraction_progress_hook()
            hook("a.txt", 1, 3)
            reporter.complete_extraction()

            task = progress.tasks[0]
            assert task.total == 3
            assert task.completed == 3


class TestSilent:
    """Test silent mode."""

    def test_prints_nothing(self, capsys):
        """Test a silent reporter is fully quiet."""
        reporter = Reporter(silent=True)

        reporter.report_fetch_start("rockyou", "https://mirror.test/x")
        reporter.report_result(_result(success=False, error="boom"))
        reporter.report_error("boom")
        with reporter.download_context():
            reporter.create_download_progress_hook("x")(1, 2)
        with reporter.extraction_context():
            reporter.start_extraction("rockyou")
            reporter.create_extraction_progress_hook()("a", 1, 1)
            reporter.complete_extraction()

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""
