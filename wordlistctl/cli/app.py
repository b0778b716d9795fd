"""Typer-based CLI for wordlistctl."""

import json
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from wordlistctl.catalog.loader import load_catalog, update_catalog
from wordlistctl.config import Settings
from wordlistctl.domain.errors import (
    CatalogError,
    CatalogNotFoundError,
    NotFoundError,
    PermissionDeniedError,
    TransferError,
    UsageError,
)
from wordlistctl.domain.models import CatalogEntry, DestinationLayout
from wordlistctl.domain.services import CatalogIndex
from wordlistctl.orchestrators import WordlistFetch
from wordlistctl.ui import Reporter
from wordlistctl.ui.tables import create_wordlist_table, format_entry_line, format_group_summary

EXIT_FAILURE = 1
EXIT_USAGE = 2

GROUP_HELP = "{usernames,passwords,discovery,fuzzing,misc}"

app = typer.Typer(help="Fetch, install and search wordlist archives")
catalog_app = typer.Typer(help="Inspect and refresh the wordlist catalog")
app.add_typer(catalog_app, name="catalog")


def _configure_logging(verbose: bool) -> None:
    """Send library logs to stderr; everything below CRITICAL only with --verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.CRITICAL,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Show help when no subcommand is provided."""
    _configure_logging(verbose)
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _load_index(config: Settings, reporter: Reporter) -> CatalogIndex:
    """Load the catalog once for this invocation; a broken catalog is fatal."""
    try:
        return CatalogIndex(load_catalog(config.catalog_file), config.duplicate_policy)
    except CatalogNotFoundError as e:
        reporter.report_error(f"{e} (fatal)")
        reporter.console.print(
            f"Run:\n  wordlistctl catalog update\nto download {escape(config.catalog_url)}"
        )
        raise typer.Exit(EXIT_USAGE) from e
    except CatalogError as e:
        reporter.report_error(f"{e} (fatal)")
        raise typer.Exit(EXIT_USAGE) from e


def _render_entries(
    entries: list[CatalogEntry],
    reporter: Reporter,
    title: str,
    json_output: bool,
    plain: bool,
) -> None:
    if json_output:
        typer.echo(
            json.dumps([entry.model_dump() for entry in entries], indent=2, ensure_ascii=False)
        )
        return

    if not entries:
        reporter.console.print("[dim]No matching wordlists found[/dim]")
        return

    if plain:
        for entry in entries:
            typer.echo(format_entry_line(entry))
        return

    reporter.console.print(create_wordlist_table(entries, title))
    reporter.console.print(f"\n[bold]Summary:[/bold] {escape(format_group_summary(entries))}")


@app.command()
def fetch(
    name: str = typer.Option(None, "--name", "-n", help="The name of the wordlist to download"),
    group: str = typer.Option(None, "--group", "-g", help=f"A group to fetch: {GROUP_HELP}"),
    base: Path = typer.Option(None, "--base", "-b", help="Base directory to store wordlists"),
    layout: DestinationLayout = typer.Option(
        None, "--layout", help="Name destination directories after the group or the wordlist"
    ),
):
    """Download and unpack wordlists into the base directory."""
    config = Settings()
    reporter = Reporter()

    if name and group:
        reporter.report_error("Choose either a group or a name, not both")
        raise typer.Exit(EXIT_USAGE)
    if not name and not group:
        reporter.report_error("Choose either a group or a name")
        raise typer.Exit(EXIT_USAGE)

    if layout is not None:
        config = config.model_copy(update={"layout": layout})

    index = _load_index(config, reporter)
    orchestrator = WordlistFetch(config, index=index)

    try:
        results = orchestrator.fetch(name=name, group=group, base_dir=base, reporter=reporter)
    except UsageError as e:
        reporter.report_error(str(e))
        raise typer.Exit(EXIT_USAGE) from e
    except (NotFoundError, PermissionDeniedError) as e:
        reporter.report_error(str(e))
        raise typer.Exit(EXIT_FAILURE) from e

    if not all(result.success for result in results):
        raise typer.Exit(EXIT_FAILURE)


@app.command("list")
def list_wordlists(
    group: str = typer.Option(None, "--group", "-g", help=f"A group to list: {GROUP_HELP}"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    plain: bool = typer.Option(False, "--plain", help="One 'name (size) [updated]' per line"),
):
    """List wordlists in the catalog, optionally restricted to a group."""
    config = Settings()
    reporter = Reporter()

    index = _load_index(config, reporter)
    entries = index.filter_by_group(group)
    _render_entries(entries, reporter, group or "Wordlists", json_output, plain)


@app.command()
def search(
    term: str = typer.Argument(..., help="Regular expression matched against wordlist names"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    plain: bool = typer.Option(False, "--plain", help="One 'name (size) [updated]' per line"),
):
    """Search wordlist names with a regular expression."""
    config = Settings()
    reporter = Reporter()

    index = _load_index(config, reporter)
    try:
        entries = index.search(term)
    except UsageError as e:
        reporter.report_error(str(e))
        raise typer.Exit(EXIT_USAGE) from e

    _render_entries(entries, reporter, f"Matches for {term!r}", json_output, plain)


@catalog_app.command("update")
def catalog_update(
    url: str = typer.Option(None, "--url", help="Catalog URL (defaults to the configured one)"),
):
    """Download a fresh catalog, replacing the local copy atomically."""
    config = Settings()
    reporter = Reporter()
    source = url or config.catalog_url

    try:
        entries = update_catalog(source, config.catalog_file, config.catalog_timeout)
    except (TransferError, CatalogError) as e:
        reporter.report_error(str(e))
        raise typer.Exit(EXIT_FAILURE) from e

    reporter.console.print(
        f"Catalog updated: {len(entries)} wordlists in {escape(str(config.catalog_file))}"
    )


@catalog_app.command("info")
def catalog_info():
    """Show where the catalog lives and what it contains."""
    config = Settings()
    reporter = Reporter()

    index = _load_index(config, reporter)
    reporter.console.print(f"[bold]Catalog:[/bold] {escape(str(config.catalog_file))}")
    reporter.console.print(f"[bold]Wordlists:[/bold] {len(index)}")
    reporter.console.print(f"[bold]Groups:[/bold] {escape(', '.join(index.groups())) or '-'}")
    if index.duplicates:
        reporter.report_warning(
            f"Duplicate names ({config.duplicate_policy.value}): {', '.join(index.duplicates)}"
        )


@catalog_app.command("path")
def catalog_path():
    """Print the configured catalog location."""
    typer.echo(str(Settings().catalog_file))


if __name__ == "__main__":
    app()
