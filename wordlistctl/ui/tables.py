"""Table rendering utilities for CLI output."""

from collections import Counter

from rich.markup import escape
from rich.table import Table

from wordlistctl.domain.models import CatalogEntry


def format_entry_line(entry: CatalogEntry) -> str:
    """Render an entry as ``name (size) [updated]``."""
    return f"{entry.name} ({entry.size or '-'}) [{entry.updated or '-'}]"


def create_wordlist_table(entries: list[CatalogEntry], title: str = "Wordlists") -> Table:
    """Create a table for displaying catalog entries.

    Args:
        entries: Entries in the order they should be shown
        title: Table title prefix

    Returns:
        Rich Table object ready for display
    """
    table = Table(title=f"{escape(title)} ({len(entries)} total)")
    table.add_column("Name", style="cyan")
    table.add_column("Group", style="yellow")
    table.add_column("Size", justify="right", style="dim")
    table.add_column("Updated", style="dim")

    for entry in entries:
        table.add_row(
            escape(entry.name),
            escape(entry.group or "-"),
            escape(entry.size or "-"),
            escape(entry.updated or "-"),
        )

    return table


def format_group_summary(entries: list[CatalogEntry]) -> str:
    """Create a summary string of entry counts by group.

    Returns:
        Formatted summary string like "2 passwords, 3 usernames"
    """
    group_counts = Counter(entry.group or "ungrouped" for entry in entries)
    return ", ".join(f"{count} {group}" for group, count in sorted(group_counts.items()))
