"""Example: Using wordlistctl as an SDK.

Shows how to search the catalog and fetch wordlists from Python code
instead of the command line.
"""

import os
from pathlib import Path

from wordlistctl import (
    DestinationLayout,
    NotFoundError,
    Reporter,
    Settings,
    WordlistFetch,
    fetch_group,
    fetch_wordlist,
    load_index,
    update_catalog,
)


def example_simple_usage():
    """Fetch one wordlist with the default configuration."""
    print("Example 1: Simple Usage")

    # Lands in /usr/share/wordlists/passwords/rockyou.txt
    fetch_wordlist("rockyou")


def example_with_environment_config():
    """Load configuration from environment variables."""
    print("\nExample 2: Environment Configuration")

    os.environ["WORDLISTCTL_BASE_DIR"] = "~/wordlists"
    os.environ["WORDLISTCTL_LAYOUT"] = "name"
    os.environ["WORDLISTCTL_DOWNLOAD_TIMEOUT"] = "120"

    settings = Settings()
    print(f"Loaded config: base_dir={settings.base_dir}, layout={settings.layout.value}")

    fetch_group("usernames", config=settings)


def example_refresh_catalog():
    """Download a fresh catalog next to the user's own wordlists."""
    print("\nExample 3: Private Catalog")

    settings = Settings(
        catalog_file=Path("~/.config/wordlistctl/archive.json"),
        base_dir=Path("~/wordlists"),
    )
    entries = update_catalog(settings.catalog_url, settings.catalog_file)
    print(f"Catalog has {len(entries)} wordlists")


def example_search():
    """Search the catalog without downloading anything."""
    print("\nExample 4: Searching")

    index = load_index()
    for entry in index.search(r"^top-"):
        print(f"  {entry.name:30} {entry.group:12} {entry.size}")

    print(f"Groups: {', '.join(index.groups())}")


def example_headless_mode():
    """Fetch with no terminal output and inspect the results instead."""
    print("\nExample 5: Headless Mode")

    settings = Settings(base_dir=Path("data/wordlists"), layout=DestinationLayout.NAME)
    orchestrator = WordlistFetch(settings)

    results = orchestrator.fetch_group("passwords", reporter=Reporter(silent=True))
    for result in results:
        if result.success:
            print(f"  {result.name}: {len(result.placed)} paths under {result.destination}")
        else:
            print(f"  {result.name}: {result.error_kind} ({result.error})")


def example_error_handling():
    """Handle lookups that fail before anything is downloaded."""
    print("\nExample 6: Error Handling")

    try:
        fetch_wordlist("no-such-list")
    except NotFoundError as e:
        print(f"  Not in the catalog: {e}")


if __name__ == "__main__":
    print("wordlistctl SDK Examples")
    print("\nThese examples show different ways to use wordlistctl")
    print("as a Python library (SDK) in your own code.\n")

    # Uncomment the examples you want to run:

    # example_simple_usage()
    # example_with_environment_config()
    # example_refresh_catalog()
    # example_search()
    # example_headless_mode()
    # example_error_handling()

    print("\nTo run an example, uncomment it in the __main__ section.")
