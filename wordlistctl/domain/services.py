"""Business logic services over the catalog."""

import logging
import re
from collections.abc import Iterable, Iterator

from wordlistctl.domain.errors import DuplicateEntryError, NotFoundError, UsageError
from wordlistctl.domain.models import CatalogEntry, DuplicatePolicy

logger = logging.getLogger(__name__)


def build_name_map(
    entries: Iterable[CatalogEntry],
    policy: DuplicatePolicy = DuplicatePolicy.KEEP_LAST,
) -> tuple[dict[str, CatalogEntry], list[str]]:
    """Build the name -> entry mapping under an explicit collision policy.

    Args:
        entries: Catalog entries in catalog order
        policy: What to do when a name is seen twice

    Returns:
        Tuple of (name_map, duplicate_names)

    Raises:
        DuplicateEntryError: If policy is REJECT and a name repeats
    """
    name_map: dict[str, CatalogEntry] = {}
    duplicates: list[str] = []

    for entry in entries:
        if entry.name not in name_map:
            name_map[entry.name] = entry
            continue

        if policy is DuplicatePolicy.REJECT:
            raise DuplicateEntryError(f"Duplicate wordlist name in catalog: {entry.name}")

        if entry.name not in duplicates:
            duplicates.append(entry.name)

        if policy is DuplicatePolicy.KEEP_LAST:
            logger.warning(f"Duplicate wordlist {entry.name!r}: keeping the later entry")
            name_map[entry.name] = entry
        else:
            logger.warning(f"Duplicate wordlist {entry.name!r}: keeping the earlier entry")

    return name_map, duplicates


class CatalogIndex:
    """Read-only lookups over a catalog snapshot.

    The name map is built once, when the index is created. Nothing mutates
    the index afterwards; entries themselves are frozen models.
    """

    def __init__(
        self,
        entries: Iterable[CatalogEntry],
        duplicate_policy: DuplicatePolicy = DuplicatePolicy.KEEP_LAST,
    ):
        self._entries: tuple[CatalogEntry, ...] = tuple(entries)
        self._by_name, self._duplicates = build_name_map(self._entries, duplicate_policy)
        self.duplicate_policy = duplicate_policy

    @property
    def entries(self) -> tuple[CatalogEntry, ...]:
        """All entries in catalog order, duplicates included."""
        return self._entries

    @property
    def duplicates(self) -> tuple[str, ...]:
        """Names that occur more than once in the catalog."""
        return tuple(self._duplicates)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def find_by_name(self, name: str) -> CatalogEntry:
        """Return the entry with exactly this name (case-sensitive).

        Raises:
            NotFoundError: If no entry has that name
        """
        try:
            return self._by_name[name]
        except KeyError:
            raise NotFoundError(f"No wordlist found with name {name!r}") from None

    def filter_by_group(self, group: str | None = None) -> list[CatalogEntry]:
        """Return entries in the group; an empty group matches everything."""
        if not group:
            return list(self._entries)
        return [entry for entry in self._entries if entry.group == group]

    def search(self, pattern: str) -> list[CatalogEntry]:
        """Return entries whose name matches a regular expression.

        The pattern is searched anywhere in the name, not anchored.

        Raises:
            UsageError: If the pattern is not a valid regular expression
        """
        try:
            regex = re.compile(pattern)
        except re.error as exc:
            raise UsageError(f"Invalid search pattern {pattern!r}: {exc}") from exc

        return [entry for entry in self._entries if regex.search(entry.name)]

    def groups(self) -> list[str]:
        """Return the distinct groups in first-seen order."""
        seen: dict[str, None] = {}
        for entry in self._entries:
            if entry.group:
                seen.setdefault(entry.group, None)
        return list(seen)
