"""Unit tests for catalog lookups."""

import logging

import pytest

from wordlistctl.domain.errors import DuplicateEntryError, NotFoundError, UsageError
from wordlistctl.domain.models import CatalogEntry, DuplicatePolicy
from wordlistctl.domain.services import CatalogIndex, build_name_map


@pytest.fixture
def duplicated_entries():
    """Two entries named rockyou with different URLs."""
    return [
        CatalogEntry(name="rockyou", url="https://a.test/rockyou.tar.gz", group="passwords"),
        CatalogEntry(name="other", url="https://a.test/other.txt", group="misc"),
        CatalogEntry(name="rockyou", url="https://b.test/rockyou.tar.gz", group="passwords"),
    ]


class TestBuildNameMap:
    """Test the name -> entry mapping."""

    def test_keep_last(self, duplicated_entries, caplog):
        """Test the later entry wins by default and the collision is logged."""
        with caplog.at_level(logging.WARNING):
            name_map, duplicates = build_name_map(duplicated_entries)

        assert name_map["rockyou"].url == "https://b.test/rockyou.tar.gz"
        assert duplicates == ["rockyou"]
        assert "rockyou" in caplog.text

    def test_keep_first(self, duplicated_entries):
        """Test the earlier entry wins under KEEP_FIRST."""
        name_map, _ = build_name_map(duplicated_entries, DuplicatePolicy.KEEP_FIRST)

        assert name_map["rockyou"].url == "https://a.test/rockyou.tar.gz"

    def test_reject(self, duplicated_entries):
        """Test REJECT raises on the first repeated name."""
        with pytest.raises(DuplicateEntryError, match="rockyou"):
            build_name_map(duplicated_entries, DuplicatePolicy.REJECT)

    def test_no_duplicates(self, sample_entries):
        """Test a clean catalog reports no duplicates."""
        name_map, duplicates = build_name_map(sample_entries, DuplicatePolicy.REJECT)

        assert len(name_map) == len(sample_entries)
        assert duplicates == []


class TestCatalogIndex:
    """Test lookups over a catalog snapshot."""

    def test_find_by_name(self, sample_index):
        """Test exact name lookup."""
        entry = sample_index.find_by_name("rockyou")

        assert entry.group == "passwords"
        assert entry.url.endswith("rockyou.txt.tar.gz")

    def test_find_by_name_is_case_sensitive(self, sample_index):
        """Test lookups do not fold case."""
        with pytest.raises(NotFoundError):
            sample_index.find_by_name("RockYou")

    def test_find_unknown(self, sample_index):
        """Test an unknown name raises NotFoundError."""
        with pytest.raises(NotFoundError, match="No wordlist found with name 'nope'"):
            sample_index.find_by_name("nope")

    def test_filter_by_group(self, sample_index):
        """Test group filtering preserves catalog order."""
        names = [entry.name for entry in sample_index.filter_by_group("usernames")]

        assert names == ["top-usernames", "names"]

    def test_filter_empty_group_matches_all(self, sample_index):
        """Test an empty or missing group returns every entry."""
        assert len(sample_index.filter_by_group("")) == 4
        assert len(sample_index.filter_by_group(None)) == 4

    def test_filter_unknown_group(self, sample_index):
        """Test a group nobody belongs to returns nothing."""
        assert sample_index.filter_by_group("fuzzing") == []

    def test_search_unanchored(self, sample_index):
        """Test the pattern may match anywhere in the name."""
        names = [entry.name for entry in sample_index.search("name")]

        assert names == ["top-usernames", "names"]

    def test_search_anchored(self, sample_index):
        """Test anchors in the pattern are honored."""
        names = [entry.name for entry in sample_index.search("^dark")]

        assert names == ["darkweb2017"]

    def test_search_invalid_pattern(self, sample_index):
        """Test an invalid regex is a usage error."""
        with pytest.raises(UsageError, match="Invalid search pattern"):
            sample_index.search("[unclosed")

    def test_groups(self, sample_index):
        """Test distinct groups in first-seen order."""
        assert sample_index.groups() == ["passwords", "usernames"]

    def test_container_protocol(self, sample_index):
        """Test len, iteration and membership."""
        assert len(sample_index) == 4
        assert [entry.name for entry in sample_index][0] == "rockyou"
        assert "rockyou" in sample_index
        assert "nope" not in sample_index

    def test_duplicates_kept_in_entries(self, duplicated_entries):
        """Test listing still shows every catalog entry."""
        index = CatalogIndex(duplicated_entries)

        assert len(index.entries) == 3
        assert index.duplicates == ("rockyou",)
        assert index.find_by_name("rockyou").url.startswith("https://b.test")
