"""
Unit tests for the taxonomy index.

Tests:
- locations / activities_for / options_for derivation
- duplicate handling differences between the three levels
- admin-view helpers
- TaxonomyEntry.from_row
"""

from core.taxonomy import (
    TaxonomyEntry,
    activities_for,
    activity_entries,
    first_entry_for_location,
    locations,
    option_entries,
    options_for,
)


class TestCascade:
    """Tests for the three cascade functions on the reference taxonomy."""

    def test_locations(self, sample_entries):
        assert locations(sample_entries) == ["A", "B"]

    def test_activities_for_location(self, sample_entries):
        assert activities_for(sample_entries, "A") == ["X"]

    def test_activities_for_bare_location(self, sample_entries):
        assert activities_for(sample_entries, "B") == []

    def test_options_for_pair(self, sample_entries):
        assert options_for(sample_entries, "A", "X") == ["Y1", "Y2"]

    def test_options_for_unknown_activity(self, sample_entries):
        assert options_for(sample_entries, "A", "Z") == []

    def test_nothing_selected(self, sample_entries):
        assert activities_for(sample_entries, None) == []
        assert options_for(sample_entries, None, None) == []

    def test_empty_taxonomy(self):
        assert locations([]) == []
        assert activities_for([], "A") == []
        assert options_for([], "A", "X") == []


class TestOrderingAndDuplicates:
    """Sorting everywhere, de-duplication only for locations and activities."""

    def test_locations_sorted_and_distinct(self, create_entry):
        entries = [create_entry("C"), create_entry("A"), create_entry("C", "x"), create_entry("B")]
        assert locations(entries) == ["A", "B", "C"]

    def test_activities_sorted_and_distinct(self, create_entry):
        entries = [
            create_entry("A", "Zen"),
            create_entry("A", "Art"),
            create_entry("A", "Zen", "o1"),
            create_entry("A", "Art", "o2"),
            create_entry("B", "Music"),
        ]
        assert activities_for(entries, "A") == ["Art", "Zen"]

    def test_options_keep_duplicates(self, create_entry):
        entries = [
            create_entry("A", "X", "Y2"),
            create_entry("A", "X", "Y1"),
            create_entry("A", "X", "Y1"),
        ]
        assert options_for(entries, "A", "X") == ["Y1", "Y1", "Y2"]

    def test_options_require_exact_pair(self, create_entry):
        entries = [create_entry("A", "X", "Y1"), create_entry("B", "X", "Y9")]
        assert options_for(entries, "A", "X") == ["Y1"]

    def test_accepts_any_iterable(self, sample_entries):
        assert locations(iter(sample_entries)) == ["A", "B"]


class TestAdminHelpers:
    """Tests for the helpers behind the settings tab."""

    def test_activity_entries_exclude_option_rows(self, sample_entries):
        rows = activity_entries(sample_entries, "A")
        assert [(e.activity, e.option) for e in rows] == [("X", None)]

    def test_option_entries(self, sample_entries):
        rows = option_entries(sample_entries, "A", "X")
        assert [e.option for e in rows] == ["Y1", "Y2"]

    def test_first_entry_for_location(self, sample_entries):
        assert first_entry_for_location(sample_entries, "A") is sample_entries[0]
        assert first_entry_for_location(sample_entries, "Nowhere") is None


class TestTaxonomyEntry:
    """Tests for building entries from backend rows."""

    def test_from_row(self):
        e = TaxonomyEntry.from_row({"id": 7, "location": "台北總部", "activity": "營隊", "option": None})
        assert e == TaxonomyEntry(id=7, location="台北總部", activity="營隊", option=None)

    def test_blank_strings_are_null(self):
        e = TaxonomyEntry.from_row({"id": 1, "location": "A", "activity": "", "option": ""})
        assert e.activity is None
        assert e.option is None

    def test_missing_keys(self):
        e = TaxonomyEntry.from_row({"id": 2, "location": "A"})
        assert (e.activity, e.option) == (None, None)

    def test_as_row_round_trip(self):
        row = {"id": 3, "location": "A", "activity": "X", "option": "Y"}
        assert TaxonomyEntry.from_row(row).as_row() == row
