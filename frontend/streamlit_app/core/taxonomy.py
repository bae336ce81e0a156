# frontend/streamlit_app/core/taxonomy.py
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Taxonomy index: location -> activity -> option cascade over a flat entry list.

Administrators curate the taxonomy one entry at a time. An entry with no
activity only establishes a location; an entry with an activity but no option
only establishes that activity under its location; an entry with both carries
one selectable option.

All functions here are pure and recompute from the entries they are given,
so callers can feed them whatever the backend returned on this rerun.

Ordering
--------
- `locations` and `activities_for` are sorted and de-duplicated.
- `options_for` is sorted but keeps duplicates: every option-bearing entry
  is a distinct row the administrator may want to see (and delete) on its own.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class TaxonomyEntry:
    """One row of the `activity_hierarchy` collection."""

    id: Any
    location: str
    activity: str | None = None
    option: str | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> TaxonomyEntry:
        """Build an entry from a backend row; blank strings count as null."""
        return cls(
            id=row.get("id"),
            location=str(row.get("location") or ""),
            activity=row.get("activity") or None,
            option=row.get("option") or None,
        )

    def as_row(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "location": self.location,
            "activity": self.activity,
            "option": self.option,
        }


def locations(entries: Iterable[TaxonomyEntry]) -> list[str]:
    """Distinct locations across all entries, sorted."""
    return sorted({e.location for e in entries})


def activities_for(entries: Iterable[TaxonomyEntry], location: str | None) -> list[str]:
    """Distinct non-null activities offered at `location`, sorted."""
    return sorted(
        {e.activity for e in entries if e.location == location and e.activity is not None}
    )


def options_for(
    entries: Iterable[TaxonomyEntry], location: str | None, activity: str | None
) -> list[str]:
    """Non-null options of the exact `(location, activity)` pair, sorted, duplicates kept."""
    return sorted(
        e.option
        for e in entries
        if e.location == location and e.activity == activity and e.option is not None
    )


# ---------------------------------------------------------------------------
# Admin-view helpers
# ---------------------------------------------------------------------------


def activity_entries(entries: Iterable[TaxonomyEntry], location: str | None) -> list[TaxonomyEntry]:
    """Entries that establish an activity under `location` (no option)."""
    return [
        e for e in entries if e.location == location and e.activity and not e.option
    ]


def option_entries(
    entries: Iterable[TaxonomyEntry], location: str | None, activity: str | None
) -> list[TaxonomyEntry]:
    """Option-bearing entries of the `(location, activity)` pair."""
    return [
        e
        for e in entries
        if e.location == location and e.activity == activity and e.option
    ]


def first_entry_for_location(
    entries: Iterable[TaxonomyEntry], location: str
) -> TaxonomyEntry | None:
    """First entry carrying `location`; the row removed by a location delete.

    Only that single row is deleted. The location stays listed while other
    rows still name it.
    """
    return next((e for e in entries if e.location == location), None)
