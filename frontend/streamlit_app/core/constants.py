# frontend/streamlit_app/core/constants.py
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Registration vocabulary and the mock-mode seed dataset.

This module centralizes:
  1) **Identity placeholders** returned by the identity codec when a login
     identifier is missing.
  2) **Form vocabularies**: the identities and transportation modes a
     registrant may choose, plus the taxonomy option that unlocks the
     free-text itinerary remarks.
  3) **Seed rows** loaded into the in-memory store when no hosted backend is
     configured.

Design notes
------------
- Values are stored verbatim in the backend, so they stay in the language
  the records are written in. Renaming one orphans existing rows.
- Seed rows are plain dicts shaped like backend rows; `MockStore.seeded()`
  deep-copies them so every store starts from the same state.
"""

from typing import Final

# ---------------------------------------------------------------------------
# Identity placeholders
# ---------------------------------------------------------------------------

#: ID suffix shown when no login identifier is available.
ID_SUFFIX_PLACEHOLDER: Final[str] = "0000"

#: Display name shown when no login identifier is available.
DISPLAY_NAME_PLACEHOLDER: Final[str] = "User"

#: Number of trailing ID characters collected at login.
ID_SUFFIX_LEN: Final[int] = 4

#: user_id recorded on submissions made without a signed-in user.
ANONYMOUS_USER_ID: Final[str] = "mock"

# ---------------------------------------------------------------------------
# Form vocabularies
# ---------------------------------------------------------------------------

IDENTITY_ATTENDEE: Final[str] = "參加法會"
IDENTITY_VOLUNTEER: Final[str] = "義工"

#: Ordered identity choices; the first is the form default.
IDENTITIES: Final[list[str]] = [IDENTITY_ATTENDEE, IDENTITY_VOLUNTEER]

#: Ordered transportation choices; the first is the form default.
TRANSPORTATION_MODES: Final[list[str]] = ["自行前往", "大車", "小車"]

#: Taxonomy option whose selection makes itinerary remarks mandatory.
OTHER_ITINERARY_OPTION: Final[str] = "其他行程"

#: Maximum length of the monastery abbreviation.
MONASTERY_MAX_LEN: Final[int] = 2

# ---------------------------------------------------------------------------
# Mock-mode seed data
# ---------------------------------------------------------------------------

SEED_BULLETINS: Final[list[dict]] = [
    {
        "id": 1,
        "content": "🎉 歡迎使用書記預先登記系統！目前運行於【展示模式】。",
    },
]

SEED_HIERARCHY: Final[list[dict]] = [
    {"id": 1, "location": "台北總部", "activity": None, "option": None},
    {"id": 2, "location": "台北總部", "activity": "兒童夏令營", "option": None},
    {"id": 3, "location": "台北總部", "activity": "兒童夏令營", "option": "一般報名組"},
    {"id": 4, "location": "台北總部", "activity": "兒童夏令營", "option": OTHER_ITINERARY_OPTION},
    {"id": 5, "location": "台中分院", "activity": None, "option": None},
    {"id": 6, "location": "台中分院", "activity": "佛學講座", "option": None},
    {"id": 7, "location": "台中分院", "activity": "佛學講座", "option": "現場參加"},
    {"id": 8, "location": "台中分院", "activity": "佛學講座", "option": OTHER_ITINERARY_OPTION},
]
