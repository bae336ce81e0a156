# frontend/streamlit_app/core/state.py
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Session-scoped UI state for the registration console.

This module owns the **default values** expected in `st.session_state` and
the registration form's cascading-select rules.

Why this exists
---------------
- Streamlit widgets read/write `st.session_state` by key. A missing key on
  first render or after a hot reload makes downstream code crash or show an
  inconsistent form.
- The form's three selects depend on each other: choosing another location
  invalidates the chosen activity and option, and choosing another activity
  invalidates the option. The reset rules live here, next to the keys they
  touch, instead of inside widget code.

Design notes
------------
- Every helper takes an optional `state` mapping and defaults to
  `st.session_state`, so the rules are unit-testable with a plain dict.
- Initialization is **idempotent**; existing values are preserved.
"""

from collections.abc import Iterable, Mapping, MutableMapping
from typing import Any, Final

import streamlit as st

from core.constants import IDENTITIES, TRANSPORTATION_MODES
from core.taxonomy import TaxonomyEntry, activities_for, options_for
from ui.keys import k

# Session keys that live outside the form.
USER: Final[str] = "USER"
IS_ADMIN: Final[str] = "IS_ADMIN"
ACTIVE_TAB: Final[str] = "ACTIVE_TAB"
NEXT_TAB: Final[str] = "NEXT_TAB"
FLASH: Final[str] = "FLASH"

DEFAULTS: Final[Mapping[str, Any]] = {
    # Signed-in `AuthUser`, or None on the login screen.
    USER: None,
    # Admin flag read from user_permissions after sign-in.
    IS_ADMIN: False,
    # Tab shown by the navigation bar.
    ACTIVE_TAB: "bulletin",
    # Tab to switch to on the next rerun (e.g. history after a submission).
    NEXT_TAB: None,
    # One-shot success message shown on the next rerun.
    FLASH: None,
}

# Registration form fields and their initial values.
FORM_DEFAULTS: Final[Mapping[str, Any]] = {
    "activity_location": None,
    "activity_name": None,
    "activity_option": None,
    "identity": IDENTITIES[0],
    "transportation": TRANSPORTATION_MODES[0],
    "monastery": "",
    "real_name": "",
    "dharma_name": "",
    "volunteer_group": "",
    "start_date": None,
    "start_time": None,
    "end_date": None,
    "end_time": None,
    "arrival_date": None,
    "arrival_time": None,
    "departure_date": None,
    "departure_time": None,
    "other_remarks": "",
    "need_help": False,
    "memo": "",
}

__all__ = [
    "DEFAULTS",
    "FORM_DEFAULTS",
    "clear_form",
    "ensure_defaults",
    "form_key",
    "form_values",
    "navigate",
    "persist_form",
    "apply_pending_navigation",
    "reset_after_activity",
    "reset_after_location",
    "sanitize_selection",
]


def _ss(state: MutableMapping[str, Any] | None) -> MutableMapping[str, Any]:
    return st.session_state if state is None else state


def form_key(field: str) -> str:
    """Widget/session key of a registration form field."""
    return k("form", field)


def ensure_defaults(state: MutableMapping[str, Any] | None = None) -> None:
    """Ensure all expected session and form keys exist.

    Safe to call on every rerun; values written by widgets are kept.
    """
    ss = _ss(state)
    for key, default_value in DEFAULTS.items():
        ss.setdefault(key, default_value)
    for field, default_value in FORM_DEFAULTS.items():
        ss.setdefault(form_key(field), default_value)


def reset_after_location(state: MutableMapping[str, Any] | None = None) -> None:
    """A new location invalidates the chosen activity and option."""
    ss = _ss(state)
    ss[form_key("activity_name")] = None
    ss[form_key("activity_option")] = None


def reset_after_activity(state: MutableMapping[str, Any] | None = None) -> None:
    """A new activity invalidates the chosen option."""
    _ss(state)[form_key("activity_option")] = None


def sanitize_selection(
    entries: Iterable[TaxonomyEntry],
    state: MutableMapping[str, Any] | None = None,
) -> None:
    """Drop stored selections the current taxonomy no longer offers.

    Must run before the select widgets are created on a rerun; Streamlit
    rejects session values that are not among a widget's options.
    """
    ss = _ss(state)
    entries = list(entries)
    loc = ss.get(form_key("activity_location"))
    act = ss.get(form_key("activity_name"))
    opt = ss.get(form_key("activity_option"))

    if loc is not None and loc not in {e.location for e in entries}:
        ss[form_key("activity_location")] = None
        reset_after_location(ss)
        return
    if act is not None and act not in activities_for(entries, loc):
        reset_after_location(ss)
        return
    if opt is not None and opt not in options_for(entries, loc, act):
        reset_after_activity(ss)


def form_values(state: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Snapshot of the form fields keyed by field name."""
    ss = st.session_state if state is None else state
    return {field: ss.get(form_key(field), default) for field, default in FORM_DEFAULTS.items()}


def clear_form(
    state: MutableMapping[str, Any] | None = None, *, keep: Iterable[str] = ()
) -> None:
    """Reset the form to its defaults, except for the fields named in `keep`."""
    ss = _ss(state)
    kept = set(keep)
    for field, default_value in FORM_DEFAULTS.items():
        if field not in kept:
            ss[form_key(field)] = default_value


def navigate(tab: str, state: MutableMapping[str, Any] | None = None) -> None:
    """Request a tab switch; applied on the next rerun before the nav renders."""
    _ss(state)[NEXT_TAB] = tab


def apply_pending_navigation(state: MutableMapping[str, Any] | None = None) -> None:
    """Move a pending tab request into the navigation widget's key."""
    ss = _ss(state)
    tab = ss.get(NEXT_TAB)
    if tab:
        ss[ACTIVE_TAB] = tab
        ss[NEXT_TAB] = None


def persist_form(state: MutableMapping[str, Any] | None = None) -> None:
    """Keep form values while the form tab is not rendered.

    Streamlit discards a widget's session value on a run in which the widget
    is not drawn; re-assigning the key marks it as user state instead.
    """
    ss = _ss(state)
    for field in FORM_DEFAULTS:
        key = form_key(field)
        if key in ss:
            ss[key] = ss[key]
