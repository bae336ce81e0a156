# frontend/streamlit_app/ui/layout.py
# SPDX-License-Identifier: Apache-2.0
"""Page chrome and navigation for the registration console.

- `configure_page`: sets the browser title and renders the in-app heading.
  Must be the first Streamlit call of a run (`st.set_page_config`).
- `render_nav`: the tab bar. Streamlit's `st.tabs` cannot be switched from
  code, and a submission must land the user on their history, so the bar is
  a horizontal radio bound to `core.state.ACTIVE_TAB`.
"""

from __future__ import annotations

from collections.abc import Sequence

import streamlit as st

from core.state import ACTIVE_TAB, apply_pending_navigation

# (tab id, label) in display order.
USER_TABS: list[tuple[str, str]] = [
    ("bulletin", "🔔 公告"),
    ("form", "📝 報名"),
    ("history", "🕘 紀錄"),
]
ADMIN_TABS: list[tuple[str, str]] = [
    ("admin_settings", "⚙️ 設定"),
    ("admin_data", "📄 資料"),
]


def configure_page(title: str) -> None:
    """Configure the browser tab and render the top-level title."""
    st.set_page_config(page_title=title, page_icon="🛡️", layout="wide")
    st.title(f"🛡️ {title}")


def render_nav(is_admin: bool) -> str:
    """Render the tab bar and return the selected tab id."""
    tabs: Sequence[tuple[str, str]] = USER_TABS + (ADMIN_TABS if is_admin else [])
    ids = [tab_id for tab_id, _ in tabs]
    labels = dict(tabs)

    apply_pending_navigation()
    # An admin tab left selected after losing admin rights falls back home.
    if st.session_state.get(ACTIVE_TAB) not in ids:
        st.session_state[ACTIVE_TAB] = ids[0]

    return st.radio(
        "功能",
        ids,
        format_func=labels.__getitem__,
        horizontal=True,
        key=ACTIVE_TAB,
        label_visibility="collapsed",
    )
