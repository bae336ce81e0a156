# frontend/streamlit_app/tabs/admin_data.py
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Streamlit tab: All registrations (administrators)

Shows every submitted record, newest first, optionally narrowed to one
location/activity, with a CSV download of the rows currently shown.
"""

from datetime import date

import streamlit as st

from core.taxonomy import TaxonomyEntry, activities_for, locations
from services.backend import BackendError
from services.registration import records_to_csv
from ui.components import registrations_table
from ui.keys import k

_ALL = "全部"


def _reset_activity() -> None:
    st.session_state[k("admin_data", "activity")] = _ALL


def render(ctx: dict) -> None:
    """Render the admin records table and export."""
    if not ctx["is_admin"]:
        st.warning("此頁面僅限管理員使用")
        return

    try:
        records = ctx["backend"].list_registrations()
    except BackendError as e:
        st.error(f"資料載入失敗：{e}")
        return

    # Filter choices come from the records themselves, so rows whose
    # taxonomy entries were deleted can still be found.
    seen = [
        TaxonomyEntry(
            id=None,
            location=r.get("activity_location") or "",
            activity=r.get("activity_name") or None,
        )
        for r in records
    ]
    f1, f2 = st.columns(2)
    with f1:
        loc = st.selectbox(
            "地點",
            [_ALL] + locations(seen),
            key=k("admin_data", "location"),
            on_change=_reset_activity,
        )
    with f2:
        act = st.selectbox(
            "活動",
            [_ALL] + activities_for(seen, loc),
            disabled=loc == _ALL,
            key=k("admin_data", "activity"),
        )

    shown = [
        r
        for r in records
        if (loc == _ALL or r.get("activity_location") == loc)
        and (loc == _ALL or act == _ALL or r.get("activity_name") == act)
    ]

    st.caption(f"共 {len(shown)} 筆")
    registrations_table(shown)

    st.download_button(
        "⬇️ 下載 CSV",
        data=records_to_csv(shown),
        file_name=f"registrations_{date.today():%Y%m%d}.csv",
        mime="text/csv",
        disabled=not shown,
        key=k("admin_data", "download"),
    )
