# frontend/streamlit_app/ui/components.py
# SPDX-License-Identifier: Apache-2.0
"""Reusable presentation helpers for the registration console.

Provided:
  • format_datetime(): "YYYY/MM/DD HH:MM" rendering of stored timestamps.
  • bulletin_card(): one bulletin with its posting time.
  • registration_card(): one submitted record as shown in the history tab.
  • registrations_table(): compact admin table of many records.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

import streamlit as st

from core.constants import IDENTITY_VOLUNTEER

_MISSING = "-"


def format_datetime(value: str | datetime | None) -> str:
    """Render a stored timestamp as "YYYY/MM/DD HH:MM".

    Timezone-aware values are shown in the server's local time. Missing
    values render as "-" and unparseable strings are returned unchanged.

    Examples:
      >>> format_datetime("2025-07-01T08:05")
      '2025/07/01 08:05'
      >>> format_datetime(None)
      '-'
    """
    if not value:
        return _MISSING
    if isinstance(value, datetime):
        d = value
    else:
        try:
            # Backends may return a trailing "Z" for UTC.
            d = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            return str(value)
    if d.tzinfo is not None:
        d = d.astimezone()
    return d.strftime("%Y/%m/%d %H:%M")


def bulletin_card(bulletin: Mapping[str, Any]) -> None:
    """Render a bulletin; content keeps its line breaks."""
    with st.container(border=True):
        st.text(bulletin.get("content") or "")
        st.caption(format_datetime(bulletin.get("created_at")))


def registration_card(record: Mapping[str, Any]) -> None:
    """Render one submitted registration as shown to its owner."""
    with st.container(border=True):
        head, badge = st.columns([3, 1])
        with head:
            st.caption(record.get("activity_location") or "")
            st.markdown(f"**{record.get('activity_name') or ''}**")
        with badge:
            st.markdown(f"`{record.get('activity_option') or ''}`")
            st.caption(record.get("identity") or "")

        monastery = record.get("monastery")
        st.markdown(
            f"👤 **{record.get('real_name') or ''}**"
            + (f" ({monastery})" if monastery else "")
        )
        st.write(f"🚗 交通：{record.get('transportation') or _MISSING}")

        if record.get("identity") == IDENTITY_VOLUNTEER:
            st.markdown(
                f"**發心資訊**  \n"
                f"組別：{record.get('volunteer_group') or _MISSING}  \n"
                f"發心：{format_datetime(record.get('start_date'))} ~ "
                f"{format_datetime(record.get('end_date'))}"
            )

        st.markdown(
            f"**行程時間**  \n"
            f"抵寺：{format_datetime(record.get('arrival_datetime'))}  \n"
            f"離寺：{format_datetime(record.get('departure_datetime'))}"
        )
        if record.get("other_remarks"):
            st.caption(f"備註：{record['other_remarks']}")


def registrations_table(records: Iterable[Mapping[str, Any]]) -> None:
    """Render records as a static admin table (newest first as given)."""
    rows = [
        {
            "登記時間": format_datetime(r.get("created_at")),
            "簽名": r.get("sign_name") or "",
            "地點": r.get("activity_location") or "",
            "活動": r.get("activity_name") or "",
            "選項": r.get("activity_option") or "",
            "身份": r.get("identity") or "",
            "交通": r.get("transportation") or "",
            "抵寺": format_datetime(r.get("arrival_datetime")),
            "離寺": format_datetime(r.get("departure_datetime")),
        }
        for r in records
    ]
    if not rows:
        st.info("目前尚無任何登記資料")
        return
    st.dataframe(rows, use_container_width=True, hide_index=True)
