# frontend/streamlit_app/tabs/form.py
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Streamlit tab: Registration form

Purpose
-------
Collects one activity sign-up record:
  • location → activity → option, as cascading selects over the taxonomy
  • identity (attendee / volunteer) and transportation
  • monastery, real name, dharma name
  • volunteer group and volunteer window (volunteers only)
  • arrival / departure datetimes
  • itinerary remarks (only for the "other itinerary" option)

Design Notes
------------
- Every widget is bound to a `core.state.form_key(...)` session key, so
  values survive tab switches. No widget is passed a default value; the
  defaults live in `core.state.FORM_DEFAULTS`.
- Cascading resets run as `on_change` callbacks, i.e. before the rerun
  renders the dependent selects. `sanitize_selection` additionally drops
  selections an administrator removed from the taxonomy meanwhile.
- Validation happens entirely client-side before the backend is called;
  nothing is written when it fails.

Error Handling
--------------
Input problems and backend failures are both surfaced with `st.error()`;
after a successful insert the user lands on the history tab.
"""

import logging
from datetime import date

import streamlit as st

from core.constants import (
    IDENTITIES,
    IDENTITY_VOLUNTEER,
    MONASTERY_MAX_LEN,
    OTHER_ITINERARY_OPTION,
    TRANSPORTATION_MODES,
)
from core.state import (
    FLASH,
    form_key,
    form_values,
    navigate,
    reset_after_activity,
    reset_after_location,
    sanitize_selection,
)
from core.taxonomy import activities_for, locations, options_for
from services.backend import BackendError
from services.registration import (
    RegistrationError,
    build_payload,
    collect_form,
    validate_registration,
)
from ui.keys import k

log = logging.getLogger(__name__)


def _datetime_pair(label: str, date_field: str, time_field: str, *, min_date: date | None = None) -> None:
    """Date + time inputs standing in for one datetime field."""
    d, t = st.columns([3, 2])
    with d:
        st.date_input(f"{label}（日期）", min_value=min_date, key=form_key(date_field))
    with t:
        st.time_input(f"{label}（時間）", step=900, key=form_key(time_field))


def render(ctx: dict) -> None:
    """Render the registration form and handle submission."""
    backend = ctx["backend"]
    ss = st.session_state
    st.subheader("📝 發心登記表")

    try:
        entries = backend.list_taxonomy()
    except BackendError as e:
        st.error(f"活動資料載入失敗：{e}")
        return
    sanitize_selection(entries)

    loc = ss.get(form_key("activity_location"))
    act = ss.get(form_key("activity_name"))

    # ─────────────────────────────────────────────────────────────────────
    # 1. Activity cascade
    # ─────────────────────────────────────────────────────────────────────
    c1, c2, c3 = st.columns(3)
    with c1:
        st.selectbox(
            "📍 1. 活動地點*",
            locations(entries),
            placeholder="請選擇地點",
            key=form_key("activity_location"),
            on_change=reset_after_location,
        )
    with c2:
        st.selectbox(
            "🏷️ 2. 活動名稱*",
            activities_for(entries, loc),
            placeholder="請選擇活動",
            disabled=not loc,
            key=form_key("activity_name"),
            on_change=reset_after_activity,
        )
    with c3:
        st.selectbox(
            "☰ 3. 活動選項*",
            options_for(entries, loc, act),
            placeholder="請選擇選項",
            disabled=not act,
            key=form_key("activity_option"),
        )

    # ─────────────────────────────────────────────────────────────────────
    # 2. Identity, transportation, names
    # ─────────────────────────────────────────────────────────────────────
    c1, c2, c3 = st.columns(3)
    with c1:
        st.selectbox("👤 身份*", IDENTITIES, key=form_key("identity"))
    with c2:
        st.selectbox("🚗 交通*", TRANSPORTATION_MODES, key=form_key("transportation"))
    with c3:
        st.text_input(
            f"精舍 (限{MONASTERY_MAX_LEN}字)",
            max_chars=MONASTERY_MAX_LEN,
            placeholder="例：普台",
            key=form_key("monastery"),
        )

    volunteer = ss.get(form_key("identity")) == IDENTITY_VOLUNTEER
    c1, c2, c3 = st.columns(3)
    with c1:
        st.text_input("姓名*", key=form_key("real_name"))
    with c2:
        st.text_input("法名", key=form_key("dharma_name"))
    if volunteer:
        with c3:
            st.text_input("發心組別*", placeholder="例：書記組", key=form_key("volunteer_group"))

    # ─────────────────────────────────────────────────────────────────────
    # 3. Times
    # ─────────────────────────────────────────────────────────────────────
    st.markdown("---")
    left, right = st.columns(2)
    if volunteer:
        with left:
            _datetime_pair("🕒 發心起日時*", "start_date", "start_time", min_date=date.today())
        with right:
            _datetime_pair("🕒 發心迄日時*", "end_date", "end_time", min_date=date.today())
    with left:
        _datetime_pair("🕒 抵寺日時*", "arrival_date", "arrival_time")
    with right:
        _datetime_pair("🕒 離寺日時*", "departure_date", "departure_time")

    if ss.get(form_key("activity_option")) == OTHER_ITINERARY_OPTION:
        st.text_area(
            "ℹ️ 其他行程備註*",
            placeholder="請詳細說明您的其他行程安排...",
            height=100,
            key=form_key("other_remarks"),
        )

    st.checkbox("需要協助", key=form_key("need_help"))
    st.text_area("備註", height=80, key=form_key("memo"))

    # ─────────────────────────────────────────────────────────────────────
    # Submit
    # ─────────────────────────────────────────────────────────────────────
    if not st.button(
        "💾 確認提交登記", type="primary", use_container_width=True, key=k("form", "submit")
    ):
        return

    form = collect_form(form_values())
    try:
        validate_registration(form)
    except RegistrationError as e:
        st.error(str(e))
        return

    payload = build_payload(form, ctx["user"])
    try:
        with st.spinner("處理中..."):
            backend.submit_registration(payload)
    except BackendError as e:
        st.error(f"錯誤: {e}")
        return

    log.info("Registration submitted for %s", payload["activity_location"])
    ss[FLASH] = "登記成功" + (" (展示模式)" if ctx["is_mock"] else "")
    navigate("history")
    st.rerun()
