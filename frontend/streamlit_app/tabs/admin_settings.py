# frontend/streamlit_app/tabs/admin_settings.py
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Streamlit tab: Taxonomy settings (administrators)

Purpose
-------
Curate the location → activity → option tree and post bulletins.

Layout
------
Three columns, each with an "add" row and a list of existing rows:
  1) Locations         : every distinct location; click to select it
  2) Activities        : activity rows of the selected location
  3) Options           : option rows of the selected activity

Every add inserts exactly one entry; every delete removes exactly one entry
by id. Deleting a location removes the first row carrying it (see
`core.taxonomy.first_entry_for_location`).

Design Notes
------------
- Adds and delete requests run as `on_click` callbacks so the text inputs
  can be cleared before they are drawn again.
- Deletes are two-step: the trash button only stages the entry; the
  confirmation bar at the top issues the backend call.
- Outcomes of callbacks are parked in session state and shown on the rerun.
"""

import logging
from typing import Any

import streamlit as st

from core.taxonomy import (
    TaxonomyEntry,
    activity_entries,
    first_entry_for_location,
    locations,
    option_entries,
)
from services.backend import Backend, BackendError
from ui.keys import k

log = logging.getLogger(__name__)

_SEL_LOC = k("admin", "selected_location")
_SEL_ACT = k("admin", "selected_activity")
_PENDING_DELETE = k("admin", "pending_delete")
_MESSAGE = k("admin", "message")
_NEW_LOC = k("admin", "new_location")
_NEW_ACT = k("admin", "new_activity")
_NEW_OPT = k("admin", "new_option")
_NEW_BULLETIN = k("admin", "new_bulletin")


# ============================== Callbacks ====================================


def _report(kind: str, text: str) -> None:
    st.session_state[_MESSAGE] = (kind, text)


def _select_location(location: str) -> None:
    ss = st.session_state
    ss[_SEL_LOC] = location
    ss[_SEL_ACT] = None


def _select_activity(activity: str) -> None:
    st.session_state[_SEL_ACT] = activity


def _add(
    backend: Backend,
    input_key: str,
    location: str | None,
    activity: str | None = None,
    level: str = "location",
) -> None:
    """Insert one entry from the text input at `input_key`, then clear it."""
    ss = st.session_state
    value = (ss.get(input_key) or "").strip()
    if not value:
        return
    args: dict[str, Any] = {"location": value}
    if level == "activity":
        args = {"location": location, "activity": value}
    elif level == "option":
        args = {"location": location, "activity": activity, "option": value}
    try:
        backend.add_taxonomy_entry(**args)
    except BackendError as e:
        _report("error", f"新增失敗：{e}")
        return
    ss[input_key] = ""
    _report("success", f"已新增：{value}")


def _stage_delete(entry: TaxonomyEntry, label: str) -> None:
    st.session_state[_PENDING_DELETE] = (entry.id, label)


def _cancel_delete() -> None:
    st.session_state[_PENDING_DELETE] = None


def _confirm_delete(backend: Backend) -> None:
    ss = st.session_state
    pending = ss.get(_PENDING_DELETE)
    ss[_PENDING_DELETE] = None
    if not pending:
        return
    entry_id, label = pending
    try:
        backend.delete_taxonomy_entry(entry_id)
    except BackendError as e:
        _report("error", f"刪除失敗：{e}")
        return
    log.info("Deleted taxonomy entry %s", entry_id)
    _report("success", f"已刪除：{label}")


def _post_bulletin(backend: Backend) -> None:
    ss = st.session_state
    content = (ss.get(_NEW_BULLETIN) or "").strip()
    if not content:
        _report("error", "公告內容不可為空")
        return
    try:
        backend.post_bulletin(content)
    except BackendError as e:
        _report("error", f"發布失敗：{e}")
        return
    ss[_NEW_BULLETIN] = ""
    _report("success", "公告已發布")


# ============================== Rendering ====================================


def _row(label: str, *, selected: bool, select, delete, key: str) -> None:
    """One list row: a select button (optional) and a trash button."""
    name_col, del_col = st.columns([5, 1])
    with name_col:
        if select is None:
            st.markdown(f"**{label}**")
        else:
            st.button(
                label,
                key=k("admin", f"sel:{key}"),
                type="primary" if selected else "secondary",
                on_click=select[0],
                args=select[1],
                use_container_width=True,
            )
    with del_col:
        st.button("🗑", key=k("admin", f"del:{key}"), on_click=delete[0], args=delete[1])


def _add_row(
    label: str, input_key: str, *, disabled: bool, on_click, args: tuple, kwargs: dict
) -> None:
    """Text input plus an add button."""
    inp, btn = st.columns([4, 1])
    with inp:
        st.text_input(
            label,
            key=input_key,
            disabled=disabled,
            placeholder=label,
            label_visibility="collapsed",
        )
    with btn:
        st.button(
            "➕",
            key=f"{input_key}:add",
            disabled=disabled,
            on_click=on_click,
            args=args,
            kwargs=kwargs,
        )


def render(ctx: dict) -> None:
    """Render the taxonomy and bulletin management tab."""
    if not ctx["is_admin"]:
        st.warning("此頁面僅限管理員使用")
        return

    backend: Backend = ctx["backend"]
    ss = st.session_state
    ss.setdefault(_SEL_LOC, None)
    ss.setdefault(_SEL_ACT, None)
    ss.setdefault(_PENDING_DELETE, None)

    message = ss.pop(_MESSAGE, None)
    if message:
        kind, text = message
        (st.success if kind == "success" else st.error)(text)

    pending = ss.get(_PENDING_DELETE)
    if pending:
        st.warning(f"確定刪除「{pending[1]}」？")
        yes, no, _ = st.columns([1, 1, 4])
        with yes:
            st.button(
                "確定刪除",
                key=k("admin", "confirm_delete"),
                type="primary",
                on_click=_confirm_delete,
                args=(backend,),
            )
        with no:
            st.button("取消", key=k("admin", "cancel_delete"), on_click=_cancel_delete)

    try:
        entries = backend.list_taxonomy()
    except BackendError as e:
        st.error(f"活動資料載入失敗：{e}")
        return

    st.subheader("🗄️ 層級數據管理")
    # Selections may point at rows deleted since the last rerun.
    if ss[_SEL_LOC] not in locations(entries):
        ss[_SEL_LOC] = None
    if ss[_SEL_ACT] not in {e.activity for e in activity_entries(entries, ss[_SEL_LOC])}:
        ss[_SEL_ACT] = None
    sel_loc, sel_act = ss[_SEL_LOC], ss[_SEL_ACT]
    col_loc, col_act, col_opt = st.columns(3)

    with col_loc:
        st.markdown("#### 1. 地點")
        _add_row(
            "新地點",
            _NEW_LOC,
            disabled=False,
            on_click=_add,
            args=(backend, _NEW_LOC, None),
            kwargs={},
        )
        for i, loc in enumerate(locations(entries)):
            target = first_entry_for_location(entries, loc)
            _row(
                loc,
                selected=loc == sel_loc,
                select=(_select_location, (loc,)),
                delete=(_stage_delete, (target, loc)),
                key=f"loc:{i}:{target.id}",
            )

    with col_act:
        st.markdown("#### 2. 活動")
        _add_row(
            "新活動",
            _NEW_ACT,
            disabled=not sel_loc,
            on_click=_add,
            args=(backend, _NEW_ACT, sel_loc),
            kwargs={"level": "activity"},
        )
        for e in activity_entries(entries, sel_loc):
            _row(
                e.activity,
                selected=e.activity == sel_act,
                select=(_select_activity, (e.activity,)),
                delete=(_stage_delete, (e, f"{sel_loc} / {e.activity}")),
                key=f"act:{e.id}",
            )

    with col_opt:
        st.markdown("#### 3. 選項")
        _add_row(
            "新選項",
            _NEW_OPT,
            disabled=not sel_act,
            on_click=_add,
            args=(backend, _NEW_OPT, sel_loc, sel_act),
            kwargs={"level": "option"},
        )
        for e in option_entries(entries, sel_loc, sel_act):
            _row(
                e.option,
                selected=False,
                select=None,
                delete=(_stage_delete, (e, f"{sel_loc} / {sel_act} / {e.option}")),
                key=f"opt:{e.id}",
            )

    # ─────────────────────────────────────────────────────────────────────
    # Bulletins
    # ─────────────────────────────────────────────────────────────────────
    st.markdown("---")
    st.subheader("🔔 發布公告")
    st.text_area("公告內容", height=120, key=_NEW_BULLETIN)
    st.button("發布", key=k("admin", "post_bulletin"), on_click=_post_bulletin, args=(backend,))
