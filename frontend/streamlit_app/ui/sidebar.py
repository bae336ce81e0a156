# frontend/streamlit_app/ui/sidebar.py
# SPDX-License-Identifier: Apache-2.0
"""Sidebar composition for the registration console.

Shows who is signed in: the avatar initial, the display name and ID suffix
decoded from the login identifier, an admin badge and a mock-mode marker. The
logout button signs out of the backend and clears the session's user, admin
flag and form.

Returns
-------
`render_sidebar_and_status()` returns the context dictionary passed to every
tab renderer:
- `backend`: the session's backend (mock or hosted).
- `user`: the signed-in `AuthUser`.
- `is_admin`: whether admin tabs are available.
- `is_mock`: whether the session runs in mock mode.
"""

from __future__ import annotations

import logging
from typing import Any

import streamlit as st

from core.identity import display_name, id_suffix
from core.state import IS_ADMIN, USER, clear_form, navigate
from services.backend import Backend, BackendError
from ui.keys import k

log = logging.getLogger(__name__)


def _logout(backend: Backend) -> None:
    """on_click handler: runs before the next rerun renders any widget."""
    try:
        backend.sign_out()
    except BackendError as e:
        # The local session is dropped regardless; the token expires server-side.
        log.warning("Sign-out failed: %s", e)
    st.session_state[USER] = None
    st.session_state[IS_ADMIN] = False
    clear_form()
    navigate("bulletin")


def render_sidebar_and_status(backend: Backend) -> dict[str, Any]:
    """Render the sidebar for the signed-in user and return the page context."""
    ss = st.session_state
    user = ss[USER]
    is_admin = bool(ss.get(IS_ADMIN))

    name = display_name(user.email)
    with st.sidebar:
        st.header(f"{(name or '?')[0]}  {name}")
        if is_admin:
            st.markdown(":red[**管理員**]")
        st.caption(f"ID: {id_suffix(user.email)}" + (" (展示中)" if backend.is_mock else ""))

        st.button(
            "登出",
            key=k("sidebar", "logout"),
            on_click=_logout,
            args=(backend,),
            use_container_width=True,
        )

        if backend.is_mock:
            st.markdown("---")
            st.caption(
                "展示模式：未設定 SUPABASE_URL / SUPABASE_ANON_KEY，"
                "資料僅保存在伺服器記憶體中。"
            )

    return dict(
        backend=backend,
        user=user,
        is_admin=is_admin,
        is_mock=backend.is_mock,
    )
