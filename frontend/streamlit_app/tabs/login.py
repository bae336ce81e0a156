# frontend/streamlit_app/tabs/login.py
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Streamlit screen: Login

People sign in with their real name and the last four characters of their
ID; the identity codec turns both into the address-shaped identifier the auth
service expects. In mock mode no password is asked for and sign-in always
succeeds.

On success the session stores the `AuthUser`, the admin flag from
`user_permissions`, and prefills the registration form's real-name field.
"""

import logging

import streamlit as st

from core.constants import ID_SUFFIX_LEN
from core.identity import login_email
from core.state import IS_ADMIN, USER, form_key
from services.backend import Backend, BackendError
from ui.keys import k

log = logging.getLogger(__name__)


def render(backend: Backend) -> None:
    """Render the login card; reruns the app once a user is signed in."""
    _, mid, _ = st.columns([1, 2, 1])
    with mid, st.container(border=True):
        st.subheader("書記登記系統 登入")

        name = st.text_input("姓名", key=k("login", "name"))
        suffix = st.text_input(
            "ID後四碼", max_chars=ID_SUFFIX_LEN, key=k("login", "id_suffix")
        )
        password = ""
        if not backend.is_mock:
            password = st.text_input("密碼", type="password", key=k("login", "password"))

        if not st.button("進入系統", type="primary", use_container_width=True):
            return

        name, suffix = name.strip(), suffix.strip()
        if not name:
            st.error("請輸入姓名")
            return

        email = login_email(name, suffix)
        try:
            user = backend.sign_in(email, password)
        except BackendError as e:
            log.info("Login rejected: %s", e)
            st.error("登入失敗")
            return

        try:
            is_admin = backend.is_admin(user.email)
        except BackendError as e:
            # A missing permission row must not block a regular user.
            log.warning("Admin flag lookup failed: %s", e)
            is_admin = False

        st.session_state[USER] = user
        st.session_state[IS_ADMIN] = is_admin
        st.session_state[form_key("real_name")] = name
        st.rerun()
