# frontend/streamlit_app/tabs/bulletin.py
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""Streamlit tab: Bulletins, newest first, read-only for everyone."""

import streamlit as st

from services.backend import BackendError
from ui.components import bulletin_card


def render(ctx: dict) -> None:
    """Render the bulletin list."""
    try:
        bulletins = ctx["backend"].list_bulletins()
    except BackendError as e:
        st.error(f"公告載入失敗：{e}")
        return

    if not bulletins:
        st.info("目前沒有公告")
        return
    for b in bulletins:
        bulletin_card(b)
