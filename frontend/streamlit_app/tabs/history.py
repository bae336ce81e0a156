# frontend/streamlit_app/tabs/history.py
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Streamlit tab: History

Lists the signed-in user's own registrations, newest first, as cards in a
three-column grid. Records are matched on `user_id`, so in mock mode every
session sees the submissions of the shared mock user.
"""

import streamlit as st

from services.backend import BackendError
from services.registration import records_for_user
from ui.components import registration_card

_GRID = 3


def render(ctx: dict) -> None:
    """Render the user's submission history."""
    try:
        records = ctx["backend"].list_registrations()
    except BackendError as e:
        st.error(f"紀錄載入失敗：{e}")
        return

    mine = records_for_user(records, ctx["user"])
    if not mine:
        st.info("您目前尚無登記紀錄")
        return

    cols = st.columns(_GRID)
    for i, record in enumerate(mine):
        with cols[i % _GRID]:
            registration_card(record)
