# frontend/streamlit_app/app.py
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

__doc__ = """Registration console (Streamlit).

This module is the Streamlit entrypoint. It wires up logging, the page chrome,
the login gate, the sidebar (who is signed in) and the tab bar.

Tabs (left-to-right order):
  1) 公告 Bulletins       : announcements, newest first.
  2) 報名 Form            : activity sign-up with cascading selects.
  3) 紀錄 History         : the signed-in user's own submissions.
  4) 設定 Settings        : taxonomy curation + bulletin posting (admins).
  5) 資料 Data            : every submission, filter + CSV export (admins).

Design notes:
* Sibling packages (core/, services/, ui/, tabs/) are imported by adding this
  directory to sys.path, so `streamlit run frontend/streamlit_app/app.py`
  works from a plain checkout.
* Page modules live in tabs/ rather than pages/: Streamlit treats a pages/
  directory next to the entrypoint as separate multipage scripts.
* Each tab module renders its own UI and keeps widget keys namespaced (see
  ui/keys.py). Tab modules are side-effect free on import.
* Keep this file thin. Backend access belongs to services/backend.py,
  form rules to services/registration.py.
"""

# ────────────────────── sys.path bootstrap for local packages ─────────────────
import pathlib
import sys

APP_DIR = pathlib.Path(__file__).resolve().parent
if str(APP_DIR) not in sys.path:
    sys.path.insert(0, str(APP_DIR))
# ──────────────────────────────────────────────────────────────────────────────

import logging
from collections.abc import Callable
from typing import Final

import streamlit as st

from core.clients import get_backend
from core.config import settings
from core.state import FLASH, USER, ensure_defaults, persist_form
from tabs import admin_data, admin_settings, bulletin, form, history, login
from ui.layout import configure_page, render_nav
from ui.sidebar import render_sidebar_and_status

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# ─────────────────────────────── Page chrome ──────────────────────────────────
configure_page(title=settings.APP_TITLE)

ensure_defaults()
persist_form()
backend = get_backend()

# ─────────────────────────────── Login gate ───────────────────────────────────
if st.session_state[USER] is None:
    login.render(backend)
    st.stop()

ctx: dict = render_sidebar_and_status(backend)

# ─────────────────────────────── Tabs wiring ──────────────────────────────────
RENDERERS: Final[dict[str, Callable[[dict], None]]] = {
    "bulletin": bulletin.render,
    "form": form.render,
    "history": history.render,
    "admin_settings": admin_settings.render,
    "admin_data": admin_data.render,
}

active = render_nav(ctx["is_admin"])

flash = st.session_state.get(FLASH)
if flash:
    st.success(flash)
    st.session_state[FLASH] = None

RENDERERS[active](ctx)
