# frontend/streamlit_app/ui/keys.py
# SPDX-License-Identifier: Apache-2.0
"""Namespaced Streamlit widget keys.

Widgets across the console's tabs reuse labels such as "新增" or "刪除";
without explicit keys Streamlit raises `StreamlitDuplicateElementId`. Every
key is therefore built as "<scope>:<name>", e.g. `k("form", "real_name")`.

The registration form's keys double as its `st.session_state` entries (see
`core.state.form_key`), so renaming one drops the user's input on reload.
"""

from __future__ import annotations


def k(scope: str, name: str) -> str:
    """Return the key "<scope>:<name>".

    Args:
      scope: Tab or area owning the widget ("form", "admin", "login", ...).
      name: Widget identifier within that scope. Dynamic parts such as a
        taxonomy entry id may be appended by the caller.
    """
    return f"{scope}:{name}"
