# frontend/streamlit_app/core/clients.py
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Backend factories for the registration console.

This module exposes:

- `get_mock_store()` → `services.backend.MockStore`
- `get_backend()`    → `MockBackend | SupabaseBackend` for the current session

Caching rules
-------------
* The mock store is wrapped with `@st.cache_resource`: one store per
  Streamlit **process**, so mock-mode submissions are visible to every
  session until the server restarts.
* The hosted-service client is **not** a cached resource. A `supabase.Client`
  carries the signed-in user's auth session, and a process-wide instance
  would leak one user's session into another's. It is kept in
  `st.session_state` instead, created on first use per browser session.

Failure behavior
----------------
* Missing `SUPABASE_URL`/`SUPABASE_ANON_KEY` selects mock mode.
* A client that cannot be constructed (bad URL, missing dependency) is
  logged and the session degrades to mock mode instead of crashing.

Testing
-------
Use `services.backend.build_backend` directly with a fake client factory;
these wrappers only add Streamlit caching.
"""

import logging

import streamlit as st

from services.backend import Backend, MockStore, build_backend

from .config import settings

log = logging.getLogger(__name__)

_BACKEND_KEY = "_BACKEND"


@st.cache_resource(show_spinner=False)
def get_mock_store() -> MockStore:
    """Construct (once per process) the in-memory store used by mock mode."""
    return MockStore.seeded()


def get_backend() -> Backend:
    """Return this session's backend, building it on first use."""
    backend = st.session_state.get(_BACKEND_KEY)
    if backend is None:
        backend = build_backend(settings, store=get_mock_store())
        st.session_state[_BACKEND_KEY] = backend
        log.debug("Session backend: %s", type(backend).__name__)
    return backend
