# frontend/streamlit_app/core/config.py
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Centralized, immutable configuration for the registration console.

A frozen `Settings` dataclass is populated from environment variables (loaded
via python-dotenv when a `.env` file is present). Other modules import the
`settings` singleton instead of calling `os.getenv` themselves.

Backend selection
-----------------
- `SUPABASE_URL` and `SUPABASE_ANON_KEY` point the app at the hosted
  data/auth service. The `NEXT_PUBLIC_` and `REACT_APP_` prefixed names used
  by the web deployments are accepted as well, so one `.env` serves both.
- Leaving either value empty is **not** an error: the app starts in mock mode
  against an in-memory seed dataset (see `services.backend.MockBackend`).

Security notes
--------------
- The anon key is a *public* key; it is still kept out of logs.
- `LOGIN_DOMAIN` is a fixed, non-secret marker appended to encoded login
  names. Changing it invalidates every existing account.

Testing
-------
Set environment variables before importing, or build a throwaway instance:
    >>> from core.config import Settings
    >>> Settings(SUPABASE_URL="", SUPABASE_ANON_KEY="").live_backend
    False
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# `override=False` by default, so pre-set env vars take precedence.
load_dotenv()


def _env_first(*names: str, default: str = "") -> str:
    """Return the first non-empty environment variable among `names`."""
    for name in names:
        value = os.getenv(name)
        if value:
            return value.strip()
    return default


@dataclass(frozen=True)
class Settings:
    """
    Immutable application settings.

    Each attribute is populated from the corresponding environment variable;
    when unset, a documented default is used.
    """

    # --- Hosted data/auth service ---------------------------------------------
    SUPABASE_URL: str = _env_first(
        "SUPABASE_URL", "NEXT_PUBLIC_SUPABASE_URL", "REACT_APP_SUPABASE_URL"
    )
    SUPABASE_ANON_KEY: str = _env_first(
        "SUPABASE_ANON_KEY",
        "NEXT_PUBLIC_SUPABASE_ANON_KEY",
        "REACT_APP_SUPABASE_ANON_KEY",
    )

    # --- Identity ---------------------------------------------------------------
    # Domain marker appended to hex-encoded login names.
    LOGIN_DOMAIN: str = os.getenv("LOGIN_DOMAIN", "@my-notes.com")

    # --- Presentation / diagnostics --------------------------------------------
    APP_TITLE: str = os.getenv("APP_TITLE", "書記預先登記系統")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def live_backend(self) -> bool:
        """True when both the service URL and its public key are configured."""
        return bool(self.SUPABASE_URL and self.SUPABASE_ANON_KEY)


# Singleton settings object imported by consumers.
settings = Settings()
