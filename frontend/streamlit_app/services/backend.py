# frontend/streamlit_app/services/backend.py
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Persistence/auth collaborator for the registration console.

This module hides the hosted data/auth service behind a small, fixed
interface so pages never talk to the SDK directly:

  • Auth           : `sign_in`, `sign_out`, `is_admin`
  • Bulletins      : `list_bulletins` (newest first), `post_bulletin`
  • Taxonomy       : `list_taxonomy`, `add_taxonomy_entry`, `delete_taxonomy_entry`
  • Registrations  : `list_registrations` (newest first), `submit_registration`

Two implementations share that surface:

- `SupabaseBackend` wraps a `supabase.Client`. Every SDK failure is re-raised
  as `BackendError` carrying the service's message, so pages handle a single
  exception type and show the text to the user.
- `MockBackend` runs against an explicitly owned `MockStore`. It is used when
  the service is not configured; sign-in always succeeds without checking the
  password and the mock user is an administrator.

Design principles
-----------------
- No optimistic updates: callers refresh their view only after a call
  returns successfully, so a failure leaves local state untouched.
- Deleting a taxonomy entry that does not exist is a no-op in both backends.
- Nothing here touches Streamlit; `core.clients` decides which backend a
  session gets.
"""

import copy
import itertools
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, TypeVar

from core.config import Settings
from core.constants import SEED_BULLETINS, SEED_HIERARCHY
from core.taxonomy import TaxonomyEntry

log = logging.getLogger(__name__)

T = TypeVar("T")

# Collection names on the hosted service.
BULLETINS_TABLE = "bulletins"
HIERARCHY_TABLE = "activity_hierarchy"
REGISTRATIONS_TABLE = "notes"
PERMISSIONS_TABLE = "user_permissions"

MOCK_USER_ID = "mock-u-1"


class BackendError(RuntimeError):
    """A call to the hosted service failed; the message is user-presentable."""


@dataclass(frozen=True)
class AuthUser:
    """Signed-in user: stable id plus the derived login identifier."""

    id: str
    email: str


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _short(email: str) -> str:
    """Abbreviate a login identifier for log lines."""
    return f"{email[:8]}…" if len(email) > 8 else email


# =============================================================================
# Mock mode
# =============================================================================


@dataclass
class MockStore:
    """In-memory collections backing mock mode.

    One store is shared by every session of the process (see
    `core.clients.get_mock_store`); there is no locking because Streamlit
    handlers of a session run one at a time and the data is demo-only.
    """

    bulletins: list[dict] = field(default_factory=list)
    hierarchy: list[dict] = field(default_factory=list)
    registrations: list[dict] = field(default_factory=list)
    _ids: Any = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        rows = itertools.chain(self.bulletins, self.hierarchy, self.registrations)
        start = max((int(r["id"]) for r in rows if isinstance(r.get("id"), int)), default=0)
        self._ids = itertools.count(start + 1)

    @classmethod
    def seeded(cls) -> MockStore:
        """A fresh store holding a private copy of the seed dataset."""
        now = _utc_now_iso()
        bulletins = [{**b, "created_at": now} for b in copy.deepcopy(SEED_BULLETINS)]
        return cls(bulletins=bulletins, hierarchy=copy.deepcopy(SEED_HIERARCHY))

    def next_id(self) -> int:
        return next(self._ids)


class MockBackend:
    """Backend over a `MockStore`; no network, no password verification."""

    is_mock = True

    def __init__(self, store: MockStore | None = None) -> None:
        self.store = store if store is not None else MockStore.seeded()

    # --- auth -----------------------------------------------------------------
    def sign_in(self, email: str, password: str = "") -> AuthUser:
        log.info("Mock sign-in for %s", _short(email))
        return AuthUser(id=MOCK_USER_ID, email=email)

    def sign_out(self) -> None:
        log.debug("Mock sign-out")

    def is_admin(self, email: str) -> bool:
        return True

    # --- bulletins --------------------------------------------------------------
    def list_bulletins(self) -> list[dict]:
        return sorted(
            (dict(b) for b in self.store.bulletins),
            key=lambda b: b.get("created_at") or "",
            reverse=True,
        )

    def post_bulletin(self, content: str) -> dict:
        row = {"id": self.store.next_id(), "content": content, "created_at": _utc_now_iso()}
        self.store.bulletins.append(row)
        return dict(row)

    # --- taxonomy ---------------------------------------------------------------
    def list_taxonomy(self) -> list[TaxonomyEntry]:
        return [TaxonomyEntry.from_row(r) for r in self.store.hierarchy]

    def add_taxonomy_entry(
        self, location: str, activity: str | None = None, option: str | None = None
    ) -> TaxonomyEntry:
        entry = TaxonomyEntry(
            id=self.store.next_id(),
            location=location,
            activity=activity or None,
            option=option or None,
        )
        self.store.hierarchy.append(entry.as_row())
        log.info("Added taxonomy entry %s", entry.id)
        return entry

    def delete_taxonomy_entry(self, entry_id: Any) -> None:
        before = len(self.store.hierarchy)
        self.store.hierarchy[:] = [r for r in self.store.hierarchy if r.get("id") != entry_id]
        if len(self.store.hierarchy) == before:
            log.debug("Taxonomy entry %s not present; nothing deleted", entry_id)

    # --- registrations ----------------------------------------------------------
    def list_registrations(self) -> list[dict]:
        return sorted(
            (dict(r) for r in self.store.registrations),
            key=lambda r: r.get("created_at") or "",
            reverse=True,
        )

    def submit_registration(self, payload: Mapping[str, Any]) -> dict:
        row = {**payload, "id": self.store.next_id()}
        row.setdefault("created_at", _utc_now_iso())
        self.store.registrations.append(row)
        log.info("Stored registration %s (mock)", row["id"])
        return dict(row)


# =============================================================================
# Hosted service
# =============================================================================


class SupabaseBackend:
    """Backend over a `supabase.Client` (tables + password auth)."""

    is_mock = False

    def __init__(self, client: Any) -> None:
        self.client = client

    def _call(self, what: str, fn: Callable[[], T]) -> T:
        try:
            return fn()
        except BackendError:
            raise
        except Exception as e:
            # postgrest APIError / auth errors / transport errors all land here.
            log.warning("%s failed: %s", what, e)
            raise BackendError(getattr(e, "message", None) or str(e)) from e

    def _rows(self, what: str, fn: Callable[[], Any]) -> list[dict]:
        resp = self._call(what, fn)
        return list(getattr(resp, "data", None) or [])

    # --- auth -----------------------------------------------------------------
    def sign_in(self, email: str, password: str) -> AuthUser:
        resp = self._call(
            "sign_in",
            lambda: self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            ),
        )
        user = getattr(resp, "user", None)
        if user is None:
            raise BackendError("登入失敗")
        log.info("Signed in %s", _short(email))
        return AuthUser(id=str(user.id), email=user.email or email)

    def sign_out(self) -> None:
        self._call("sign_out", self.client.auth.sign_out)

    def is_admin(self, email: str) -> bool:
        rows = self._rows(
            "is_admin",
            lambda: self.client.table(PERMISSIONS_TABLE)
            .select("is_admin")
            .eq("email", email)
            .limit(1)
            .execute(),
        )
        return bool(rows and rows[0].get("is_admin"))

    # --- bulletins --------------------------------------------------------------
    def list_bulletins(self) -> list[dict]:
        return self._rows(
            "list_bulletins",
            lambda: self.client.table(BULLETINS_TABLE)
            .select("*")
            .order("created_at", desc=True)
            .execute(),
        )

    def post_bulletin(self, content: str) -> dict:
        rows = self._rows(
            "post_bulletin",
            lambda: self.client.table(BULLETINS_TABLE).insert({"content": content}).execute(),
        )
        return rows[0] if rows else {"content": content}

    # --- taxonomy ---------------------------------------------------------------
    def list_taxonomy(self) -> list[TaxonomyEntry]:
        rows = self._rows(
            "list_taxonomy",
            lambda: self.client.table(HIERARCHY_TABLE).select("*").execute(),
        )
        return [TaxonomyEntry.from_row(r) for r in rows]

    def add_taxonomy_entry(
        self, location: str, activity: str | None = None, option: str | None = None
    ) -> TaxonomyEntry:
        row = {"location": location, "activity": activity, "option": option}
        rows = self._rows(
            "add_taxonomy_entry",
            lambda: self.client.table(HIERARCHY_TABLE).insert(row).execute(),
        )
        return TaxonomyEntry.from_row(rows[0] if rows else row)

    def delete_taxonomy_entry(self, entry_id: Any) -> None:
        # Deleting zero rows is not an error for the REST layer.
        self._call(
            "delete_taxonomy_entry",
            lambda: self.client.table(HIERARCHY_TABLE).delete().eq("id", entry_id).execute(),
        )

    # --- registrations ----------------------------------------------------------
    def list_registrations(self) -> list[dict]:
        return self._rows(
            "list_registrations",
            lambda: self.client.table(REGISTRATIONS_TABLE)
            .select("*")
            .order("created_at", desc=True)
            .execute(),
        )

    def submit_registration(self, payload: Mapping[str, Any]) -> dict:
        rows = self._rows(
            "submit_registration",
            lambda: self.client.table(REGISTRATIONS_TABLE).insert(dict(payload)).execute(),
        )
        return rows[0] if rows else dict(payload)


Backend = MockBackend | SupabaseBackend


def build_backend(
    settings: Settings,
    *,
    client_factory: Callable[[str, str], Any] | None = None,
    store: MockStore | None = None,
) -> Backend:
    """Choose the live backend when configured and constructible, else mock.

    A missing URL/key selects mock mode silently. A client that fails to
    construct is logged and also falls back to mock mode.
    """
    if not settings.live_backend:
        log.info("No backend configured; running in mock mode")
        return MockBackend(store)

    if client_factory is None:
        from supabase import create_client

        client_factory = create_client

    try:
        client = client_factory(settings.SUPABASE_URL, settings.SUPABASE_ANON_KEY)
    except Exception as e:
        log.warning("Backend client could not be created (%s); using mock mode", e)
        return MockBackend(store)
    return SupabaseBackend(client)
