"""
Shared pytest fixtures for the registration console test suite.

Provides taxonomy entry factories, an isolated mock backend and a plain-dict
stand-in for `st.session_state`.
"""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from core.state import ensure_defaults
from core.taxonomy import TaxonomyEntry
from services.backend import AuthUser, MockBackend, MockStore


@pytest.fixture
def create_entry():
    """
    Return a function that creates TaxonomyEntry objects with sequential ids.

    Example:
        entry = create_entry("A", "X", "Y1")
    """
    counter = iter(range(1, 10_000))

    def _create_entry(location: str, activity=None, option=None, **kwargs) -> TaxonomyEntry:
        return TaxonomyEntry(
            id=kwargs.pop("id", next(counter)),
            location=location,
            activity=activity,
            option=option,
        )

    return _create_entry


@pytest.fixture
def sample_entries(create_entry):
    """
    The reference taxonomy: location A with activity X and options Y1/Y2,
    plus a bare location B.
    """
    return [
        create_entry("A"),
        create_entry("A", "X"),
        create_entry("A", "X", "Y1"),
        create_entry("A", "X", "Y2"),
        create_entry("B"),
    ]


@pytest.fixture
def mock_store():
    """A freshly seeded in-memory store, private to the test."""
    return MockStore.seeded()


@pytest.fixture
def mock_backend(mock_store):
    """MockBackend over an isolated store."""
    return MockBackend(mock_store)


@pytest.fixture
def session_state():
    """Plain dict initialised like st.session_state on a first run."""
    state: dict = {}
    ensure_defaults(state)
    return state


@pytest.fixture
def user():
    """Signed-in user whose identifier encodes "王小明" + "1234"."""
    return AuthUser(
        id="u-1",
        email="738b5c0f660e0031003200330034@my-notes.com",
    )


@pytest.fixture
def supabase_client():
    """
    MagicMock standing in for supabase.Client.

    Query builders chain, so every builder method returns the same builder
    and `execute()` yields an object with a `.data` list (empty by default).
    """
    client = MagicMock(name="supabase.Client")
    builder = client.table.return_value
    for method in ("select", "order", "eq", "limit", "insert", "delete"):
        getattr(builder, method).return_value = builder
    builder.execute.return_value = SimpleNamespace(data=[])
    return client
