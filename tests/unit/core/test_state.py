"""
Unit tests for session-state helpers.

A plain dict stands in for st.session_state; every helper accepts one.
"""

from core.state import (
    ACTIVE_TAB,
    FORM_DEFAULTS,
    NEXT_TAB,
    USER,
    apply_pending_navigation,
    clear_form,
    ensure_defaults,
    form_key,
    form_values,
    navigate,
    persist_form,
    reset_after_activity,
    reset_after_location,
    sanitize_selection,
)


def _select(state, location, activity=None, option=None):
    state[form_key("activity_location")] = location
    state[form_key("activity_name")] = activity
    state[form_key("activity_option")] = option


class TestEnsureDefaults:
    """Tests for ensure_defaults."""

    def test_populates_session_and_form_keys(self, session_state):
        assert session_state[USER] is None
        assert session_state[ACTIVE_TAB] == "bulletin"
        for field, default in FORM_DEFAULTS.items():
            assert session_state[form_key(field)] == default

    def test_idempotent_and_preserving(self, session_state):
        session_state[form_key("real_name")] = "王小明"
        session_state[ACTIVE_TAB] = "form"
        ensure_defaults(session_state)
        assert session_state[form_key("real_name")] == "王小明"
        assert session_state[ACTIVE_TAB] == "form"

    def test_form_keys_are_namespaced(self):
        assert form_key("real_name") == "form:real_name"


class TestCascadingReset:
    """Changing an upstream select clears everything downstream."""

    def test_location_change_clears_activity_and_option(self, session_state):
        _select(session_state, "A", "X", "Y1")
        session_state[form_key("activity_location")] = "B"
        reset_after_location(session_state)
        assert session_state[form_key("activity_location")] == "B"
        assert session_state[form_key("activity_name")] is None
        assert session_state[form_key("activity_option")] is None

    def test_activity_change_clears_option_only(self, session_state):
        _select(session_state, "A", "X", "Y1")
        reset_after_activity(session_state)
        assert session_state[form_key("activity_location")] == "A"
        assert session_state[form_key("activity_name")] == "X"
        assert session_state[form_key("activity_option")] is None

    def test_other_fields_untouched(self, session_state):
        session_state[form_key("real_name")] = "王小明"
        _select(session_state, "A", "X", "Y1")
        reset_after_location(session_state)
        assert session_state[form_key("real_name")] == "王小明"


class TestSanitizeSelection:
    """Selections that the taxonomy no longer offers are dropped."""

    def test_valid_selection_kept(self, session_state, sample_entries):
        _select(session_state, "A", "X", "Y2")
        sanitize_selection(sample_entries, session_state)
        assert form_values(session_state)["activity_option"] == "Y2"

    def test_removed_location_clears_all(self, session_state, sample_entries):
        _select(session_state, "Gone", "X", "Y1")
        sanitize_selection(sample_entries, session_state)
        values = form_values(session_state)
        assert (values["activity_location"], values["activity_name"], values["activity_option"]) == (
            None,
            None,
            None,
        )

    def test_removed_activity_clears_activity_and_option(self, session_state, sample_entries):
        _select(session_state, "A", "Gone", "Y1")
        sanitize_selection(sample_entries, session_state)
        values = form_values(session_state)
        assert values["activity_location"] == "A"
        assert values["activity_name"] is None
        assert values["activity_option"] is None

    def test_removed_option_clears_option(self, session_state, sample_entries):
        _select(session_state, "A", "X", "Gone")
        sanitize_selection(sample_entries, session_state)
        values = form_values(session_state)
        assert values["activity_name"] == "X"
        assert values["activity_option"] is None

    def test_empty_selection_untouched(self, session_state, sample_entries):
        sanitize_selection(sample_entries, session_state)
        assert form_values(session_state)["activity_location"] is None


class TestFormHelpers:
    """Tests for form_values, clear_form, persist_form."""

    def test_form_values_uses_defaults_for_missing_keys(self):
        values = form_values({})
        assert values == dict(FORM_DEFAULTS)

    def test_clear_form_keeps_named_fields(self, session_state):
        session_state[form_key("real_name")] = "王小明"
        session_state[form_key("memo")] = "hello"
        clear_form(session_state, keep=["real_name"])
        assert session_state[form_key("real_name")] == "王小明"
        assert session_state[form_key("memo")] == ""

    def test_persist_form_only_touches_existing_keys(self):
        state = {form_key("memo"): "keep me"}
        persist_form(state)
        assert state == {form_key("memo"): "keep me"}


class TestNavigation:
    """Pending tab switches are applied on the next run."""

    def test_navigate_then_apply(self, session_state):
        navigate("history", session_state)
        assert session_state[ACTIVE_TAB] == "bulletin"
        apply_pending_navigation(session_state)
        assert session_state[ACTIVE_TAB] == "history"
        assert session_state[NEXT_TAB] is None

    def test_apply_without_request_is_noop(self, session_state):
        session_state[ACTIVE_TAB] = "form"
        apply_pending_navigation(session_state)
        assert session_state[ACTIVE_TAB] == "form"
