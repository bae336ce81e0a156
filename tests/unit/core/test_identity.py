"""
Unit tests for the identity codec.

Covers:
- encode_name / decode_name round trips and length
- decode fallbacks for malformed identifiers
- split_display_name_and_suffix and its numeric-tail rule
- display_name / id_suffix placeholders
- login_email shape
"""

import re

import pytest

from core.identity import (
    decode_name,
    display_name,
    encode_name,
    id_suffix,
    login_email,
    split_display_name_and_suffix,
)

DOMAIN = "@my-notes.com"

SAMPLES = ["", "a", "abc", "王小明", "José Núñez", "陳大文0912", "O'Brien-Smith", "😀 ok"]


class TestEncodeName:
    """Tests for encode_name."""

    def test_known_value(self):
        """Each UTF-16 unit becomes a zero-padded 4-digit hex group."""
        assert encode_name("王1234") == "738b0031003200330034"
        assert encode_name("A") == "0041"

    def test_empty_name(self):
        assert encode_name("") == ""

    @pytest.mark.parametrize("name", SAMPLES)
    def test_output_is_hex_and_four_times_utf16_length(self, name):
        encoded = encode_name(name)
        utf16_units = len(name.encode("utf-16-be")) // 2
        assert len(encoded) == 4 * utf16_units
        assert re.fullmatch(r"[0-9a-f]*", encoded)

    def test_bmp_length_is_four_times_characters(self):
        assert len(encode_name("王小明")) == 12

    def test_astral_character_uses_surrogate_pair(self):
        """Characters outside the BMP take two groups."""
        assert encode_name("😀") == "d83dde00"

    def test_never_raises_on_non_string(self):
        """Unencodable input is returned unchanged."""
        assert encode_name(None) is None


class TestDecodeName:
    """Tests for decode_name."""

    @pytest.mark.parametrize("name", SAMPLES)
    def test_round_trip(self, name):
        assert decode_name(encode_name(name)) == name

    @pytest.mark.parametrize("name", SAMPLES)
    def test_round_trip_with_domain(self, name):
        assert decode_name(encode_name(name) + DOMAIN) == name

    def test_uppercase_hex_accepted(self):
        assert decode_name("004A@x.com") == "J"

    def test_length_not_multiple_of_four_falls_back(self):
        assert decode_name("00410@my-notes.com") == "00410"

    def test_non_hex_falls_back(self):
        assert decode_name("zzzz@my-notes.com") == "zzzz"

    def test_prefixed_hex_is_not_accepted(self):
        """int()-style prefixes and signs are not hex digits."""
        assert decode_name("0x41@d") == "0x41"
        assert decode_name("+041@d") == "+041"

    def test_absent_and_empty_input(self):
        assert decode_name(None) == ""
        assert decode_name("") == ""
        assert decode_name("@my-notes.com") == ""

    def test_plain_address_returns_local_part(self):
        assert decode_name("someone@example.org") == "someone"


class TestSplitDisplayNameAndSuffix:
    """Tests for the numeric-tail heuristic."""

    def test_name_and_suffix(self):
        token = login_email("王小明", "1234", domain=DOMAIN)
        assert split_display_name_and_suffix(token) == ("王小明", "1234")

    @pytest.mark.parametrize("name", ["王小明", "José", "Ann-Marie", "陳0912a"])
    @pytest.mark.parametrize("suffix", ["0000", "0912", "9999"])
    def test_recovers_name_and_suffix(self, name, suffix):
        token = encode_name(name + suffix) + DOMAIN
        assert split_display_name_and_suffix(token) == (name, suffix)

    def test_without_suffix(self):
        token = encode_name("王小明") + DOMAIN
        assert split_display_name_and_suffix(token) == ("王小明", "")

    def test_non_numeric_tail(self):
        token = encode_name("Robert") + DOMAIN
        assert split_display_name_and_suffix(token) == ("Robert", "")

    def test_exactly_four_digits_is_a_name(self):
        """Length must exceed four for a suffix to be split off."""
        token = encode_name("1234") + DOMAIN
        assert split_display_name_and_suffix(token) == ("1234", "")

    def test_name_ending_in_digits_is_split(self):
        """Known limitation: a name ending in four digits looks like name + suffix."""
        token = encode_name("Room2024") + DOMAIN
        assert split_display_name_and_suffix(token) == ("Room", "2024")

    def test_non_ascii_digits_are_not_a_suffix(self):
        token = encode_name("王小明１２３４") + DOMAIN
        assert split_display_name_and_suffix(token) == ("王小明１２３４", "")

    @pytest.mark.parametrize("tail", ["-123", "+123", " 123"])
    def test_signed_or_padded_tail_is_not_a_suffix(self, tail):
        token = encode_name("王小明" + tail) + DOMAIN
        assert split_display_name_and_suffix(token) == ("王小明" + tail, "")

    def test_corrupt_identifier_does_not_raise(self):
        assert split_display_name_and_suffix("not-hex@my-notes.com") == ("not-hex", "")

    def test_non_string_identifier_does_not_raise(self):
        assert decode_name(123) == "123"
        assert split_display_name_and_suffix(123) == ("123", "")


class TestAccessors:
    """Tests for display_name and id_suffix."""

    def test_id_suffix_placeholder(self):
        assert id_suffix(None) == "0000"
        assert id_suffix("") == "0000"

    def test_display_name_placeholder(self):
        assert display_name(None) == "User"
        assert display_name("") == "User"

    def test_halves_of_identifier(self, user):
        assert display_name(user.email) == "王小明"
        assert id_suffix(user.email) == "1234"

    def test_suffix_empty_when_not_numeric(self):
        assert id_suffix(encode_name("王小明") + DOMAIN) == ""


class TestLoginEmail:
    """Tests for login_email."""

    def test_shape(self):
        email = login_email("王小明", "1234", domain=DOMAIN)
        assert re.fullmatch(r"[0-9a-f]+@my-notes\.com", email)
        assert email == "738b5c0f660e0031003200330034@my-notes.com"

    def test_default_domain_from_settings(self):
        from core.config import settings

        assert login_email("A", "0001").endswith(settings.LOGIN_DOMAIN)

    def test_empty_suffix(self):
        assert login_email("A", "", domain=DOMAIN) == "0041@my-notes.com"
