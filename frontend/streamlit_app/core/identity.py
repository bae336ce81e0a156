# frontend/streamlit_app/core/identity.py
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Identity codec: real name + ID suffix <-> address-shaped login identifier.

The hosted auth service only accepts e-mail style identifiers, while people
sign in with their real name and the last four characters of an ID. The name
and suffix are concatenated and every UTF-16 code unit is written as four
lowercase hex digits, which is always a valid address local part whatever
script the name is written in. A fixed domain marker completes the address:

    >>> encode_name("王1234")
    '738b0031003200330034'
    >>> login_email("王", "1234")
    '738b0031003200330034@my-notes.com'
    >>> split_display_name_and_suffix("738b0031003200330034@my-notes.com")
    ('王', '1234')

Failure behavior
----------------
Nothing in this module raises. Identifiers come back from the auth service
and may be corrupted or foreign; decoding falls back to the raw local part
and the accessors fall back to placeholders.

Known limitation
----------------
The suffix is recognised only by the "last four characters are digits" rule.
A name that itself ends in four digits and was registered without a suffix is
split as name + suffix.

The rule is stricter than a general "parses as a number" test: only four
ASCII digits count, so tails such as "-123", "+123", " 123" or full-width
digits stay part of the name.
"""

import logging
import re

from .config import settings
from .constants import (
    DISPLAY_NAME_PLACEHOLDER,
    ID_SUFFIX_LEN,
    ID_SUFFIX_PLACEHOLDER,
)

log = logging.getLogger(__name__)

# Hex digits per UTF-16 code unit.
_GROUP = 4
_HEX_RE = re.compile(r"[0-9a-fA-F]+")
_SUFFIX_RE = re.compile(r"[0-9]{%d}" % ID_SUFFIX_LEN)


def encode_name(name: str) -> str:
    """Hex-encode each UTF-16 code unit of `name` as a 4-digit group.

    Characters outside the BMP contribute two groups (their surrogate pair),
    so the result is always 4x the UTF-16 length of the input.
    Returns the input unchanged if it cannot be encoded.
    """
    try:
        raw = name.encode("utf-16-be", "surrogatepass")
        return raw.hex()
    except (AttributeError, UnicodeError):
        log.debug("encode_name fell back to raw input")
        return name


def _local_part(token: str | None) -> str:
    return str(token or "").split("@")[0]


def decode_name(token: str | None) -> str:
    """Decode the local part of a login identifier back into text.

    Falls back to the local part verbatim when it is empty, its length is not
    a multiple of four, or it contains non-hex digits. Absent input yields "".
    """
    hex_part = _local_part(token)
    try:
        if len(hex_part) % _GROUP or not _HEX_RE.fullmatch(hex_part):
            raise ValueError("local part is not a sequence of 4-digit hex groups")
        raw = bytes.fromhex(hex_part)
        return raw.decode("utf-16-be", "surrogatepass")
    except ValueError:
        return hex_part


def split_display_name_and_suffix(token: str | None) -> tuple[str, str]:
    """Return `(display_name, id_suffix)` for a login identifier.

    The trailing four characters are taken as the ID suffix only when the
    decoded text is longer than four characters and those characters are
    ASCII digits; otherwise the whole text is the name and the suffix is "".
    """
    full = decode_name(token)
    tail = full[-ID_SUFFIX_LEN:]
    if len(full) > ID_SUFFIX_LEN and _SUFFIX_RE.fullmatch(tail):
        return full[:-ID_SUFFIX_LEN], tail
    return full, ""


def display_name(token: str | None) -> str:
    """Name half of the identifier, or a placeholder when there is none."""
    if not token:
        return DISPLAY_NAME_PLACEHOLDER
    return split_display_name_and_suffix(token)[0]


def id_suffix(token: str | None) -> str:
    """Suffix half of the identifier; "0000" when the identifier is absent."""
    if not token:
        return ID_SUFFIX_PLACEHOLDER
    return split_display_name_and_suffix(token)[1]


def login_email(name: str, suffix: str, domain: str | None = None) -> str:
    """Build the address-shaped identifier the auth service signs in with."""
    return encode_name(f"{name}{suffix}") + (domain or settings.LOGIN_DOMAIN)
