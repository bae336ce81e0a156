# frontend/streamlit_app/services/registration.py
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
Registration record rules: form assembly, validation, payload, export.

The registration form keeps its datetimes as separate date and time widgets;
`collect_form` folds them into the record's ISO `YYYY-MM-DDTHH:MM` fields.
`validate_registration` then enforces the required fields **before** any
backend call is issued, and `build_payload` stamps the record with the
submitter's identity.

Validation order (first failure wins, message shown as-is):
  1) location, activity, option, real name
  2) volunteer window + volunteer group, for volunteers only
  3) arrival and departure
  4) itinerary remarks, when the "other itinerary" option is chosen
  5) monastery abbreviation length
  6) every end after its start
"""

import csv
import io
from collections.abc import Iterable, Mapping
from datetime import date, datetime, time, timezone
from typing import Any

from core.constants import (
    ANONYMOUS_USER_ID,
    IDENTITY_VOLUNTEER,
    MONASTERY_MAX_LEN,
    OTHER_ITINERARY_OPTION,
)
from core.identity import id_suffix
from services.backend import AuthUser

# Record datetime fields and the (date, time) form fields they are built from.
DATETIME_FIELDS: dict[str, tuple[str, str]] = {
    "start_date": ("start_date", "start_time"),
    "end_date": ("end_date", "end_time"),
    "arrival_datetime": ("arrival_date", "arrival_time"),
    "departure_datetime": ("departure_date", "departure_time"),
}

VOLUNTEER_ONLY_FIELDS = ("volunteer_group", "start_date", "end_date")

# Column order of the admin CSV export.
EXPORT_COLUMNS: list[str] = [
    "created_at",
    "sign_name",
    "real_name",
    "dharma_name",
    "id_2",
    "monastery",
    "activity_location",
    "activity_name",
    "activity_option",
    "identity",
    "volunteer_group",
    "start_date",
    "end_date",
    "transportation",
    "arrival_datetime",
    "departure_datetime",
    "other_remarks",
    "need_help",
    "memo",
]


class RegistrationError(ValueError):
    """The form is incomplete or inconsistent; nothing was submitted."""


def combine_datetime(d: date | None, t: time | None) -> str:
    """Join a date and a time into `YYYY-MM-DDTHH:MM`; "" if the date is missing.

    A missing time means midnight.
    """
    if d is None:
        return ""
    return datetime.combine(d, t or time(0, 0)).strftime("%Y-%m-%dT%H:%M")


def collect_form(values: Mapping[str, Any]) -> dict[str, Any]:
    """Turn raw widget values into record fields."""
    form = {
        "activity_location": values.get("activity_location") or "",
        "activity_name": values.get("activity_name") or "",
        "activity_option": values.get("activity_option") or "",
        "identity": values.get("identity") or "",
        "transportation": values.get("transportation") or "",
        "monastery": (values.get("monastery") or "").strip(),
        "real_name": (values.get("real_name") or "").strip(),
        "dharma_name": (values.get("dharma_name") or "").strip(),
        "volunteer_group": (values.get("volunteer_group") or "").strip(),
        "other_remarks": (values.get("other_remarks") or "").strip(),
        "need_help": bool(values.get("need_help")),
        "memo": (values.get("memo") or "").strip(),
    }
    for record_field, (date_field, time_field) in DATETIME_FIELDS.items():
        form[record_field] = combine_datetime(values.get(date_field), values.get(time_field))
    return form


def _ends_before_start(start: str, end: str) -> bool:
    # ISO strings of the same shape compare chronologically.
    return bool(start and end and end < start)


def validate_registration(form: Mapping[str, Any]) -> None:
    """Raise `RegistrationError` if the form cannot be submitted."""
    if not all(
        form.get(f)
        for f in ("activity_location", "activity_name", "activity_option", "real_name")
    ):
        raise RegistrationError("請完整填寫活動與基本資訊 (*)")

    volunteer = form.get("identity") == IDENTITY_VOLUNTEER
    if volunteer and not all(form.get(f) for f in VOLUNTEER_ONLY_FIELDS):
        raise RegistrationError("身分為義工時，發心時間與組別為必填")

    if not form.get("arrival_datetime") or not form.get("departure_datetime"):
        raise RegistrationError("抵寺與離寺時間為必填")

    if form.get("activity_option") == OTHER_ITINERARY_OPTION and not form.get("other_remarks"):
        raise RegistrationError("選擇其他行程時，請填寫行程備註")

    if len(form.get("monastery") or "") > MONASTERY_MAX_LEN:
        raise RegistrationError(f"精舍名稱限 {MONASTERY_MAX_LEN} 字")

    if volunteer and _ends_before_start(form.get("start_date") or "", form.get("end_date") or ""):
        raise RegistrationError("發心迄日時不可早於起日時")
    if _ends_before_start(
        form.get("arrival_datetime") or "", form.get("departure_datetime") or ""
    ):
        raise RegistrationError("離寺日時不可早於抵寺日時")


def build_payload(
    form: Mapping[str, Any],
    user: AuthUser | None,
    *,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Record to insert: form fields plus submitter identity and timestamp."""
    suffix = id_suffix(user.email) if user else id_suffix(None)
    payload = dict(form)
    if payload.get("identity") != IDENTITY_VOLUNTEER:
        for f in VOLUNTEER_ONLY_FIELDS:
            payload[f] = ""
    if payload.get("activity_option") != OTHER_ITINERARY_OPTION:
        payload["other_remarks"] = ""
    payload.update(
        user_id=user.id if user else ANONYMOUS_USER_ID,
        id_2=suffix,
        sign_name=f"{payload.get('real_name', '')} ({suffix})",
        created_at=(now or datetime.now(timezone.utc)).isoformat(),
    )
    # Empty datetimes are stored as NULL rather than "".
    for f in ("start_date", "end_date"):
        payload[f] = payload.get(f) or None
    return payload


def records_for_user(records: Iterable[Mapping[str, Any]], user: AuthUser | None) -> list[dict]:
    """The signed-in user's own records, in the order given."""
    uid = user.id if user else ANONYMOUS_USER_ID
    return [dict(r) for r in records if r.get("user_id") == uid]


def records_to_csv(records: Iterable[Mapping[str, Any]]) -> bytes:
    """CSV export (UTF-8 with BOM so spreadsheet apps detect the encoding)."""
    buf = io.StringIO()
    w = csv.DictWriter(buf, fieldnames=EXPORT_COLUMNS, extrasaction="ignore")
    w.writeheader()
    for r in records:
        w.writerow({c: "" if r.get(c) is None else r.get(c) for c in EXPORT_COLUMNS})
    return buf.getvalue().encode("utf-8-sig")
