"""
Canonical shape for program records.

Program rows reach the API from two schema generations that disagree on
field names and on the status/category vocabularies. Everything is resolved
here, once, through data-driven alias tables; callers only ever see the
canonical field names and codes below.
"""
from __future__ import annotations

import datetime
import math
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, Mapping, NamedTuple, Optional, Sequence

from django.utils.dateparse import parse_date, parse_datetime


class CodeLabel(NamedTuple):
    code: str
    label: str


# ---------------------------------------------------------------------------
# Status vocabulary
# ---------------------------------------------------------------------------

PLANNED = "planned"
RUNNING = "running"
FINISHED = "finished"

STATUS_LABELS: Dict[str, str] = {
    PLANNED: "계획",
    RUNNING: "진행 중",
    FINISHED: "종료",
}

# Upper-case enum values stored by either schema generation. Matched after
# lowercasing, so keys are lower-case here.
STATUS_DB_ENUM: Dict[str, str] = {
    "pending": PLANNED,
    "rejected": PLANNED,
    "in_progress": RUNNING,
    "completed": FINISHED,
}

# Labels of both generations, keyed the way _status_key() renders them.
STATUS_LABEL_CODES: Dict[str, str] = {
    "계획": PLANNED,
    "진행_중": RUNNING,
    "진행중": RUNNING,
    "종료": FINISHED,
    "승인_전": PLANNED,
    "승인전": PLANNED,
    "반려": PLANNED,
    "승인_완료": RUNNING,
    "승인완료": RUNNING,
    "진행_완료": FINISHED,
    "진행완료": FINISHED,
}

STATUS_LEGACY: Dict[str, str] = {
    "approved": RUNNING,
    "draft": PLANNED,
    "scheduled": PLANNED,
    "reverted": PLANNED,
    "active": RUNNING,
    "ongoing": RUNNING,
    "in-progress": RUNNING,
    "closed": FINISHED,
    "done": FINISHED,
    "ended": FINISHED,
    "complete": FINISHED,
}

# ---------------------------------------------------------------------------
# Category vocabulary
# ---------------------------------------------------------------------------

DEFAULT_CATEGORY = "others"

CATEGORY_LABELS: Dict[str, str] = {
    "children": "아동",
    "environment": "환경",
    "education": "교육",
    "animal": "동물",
    "health": "보건",
    DEFAULT_CATEGORY: "기타",
}

CATEGORY_LABEL_CODES: Dict[str, str] = {label: code for code, label in CATEGORY_LABELS.items()}

CATEGORY_ALIASES: Dict[str, str] = {
    "child": "children",
    "kids": "children",
    "env": "environment",
    "environmental": "environment",
    "animals": "animal",
    "medical": "health",
    "other": DEFAULT_CATEGORY,
    "etc": DEFAULT_CATEGORY,
}

_WHITESPACE = re.compile(r"\s+")


def _status_key(raw: str) -> str:
    return _WHITESPACE.sub("_", raw.strip().lower())


def _split_pair(raw: Any):
    """Return (text, label) for a raw value that may already be a pair."""
    if isinstance(raw, CodeLabel):
        return raw.code, raw.label
    if isinstance(raw, Mapping):
        code = raw.get("code")
        label = raw.get("label")
        return ("" if code is None else str(code)), (None if label is None else str(label))
    if raw is None:
        return "", None
    return str(raw), None


def _resolve_status_code(key: str, raw_text: str) -> Optional[str]:
    if key in STATUS_LABELS:
        return key
    if key in STATUS_DB_ENUM:
        return STATUS_DB_ENUM[key]
    compact = raw_text.strip()
    for candidate in (compact, key, compact.replace(" ", "")):
        if candidate in STATUS_LABEL_CODES:
            return STATUS_LABEL_CODES[candidate]
    return STATUS_LEGACY.get(key)


def normalize_status(raw: Any) -> CodeLabel:
    """Resolve any observed status spelling to a canonical (code, label) pair.

    Unknown input is kept as a novel code rather than rejected, so this
    never raises.
    """
    text, label = _split_pair(raw)
    key = _status_key(text)
    if not key:
        if label:
            code = _resolve_status_code(_status_key(label), label)
            if code:
                return CodeLabel(code, STATUS_LABELS[code])
        return CodeLabel(PLANNED, STATUS_LABELS[PLANNED])
    code = _resolve_status_code(key, text)
    if code:
        return CodeLabel(code, STATUS_LABELS[code])
    if label is not None:
        return CodeLabel(key, label)
    return CodeLabel(key, text.strip())


def is_canonical_status(code: str) -> bool:
    return code in STATUS_LABELS


def has_status(raw: Any, code: str) -> bool:
    """True when a stored status value, in any spelling, normalizes to ``code``."""
    return normalize_status(raw).code == code


def normalize_category(raw: Any) -> CodeLabel:
    text, label = _split_pair(raw)
    stripped = text.strip()
    key = stripped.lower()
    if not key:
        if label and label.strip() in CATEGORY_LABEL_CODES:
            code = CATEGORY_LABEL_CODES[label.strip()]
            return CodeLabel(code, CATEGORY_LABELS[code])
        return CodeLabel(DEFAULT_CATEGORY, CATEGORY_LABELS[DEFAULT_CATEGORY])
    if key in CATEGORY_LABELS:
        return CodeLabel(key, CATEGORY_LABELS[key])
    if stripped in CATEGORY_LABEL_CODES:
        code = CATEGORY_LABEL_CODES[stripped]
        return CodeLabel(code, CATEGORY_LABELS[code])
    if key in CATEGORY_ALIASES:
        code = CATEGORY_ALIASES[key]
        return CodeLabel(code, CATEGORY_LABELS[code])
    if label is not None:
        return CodeLabel(key, label)
    return CodeLabel(key, stripped)


# ---------------------------------------------------------------------------
# Program records
# ---------------------------------------------------------------------------

# Canonical field -> accepted source fields, in priority order. The canonical
# name always comes first so a normalized record resolves to itself.
PROGRAM_FIELD_ALIASES: Dict[str, Sequence[str]] = {
    "program_id": ("program_id", "id", "programId"),
    "program_name": ("program_name", "name", "title", "programName"),
    "start_date": ("start_date", "start_at", "startDate"),
    "end_date": ("end_date", "end_at", "endDate", "deadline"),
    "total_amount": ("total_amount", "totalAmount", "goal_amount", "goalAmount", "total_budget"),
    "location": ("location", "place", "address"),
    "description": ("description", "goal_description", "goal_text", "purpose"),
    "organization": ("organization", "company_name", "organization_name"),
    "contact": ("contact", "company_phone", "phone"),
    "company_id": ("company_id", "companyId", "company"),
    "created_at": ("created_at", "createdAt"),
    "updated_at": ("updated_at", "updatedAt"),
}

STATUS_FIELDS = ("status", "status_code", "status_name")
STATUS_LABEL_FIELDS = ("status_label",)
CATEGORY_FIELDS = ("category", "category_code", "category_name", "category_id")
CATEGORY_LABEL_FIELDS = ("category_label",)

PROGRAM_FIELDS = (
    "program_id",
    "program_name",
    "category",
    "category_label",
    "status",
    "status_label",
    "start_date",
    "end_date",
    "total_amount",
    "location",
    "description",
    "organization",
    "contact",
    "company_id",
    "created_at",
    "updated_at",
)


def first_present(record: Mapping[str, Any], fields: Iterable[str]) -> Any:
    for field in fields:
        value = record.get(field)
        if value is not None and value != "":
            return value
    return None


def to_date(value: Any) -> Optional[datetime.date]:
    """Parse a date-ish value; anything unparsable becomes None."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    text = str(value).strip()
    try:
        parsed = parse_date(text)
        if parsed:
            return parsed
        moment = parse_datetime(text)
    except ValueError:
        return None
    return moment.date() if moment else None


def _iso_date(value: Any) -> Optional[str]:
    parsed = to_date(value)
    if parsed:
        return parsed.isoformat()
    return None if value in (None, "") else str(value)


def _iso_moment(value: Any) -> Any:
    if isinstance(value, (datetime.datetime, datetime.date)):
        return value.isoformat()
    return value


def to_amount(value: Any) -> Optional[float]:
    if value is None or value == "" or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    try:
        amount = Decimal(str(value).replace(",", "").strip())
    except InvalidOperation:
        return None
    if not amount.is_finite():
        return None
    return int(amount) if amount == amount.to_integral_value() else float(amount)


def _category_lookup(raw: Any, categories: Optional[Iterable[Mapping[str, Any]]]) -> Any:
    if categories is None or isinstance(raw, bool):
        return raw
    if not (isinstance(raw, int) or (isinstance(raw, str) and raw.strip().isascii() and raw.strip().isdecimal())):
        return raw
    wanted = str(raw).strip()
    for category in categories:
        if str(category.get("category_id")) == wanted:
            return category.get("category_name") or raw
    return raw


def normalize_program(
    record: Mapping[str, Any],
    categories: Optional[Iterable[Mapping[str, Any]]] = None,
) -> Dict[str, Any]:
    """Return ``record`` in canonical form.

    ``categories`` is consulted when the record only carries a numeric
    category id. The function is idempotent.
    """
    values = {field: first_present(record, aliases) for field, aliases in PROGRAM_FIELD_ALIASES.items()}

    status = normalize_status({
        "code": first_present(record, STATUS_FIELDS),
        "label": first_present(record, STATUS_LABEL_FIELDS),
    })
    raw_category = _category_lookup(first_present(record, CATEGORY_FIELDS), categories)
    category = normalize_category({
        "code": raw_category,
        "label": first_present(record, CATEGORY_LABEL_FIELDS),
    })

    program_id = values["program_id"]
    company_id = values["company_id"]
    if isinstance(company_id, Mapping):
        company_id = company_id.get("company_id") or company_id.get("id")

    return {
        "program_id": None if program_id is None else str(program_id),
        "program_name": values["program_name"],
        "category": category.code,
        "category_label": category.label,
        "status": status.code,
        "status_label": status.label,
        "start_date": _iso_date(values["start_date"]),
        "end_date": _iso_date(values["end_date"]),
        "total_amount": to_amount(values["total_amount"]),
        "location": values["location"],
        "description": values["description"],
        "organization": values["organization"],
        "contact": values["contact"],
        "company_id": company_id,
        "created_at": _iso_moment(values["created_at"]),
        "updated_at": _iso_moment(values["updated_at"]),
    }
