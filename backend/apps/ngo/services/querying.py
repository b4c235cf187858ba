"""
In-memory filtering and sorting shared by the primary and sample stores.

Both data sources go through the same functions so a caller cannot tell from
the response which one answered.
"""
from __future__ import annotations

import datetime
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .normalization import (
    CATEGORY_LABELS,
    is_canonical_status,
    normalize_category,
    normalize_status,
    to_amount,
    to_date,
)

ALL = "all"

DEFAULT_PROGRAM_SORT = "deadline_asc"

# sort key -> (record field, kind, descending)
PROGRAM_SORTS: Dict[str, Tuple[str, str, bool]] = {
    "deadline_asc": ("end_date", "date", False),
    "deadline_desc": ("end_date", "date", True),
    "start_asc": ("start_date", "date", False),
    "start_desc": ("start_date", "date", True),
    "amount_asc": ("total_amount", "amount", False),
    "amount_desc": ("total_amount", "amount", True),
}


def _param(params: Mapping[str, Any], *names: str) -> str:
    for name in names:
        value = params.get(name)
        if value is not None and str(value).strip():
            return str(value).strip()
    return ""


@dataclass(frozen=True)
class ProgramQuery:
    keyword: str = ""
    category: Optional[str] = None
    status: Optional[str] = None
    sort: str = DEFAULT_PROGRAM_SORT

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "ProgramQuery":
        """Build a query from request parameters; unknown values mean "no filter"."""
        category = _param(params, "category")
        status = _param(params, "status")
        sort = _param(params, "sort").lower()

        category_code = None
        if category and category.lower() != ALL:
            code = normalize_category(category).code
            category_code = code if code in CATEGORY_LABELS else None

        status_code = None
        if status and status.lower() != ALL:
            code = normalize_status(status).code
            status_code = code if is_canonical_status(code) else None

        return cls(
            keyword=_param(params, "keyword"),
            category=category_code,
            status=status_code,
            sort=sort if sort in PROGRAM_SORTS else DEFAULT_PROGRAM_SORT,
        )


def _contains(value: Any, needle: str) -> bool:
    return value is not None and needle in str(value).casefold()


def filter_programs(programs: Iterable[Mapping[str, Any]], query: ProgramQuery) -> List[Mapping[str, Any]]:
    needle = query.keyword.casefold()
    result = []
    for program in programs:
        if needle and not (_contains(program.get("program_id"), needle) or _contains(program.get("program_name"), needle)):
            continue
        if query.category and program.get("category") != query.category:
            continue
        if query.status and program.get("status") != query.status:
            continue
        result.append(program)
    return result


def sort_programs(programs: Iterable[Mapping[str, Any]], sort: str = DEFAULT_PROGRAM_SORT) -> List[Mapping[str, Any]]:
    """Stable sort by one of PROGRAM_SORTS.

    Records without a usable date go last in both directions; a missing or
    non-numeric amount counts as 0.
    """
    field, kind, descending = PROGRAM_SORTS.get(sort, PROGRAM_SORTS[DEFAULT_PROGRAM_SORT])
    programs = list(programs)
    if kind == "amount":
        return sorted(programs, key=lambda p: to_amount(p.get(field)) or 0, reverse=descending)

    dated: List[Tuple[datetime.date, Mapping[str, Any]]] = []
    undated: List[Mapping[str, Any]] = []
    for program in programs:
        when = to_date(program.get(field))
        if when is None:
            undated.append(program)
        else:
            dated.append((when, program))
    dated.sort(key=lambda pair: pair[0], reverse=descending)
    return [program for _, program in dated] + undated


def query_programs(programs: Iterable[Mapping[str, Any]], query: ProgramQuery) -> List[Mapping[str, Any]]:
    return sort_programs(filter_programs(programs, query), query.sort)


# ---------------------------------------------------------------------------
# Donors and categories
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RecordSchema:
    """Allow-lists for one entity's searchable and sortable fields."""

    searchable: Sequence[str]
    sortable: Mapping[str, bool]  # field -> descending
    default_sort: str
    id_field: str


DONOR_SCHEMA = RecordSchema(
    searchable=("donor_id", "name", "email", "phone"),
    sortable={"donor_id": True, "name": False, "email": False, "created_at": True},
    default_sort="donor_id",
    id_field="donor_id",
)

CATEGORY_SCHEMA = RecordSchema(
    searchable=("category_id", "category_name"),
    sortable={"category_id": False, "category_name": False},
    default_sort="category_id",
    id_field="category_id",
)


@dataclass(frozen=True)
class RecordQuery:
    keyword: str = ""
    search_field: str = ALL
    sort_field: str = ""

    @classmethod
    def from_params(cls, params: Mapping[str, Any], schema: RecordSchema) -> "RecordQuery":
        search_field = _param(params, "searchField", "search_field")
        sort_field = _param(params, "sortField", "sort_field", "sort")
        return cls(
            keyword=_param(params, "keyword"),
            search_field=search_field if search_field in schema.searchable else ALL,
            sort_field=sort_field if sort_field in schema.sortable else schema.default_sort,
        )


def filter_records(records: Iterable[Mapping[str, Any]], query: RecordQuery, schema: RecordSchema) -> List[Mapping[str, Any]]:
    needle = query.keyword.casefold()
    if not needle:
        return list(records)
    fields = schema.searchable if query.search_field == ALL else (query.search_field,)
    return [record for record in records if any(_contains(record.get(field), needle) for field in fields)]


def _as_int(value: Any) -> Optional[int]:
    """Parse plain ASCII digits (optionally signed); anything else is text."""
    text = str(value).strip()
    digits = text[1:] if text.startswith("-") else text
    if digits.isascii() and digits.isdecimal():
        return int(text)
    return None


def _sort_key(value: Any):
    # Numbers before text, missing values last.
    if value is None or value == "":
        return (2, 0, "")
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (0, value, "")
    number = _as_int(value)
    if number is not None:
        return (0, number, "")
    return (1, 0, str(value).casefold())


def sort_records(records: Iterable[Mapping[str, Any]], query: RecordQuery, schema: RecordSchema) -> List[Mapping[str, Any]]:
    field = query.sort_field if query.sort_field in schema.sortable else schema.default_sort
    descending = schema.sortable[field]
    records = list(records)
    present = [r for r in records if r.get(field) not in (None, "")]
    missing = [r for r in records if r.get(field) in (None, "")]
    present.sort(key=lambda r: _sort_key(r.get(field)), reverse=descending)
    return present + missing


def query_records(records: Iterable[Mapping[str, Any]], query: RecordQuery, schema: RecordSchema) -> List[Mapping[str, Any]]:
    return sort_records(filter_records(records, query, schema), query, schema)


def next_numeric_id(ids: Iterable[Any]) -> str:
    numbers = [n for n in (_as_int(i) for i in ids if i is not None) if n >= 0]
    return str(max(numbers, default=0) + 1)


# ---------------------------------------------------------------------------
# Companies
# ---------------------------------------------------------------------------


def filter_companies(companies: Iterable[Mapping[str, Any]], keyword: str = "") -> List[Mapping[str, Any]]:
    needle = (keyword or "").strip().casefold()
    if not needle:
        return list(companies)
    fields = ("company_name", "contact", "address")
    return [c for c in companies if any(_contains(c.get(field), needle) for field in fields)]


def group_programs_by_company(
    companies: Iterable[Mapping[str, Any]],
    programs: Iterable[Mapping[str, Any]],
) -> List[Dict[str, Any]]:
    """Attach each company's programs, de-duplicated by id and sorted by deadline."""
    owned: Dict[str, Dict[str, Mapping[str, Any]]] = {}
    for program in programs:
        company_id = program.get("company_id")
        if company_id is None:
            continue
        bucket = owned.setdefault(str(company_id), {})
        program_id = str(program.get("program_id"))
        bucket[program_id] = program  # last write wins

    result = []
    for company in companies:
        bucket = owned.get(str(company.get("company_id")), {})
        entry = dict(company)
        entry["programs"] = sort_programs(bucket.values(), DEFAULT_PROGRAM_SORT)
        result.append(entry)
    return result
