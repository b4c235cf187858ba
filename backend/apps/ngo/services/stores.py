"""
Record stores.

Two interchangeable implementations of one small interface: ``ModelStore``
talks to the database through the ORM, ``SampleStore`` keeps an in-memory
copy of the seed data in ``sample_data``. Records are plain dicts keyed by
the API field names, so handlers never touch model instances directly.
"""
from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

from django.utils import timezone

from apps.companies.models import Company

from ..models import Category, Donor, Program
from . import sample_data
from .normalization import normalize_program
from .querying import next_numeric_id

DONORS = "donors"
PROGRAMS = "programs"
COMPANIES = "companies"
CATEGORIES = "categories"


class UnknownEntity(KeyError):
    pass


class RecordStore:
    """Interface shared by the primary and the sample store."""

    name = "abstract"

    def list(self, entity: str) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def get(self, entity: str, pk: Any) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    def find(self, entity: str, field: str, value: Any) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    def insert(self, entity: str, record: Mapping[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError

    def update(self, entity: str, pk: Any, changes: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    def delete(self, entity: str, pk: Any) -> bool:
        raise NotImplementedError


@dataclass(frozen=True)
class EntitySpec:
    model: Any
    pk: str
    fields: Sequence[str]


ENTITIES: Dict[str, EntitySpec] = {
    DONORS: EntitySpec(Donor, "donor_id", ("donor_id", "name", "email", "phone", "password", "created_at")),
    CATEGORIES: EntitySpec(Category, "category_id", ("category_id", "category_name", "description")),
    COMPANIES: EntitySpec(Company, "company_id", ("company_id", "company_name", "contact", "address")),
    PROGRAMS: EntitySpec(
        Program,
        "program_id",
        (
            "program_id",
            "program_name",
            "category",
            "status",
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
        ),
    ),
}


def _spec(entity: str) -> EntitySpec:
    try:
        return ENTITIES[entity]
    except KeyError:
        raise UnknownEntity(entity) from None


class ModelStore(RecordStore):
    """Primary store backed by the Django ORM."""

    name = "database"

    def _values(self, spec: EntitySpec):
        return spec.model.objects.values(*spec.fields)

    def list(self, entity: str) -> List[Dict[str, Any]]:
        return list(self._values(_spec(entity)))

    def get(self, entity: str, pk: Any) -> Optional[Dict[str, Any]]:
        spec = _spec(entity)
        try:
            return self._values(spec).filter(pk=pk).first()
        except (TypeError, ValueError):
            # A non-numeric id against an integer key cannot match.
            return None

    def find(self, entity: str, field: str, value: Any) -> Optional[Dict[str, Any]]:
        spec = _spec(entity)
        if field not in spec.fields:
            raise ValueError(f"{field} is not a field of {entity}")
        return self._values(spec).filter(**{field: value}).first()

    def _writable(self, spec: EntitySpec, record: Mapping[str, Any]) -> Dict[str, Any]:
        data = {k: v for k, v in record.items() if k in spec.fields and k not in ("created_at", "updated_at")}
        if data.get(spec.pk) is None:
            data.pop(spec.pk, None)
        return data

    def insert(self, entity: str, record: Mapping[str, Any]) -> Dict[str, Any]:
        spec = _spec(entity)
        instance = spec.model.objects.create(**self._writable(spec, record))
        return self._values(spec).get(pk=instance.pk)

    def update(self, entity: str, pk: Any, changes: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        spec = _spec(entity)
        data = self._writable(spec, changes)
        data.pop(spec.pk, None)
        if "updated_at" in spec.fields:
            data["updated_at"] = timezone.now()
        try:
            updated = spec.model.objects.filter(pk=pk).update(**data)
        except (TypeError, ValueError):
            return None
        if not updated:
            return None
        return self._values(spec).get(pk=pk)

    def delete(self, entity: str, pk: Any) -> bool:
        spec = _spec(entity)
        try:
            deleted, _ = spec.model.objects.filter(pk=pk).delete()
        except (TypeError, ValueError):
            return False
        return deleted > 0


def _seed_programs() -> List[Dict[str, Any]]:
    return [normalize_program(p, sample_data.SAMPLE_CATEGORIES) for p in sample_data.SAMPLE_PROGRAMS]


class SampleStore(RecordStore):
    """In-memory store seeded from ``sample_data``.

    Programs are kept in normalized form. There is no locking: concurrent
    writers may lose updates, which is acceptable for a degraded-mode copy.
    """

    name = "sample"

    def __init__(self, seed: Optional[Mapping[str, List[Dict[str, Any]]]] = None):
        self._seed = seed
        self._rows: Dict[str, List[Dict[str, Any]]] = {}
        self.reset()

    def reset(self) -> None:
        seed = self._seed
        if seed is None:
            seed = {
                DONORS: sample_data.SAMPLE_DONORS,
                CATEGORIES: sample_data.SAMPLE_CATEGORIES,
                COMPANIES: sample_data.SAMPLE_COMPANIES,
                PROGRAMS: _seed_programs(),
            }
        self._rows = {entity: copy.deepcopy(list(seed.get(entity, []))) for entity in ENTITIES}

    def _rows_for(self, entity: str) -> List[Dict[str, Any]]:
        _spec(entity)
        return self._rows.setdefault(entity, [])

    def _index(self, entity: str, pk: Any) -> Optional[int]:
        key = _spec(entity).pk
        for index, row in enumerate(self._rows_for(entity)):
            if str(row.get(key)) == str(pk):
                return index
        return None

    def _prepare(self, entity: str, record: Mapping[str, Any]) -> Dict[str, Any]:
        row = dict(record)
        if entity == PROGRAMS:
            row = normalize_program(row)
        return row

    def list(self, entity: str) -> List[Dict[str, Any]]:
        return copy.deepcopy(self._rows_for(entity))

    def get(self, entity: str, pk: Any) -> Optional[Dict[str, Any]]:
        index = self._index(entity, pk)
        if index is None:
            return None
        return copy.deepcopy(self._rows_for(entity)[index])

    def find(self, entity: str, field: str, value: Any) -> Optional[Dict[str, Any]]:
        for row in self._rows_for(entity):
            if row.get(field) == value:
                return copy.deepcopy(row)
        return None

    def insert(self, entity: str, record: Mapping[str, Any]) -> Dict[str, Any]:
        """Insert ``record``, replacing any row with the same key."""
        spec = _spec(entity)
        rows = self._rows_for(entity)
        row = self._prepare(entity, record)
        if row.get(spec.pk) in (None, ""):
            generated = next_numeric_id(r.get(spec.pk) for r in rows)
            row[spec.pk] = generated if entity in (CATEGORIES, PROGRAMS) else int(generated)
        if entity == DONORS and not row.get("created_at"):
            row["created_at"] = timezone.now().isoformat()
        index = self._index(entity, row[spec.pk])
        if index is None:
            rows.append(row)
        else:
            rows[index] = row
        return copy.deepcopy(row)

    def update(self, entity: str, pk: Any, changes: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        index = self._index(entity, pk)
        if index is None:
            return None
        rows = self._rows_for(entity)
        row = dict(rows[index])
        row.update({k: v for k, v in changes.items() if k != _spec(entity).pk})
        if entity == PROGRAMS:
            row["updated_at"] = timezone.now().isoformat()
            # Drop the stale label so the new status code decides it.
            if "status" in changes:
                row.pop("status_label", None)
        rows[index] = self._prepare(entity, row)
        return copy.deepcopy(rows[index])

    def delete(self, entity: str, pk: Any) -> bool:
        index = self._index(entity, pk)
        if index is None:
            return False
        del self._rows_for(entity)[index]
        return True
