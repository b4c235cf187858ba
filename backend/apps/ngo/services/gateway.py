"""
Primary-first access with a sample-store fallback.

Reads go to the database and fall back to the sample store when the query
fails or comes back empty. Writes go to the database and are mirrored into
the sample store; when the database write fails the sample store takes the
write alone and the caller sees a success.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from django.db import DatabaseError

from .stores import RecordStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Listing:
    records: List[Dict[str, Any]] = field(default_factory=list)
    source: str = "database"
    warning: Optional[str] = None


class StoreGateway:
    def __init__(self, primary: RecordStore, fallback: RecordStore):
        self.primary = primary
        self.fallback = fallback

    def _degraded(self, operation: str, entity: str, exc: Exception) -> str:
        logger.warning(
            "Primary store failed during %s on %s; using %s store: %s",
            operation,
            entity,
            self.fallback.name,
            exc,
            exc_info=True,
        )
        return f"Fell back to sample data: {type(exc).__name__}"

    # -- reads ------------------------------------------------------------

    def list(self, entity: str, *, fallback_on_error: bool = True) -> Listing:
        try:
            records = self.primary.list(entity)
        except DatabaseError as exc:
            if not fallback_on_error:
                raise
            warning = self._degraded("list", entity, exc)
            return Listing(self.fallback.list(entity), self.fallback.name, warning)
        if records:
            return Listing(records, self.primary.name)
        logger.debug("Primary store has no %s; serving %s rows", entity, self.fallback.name)
        return Listing(self.fallback.list(entity), self.fallback.name)

    def get(self, entity: str, pk: Any) -> Optional[Dict[str, Any]]:
        try:
            record = self.primary.get(entity, pk)
        except DatabaseError as exc:
            self._degraded("get", entity, exc)
            record = None
        if record is not None:
            return record
        return self.fallback.get(entity, pk)

    def find(self, entity: str, field_name: str, value: Any, *, fallback_on_error: bool = True) -> Optional[Dict[str, Any]]:
        try:
            record = self.primary.find(entity, field_name, value)
        except DatabaseError as exc:
            if not fallback_on_error:
                raise
            self._degraded("find", entity, exc)
            record = None
        if record is not None:
            return record
        return self.fallback.find(entity, field_name, value)

    # -- writes -----------------------------------------------------------

    def insert(self, entity: str, record: Mapping[str, Any]) -> Dict[str, Any]:
        try:
            stored = self.primary.insert(entity, record)
        except DatabaseError as exc:
            self._degraded("insert", entity, exc)
            return self.fallback.insert(entity, record)
        self.fallback.insert(entity, stored)
        return stored

    def update(self, entity: str, pk: Any, changes: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        try:
            stored = self.primary.update(entity, pk, changes)
        except DatabaseError as exc:
            self._degraded("update", entity, exc)
            return self.fallback.update(entity, pk, changes)
        mirrored = self.fallback.update(entity, pk, changes)
        return stored if stored is not None else mirrored

    def delete(self, entity: str, pk: Any) -> bool:
        try:
            deleted = self.primary.delete(entity, pk)
        except DatabaseError as exc:
            self._degraded("delete", entity, exc)
            return self.fallback.delete(entity, pk)
        mirrored = self.fallback.delete(entity, pk)
        return deleted or mirrored
