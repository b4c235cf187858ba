from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from django.conf import settings
from django.db import DatabaseError, transaction
from django.utils import timezone

from ..models import Program
from .normalization import FINISHED, PLANNED, RUNNING, has_status

logger = logging.getLogger(__name__)


@dataclass
class SweepResult:
    today: datetime.date
    started: int = 0
    finished: int = 0
    purged: int = 0
    failed_steps: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed_steps

    def as_dict(self) -> dict:
        return {
            "today": self.today.isoformat(),
            "started": self.started,
            "finished": self.finished,
            "purged": self.purged,
            "failed_steps": list(self.failed_steps),
        }


def retention_cutoff(today: datetime.date, years: Optional[int] = None) -> datetime.date:
    """``today`` minus ``years`` calendar years; 29 February clamps to the 28th."""
    if years is None:
        years = getattr(settings, "PROGRAM_RETENTION_YEARS", 3)
    try:
        return today.replace(year=today.year - years)
    except ValueError:
        return today.replace(year=today.year - years, day=28)


def _ids_in_status(candidates, code: str) -> List[str]:
    # Stored statuses come in any spelling; compare normalized codes.
    return [pk for pk, status in candidates.values_list("pk", "status") if has_status(status, code)]


def _advance(candidates, current: str, target: str) -> int:
    ids = _ids_in_status(candidates.exclude(status=target), current)
    if not ids:
        return 0
    return Program.objects.filter(pk__in=ids).update(status=target, updated_at=timezone.now())


def _start_due_programs(today: datetime.date) -> int:
    return _advance(Program.objects.filter(start_date__lte=today), PLANNED, RUNNING)


def _finish_ended_programs(today: datetime.date) -> int:
    return _advance(Program.objects.filter(end_date__lt=today), RUNNING, FINISHED)


def _purge_expired_programs(today: datetime.date) -> int:
    deleted, _ = Program.objects.filter(end_date__lt=retention_cutoff(today)).delete()
    return deleted


def sweep_programs(today: Optional[datetime.date] = None) -> SweepResult:
    """Advance program status by date and purge long-expired programs.

    The three steps run in this order as separate statements; a step that
    fails is logged and recorded in ``failed_steps`` without stopping the
    ones after it. Every predicate is state-gated, so a second run on the
    same day changes nothing.
    """
    today = today or timezone.localdate()
    result = SweepResult(today=today)
    steps = (
        ("start", "started", _start_due_programs),
        ("finish", "finished", _finish_ended_programs),
        ("purge", "purged", _purge_expired_programs),
    )
    for name, counter, step in steps:
        try:
            with transaction.atomic():
                setattr(result, counter, step(today))
        except DatabaseError:
            logger.exception("Program maintenance step %r failed for %s", name, today)
            result.failed_steps.append(name)

    logger.info(
        "Program maintenance for %s: started=%s finished=%s purged=%s failed=%s",
        today,
        result.started,
        result.finished,
        result.purged,
        result.failed_steps or "-",
    )
    return result
