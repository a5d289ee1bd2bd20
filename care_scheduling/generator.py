"""
Shift generation from recurring patterns.

Generation is a best-effort maintenance job: a pattern that fails to expand
is logged and skipped, the remaining patterns still run, and the summary
only counts what was actually written. Re-running is always safe because
inserts go through the (client, shift type, date) unique constraint.
"""

import logging
from datetime import date

from pydantic import BaseModel, Field

from care_scheduling import repository as repo
from care_scheduling.errors import NotFoundError
from care_scheduling.models import Shift, ShiftPattern, ShiftStatus, ShiftType
from care_scheduling.recurrence import expand_pattern, horizon_end
from care_scheduling.repository import Database

logger = logging.getLogger(__name__)


class GenerationSummary(BaseModel):
    generated: int = 0
    skipped: int = 0
    patterns_considered: int = 0
    failed_patterns: list[str] = Field(default_factory=list)


def select_patterns(
    db: Database, client_id: str, *, today: date, pattern_id: str | None = None
) -> list[ShiftPattern]:
    """Active patterns of the client whose range reaches into [today, horizon]."""
    end = horizon_end(today)
    return repo.select(
        db,
        ShiftPattern,
        lambda p: p.client_id == client_id
        and p.is_active
        and p.start_date <= end
        and (p.end_date is None or p.end_date >= today)
        and (pattern_id is None or p.id == pattern_id),
    )


def build_shifts(
    pattern: ShiftPattern, shift_type: ShiftType, *, today: date, created_by: str | None
) -> list[Shift]:
    return [
        Shift(
            client_id=pattern.client_id,
            shift_type_id=pattern.shift_type_id,
            date=shift_date,
            start_time=shift_type.start_time,
            end_time=shift_type.end_time,
            caregiver_id=pattern.caregiver_id,
            status=ShiftStatus.FILLED if pattern.caregiver_id else ShiftStatus.UNFILLED,
            pattern_id=pattern.id,
            created_by=created_by,
        )
        for shift_date in expand_pattern(pattern, today=today)
    ]


def generate_shifts(
    db: Database,
    client_id: str,
    *,
    today: date,
    pattern_id: str | None = None,
    created_by: str | None = None,
) -> GenerationSummary:
    if pattern_id is not None:
        requested = repo.get(db, ShiftPattern, pattern_id)
        if requested is None or requested.client_id != client_id:
            raise NotFoundError("Shift pattern not found")

    patterns = select_patterns(db, client_id, today=today, pattern_id=pattern_id)
    summary = GenerationSummary(patterns_considered=len(patterns))
    if not patterns:
        logger.info(f"No active patterns to generate for client {client_id}")
        return summary

    for pattern in patterns:
        logger.info(
            f"Processing pattern {pattern.id} ({pattern.recurrence_type}, "
            f"start={pattern.start_date}, caregiver={pattern.caregiver_id or 'unassigned'})"
        )
        try:
            shift_type = repo.get(db, ShiftType, pattern.shift_type_id)
            if shift_type is None:
                raise LookupError(f"shift type {pattern.shift_type_id} is missing")
            shifts = build_shifts(
                pattern, shift_type, today=today, created_by=created_by
            )
            inserted, skipped = repo.insert_shifts(db, shifts)
        except Exception:
            logger.exception(f"Failed to generate pattern {pattern.id}, skipping it")
            summary.failed_patterns.append(pattern.id)
            continue

        summary.generated += inserted
        summary.skipped += skipped

    logger.info(
        f"Generated shifts for client {client_id}: generated={summary.generated} "
        f"skipped={summary.skipped} patterns={summary.patterns_considered} "
        f"failed={len(summary.failed_patterns)}"
    )
    return summary
