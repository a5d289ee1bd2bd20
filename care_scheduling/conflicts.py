from datetime import date

from pydantic import BaseModel, Field

from care_scheduling import repository as repo
from care_scheduling.models import Client, Shift, ShiftStatus, ShiftType
from care_scheduling.overlap import time_ranges_overlap
from care_scheduling.repository import Database


class ShiftConflict(BaseModel):
    id: str
    client_name: str | None
    shift_type_name: str | None
    date: date
    start_time: str
    end_time: str


class ConflictReport(BaseModel):
    has_conflict: bool
    conflicts: list[ShiftConflict] = Field(default_factory=list)


def check_conflicts(
    db: Database,
    caregiver_id: str,
    shift_date: date,
    start_time: str,
    end_time: str,
    exclude_shift_id: str | None = None,
) -> ConflictReport:
    """
    Find the caregiver's shifts on ``shift_date`` that overlap the candidate
    time range. Advisory only: nothing is blocked or written here.
    """
    existing = repo.select(
        db,
        Shift,
        lambda s: s.caregiver_id == caregiver_id
        and s.date == shift_date
        and s.status != ShiftStatus.CANCELLED
        and s.id != exclude_shift_id,
    )

    conflicts = []
    for shift in existing:
        if not time_ranges_overlap(start_time, end_time, shift.start_time, shift.end_time):
            continue
        client = repo.get(db, Client, shift.client_id)
        shift_type = repo.get(db, ShiftType, shift.shift_type_id)
        conflicts.append(
            ShiftConflict(
                id=shift.id,
                client_name=client.name if client else None,
                shift_type_name=shift_type.name if shift_type else None,
                date=shift.date,
                start_time=shift.start_time,
                end_time=shift.end_time,
            )
        )

    conflicts.sort(key=lambda c: c.start_time)
    return ConflictReport(has_conflict=bool(conflicts), conflicts=conflicts)
