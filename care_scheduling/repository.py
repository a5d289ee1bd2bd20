"""Scheduling repository - typed access to the key/value database"""

from collections.abc import Callable
from datetime import date
from typing import TypeVar

from care_scheduling.database import InMemoryKeyValueDatabase
from care_scheduling.models import (
    Caregiver,
    Client,
    SchedulingSettings,
    Shift,
    ShiftPattern,
    ShiftType,
    TimeOffRequest,
)

Record = (
    Client
    | Caregiver
    | ShiftType
    | ShiftPattern
    | Shift
    | SchedulingSettings
    | TimeOffRequest
)
Database = InMemoryKeyValueDatabase[str, Record]

R = TypeVar("R")

_PREFIXES: dict[type, str] = {
    Client: "client",
    Caregiver: "caregiver",
    ShiftType: "shift_type",
    ShiftPattern: "pattern",
    Shift: "shift",
    SchedulingSettings: "settings",
    TimeOffRequest: "time_off",
}


def key_for(cls: type, record_id: str) -> str:
    return f"{_PREFIXES[cls]}:{record_id}"


def get(db: Database, cls: type[R], record_id: str | None) -> R | None:
    if not record_id:
        return None
    value = db.get(key_for(cls, record_id))
    if not isinstance(value, cls):
        return None
    return value


def save(db: Database, record: Record) -> None:
    record_id = (
        record.client_id if isinstance(record, SchedulingSettings) else record.id
    )
    db.put(key_for(type(record), record_id), record)


def select(
    db: Database, cls: type[R], predicate: Callable[[R], bool] | None = None
) -> list[R]:
    return [
        v
        for v in db.all()
        if isinstance(v, cls) and (predicate is None or predicate(v))
    ]


def shift_types_for_client(db: Database, client_id: str) -> list[ShiftType]:
    return sorted(
        select(db, ShiftType, lambda t: t.client_id == client_id),
        key=lambda t: t.start_time,
    )


def patterns_for_client(db: Database, client_id: str) -> list[ShiftPattern]:
    return sorted(
        select(db, ShiftPattern, lambda p: p.client_id == client_id),
        key=lambda p: p.start_date,
    )


def shifts_in_range(
    db: Database,
    start: date,
    end: date,
    *,
    client_id: str | None = None,
    caregiver_id: str | None = None,
) -> list[Shift]:
    shifts = select(
        db,
        Shift,
        lambda s: start <= s.date <= end
        and (client_id is None or s.client_id == client_id)
        and (caregiver_id is None or s.caregiver_id == caregiver_id),
    )
    return sorted(shifts, key=lambda s: (s.date, s.start_time))


def shift_type_in_use(db: Database, shift_type_id: str) -> bool:
    return any(
        isinstance(v, (Shift, ShiftPattern)) and v.shift_type_id == shift_type_id
        for v in db.all()
    )


def insert_shifts(db: Database, shifts: list[Shift]) -> tuple[int, int]:
    """Insert-or-ignore on (client, shift type, date). Returns (inserted, skipped)."""
    return db.insert_many_unique(
        (key_for(Shift, s.id), s, s.unique_key) for s in shifts
    )


def delete_future_pattern_shifts(
    db: Database, pattern_id: str, today: date
) -> int:
    """Remove a pattern's shifts from today on, leaving hand-edited ones."""
    doomed = select(
        db,
        Shift,
        lambda s: s.pattern_id == pattern_id
        and s.date >= today
        and not s.is_pattern_override,
    )
    for shift in doomed:
        db.delete(key_for(Shift, shift.id))
    return len(doomed)
