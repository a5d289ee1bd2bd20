"""Client-owned scheduling templates: shift types, patterns and settings"""

import logging
from datetime import date

from care_scheduling import config
from care_scheduling import repository as repo
from care_scheduling.errors import InvalidInputError, NotFoundError, StateConflictError
from care_scheduling.models import (
    Caregiver,
    RecurrenceType,
    SchedulingSettings,
    ShiftPattern,
    ShiftType,
)
from care_scheduling.recurrence import horizon_end
from care_scheduling.repository import Database

logger = logging.getLogger(__name__)


# ============================================================================
# SHIFT TYPES
# ============================================================================


def get_shift_type(db: Database, client_id: str, shift_type_id: str) -> ShiftType:
    shift_type = repo.get(db, ShiftType, shift_type_id)
    if shift_type is None or shift_type.client_id != client_id:
        raise NotFoundError("Shift type not found")
    return shift_type


def create_shift_type(
    db: Database, client_id: str, *, name: str, start_time: str, end_time: str, color: str
) -> ShiftType:
    shift_type = ShiftType(
        client_id=client_id,
        name=name,
        start_time=start_time,
        end_time=end_time,
        color=color,
    )
    repo.save(db, shift_type)
    logger.info(f"Created shift type {shift_type.id} ({name}) for client {client_id}")
    return shift_type


def update_shift_type(
    db: Database, client_id: str, shift_type_id: str, **changes
) -> ShiftType:
    """
    Apply the non-empty fields in ``changes``. Shifts that were already
    generated keep the times they were created with.
    """
    shift_type = get_shift_type(db, client_id, shift_type_id)
    for field in ("name", "start_time", "end_time", "color"):
        value = changes.get(field)
        if value:
            setattr(shift_type, field, value)
    repo.save(db, shift_type)
    return shift_type


def delete_shift_type(db: Database, client_id: str, shift_type_id: str) -> None:
    shift_type = get_shift_type(db, client_id, shift_type_id)
    if repo.shift_type_in_use(db, shift_type.id):
        raise StateConflictError(
            "This shift type cannot be deleted because shifts or patterns use it"
        )
    db.delete(repo.key_for(ShiftType, shift_type.id))
    logger.info(f"Deleted shift type {shift_type_id} for client {client_id}")


# ============================================================================
# PATTERNS
# ============================================================================


def _check_end_date(start_date: date, end_date: date | None, today: date) -> None:
    if end_date is None:
        return
    latest = horizon_end(today)
    if end_date > latest:
        raise InvalidInputError(f"End date can be at most {latest.isoformat()}")
    if end_date < start_date:
        raise InvalidInputError("End date must be on or after the start date")


def _check_references(
    db: Database, client_id: str, shift_type_id: str | None, caregiver_id: str | None
) -> None:
    if shift_type_id:
        shift_type = repo.get(db, ShiftType, shift_type_id)
        if shift_type is None or shift_type.client_id != client_id:
            raise InvalidInputError("Invalid shift type")
    if caregiver_id and repo.get(db, Caregiver, caregiver_id) is None:
        raise InvalidInputError("Unknown caregiver")


def get_pattern(db: Database, client_id: str, pattern_id: str) -> ShiftPattern:
    pattern = repo.get(db, ShiftPattern, pattern_id)
    if pattern is None or pattern.client_id != client_id:
        raise NotFoundError("Shift pattern not found")
    return pattern


def create_pattern(
    db: Database,
    client_id: str,
    *,
    shift_type_id: str,
    recurrence_type: RecurrenceType,
    start_date: date,
    end_date: date | None = None,
    caregiver_id: str | None = None,
    created_by: str | None = None,
    today: date,
) -> ShiftPattern:
    _check_end_date(start_date, end_date, today)
    _check_references(db, client_id, shift_type_id, caregiver_id)
    pattern = ShiftPattern(
        client_id=client_id,
        shift_type_id=shift_type_id,
        caregiver_id=caregiver_id,
        recurrence_type=recurrence_type,
        start_date=start_date,
        end_date=end_date,
        created_by=created_by,
    )
    repo.save(db, pattern)
    logger.info(
        f"Created {recurrence_type} pattern {pattern.id} for client {client_id} "
        f"starting {start_date.isoformat()}"
    )
    return pattern


def update_pattern(
    db: Database,
    client_id: str,
    pattern_id: str,
    changes: dict,
    *,
    regenerate_shifts: bool = False,
    today: date,
) -> tuple[ShiftPattern, int]:
    """
    Update a pattern with the fields present in ``changes``.

    With ``regenerate_shifts`` the pattern's future shifts that were not
    edited by hand are removed, so the next generation run rebuilds them
    from the updated pattern. Returns the pattern and the number removed.
    """
    pattern = get_pattern(db, client_id, pattern_id)
    _check_references(
        db, client_id, changes.get("shift_type_id"), changes.get("caregiver_id")
    )
    start_date = changes.get("start_date") or pattern.start_date
    end_date = changes["end_date"] if "end_date" in changes else pattern.end_date
    _check_end_date(start_date, end_date, today)

    removed = 0
    if regenerate_shifts:
        removed = repo.delete_future_pattern_shifts(db, pattern.id, today)

    for field in ("shift_type_id", "caregiver_id", "recurrence_type", "start_date"):
        if changes.get(field):
            setattr(pattern, field, changes[field])
    if "end_date" in changes:
        pattern.end_date = changes["end_date"]
    if changes.get("is_active") is not None:
        pattern.is_active = changes["is_active"]
    repo.save(db, pattern)
    return pattern, removed


def deactivate_pattern(
    db: Database, client_id: str, pattern_id: str, *, today: date
) -> int:
    """Soft delete. Future, not hand-edited shifts of the pattern are removed."""
    pattern = get_pattern(db, client_id, pattern_id)
    removed = repo.delete_future_pattern_shifts(db, pattern.id, today)
    pattern.is_active = False
    repo.save(db, pattern)
    logger.info(f"Deactivated pattern {pattern_id}, removed {removed} future shifts")
    return removed


# ============================================================================
# SETTINGS
# ============================================================================


def get_settings(db: Database, client_id: str) -> SchedulingSettings:
    settings = repo.get(db, SchedulingSettings, client_id)
    if settings is None:
        settings = SchedulingSettings(
            client_id=client_id, weeks_ahead=config.DEFAULT_WEEKS_AHEAD
        )
        repo.save(db, settings)
    return settings


def update_settings(
    db: Database, client_id: str, *, weeks_ahead: int | None = None
) -> SchedulingSettings:
    settings = get_settings(db, client_id)
    if weeks_ahead is not None:
        if not config.MIN_WEEKS_AHEAD <= weeks_ahead <= config.MAX_WEEKS_AHEAD:
            raise InvalidInputError(
                f"weeks_ahead must be between {config.MIN_WEEKS_AHEAD} "
                f"and {config.MAX_WEEKS_AHEAD}"
            )
        settings.weeks_ahead = weeks_ahead
    repo.save(db, settings)
    return settings
