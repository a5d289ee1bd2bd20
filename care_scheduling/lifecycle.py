"""
Shift lifecycle: status transitions, caregiver time corrections and client
verification.

Status (UNFILLED -> FILLED -> COMPLETED, or CANCELLED), the time-correction
status and the client verification flag are independent of each other. A
shift can be COMPLETED, carry an APPROVED correction and be verified at the
same time.
"""

import logging
from datetime import date, datetime

from care_scheduling import repository as repo
from care_scheduling.auth import Principal, authorize
from care_scheduling.errors import (
    InvalidInputError,
    NotFoundError,
    StateConflictError,
    UnauthorizedError,
)
from care_scheduling.models import (
    Caregiver,
    Role,
    Shift,
    ShiftStatus,
    ShiftType,
    TimeCorrectionStatus,
)
from care_scheduling.repository import Database
from care_scheduling.validators import validate_time

logger = logging.getLogger(__name__)

WORKED_STATUSES = frozenset({ShiftStatus.FILLED, ShiftStatus.COMPLETED})


def _load_shift(db: Database, shift_id: str) -> Shift:
    shift = repo.get(db, Shift, shift_id)
    if shift is None:
        raise NotFoundError("Shift not found")
    return shift


def _require_caregiver(db: Database, caregiver_id: str) -> None:
    if repo.get(db, Caregiver, caregiver_id) is None:
        raise NotFoundError("Caregiver not found")


def _require_time(value: str, field: str) -> str:
    try:
        return validate_time(value)
    except ValueError:
        raise InvalidInputError(f"{field} must be a time in HH:mm format") from None


def create_shift(
    db: Database,
    principal: Principal,
    client_id: str,
    *,
    shift_type_id: str,
    shift_date: date,
    start_time: str | None = None,
    end_time: str | None = None,
    caregiver_id: str | None = None,
    internal_notes: str | None = None,
    instruction_notes: str | None = None,
) -> Shift:
    """Create a one-off shift. Times default to the shift type's times."""
    authorize(principal, client_id, Role.CLIENT)
    shift_type = repo.get(db, ShiftType, shift_type_id)
    if shift_type is None or shift_type.client_id != client_id:
        raise InvalidInputError("Invalid shift type")
    if caregiver_id:
        _require_caregiver(db, caregiver_id)

    shift = Shift(
        client_id=client_id,
        shift_type_id=shift_type_id,
        date=shift_date,
        start_time=_require_time(start_time, "start_time") if start_time else shift_type.start_time,
        end_time=_require_time(end_time, "end_time") if end_time else shift_type.end_time,
        caregiver_id=caregiver_id,
        status=ShiftStatus.FILLED if caregiver_id else ShiftStatus.UNFILLED,
        internal_notes=internal_notes,
        instruction_notes=instruction_notes,
        created_by=principal.id,
    )
    inserted, _ = repo.insert_shifts(db, [shift])
    if not inserted:
        raise StateConflictError(
            f"A {shift_type.name} shift already exists on {shift_date.isoformat()}"
        )
    return shift


def assign_caregiver(
    db: Database, principal: Principal, shift_id: str, caregiver_id: str | None
) -> Shift:
    """
    Assign (or with None, unassign) the caregiver of a shift.
    Changing the caregiver of a pattern-generated shift detaches it from the
    pattern, so regenerating the pattern leaves it alone.
    """
    shift = _load_shift(db, shift_id)
    authorize(principal, shift.client_id, Role.CLIENT)
    if shift.status in (ShiftStatus.COMPLETED, ShiftStatus.CANCELLED):
        raise StateConflictError(
            f"{shift.status.capitalize()} shifts can no longer be reassigned"
        )
    if caregiver_id:
        _require_caregiver(db, caregiver_id)

    if shift.pattern_id and caregiver_id != shift.caregiver_id:
        shift.is_pattern_override = True
    shift.caregiver_id = caregiver_id
    shift.status = ShiftStatus.FILLED if caregiver_id else ShiftStatus.UNFILLED
    repo.save(db, shift)
    return shift


def update_shift_details(
    db: Database,
    principal: Principal,
    shift_id: str,
    *,
    start_time: str | None = None,
    end_time: str | None = None,
    internal_notes: str | None = None,
    instruction_notes: str | None = None,
) -> Shift:
    shift = _load_shift(db, shift_id)
    authorize(principal, shift.client_id, Role.CLIENT)
    if shift.status == ShiftStatus.COMPLETED:
        raise StateConflictError("Completed shifts cannot be changed")
    # validate everything before touching the stored shift
    if start_time:
        _require_time(start_time, "start_time")
    if end_time:
        _require_time(end_time, "end_time")

    if start_time:
        shift.start_time = start_time
    if end_time:
        shift.end_time = end_time
    if internal_notes is not None:
        shift.internal_notes = internal_notes
    if instruction_notes is not None:
        shift.instruction_notes = instruction_notes
    repo.save(db, shift)
    return shift


def complete_shift(
    db: Database, principal: Principal, shift_id: str, *, today: date
) -> Shift:
    shift = _load_shift(db, shift_id)
    authorize(principal, shift.client_id, Role.CLIENT)
    if shift.status != ShiftStatus.FILLED:
        raise StateConflictError("Only filled shifts can be completed")
    if shift.date >= today:
        raise StateConflictError("Only past shifts can be completed")
    shift.status = ShiftStatus.COMPLETED
    repo.save(db, shift)
    return shift


def cancel_shift(db: Database, principal: Principal, shift_id: str) -> Shift:
    shift = _load_shift(db, shift_id)
    authorize(principal, shift.client_id, Role.CLIENT)
    if shift.status == ShiftStatus.COMPLETED:
        raise StateConflictError("Completed shifts cannot be cancelled")
    if shift.status == ShiftStatus.CANCELLED:
        raise StateConflictError("Shift is already cancelled")
    shift.status = ShiftStatus.CANCELLED
    repo.save(db, shift)
    return shift


def submit_time_correction(
    db: Database,
    principal: Principal,
    shift_id: str,
    *,
    actual_start_time: str,
    actual_end_time: str,
    caregiver_note: str | None = None,
    now: datetime,
    today: date,
) -> Shift:
    if principal.role != Role.CAREGIVER or not principal.profile_id:
        raise UnauthorizedError("Only caregivers can submit time corrections")
    _require_time(actual_start_time, "actual_start_time")
    _require_time(actual_end_time, "actual_end_time")

    shift = _load_shift(db, shift_id)
    if shift.caregiver_id != principal.profile_id:
        logger.warning(
            f"Caregiver {principal.profile_id} tried to correct shift {shift_id} "
            f"assigned to {shift.caregiver_id}"
        )
        raise UnauthorizedError("You are not assigned to this shift")
    if shift.date >= today:
        raise StateConflictError("Time corrections can only be submitted for past shifts")
    if shift.status not in WORKED_STATUSES:
        raise StateConflictError("Only filled or completed shifts can be corrected")

    shift.actual_start_time = actual_start_time
    shift.actual_end_time = actual_end_time
    shift.caregiver_note = caregiver_note or None
    shift.time_correction_status = TimeCorrectionStatus.PENDING
    shift.time_correction_at = now
    repo.save(db, shift)
    logger.info(f"Time correction submitted for shift {shift_id}")
    return shift


def review_time_correction(
    db: Database, principal: Principal, shift_id: str, *, approve: bool
) -> Shift:
    shift = _load_shift(db, shift_id)
    authorize(principal, shift.client_id, Role.CLIENT)
    if shift.time_correction_status != TimeCorrectionStatus.PENDING:
        raise StateConflictError("Shift has no pending time correction")
    shift.time_correction_status = (
        TimeCorrectionStatus.APPROVED if approve else TimeCorrectionStatus.REJECTED
    )
    repo.save(db, shift)
    return shift


def pending_corrections(db: Database, client_id: str) -> list[Shift]:
    shifts = repo.select(
        db,
        Shift,
        lambda s: s.client_id == client_id
        and s.time_correction_status == TimeCorrectionStatus.PENDING,
    )
    return sorted(
        shifts,
        key=lambda s: s.time_correction_at.timestamp() if s.time_correction_at else 0.0,
        reverse=True,
    )


def set_client_verified(
    db: Database,
    principal: Principal,
    shift_id: str,
    *,
    verified: bool,
    now: datetime,
    today: date,
) -> Shift:
    if principal.role != Role.CLIENT or not principal.profile_id:
        raise UnauthorizedError("Only clients can verify shifts")
    shift = _load_shift(db, shift_id)
    authorize(principal, shift.client_id, Role.CLIENT)
    if not shift.caregiver_id:
        raise StateConflictError("Only shifts with an assigned caregiver can be verified")
    if shift.status not in WORKED_STATUSES:
        raise StateConflictError("Only filled or completed shifts can be verified")
    if shift.date >= today:
        raise StateConflictError("Only past shifts can be verified")

    shift.client_verified = verified
    shift.client_verified_at = now if verified else None
    repo.save(db, shift)
    return shift
