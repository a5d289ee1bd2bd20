from datetime import date, datetime

from fastapi import APIRouter, Depends

from care_scheduling import lifecycle
from care_scheduling import repository as repo
from care_scheduling.auth import Principal, acting_client_id, get_current_principal
from care_scheduling.errors import InvalidInputError
from care_scheduling.models import Role, Shift
from care_scheduling.repository import Database
from care_scheduling.routes.deps import get_db, get_now, get_today
from care_scheduling.schemas import (
    ShiftCreate,
    ShiftUpdate,
    TimeCorrectionRequest,
    TimeCorrectionReview,
    VerifyRequest,
)

router = APIRouter(prefix="/scheduling/shifts", tags=["Shifts"])


@router.get("")
async def list_shifts(
    start_date: date,
    end_date: date,
    client_id: str | None = None,
    principal: Principal = Depends(get_current_principal),
    db: Database = Depends(get_db),
) -> list[Shift]:
    if end_date < start_date:
        raise InvalidInputError("end_date must be on or after start_date")

    if principal.role == Role.CLIENT and principal.profile_id:
        return repo.shifts_in_range(db, start_date, end_date, client_id=principal.profile_id)
    if principal.role == Role.CAREGIVER and principal.profile_id:
        return repo.shifts_in_range(
            db, start_date, end_date, caregiver_id=principal.profile_id, client_id=client_id
        )
    if not client_id:
        raise InvalidInputError("client_id is required")
    return repo.shifts_in_range(db, start_date, end_date, client_id=client_id)


@router.post("", status_code=201)
async def create_shift(
    body: ShiftCreate,
    client_id: str | None = None,
    principal: Principal = Depends(get_current_principal),
    db: Database = Depends(get_db),
) -> Shift:
    return lifecycle.create_shift(
        db,
        principal,
        acting_client_id(principal, client_id),
        shift_type_id=body.shift_type_id,
        shift_date=body.date,
        start_time=body.start_time,
        end_time=body.end_time,
        caregiver_id=body.caregiver_id,
        internal_notes=body.internal_notes,
        instruction_notes=body.instruction_notes,
    )


@router.get("/pending-corrections")
async def list_pending_corrections(
    client_id: str | None = None,
    principal: Principal = Depends(get_current_principal),
    db: Database = Depends(get_db),
) -> list[Shift]:
    return lifecycle.pending_corrections(db, acting_client_id(principal, client_id))


@router.patch("/time-correction")
async def submit_time_correction(
    body: TimeCorrectionRequest,
    principal: Principal = Depends(get_current_principal),
    db: Database = Depends(get_db),
    now: datetime = Depends(get_now),
    today: date = Depends(get_today),
) -> Shift:
    return lifecycle.submit_time_correction(
        db,
        principal,
        body.shift_id,
        actual_start_time=body.actual_start_time,
        actual_end_time=body.actual_end_time,
        caregiver_note=body.caregiver_note,
        now=now,
        today=today,
    )


@router.patch("/time-correction/review")
async def review_time_correction(
    body: TimeCorrectionReview,
    principal: Principal = Depends(get_current_principal),
    db: Database = Depends(get_db),
) -> Shift:
    return lifecycle.review_time_correction(
        db, principal, body.shift_id, approve=body.approve
    )


@router.patch("/verify")
async def verify_shift(
    body: VerifyRequest,
    principal: Principal = Depends(get_current_principal),
    db: Database = Depends(get_db),
    now: datetime = Depends(get_now),
    today: date = Depends(get_today),
) -> Shift:
    return lifecycle.set_client_verified(
        db, principal, body.shift_id, verified=body.verified, now=now, today=today
    )


@router.put("/{shift_id}")
async def update_shift(
    shift_id: str,
    body: ShiftUpdate,
    principal: Principal = Depends(get_current_principal),
    db: Database = Depends(get_db),
) -> Shift:
    if "caregiver_id" in body.model_fields_set:
        lifecycle.assign_caregiver(db, principal, shift_id, body.caregiver_id)
    return lifecycle.update_shift_details(
        db,
        principal,
        shift_id,
        start_time=body.start_time,
        end_time=body.end_time,
        internal_notes=body.internal_notes,
        instruction_notes=body.instruction_notes,
    )


@router.post("/{shift_id}/complete")
async def complete_shift(
    shift_id: str,
    principal: Principal = Depends(get_current_principal),
    db: Database = Depends(get_db),
    today: date = Depends(get_today),
) -> Shift:
    return lifecycle.complete_shift(db, principal, shift_id, today=today)


@router.post("/{shift_id}/cancel")
async def cancel_shift(
    shift_id: str,
    principal: Principal = Depends(get_current_principal),
    db: Database = Depends(get_db),
) -> Shift:
    return lifecycle.cancel_shift(db, principal, shift_id)
