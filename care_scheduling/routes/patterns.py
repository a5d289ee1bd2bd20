from datetime import date

from fastapi import APIRouter, Depends

from care_scheduling import management
from care_scheduling import repository as repo
from care_scheduling.auth import (
    Principal,
    acting_client_id,
    get_current_principal,
    readable_client_id,
)
from care_scheduling.models import ShiftPattern
from care_scheduling.repository import Database
from care_scheduling.routes.deps import get_db, get_today
from care_scheduling.schemas import PatternCreate, PatternUpdate

router = APIRouter(prefix="/scheduling/patterns", tags=["Shift patterns"])


@router.get("")
async def list_patterns(
    client_id: str | None = None,
    principal: Principal = Depends(get_current_principal),
    db: Database = Depends(get_db),
) -> list[ShiftPattern]:
    return repo.patterns_for_client(db, readable_client_id(principal, client_id))


@router.post("", status_code=201)
async def create_pattern(
    body: PatternCreate,
    client_id: str | None = None,
    principal: Principal = Depends(get_current_principal),
    db: Database = Depends(get_db),
    today: date = Depends(get_today),
) -> ShiftPattern:
    return management.create_pattern(
        db,
        acting_client_id(principal, client_id),
        **body.model_dump(),
        created_by=principal.id,
        today=today,
    )


@router.put("/{pattern_id}")
async def update_pattern(
    pattern_id: str,
    body: PatternUpdate,
    client_id: str | None = None,
    principal: Principal = Depends(get_current_principal),
    db: Database = Depends(get_db),
    today: date = Depends(get_today),
) -> dict:
    changes = body.model_dump(exclude_unset=True, exclude={"regenerate_shifts"})
    pattern, removed = management.update_pattern(
        db,
        acting_client_id(principal, client_id),
        pattern_id,
        changes,
        regenerate_shifts=body.regenerate_shifts,
        today=today,
    )
    return {"pattern": pattern.model_dump(mode="json"), "deleted_shifts": removed}


@router.delete("/{pattern_id}")
async def delete_pattern(
    pattern_id: str,
    client_id: str | None = None,
    principal: Principal = Depends(get_current_principal),
    db: Database = Depends(get_db),
    today: date = Depends(get_today),
) -> dict:
    removed = management.deactivate_pattern(
        db, acting_client_id(principal, client_id), pattern_id, today=today
    )
    return {"status": "deactivated", "pattern_id": pattern_id, "deleted_shifts": removed}
