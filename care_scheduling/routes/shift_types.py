from fastapi import APIRouter, Depends

from care_scheduling import management
from care_scheduling import repository as repo
from care_scheduling.auth import (
    Principal,
    acting_client_id,
    get_current_principal,
    readable_client_id,
)
from care_scheduling.models import ShiftType
from care_scheduling.repository import Database
from care_scheduling.routes.deps import get_db
from care_scheduling.schemas import ShiftTypeCreate, ShiftTypeUpdate

router = APIRouter(prefix="/scheduling/shift-types", tags=["Shift types"])


@router.get("")
async def list_shift_types(
    client_id: str | None = None,
    principal: Principal = Depends(get_current_principal),
    db: Database = Depends(get_db),
) -> list[ShiftType]:
    return repo.shift_types_for_client(db, readable_client_id(principal, client_id))


@router.post("", status_code=201)
async def create_shift_type(
    body: ShiftTypeCreate,
    client_id: str | None = None,
    principal: Principal = Depends(get_current_principal),
    db: Database = Depends(get_db),
) -> ShiftType:
    return management.create_shift_type(
        db, acting_client_id(principal, client_id), **body.model_dump()
    )


@router.put("/{shift_type_id}")
async def update_shift_type(
    shift_type_id: str,
    body: ShiftTypeUpdate,
    client_id: str | None = None,
    principal: Principal = Depends(get_current_principal),
    db: Database = Depends(get_db),
) -> ShiftType:
    return management.update_shift_type(
        db,
        acting_client_id(principal, client_id),
        shift_type_id,
        **body.model_dump(exclude_unset=True),
    )


@router.delete("/{shift_type_id}")
async def delete_shift_type(
    shift_type_id: str,
    client_id: str | None = None,
    principal: Principal = Depends(get_current_principal),
    db: Database = Depends(get_db),
) -> dict:
    management.delete_shift_type(
        db, acting_client_id(principal, client_id), shift_type_id
    )
    return {"status": "deleted", "shift_type_id": shift_type_id}
