from datetime import date

from fastapi import APIRouter, Depends

from care_scheduling import management
from care_scheduling.auth import Principal, acting_client_id, get_current_principal
from care_scheduling.models import SchedulingSettings
from care_scheduling.repository import Database
from care_scheduling.routes.deps import get_db, get_today
from care_scheduling.schemas import SettingsUpdate
from care_scheduling.statistics import SchedulingOverview, scheduling_overview

router = APIRouter(prefix="/scheduling", tags=["Overview"])


@router.get("/overview-stats")
async def overview_stats(
    client_id: str | None = None,
    principal: Principal = Depends(get_current_principal),
    db: Database = Depends(get_db),
    today: date = Depends(get_today),
) -> SchedulingOverview:
    return scheduling_overview(db, acting_client_id(principal, client_id), today=today)


@router.get("/settings")
async def get_settings(
    client_id: str | None = None,
    principal: Principal = Depends(get_current_principal),
    db: Database = Depends(get_db),
) -> SchedulingSettings:
    return management.get_settings(db, acting_client_id(principal, client_id))


@router.put("/settings")
async def update_settings(
    body: SettingsUpdate,
    client_id: str | None = None,
    principal: Principal = Depends(get_current_principal),
    db: Database = Depends(get_db),
) -> SchedulingSettings:
    return management.update_settings(
        db, acting_client_id(principal, client_id), weeks_ahead=body.weeks_ahead
    )
