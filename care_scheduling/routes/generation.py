import asyncio
from contextlib import asynccontextmanager
from datetime import date

from fastapi import APIRouter, Depends, Request

from care_scheduling.auth import Principal, acting_client_id, get_current_principal
from care_scheduling.conflicts import ConflictReport, check_conflicts
from care_scheduling.generator import GenerationSummary, generate_shifts
from care_scheduling.repository import Database
from care_scheduling.routes.deps import get_db, get_today
from care_scheduling.schemas import ConflictCheckRequest, GenerateRequest

router = APIRouter(prefix="/scheduling", tags=["Generation"])


@asynccontextmanager
async def client_generation_lock(state, client_id: str):
    """
    Hold the client's generation lock. The entry in ``state.generation_locks``
    counts holders and waiters and is removed when the last one leaves.
    """
    locks: dict[str, tuple[asyncio.Lock, int]] = state.generation_locks
    lock, users = locks.get(client_id, (None, 0))
    if lock is None:
        lock = asyncio.Lock()
    locks[client_id] = (lock, users + 1)
    try:
        async with lock:
            yield
    finally:
        lock, users = locks[client_id]
        if users == 1:
            del locks[client_id]
        else:
            locks[client_id] = (lock, users - 1)


@router.post("/generate")
async def generate(
    request: Request,
    body: GenerateRequest | None = None,
    client_id: str | None = None,
    principal: Principal = Depends(get_current_principal),
    db: Database = Depends(get_db),
    today: date = Depends(get_today),
) -> GenerationSummary:
    target = acting_client_id(principal, client_id)
    pattern_id = body.pattern_id if body else None

    # one generation run per client at a time
    async with client_generation_lock(request.app.state, target):
        return await asyncio.to_thread(
            generate_shifts,
            db,
            target,
            today=today,
            pattern_id=pattern_id,
            created_by=principal.id,
        )


@router.post("/conflicts")
async def conflicts(
    body: ConflictCheckRequest,
    principal: Principal = Depends(get_current_principal),
    db: Database = Depends(get_db),
) -> ConflictReport:
    return check_conflicts(
        db,
        body.caregiver_id,
        body.date,
        body.start_time,
        body.end_time,
        exclude_shift_id=body.exclude_shift_id,
    )
