import logging
from collections.abc import Callable
from datetime import UTC, datetime

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from care_scheduling import config
from care_scheduling.database import InMemoryKeyValueDatabase
from care_scheduling.errors import InvalidInputError, SchedulingError
from care_scheduling.repository import Database
from care_scheduling.routes import generation, overview, patterns, shift_types, shifts

logger = logging.getLogger(__name__)

router = APIRouter()

NowFn = Callable[[], datetime]


@router.get("/health")
async def health_check() -> dict[str, str]:
    return {"status": "ok"}


async def scheduling_error_handler(request: Request, exc: SchedulingError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.detail}")
    else:
        logger.warning(
            f"{request.method} {request.url.path} rejected ({exc.kind}): {exc.detail}"
        )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed input is reported as invalid_input (400), naming the fields."""
    problems = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        problems.append(f"{location}: {err.get('msg')}" if location else err.get("msg"))
    error = InvalidInputError("; ".join(problems) or "Invalid request")
    logger.warning(f"Validation error for {request.url.path}: {error.detail}")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


def configure_logging() -> None:
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def create_app(
    database: Database | None = None, *, now_fn: NowFn | None = None
) -> FastAPI:
    configure_logging()
    app = FastAPI(title="Care Scheduling API")

    db: Database = database if database is not None else InMemoryKeyValueDatabase()
    app.state.database = db
    app.state.now_fn = now_fn or (lambda: datetime.now(UTC))
    app.state.generation_locks = {}

    app.add_exception_handler(SchedulingError, scheduling_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.include_router(router)
    app.include_router(shift_types.router)
    app.include_router(patterns.router)
    app.include_router(shifts.router)
    app.include_router(generation.router)
    app.include_router(overview.router)
    return app
