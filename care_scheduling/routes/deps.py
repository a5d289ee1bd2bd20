from datetime import date, datetime
from zoneinfo import ZoneInfo

from fastapi import Request

from care_scheduling import config
from care_scheduling.repository import Database


def get_db(request: Request) -> Database:
    return request.app.state.database


def get_now(request: Request) -> datetime:
    return request.app.state.now_fn()


def get_today(request: Request) -> date:
    """The current calendar date where the care is delivered."""
    now = request.app.state.now_fn()
    if now.tzinfo is None:
        return now.date()
    return now.astimezone(ZoneInfo(config.SCHEDULING_TIMEZONE)).date()
