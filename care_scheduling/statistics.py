"""
Scheduling overview statistics over the coming 12 months.

Read-only: nothing here writes to the database, so the overview can be
recomputed as often as a dashboard asks for it.
"""

from collections import defaultdict
from datetime import date

from pydantic import BaseModel

from care_scheduling import config
from care_scheduling import repository as repo
from care_scheduling.models import (
    Caregiver,
    Shift,
    ShiftStatus,
    ShiftType,
    TimeOffRequest,
    TimeOffStatus,
    TimeOffType,
)
from care_scheduling.overlap import shift_hours
from care_scheduling.repository import Database


class Period(BaseModel):
    start_date: date
    end_date: date


class OverallStats(BaseModel):
    total_shifts: int
    filled_shifts: int
    unfilled_shifts: int
    completed_shifts: int
    cancelled_shifts: int
    fill_rate: float
    completion_rate: float


class UnfilledShiftType(BaseModel):
    id: str
    name: str
    color: str


class UnfilledShift(BaseModel):
    id: str
    date: date
    start_time: str
    end_time: str
    shift_type: UnfilledShiftType | None
    status: ShiftStatus


class UnfilledDate(BaseModel):
    date: date
    unfilled_count: int
    total_shifts: int


class CaregiverStats(BaseModel):
    caregiver_id: str
    caregiver_name: str | None
    caregiver_color: str | None
    total_shifts: int
    total_hours: float
    completed_shifts: int
    cancelled_shifts: int
    average_hours_per_week: float
    sickness_percentage: float
    sick_days_count: int


class SchedulingOverview(BaseModel):
    period: Period
    overall_stats: OverallStats
    unfilled_shifts_list: list[UnfilledShift]
    unfilled_dates_list: list[UnfilledDate]
    caregiver_stats: list[CaregiverStats]


def one_year_later(day: date) -> date:
    try:
        return day.replace(year=day.year + 1)
    except ValueError:
        # Feb 29 -> Feb 28
        return day.replace(year=day.year + 1, day=28)


def percentage(part: int | float, whole: int | float) -> float:
    return round(part / whole * 100, 1) if whole else 0.0


def sick_days_by_caregiver(
    db: Database, client_id: str, start: date, end: date
) -> dict[str, int]:
    """Approved sick leave clipped to [start, end], counting both ends."""
    requests = repo.select(
        db,
        TimeOffRequest,
        lambda r: r.client_id == client_id
        and r.status == TimeOffStatus.APPROVED
        and r.request_type == TimeOffType.SICK_LEAVE
        and r.start_date <= end
        and r.end_date >= start,
    )
    days: dict[str, int] = defaultdict(int)
    for request in requests:
        clipped_start = max(request.start_date, start)
        clipped_end = min(request.end_date, end)
        days[request.caregiver_id] += (clipped_end - clipped_start).days + 1
    return days


def _caregiver_stats(
    db: Database, shifts: list[Shift], sick_days: dict[str, int]
) -> list[CaregiverStats]:
    by_caregiver: dict[str, list[Shift]] = defaultdict(list)
    for shift in shifts:
        if shift.caregiver_id:
            by_caregiver[shift.caregiver_id].append(shift)

    stats = []
    for caregiver_id, assigned in by_caregiver.items():
        caregiver = repo.get(db, Caregiver, caregiver_id)
        total_hours = sum(shift_hours(s.start_time, s.end_time) for s in assigned)
        sick = sick_days.get(caregiver_id, 0)
        stats.append(
            CaregiverStats(
                caregiver_id=caregiver_id,
                caregiver_name=caregiver.name if caregiver else None,
                caregiver_color=caregiver.color if caregiver else None,
                total_shifts=len(assigned),
                total_hours=round(total_hours, 1),
                completed_shifts=sum(s.status == ShiftStatus.COMPLETED for s in assigned),
                cancelled_shifts=sum(s.status == ShiftStatus.CANCELLED for s in assigned),
                average_hours_per_week=round(total_hours / config.STATS_WEEKS_IN_PERIOD, 1),
                sickness_percentage=percentage(sick, len(assigned)),
                sick_days_count=sick,
            )
        )
    stats.sort(key=lambda c: c.total_shifts, reverse=True)
    return stats


def scheduling_overview(db: Database, client_id: str, *, today: date) -> SchedulingOverview:
    start = today
    end = one_year_later(today)
    shifts = repo.shifts_in_range(db, start, end, client_id=client_id)

    filled = [s for s in shifts if s.caregiver_id]
    unfilled = [s for s in shifts if not s.caregiver_id]
    completed = sum(s.status == ShiftStatus.COMPLETED for s in shifts)
    cancelled = sum(s.status == ShiftStatus.CANCELLED for s in shifts)
    past = [s for s in shifts if s.date < today]

    overall = OverallStats(
        total_shifts=len(shifts),
        filled_shifts=len(filled),
        unfilled_shifts=len(unfilled),
        completed_shifts=completed,
        cancelled_shifts=cancelled,
        fill_rate=percentage(len(filled), len(shifts)),
        completion_rate=percentage(completed, len(past)),
    )

    unfilled_list = []
    for shift in unfilled:
        shift_type = repo.get(db, ShiftType, shift.shift_type_id)
        unfilled_list.append(
            UnfilledShift(
                id=shift.id,
                date=shift.date,
                start_time=shift.start_time,
                end_time=shift.end_time,
                shift_type=UnfilledShiftType(
                    id=shift_type.id, name=shift_type.name, color=shift_type.color
                )
                if shift_type
                else None,
                status=shift.status,
            )
        )

    totals_per_date: dict[date, int] = defaultdict(int)
    for shift in shifts:
        totals_per_date[shift.date] += 1
    unfilled_per_date: dict[date, int] = defaultdict(int)
    for shift in unfilled:
        unfilled_per_date[shift.date] += 1
    unfilled_dates = [
        UnfilledDate(date=day, unfilled_count=count, total_shifts=totals_per_date[day])
        for day, count in sorted(unfilled_per_date.items())
    ]

    return SchedulingOverview(
        period=Period(start_date=start, end_date=end),
        overall_stats=overall,
        unfilled_shifts_list=unfilled_list,
        unfilled_dates_list=unfilled_dates,
        caregiver_stats=_caregiver_stats(
            db, shifts, sick_days_by_caregiver(db, client_id, start, end)
        ),
    )
