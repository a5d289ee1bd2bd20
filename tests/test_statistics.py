from datetime import date

import pytest

from care_scheduling import repository as repo
from care_scheduling.models import ShiftStatus, TimeOffRequest, TimeOffStatus, TimeOffType
from care_scheduling.statistics import one_year_later, percentage, scheduling_overview
from conftest import CLIENT_ID, OTHER_CLIENT_ID, add_shift

TODAY = date(2024, 1, 10)


def _time_off(db, caregiver_id, start, end, *, status=TimeOffStatus.APPROVED,
              request_type=TimeOffType.SICK_LEAVE, client_id=CLIENT_ID) -> None:
    repo.save(
        db,
        TimeOffRequest(
            caregiver_id=caregiver_id,
            client_id=client_id,
            start_date=start,
            end_date=end,
            status=status,
            request_type=request_type,
        ),
    )


@pytest.fixture
def scheduled(db):
    add_shift(db, date(2024, 1, 12), caregiver_id="alice-id")
    add_shift(db, date(2024, 1, 13), shift_type_id="nacht", caregiver_id="alice-id")
    add_shift(db, date(2024, 1, 12), shift_type_id="nacht", caregiver_id="wei-id")
    add_shift(db, date(2024, 1, 13))
    # outside the window or for another client
    add_shift(db, date(2024, 1, 9), caregiver_id="alice-id", status=ShiftStatus.COMPLETED)
    add_shift(db, date(2025, 2, 1))
    add_shift(db, date(2024, 1, 12), client_id=OTHER_CLIENT_ID)

    _time_off(db, "alice-id", date(2024, 1, 5), date(2024, 1, 11))
    _time_off(db, "alice-id", date(2024, 1, 12), date(2024, 1, 20),
              request_type=TimeOffType.VACATION)
    _time_off(db, "wei-id", date(2024, 1, 12), date(2024, 1, 14),
              status=TimeOffStatus.PENDING)
    return db


def test_empty_schedule_reports_zero_rates(db) -> None:
    overview = scheduling_overview(db, CLIENT_ID, today=TODAY)

    assert overview.overall_stats.total_shifts == 0
    assert overview.overall_stats.fill_rate == 0.0
    assert overview.overall_stats.completion_rate == 0.0
    assert overview.unfilled_shifts_list == []
    assert overview.unfilled_dates_list == []
    assert overview.caregiver_stats == []


def test_window_runs_one_year_from_today(db) -> None:
    overview = scheduling_overview(db, CLIENT_ID, today=TODAY)
    assert overview.period.start_date == TODAY
    assert overview.period.end_date == date(2025, 1, 10)


def test_overall_stats(scheduled) -> None:
    stats = scheduling_overview(scheduled, CLIENT_ID, today=TODAY).overall_stats

    assert stats.total_shifts == 4
    assert stats.filled_shifts == 3
    assert stats.unfilled_shifts == 1
    assert stats.fill_rate == 75.0


def test_completion_rate_ignores_today_and_later(db) -> None:
    add_shift(db, TODAY, caregiver_id="alice-id", status=ShiftStatus.COMPLETED)
    add_shift(db, date(2024, 1, 11), caregiver_id="alice-id")

    stats = scheduling_overview(db, CLIENT_ID, today=TODAY).overall_stats

    assert stats.completed_shifts == 1
    assert stats.completion_rate == 0.0


def test_unfilled_shifts_grouped_by_date(scheduled) -> None:
    overview = scheduling_overview(scheduled, CLIENT_ID, today=TODAY)

    assert len(overview.unfilled_shifts_list) == 1
    unfilled = overview.unfilled_shifts_list[0]
    assert unfilled.date == date(2024, 1, 13)
    assert unfilled.shift_type.name == "Ochtend"

    assert [d.model_dump() for d in overview.unfilled_dates_list] == [
        {"date": date(2024, 1, 13), "unfilled_count": 1, "total_shifts": 2}
    ]


def test_caregiver_workload_and_sickness(scheduled) -> None:
    stats = scheduling_overview(scheduled, CLIENT_ID, today=TODAY).caregiver_stats

    assert [c.caregiver_id for c in stats] == ["alice-id", "wei-id"]
    alice, wei = stats

    assert alice.caregiver_name == "Alice Ongwele"
    assert alice.total_shifts == 2
    assert alice.total_hours == 12.0  # 4h morning + 8h overnight
    assert alice.average_hours_per_week == 0.2
    # approved sick leave 01-05..01-11 clipped to 01-10..01-11
    assert alice.sick_days_count == 2
    assert alice.sickness_percentage == 100.0

    assert wei.total_hours == 8.0
    assert wei.sick_days_count == 0
    assert wei.sickness_percentage == 0.0


def test_overview_is_read_only(scheduled) -> None:
    before = {id(v): v.model_dump() for v in scheduled.all()}

    scheduling_overview(scheduled, CLIENT_ID, today=TODAY)
    scheduling_overview(scheduled, CLIENT_ID, today=TODAY)

    assert {id(v): v.model_dump() for v in scheduled.all()} == before


def test_one_year_later_handles_leap_day() -> None:
    assert one_year_later(date(2024, 2, 29)) == date(2025, 2, 28)
    assert one_year_later(date(2024, 1, 10)) == date(2025, 1, 10)


def test_percentage_rounds_to_one_decimal() -> None:
    assert percentage(1, 3) == 33.3
    assert percentage(2, 3) == 66.7
    assert percentage(5, 0) == 0.0
