import pytest

from care_scheduling.overlap import shift_hours, time_ranges_overlap


@pytest.mark.parametrize(
    ("first", "second", "expected"),
    [
        (("08:00", "12:00"), ("11:00", "14:00"), True),
        (("08:00", "12:00"), ("12:00", "16:00"), False),  # touching
        (("08:00", "12:00"), ("13:00", "16:00"), False),
        (("08:00", "12:00"), ("09:00", "10:00"), True),  # contained
        (("22:00", "02:00"), ("01:00", "03:00"), True),
        (("22:00", "02:00"), ("03:00", "05:00"), False),
        (("22:00", "02:00"), ("23:00", "23:30"), True),
        (("20:00", "22:00"), ("22:00", "06:00"), False),
        (("22:00", "06:00"), ("06:00", "08:00"), False),
        (("08:00", "12:00"), ("22:00", "06:00"), False),
    ],
)
def test_time_ranges_overlap(first, second, expected) -> None:
    assert time_ranges_overlap(*first, *second) is expected
    assert time_ranges_overlap(*second, *first) is expected


def test_two_overnight_shifts_overlap() -> None:
    assert time_ranges_overlap("22:00", "06:00", "23:00", "07:00")


def test_invalid_time_is_rejected() -> None:
    with pytest.raises(ValueError):
        time_ranges_overlap("24:00", "02:00", "01:00", "03:00")


@pytest.mark.parametrize(
    ("start", "end", "hours"),
    [
        ("08:00", "12:00", 4.0),
        ("08:15", "12:45", 4.5),
        ("22:00", "06:00", 8.0),
        ("22:30", "22:00", 23.5),
        ("09:00", "09:00", 0.0),
    ],
)
def test_shift_hours_wraps_past_midnight(start, end, hours) -> None:
    assert shift_hours(start, end) == pytest.approx(hours)
