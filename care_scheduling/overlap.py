from care_scheduling.validators import time_to_minutes

MINUTES_PER_DAY = 24 * 60


def _span(start: str, end: str) -> tuple[int, int]:
    start_min = time_to_minutes(start)
    end_min = time_to_minutes(end)
    # overnight: the shift ends on the next day
    if end_min < start_min:
        end_min += MINUTES_PER_DAY
    return start_min, end_min


def time_ranges_overlap(start1: str, end1: str, start2: str, end2: str) -> bool:
    """
    Whether two HH:mm ranges on the same date overlap.

    Ranges are half-open, so one ending at 12:00 and the next starting at
    12:00 do not overlap. An overnight range (22:00-02:00) also covers the
    early hours of the clock, so it overlaps 01:00-03:00.
    """
    s1, e1 = _span(start1, end1)
    s2, e2 = _span(start2, end2)
    return any(
        s1 < e2 + shift and s2 + shift < e1
        for shift in (-MINUTES_PER_DAY, 0, MINUTES_PER_DAY)
    )


def shift_hours(start: str, end: str) -> float:
    s, e = _span(start, end)
    return (e - s) / 60
