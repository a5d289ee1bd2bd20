"""
Scheduling domain models.
"""

from datetime import date, datetime
from enum import StrEnum
from uuid import uuid4

from pydantic import BaseModel, Field


def new_id() -> str:
    return uuid4().hex


class Role(StrEnum):
    CLIENT = "CLIENT"
    CAREGIVER = "CAREGIVER"
    ADMIN = "ADMIN"
    SUPER_ADMIN = "SUPER_ADMIN"


class RecurrenceType(StrEnum):
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    BIWEEKLY = "BIWEEKLY"
    FIRST_OF_MONTH = "FIRST_OF_MONTH"
    LAST_OF_MONTH = "LAST_OF_MONTH"


class ShiftStatus(StrEnum):
    UNFILLED = "UNFILLED"
    FILLED = "FILLED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class TimeCorrectionStatus(StrEnum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class TimeOffStatus(StrEnum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class TimeOffType(StrEnum):
    SICK_LEAVE = "SICK_LEAVE"
    VACATION = "VACATION"
    PERSONAL = "PERSONAL"
    OTHER = "OTHER"


class Client(BaseModel):
    id: str
    name: str


class Caregiver(BaseModel):
    id: str
    name: str
    color: str | None = None


class ShiftType(BaseModel):
    id: str = Field(default_factory=new_id)
    client_id: str
    name: str
    start_time: str  # HH:mm
    end_time: str  # HH:mm, earlier than start_time for overnight shifts
    color: str


class ShiftPattern(BaseModel):
    id: str = Field(default_factory=new_id)
    client_id: str
    shift_type_id: str
    caregiver_id: str | None = None
    recurrence_type: RecurrenceType
    start_date: date
    end_date: date | None = None
    is_active: bool = True
    created_by: str | None = None

    @property
    def anchor_weekday(self) -> int:
        """Weekday the pattern repeats on (0=Monday), taken from start_date."""
        return self.start_date.weekday()


class Shift(BaseModel):
    id: str = Field(default_factory=new_id)
    client_id: str
    shift_type_id: str
    date: date
    # copied from the shift type at creation, later type edits don't apply
    start_time: str
    end_time: str
    status: ShiftStatus = ShiftStatus.UNFILLED
    caregiver_id: str | None = None  # None while UNFILLED
    pattern_id: str | None = None
    is_pattern_override: bool = False  # detached from its pattern by hand
    internal_notes: str | None = None
    instruction_notes: str | None = None
    created_by: str | None = None

    actual_start_time: str | None = None
    actual_end_time: str | None = None
    caregiver_note: str | None = None
    time_correction_status: TimeCorrectionStatus | None = None
    time_correction_at: datetime | None = None

    client_verified: bool = False
    client_verified_at: datetime | None = None

    @property
    def unique_key(self) -> tuple[str, str, str, date]:
        return ("shift", self.client_id, self.shift_type_id, self.date)


class SchedulingSettings(BaseModel):
    client_id: str
    weeks_ahead: int = 8


class TimeOffRequest(BaseModel):
    id: str = Field(default_factory=new_id)
    caregiver_id: str
    client_id: str
    start_date: date
    end_date: date
    status: TimeOffStatus = TimeOffStatus.PENDING
    request_type: TimeOffType
