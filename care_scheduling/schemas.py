"""Request schemas - Pydantic models for validation"""

from datetime import date
from typing import Annotated

from pydantic import BaseModel, Field, field_validator

from care_scheduling.models import RecurrenceType
from care_scheduling.validators import validate_color, validate_time


def _optional_time(v: str | None) -> str | None:
    if v:
        return validate_time(v)
    return v


class ShiftTypeCreate(BaseModel):
    name: str = Field(min_length=1)
    start_time: str
    end_time: str
    color: str

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_times(cls, v):
        return validate_time(v)

    @field_validator("color")
    @classmethod
    def validate_hex_color(cls, v):
        return validate_color(v)


class ShiftTypeUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    start_time: str | None = None
    end_time: str | None = None
    color: str | None = None

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_times(cls, v):
        return _optional_time(v)

    @field_validator("color")
    @classmethod
    def validate_hex_color(cls, v):
        if v:
            return validate_color(v)
        return v


class PatternCreate(BaseModel):
    shift_type_id: str
    recurrence_type: RecurrenceType
    start_date: date
    end_date: date | None = None
    caregiver_id: str | None = None


class PatternUpdate(BaseModel):
    shift_type_id: str | None = None
    recurrence_type: RecurrenceType | None = None
    start_date: date | None = None
    end_date: date | None = None
    caregiver_id: str | None = None
    is_active: bool | None = None
    regenerate_shifts: bool = False


class GenerateRequest(BaseModel):
    pattern_id: str | None = None


class ConflictCheckRequest(BaseModel):
    caregiver_id: str
    date: date
    start_time: str
    end_time: str
    exclude_shift_id: str | None = None

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_times(cls, v):
        return validate_time(v)


class ShiftCreate(BaseModel):
    shift_type_id: str
    date: date
    start_time: str | None = None
    end_time: str | None = None
    caregiver_id: str | None = None
    internal_notes: str | None = None
    instruction_notes: str | None = None

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_times(cls, v):
        return _optional_time(v)


class ShiftUpdate(BaseModel):
    # caregiver_id: omitted leaves the assignment alone, null unassigns
    caregiver_id: str | None = None
    start_time: str | None = None
    end_time: str | None = None
    internal_notes: str | None = None
    instruction_notes: str | None = None

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_times(cls, v):
        return _optional_time(v)


class TimeCorrectionRequest(BaseModel):
    shift_id: str
    actual_start_time: str
    actual_end_time: str
    caregiver_note: str | None = None

    @field_validator("actual_start_time", "actual_end_time")
    @classmethod
    def validate_times(cls, v):
        return validate_time(v)


class TimeCorrectionReview(BaseModel):
    shift_id: str
    approve: bool


class VerifyRequest(BaseModel):
    shift_id: str
    verified: bool


class SettingsUpdate(BaseModel):
    weeks_ahead: Annotated[int, Field(strict=True, ge=1, le=52)] | None = None
