from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

# events.required_duration is a Postgres INTEGER
MAX_REQUIRED_DURATION = 2**31 - 1

EventStatus = Literal["active", "cancelled"]
AvailabilityStatus = Literal["available", "unavailable"]


class CamelModel(BaseModel):
    """Base model whose JSON form uses camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Event(CamelModel):
    id: str
    title: str
    description: str | None = None
    organizer_id: str
    required_duration: int
    status: EventStatus = "active"
    created_at: datetime
    updated_at: datetime


class TimeSlot(CamelModel):
    id: str
    event_id: str
    start_time: datetime
    end_time: datetime
    created_at: datetime
    updated_at: datetime


class AvailabilityRecord(CamelModel):
    id: str
    user_id: str
    event_id: str
    timeslot_id: str
    status: AvailabilityStatus
    created_at: datetime
    updated_at: datetime


class Recommendation(CamelModel):
    timeslot: TimeSlot
    available_users: list[str]
    unavailable_users: list[str]
    availability_percentage: float


class RecommendationsResponse(CamelModel):
    recommendations: list[Recommendation]


class CreateEventRequest(CamelModel):
    title: str
    description: str | None = None
    organizer_id: str
    required_duration: int = Field(
        gt=0, le=MAX_REQUIRED_DURATION, description="Required meeting length in minutes"
    )

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        v = v.strip()
        if not v or len(v) > 200:
            raise ValueError("title must be 1-200 characters")
        return v

    @field_validator("organizer_id")
    @classmethod
    def validate_organizer_id(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("organizerId must not be empty")
        return v


class UpdateEventRequest(CreateEventRequest):
    status: EventStatus | None = None


class TimeSlotRequest(CamelModel):
    start_time: datetime
    end_time: datetime

    @model_validator(mode="after")
    def validate_range(self) -> "TimeSlotRequest":
        start_aware = self.start_time.tzinfo is not None
        end_aware = self.end_time.tzinfo is not None
        if start_aware != end_aware:
            raise ValueError("startTime and endTime must both carry a timezone or both omit it")
        if self.end_time < self.start_time:
            raise ValueError("End time must be after start time")
        return self


class AvailabilityRequest(CamelModel):
    timeslot_id: str
    status: AvailabilityStatus


class AvailabilityStatusRequest(CamelModel):
    status: AvailabilityStatus
